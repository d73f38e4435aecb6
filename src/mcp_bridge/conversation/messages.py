"""Conversation history messages and per-query state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ToolCall(BaseModel):
    """A model-issued request to invoke a tool."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: str = ""

    @classmethod
    def from_openai(cls, tool_call: Any) -> ToolCall:
        """Build from an OpenAI ``ChatCompletionMessageToolCall``."""
        return cls(id=tool_call.id, name=tool_call.function.name, arguments=tool_call.function.arguments or "")

    def to_openai(self) -> dict[str, Any]:
        """Return the chat API representation."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


class SystemMessage(BaseModel):
    """System instructions seeding the conversation."""

    role: Literal["system"] = "system"
    content: str

    def to_openai(self) -> dict[str, Any]:
        """Return the chat API representation."""
        return {"role": self.role, "content": self.content}


class UserMessage(BaseModel):
    """The user's query."""

    role: Literal["user"] = "user"
    content: str

    def to_openai(self) -> dict[str, Any]:
        """Return the chat API representation."""
        return {"role": self.role, "content": self.content}


def _empty_tool_calls() -> list[ToolCall]:
    """Return an empty list for tool calls."""
    return []


class AssistantMessage(BaseModel):
    """An assistant turn; in history it records the tool calls it issued."""

    role: Literal["assistant"] = "assistant"
    content: str | None = None
    tool_calls: list[ToolCall] = Field(default_factory=_empty_tool_calls)

    def to_openai(self) -> dict[str, Any]:
        """Return the chat API representation."""
        payload: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            payload["tool_calls"] = [call.to_openai() for call in self.tool_calls]
        return payload


class ToolResultMessage(BaseModel):
    """The output of one tool call, correlated by its id."""

    role: Literal["tool"] = "tool"
    tool_call_id: str
    content: str

    def to_openai(self) -> dict[str, Any]:
        """Return the chat API representation."""
        return {"role": self.role, "tool_call_id": self.tool_call_id, "content": self.content}


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolResultMessage],
    Field(discriminator="role"),
]


@dataclass
class ConversationState:
    """Mutable state of a single ``process_query`` call."""

    system_prompt: str
    history: list[Message]
    available_tools: list[dict[str, Any]]
    answer: list[str] = field(default_factory=list)
    rounds: int = 0

    @classmethod
    def start(cls, query: str, system_prompt: str, available_tools: list[dict[str, Any]]) -> ConversationState:
        """Seed a conversation with the system prompt and the user query."""
        return cls(
            system_prompt=system_prompt,
            history=[SystemMessage(content=system_prompt), UserMessage(content=query)],
            available_tools=list(available_tools),
        )

    def record_text(self, text: str) -> None:
        """Append a line to the final answer."""
        self.answer.append(text)

    def record_tool_calls(self, tool_calls: list[ToolCall]) -> None:
        """Append the assistant turn that issued ``tool_calls``."""
        self.history.append(AssistantMessage(tool_calls=list(tool_calls)))

    def record_tool_result(self, tool_call_id: str, content: str) -> None:
        """Append the result for one tool call."""
        self.history.append(ToolResultMessage(tool_call_id=tool_call_id, content=content))

    def pending_tool_call_ids(self) -> list[str]:
        """Return ids issued by the last assistant turn that still lack a result."""
        issued: list[str] = []
        answered: set[str] = set()
        for message in self.history:
            if isinstance(message, AssistantMessage) and message.tool_calls:
                issued = [call.id for call in message.tool_calls]
                answered = set()
            elif isinstance(message, ToolResultMessage):
                answered.add(message.tool_call_id)
        return [call_id for call_id in issued if call_id not in answered]

    def to_openai_messages(self) -> list[dict[str, Any]]:
        """Return a fresh copy of the history in chat API form."""
        return [message.to_openai() for message in self.history]

    @property
    def final_text(self) -> str:
        """Return the accumulated answer."""
        return "\n".join(self.answer)
