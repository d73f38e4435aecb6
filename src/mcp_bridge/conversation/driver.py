"""Conversation loop alternating between chat completions and tool calls."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog

from mcp_bridge.conversation.arguments import parse_tool_arguments
from mcp_bridge.conversation.messages import ConversationState, ToolCall
from mcp_bridge.exceptions import ConversationLimitError, NotConnectedError, ToolArgumentsError
from mcp_bridge.llm.tools_adapter import remote_tool_to_openai_spec
from mcp_bridge.settings import DEFAULT_SYSTEM_PROMPT

if TYPE_CHECKING:
    from types import TracebackType

    from openai import OpenAI

    from mcp_bridge.tools.protocols import ToolSource

logger = structlog.get_logger(__name__)


class ConversationDriver:
    """Drive a chat model that may call tools exposed by a remote MCP server.

    One driver owns one tool connection and one chat client. Queries are
    processed one at a time; use separate drivers for concurrent
    conversations.
    """

    def __init__(
        self,
        chat_client: OpenAI,
        tool_client: ToolSource,
        *,
        model: str = "gpt-4o",
        max_tokens: int = 1000,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_rounds: int | None = None,
    ) -> None:
        """Initialise the driver with its collaborators and request settings."""
        if max_rounds is not None and max_rounds < 1:
            message = "max_rounds must be at least 1"
            raise ValueError(message)
        self.chat_client = chat_client
        self.tool_client = tool_client
        self.model = model
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt
        self.max_rounds = max_rounds
        self.available_tools: list[dict[str, Any]] | None = None

    def __enter__(self) -> ConversationDriver:
        """Return the driver for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the tool connection when leaving a ``with`` block."""
        self.close()

    def connect_to_server(self, url: str) -> None:
        """Connect to the tool server and load its tools in chat API form."""
        self.tool_client.connect(url)
        tools = self.tool_client.list_tools()
        self.available_tools = [remote_tool_to_openai_spec(tool) for tool in tools]
        logger.info("tools.available", url=url, tools=[tool.name for tool in tools])

    def close(self) -> None:
        """Release the tool server connection."""
        self.tool_client.close()
        self.available_tools = None

    def process_query(self, query: str, system_prompt: str | None = None) -> str:
        """Answer ``query``, executing every tool call the model requests.

        Returns the model's text output joined by newlines, interleaved with
        one trace line per tool call.

        Raises:
            NotConnectedError: if :meth:`connect_to_server` has not succeeded.
            ConversationLimitError: if ``max_rounds`` submissions did not
                produce a final answer.
        """
        if self.available_tools is None:
            message = "not connected to a tool server; call connect_to_server() first"
            raise NotConnectedError(message)

        state = ConversationState.start(
            query,
            system_prompt if system_prompt is not None else self.system_prompt,
            self.available_tools,
        )
        while True:
            if self.max_rounds is not None and state.rounds >= self.max_rounds:
                raise ConversationLimitError(self.max_rounds)
            completion = self._submit(state)
            if not completion.choices:
                logger.warning("chat.no_choices", round=state.rounds)
                break

            message = completion.choices[0].message
            if message.content:
                state.record_text(message.content)

            tool_calls = [ToolCall.from_openai(call) for call in message.tool_calls or []]
            logger.debug("chat.response", round=state.rounds, tool_calls=len(tool_calls))
            if not tool_calls:
                break

            state.record_tool_calls(tool_calls)
            for tool_call in tool_calls:
                state.record_tool_result(tool_call.id, self._execute(state, tool_call))

        answer = state.final_text
        logger.info("conversation.finished", rounds=state.rounds, answer_chars=len(answer))
        return answer

    def _submit(self, state: ConversationState) -> Any:
        """Send the full history and tool list for one round trip."""
        request: dict[str, Any] = {
            "model": self.model,
            "messages": state.to_openai_messages(),
            "max_completion_tokens": self.max_tokens,
        }
        pending = state.pending_tool_call_ids()
        if pending:
            message = f"tool calls without results: {pending}"
            raise RuntimeError(message)
        if state.available_tools:
            request["tools"] = list(state.available_tools)
        state.rounds += 1
        logger.debug("chat.request", round=state.rounds, messages=len(request["messages"]))
        return self.chat_client.chat.completions.create(**request)

    def _execute(self, state: ConversationState, tool_call: ToolCall) -> str:
        """Run one tool call and return the content for its tool message."""
        try:
            arguments = parse_tool_arguments(tool_call.arguments)
        except ToolArgumentsError as exc:
            logger.warning("tool.bad_arguments", tool=tool_call.name, error=str(exc))
            return str(exc)

        state.record_text(
            f"[Calling tool {tool_call.name} with arguments {json.dumps(arguments, ensure_ascii=False)}]",
        )
        result = self.tool_client.call_tool(tool_call.name, arguments)
        logger.info(
            "tool.result",
            tool=tool_call.name,
            call_id=tool_call.id,
            is_error=result.is_error,
            items=len(result.content),
        )
        return result.text
