"""Tests for conversation messages and state."""

from __future__ import annotations

from types import SimpleNamespace

from mcp_bridge.conversation.messages import ConversationState, ToolCall


def test_start_seeds_system_and_user_messages() -> None:
    """A new conversation holds exactly the system prompt and the query."""
    state = ConversationState.start("What is hot?", "Be helpful.", [])

    assert state.to_openai_messages() == [
        {"role": "system", "content": "Be helpful."},
        {"role": "user", "content": "What is hot?"},
    ]
    assert state.final_text == ""


def test_tool_call_round_trip_to_openai_shape() -> None:
    """Tool calls are recorded on the assistant message in chat API form."""
    openai_call = SimpleNamespace(
        id="call_1",
        type="function",
        function=SimpleNamespace(name="temperature", arguments='{"city": "Fresno"}'),
    )
    state = ConversationState.start("q", "s", [])

    state.record_tool_calls([ToolCall.from_openai(openai_call)])
    state.record_tool_result("call_1", "97 F")

    assert state.to_openai_messages()[2:] == [
        {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "temperature", "arguments": '{"city": "Fresno"}'},
                },
            ],
        },
        {"role": "tool", "tool_call_id": "call_1", "content": "97 F"},
    ]


def test_pending_tool_call_ids_tracks_last_batch() -> None:
    """Ids without a tool message are reported until answered."""
    state = ConversationState.start("q", "s", [])
    state.record_tool_calls([ToolCall(id="a", name="x"), ToolCall(id="b", name="y")])

    assert state.pending_tool_call_ids() == ["a", "b"]

    state.record_tool_result("a", "done")
    assert state.pending_tool_call_ids() == ["b"]

    state.record_tool_result("b", "done")
    assert state.pending_tool_call_ids() == []


def test_to_openai_messages_returns_fresh_list() -> None:
    """Callers may keep the returned list without seeing later appends."""
    state = ConversationState.start("q", "s", [])
    snapshot = state.to_openai_messages()

    state.record_tool_result("a", "late")

    assert len(snapshot) == 2
