"""
End-to-end tool calling against the fake server.

A chat request carries one registered tool; the server answers with a call
to ``rgb_to_hex``; the client resolves and runs it, appends the tool result
and sends exactly one follow-up request.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from conftest import chat_payload

from ollamakit import Message, Role, Tool, ToolRegistry, UnknownToolError


@dataclass
class RGB:
    red: float
    green: float
    blue: float


def _channel(component: float) -> int:
    return max(0, min(255, round(component * 255)))


def to_hex(color: RGB) -> str:
    return "#%02X%02X%02X" % (_channel(color.red), _channel(color.green), _channel(color.blue))


def _component(name: str) -> dict:
    return {"type": "number", "description": f"{name} component, 0 to 1", "minimum": 0, "maximum": 1}


rgb_to_hex = Tool(
    name="rgb_to_hex",
    description="Converts RGB components to a hex color string",
    properties={
        "red": _component("Red"),
        "green": _component("Green"),
        "blue": _component("Blue"),
    },
    required=["red", "green", "blue"],
    implementation=to_hex,
    input_type=RGB,
    output_type=str,
)

YELLOW_CALL = {
    "function": {"name": "rgb_to_hex", "arguments": {"red": 1.0, "green": 1.0, "blue": 0.0}}
}


class TestRgbToHex:
    """The tool itself."""

    def test_conversion(self):
        assert to_hex(RGB(1.0, 1.0, 0.0)) == "#FFFF00"
        assert to_hex(RGB(0.5, 0.0, 1.2)) == "#8000FF"

    def test_integer_components_are_accepted(self):
        decoded = rgb_to_hex.decode_input({"red": 1, "green": 0, "blue": 0})
        assert decoded == RGB(1.0, 0.0, 0.0)
        assert isinstance(decoded.red, float)


class TestChatWithTools:
    """Test the auto-run chat round trip."""

    def test_tool_call_round_trip(self, client, server):
        server.reply_json(chat_payload("", tool_calls=[YELLOW_CALL]))
        server.reply_json(chat_payload("That color is #FFFF00, yellow."))
        question = Message.user("What is the hex code for yellow?")

        conversation, response = client.chat_with_tools("llama3.2", [question], [rgb_to_hex])

        assert len(server.requests) == 2
        first, second = (request.json() for request in server.requests)
        assert first["tools"] == [rgb_to_hex.schema()]
        assert first["messages"] == [{"role": "user", "content": "What is the hex code for yellow?"}]

        assert second["messages"] == [
            {"role": "user", "content": "What is the hex code for yellow?"},
            {"role": "assistant", "content": "", "tool_calls": [YELLOW_CALL]},
            {"role": "tool", "content": "#FFFF00"},
        ]
        assert [message.role for message in conversation] == [Role.USER, Role.ASSISTANT, Role.TOOL]
        assert conversation[-1].content == "#FFFF00"
        assert response.message.content == "That color is #FFFF00, yellow."

    def test_one_tool_message_per_call(self, client, server):
        cyan_call = {
            "function": {"name": "rgb_to_hex", "arguments": {"red": 0, "green": 1, "blue": 1}}
        }
        server.reply_json(chat_payload("", tool_calls=[YELLOW_CALL, cyan_call]))
        server.reply_json(chat_payload("done"))

        conversation, _ = client.chat_with_tools(
            "llama3.2", [Message.user("yellow and cyan?")], ToolRegistry([rgb_to_hex])
        )

        assert [m.content for m in conversation if m.role is Role.TOOL] == ["#FFFF00", "#00FFFF"]

    def test_no_tool_calls_means_single_request(self, client, server):
        server.reply_json(chat_payload("I can answer that directly."))

        conversation, response = client.chat_with_tools(
            "llama3.2", [Message.user("hi")], [rgb_to_hex]
        )

        assert len(server.requests) == 1
        assert conversation == [Message.user("hi")]
        assert response.message.content == "I can answer that directly."

    def test_follow_up_tool_calls_are_not_run(self, client, server):
        server.reply_json(chat_payload("", tool_calls=[YELLOW_CALL]))
        server.reply_json(chat_payload("", tool_calls=[YELLOW_CALL]))

        _, response = client.chat_with_tools("llama3.2", [Message.user("again")], [rgb_to_hex])

        assert len(server.requests) == 2
        assert response.message.tool_calls is not None

    def test_unknown_tool(self, client, server):
        server.reply_json(
            chat_payload("", tool_calls=[{"function": {"name": "hex_to_rgb", "arguments": {}}}])
        )

        with pytest.raises(UnknownToolError) as exc_info:
            client.chat_with_tools("llama3.2", [Message.user("convert")], [rgb_to_hex])

        assert exc_info.value.tool_name == "hex_to_rgb"
        assert len(server.requests) == 1

    def test_non_tool_entries_rejected(self, client):
        with pytest.raises(TypeError):
            client.chat_with_tools("llama3.2", [Message.user("hi")], [{"type": "function"}])

    @pytest.mark.asyncio
    async def test_async_round_trip(self, aclient, server):
        server.reply_json(chat_payload("", tool_calls=[YELLOW_CALL]))
        server.reply_json(chat_payload("Yellow is #FFFF00."))

        conversation, response = await aclient.achat_with_tools(
            "llama3.2", [Message.user("yellow?")], [rgb_to_hex]
        )

        assert len(server.requests) == 2
        assert server.requests[1].json()["messages"][-1] == {"role": "tool", "content": "#FFFF00"}
        assert conversation[-1] == Message.tool("#FFFF00")
        assert response.message.content == "Yellow is #FFFF00."
