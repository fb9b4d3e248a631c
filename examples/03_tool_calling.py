"""
Tool calling: let the model call a local function and answer with its result.

Requires a model with tool support, e.g. ``ollama pull llama3.2``.

Run:
    python examples/03_tool_calling.py
"""

from dataclasses import dataclass

from ollamakit import Client, Message, Tool, ToolRegistry


@dataclass
class RGB:
    red: float
    green: float
    blue: float


def to_hex(color: RGB) -> str:
    channels = [max(0, min(255, round(c * 255))) for c in (color.red, color.green, color.blue)]
    return "#%02X%02X%02X" % tuple(channels)


rgb_to_hex = Tool(
    name="rgb_to_hex",
    description="Converts RGB components (0 to 1) to a hex color string",
    properties={
        "red": {"type": "number", "minimum": 0, "maximum": 1},
        "green": {"type": "number", "minimum": 0, "maximum": 1},
        "blue": {"type": "number", "minimum": 0, "maximum": 1},
    },
    required=["red", "green", "blue"],
    implementation=to_hex,
    input_type=RGB,
    output_type=str,
)

registry = ToolRegistry([rgb_to_hex])


@registry.tool(description="Look up the RGB components of a named color")
def color_components(name: str) -> dict:
    palette = {"yellow": (1.0, 1.0, 0.0), "teal": (0.0, 0.5, 0.5)}
    red, green, blue = palette.get(name.lower(), (0.0, 0.0, 0.0))
    return {"red": red, "green": green, "blue": blue}


def main() -> None:
    with Client() as client:
        conversation, response = client.chat_with_tools(
            "llama3.2",
            [Message.user("What is the hex code for pure yellow (red 1, green 1, blue 0)?")],
            registry,
        )

    for message in conversation:
        print(f"[{message.role.value}] {message.content or message.tool_calls}")
    print(f"[assistant] {response.message.content}")


if __name__ == "__main__":
    main()
