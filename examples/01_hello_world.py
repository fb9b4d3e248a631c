"""
Hello World: your first ollamakit request.

Prerequisites: a running Ollama server with a model pulled
    ollama serve
    ollama pull llama3.2
    pip install ollamakit

Run:
    python examples/01_hello_world.py
"""

from ollamakit import Message, default_client


def main() -> None:
    client = default_client()

    models = client.list_models()
    print(f"Installed models: {', '.join(m.name for m in models.models) or 'none'}\n")

    response = client.chat(
        "llama3.2",
        [Message.system("You answer in one sentence."), Message.user("Why is the sky blue?")],
    )
    print(f"Response: {response.message.content}")
    if response.eval_count and response.eval_duration:
        tokens_per_second = response.eval_count / (response.eval_duration / 1e9)
        print(f"Speed: {tokens_per_second:.1f} tokens/s")


if __name__ == "__main__":
    main()
