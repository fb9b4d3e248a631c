"""
Stream a completion token by token, sync and async.

Leaving the ``with`` block early closes the connection, which stops
generation on the server.

Run:
    python examples/02_streaming.py
"""

import asyncio

from ollamakit import Client, Message


def stream_sync(client: Client) -> None:
    print("=== generate_stream ===")
    with client.generate_stream("llama3.2", "Write a haiku about llamas.") as stream:
        for chunk in stream:
            print(chunk.response, end="", flush=True)
    print("\n")


def stream_first_words(client: Client, limit: int = 5) -> None:
    print(f"=== first {limit} chunks, then cancel ===")
    with client.generate_stream("llama3.2", "Tell me a long story.") as stream:
        for index, chunk in enumerate(stream):
            print(chunk.response, end="", flush=True)
            if index + 1 >= limit:
                break
    print(" [cancelled]\n")


async def stream_async(client: Client) -> None:
    print("=== achat_stream ===")
    async with client.achat_stream("llama3.2", [Message.user("Count to five.")]) as stream:
        async for chunk in stream:
            print(chunk.message.content, end="", flush=True)
    print()
    await client.aclose()


def main() -> None:
    client = Client()
    stream_sync(client)
    stream_first_words(client)
    asyncio.run(stream_async(client))


if __name__ == "__main__":
    main()
