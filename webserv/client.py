"""Test client that sends numbered greetings and reads the server's replies."""

from __future__ import annotations

import argparse
import socket
import sys
import time
from collections.abc import Iterator

from webserv.server import BUFFER_SIZE, PORT


def send_messages(
    host: str = "127.0.0.1",
    port: int = PORT,
    count: int = 5,
    delay: float = 2.0,
) -> Iterator[tuple[str, str | None]]:
    """Send ``count`` greetings, yielding each message with the reply it got.

    The reply is ``None`` when the server sent nothing back. Connection
    failures raise ``OSError``.
    """
    with socket.create_connection((host, port)) as sock:
        for number in range(1, count + 1):
            message = f"{number} : Hello, Server!\n"
            sock.sendall(message.encode())
            data = sock.recv(BUFFER_SIZE)
            yield message, data.decode("utf-8", errors="replace") if data else None
            if delay > 0:
                time.sleep(delay)


def main(argv: list[str] | None = None) -> int:
    """Connect to the server and exchange a few greetings."""
    parser = argparse.ArgumentParser(description="Send numbered greetings to the server.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--count", type=int, default=5)
    parser.add_argument("--delay", type=float, default=2.0)
    args = parser.parse_args(argv)

    try:
        for index, (message, reply) in enumerate(
            send_messages(args.host, args.port, args.count, args.delay)
        ):
            print(f"Client's message to server: {message}")
            if reply is not None:
                print(f"{index}th message received from server: {reply}")
    except OSError as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())