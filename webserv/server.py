"""A small poll-driven TCP server that answers every message with a fixed HTTP reply."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
from typing import TextIO

from webserv.charclass import toupper

PORT = 8080
BUFFER_SIZE = 1024
MAX_CLIENTS = 10
BACKLOG = 10
HTTP_RESPONSE = b"HTTP/1.1 200 OK\r\nContent-Length:13\r\nHello, World!\r\n"


def to_uppercase(data: bytes | str) -> bytes | str:
    """Convert ASCII lowercase letters to uppercase, leaving everything else alone."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).upper()
    if isinstance(data, str):
        return "".join(toupper(ch) for ch in data)
    raise TypeError(f"expected bytes or str, got {type(data).__name__}")


class Server:
    """TCP server multiplexing a listening socket and up to ``max_clients`` connections."""

    def __init__(
        self,
        host: str = "",
        port: int = PORT,
        *,
        max_clients: int = MAX_CLIENTS,
        backlog: int = BACKLOG,
        output: TextIO | None = None,
        errors: TextIO | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.max_clients = max_clients
        self.backlog = backlog
        self._output = output
        self._errors = errors
        self._listener: socket.socket | None = None
        self._selector: selectors.BaseSelector | None = None
        self._clients: set[socket.socket] = set()

    def __enter__(self) -> Server:
        if self._listener is None:
            self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _say(self, text: str) -> None:
        print(text, file=self._output if self._output is not None else sys.stdout)

    def _complain(self, text: str) -> None:
        print(text, file=self._errors if self._errors is not None else sys.stderr)

    @property
    def address(self) -> tuple[str, int]:
        """The address the listening socket is bound to."""
        if self._listener is None:
            raise RuntimeError("server is not started")
        host, port = self._listener.getsockname()[:2]
        return host, port

    @property
    def client_count(self) -> int:
        """Number of connected clients."""
        return len(self._clients)

    def start(self) -> None:
        """Create, bind and listen on the server socket."""
        if self._listener is not None:
            raise RuntimeError("server is already started")
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._say(f"Server socket created on sd {listener.fileno()}")
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.host, self.port))
            listener.listen(self.backlog)
        except OSError:
            listener.close()
            raise
        selector = selectors.DefaultSelector()
        selector.register(listener, selectors.EVENT_READ)
        self._listener = listener
        self._selector = selector
        self._say(f"Server is listening on port {self.address[1]}")

    def poll_once(self, timeout: float | None = None) -> int:
        """Wait up to ``timeout`` seconds for activity and handle it.

        Returns the number of sockets that were ready.
        """
        if self._selector is None or self._listener is None:
            raise RuntimeError("server is not started")
        events = self._selector.select(timeout)
        ready = [key.fileobj for key, _ in events]
        if self._listener in ready:
            self._accept()
        for conn in ready:
            if conn is not self._listener and conn in self._clients:
                self._service(conn)
        return len(ready)

    def serve_forever(self) -> None:
        """Handle connections until polling fails or the server is closed."""
        try:
            while self._selector is not None:
                try:
                    self.poll_once(None)
                except OSError as exc:
                    self._complain(f"Poll failed: {exc}")
                    break
        finally:
            self.close()

    def close(self) -> None:
        """Close every client connection and the listening socket."""
        for conn in list(self._clients):
            self._drop(conn)
        if self._selector is not None:
            self._selector.close()
            self._selector = None
        if self._listener is not None:
            self._listener.close()
            self._listener = None

    def _accept(self) -> None:
        assert self._listener is not None and self._selector is not None
        try:
            conn, _ = self._listener.accept()
        except OSError as exc:
            self._complain(f"Accept failed: {exc}")
            return
        self._say(f"New client connected : client socket({conn.fileno()})")
        if len(self._clients) >= self.max_clients:
            self._say("Max clients reached, rejecting connection")
            conn.close()
            return
        self._selector.register(conn, selectors.EVENT_READ)
        self._clients.add(conn)

    def _drop(self, conn: socket.socket) -> None:
        if self._selector is not None:
            self._selector.unregister(conn)
        self._clients.discard(conn)
        conn.close()

    def _service(self, conn: socket.socket) -> None:
        try:
            data = conn.recv(BUFFER_SIZE)
        except OSError as exc:
            self._complain(f"Recv failed: {exc}")
            return
        if not data:
            self._say("Client disconnected")
            self._drop(conn)
            return
        self._say(f"Client's Received: {data.decode('utf-8', errors='replace')}")
        fd = conn.fileno()
        try:
            conn.sendall(HTTP_RESPONSE)
        except OSError as exc:
            self._complain(f"Send failed: {exc}")
            return
        self._say(f"HTTP response sent to client {fd}")


def main(argv: list[str] | None = None) -> int:
    """Run the server until interrupted."""
    parser = argparse.ArgumentParser(description="Answer every message with a fixed HTTP reply.")
    parser.add_argument("--host", default="", help="address to bind (default: all interfaces)")
    parser.add_argument("--port", type=int, default=PORT, help=f"port to listen on (default: {PORT})")
    parser.add_argument("--max-clients", type=int, default=MAX_CLIENTS)
    args = parser.parse_args(argv)

    server = Server(args.host, args.port, max_clients=args.max_clients)
    try:
        server.start()
    except OSError as exc:
        print(f"Server start failed: {exc}", file=sys.stderr)
        return 1
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        server.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())