import io
import socket
import time

import pytest

from webserv.server import HTTP_RESPONSE, Server, main, to_uppercase


def _poll_until(server, condition, limit=3.0):
    deadline = time.monotonic() + limit
    while not condition():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        server.poll_once(0.05)


@pytest.fixture
def server():
    srv = Server("127.0.0.1", 0, output=io.StringIO(), errors=io.StringIO())
    srv.start()
    yield srv
    srv.close()


def _connect(srv):
    conn = socket.create_connection(srv.address, timeout=3)
    return conn


def test_to_uppercase_bytes():
    assert to_uppercase(b"1 : Hello, Server!\n") == b"1 : HELLO, SERVER!\n"


def test_to_uppercase_str_keeps_non_ascii():
    assert to_uppercase("abc-xyz 123") == "ABC-XYZ 123"
    assert to_uppercase("é") == "é"


def test_to_uppercase_is_idempotent():
    once = to_uppercase(b"mixed Case text")
    assert to_uppercase(once) == once


def test_to_uppercase_rejects_other_types():
    with pytest.raises(TypeError):
        to_uppercase(42)


def test_poll_before_start_raises():
    with pytest.raises(RuntimeError):
        Server("127.0.0.1", 0).poll_once(0)


def test_start_twice_raises(server):
    with pytest.raises(RuntimeError):
        server.start()


def test_replies_with_fixed_http_response(server):
    with _connect(server) as conn:
        _poll_until(server, lambda: server.client_count == 1)
        conn.sendall(b"1 : Hello, Server!\n")
        _poll_until(server, lambda: "HTTP response sent" in server._output.getvalue())
        assert conn.recv(1024) == b"HTTP/1.1 200 OK\r\nContent-Length:13\r\nHello, World!\r\n"


def test_every_message_gets_a_reply(server):
    with _connect(server) as conn:
        _poll_until(server, lambda: server.client_count == 1)
        for n in range(3):
            conn.sendall(f"message {n}".encode())
            received = b""
            deadline = time.monotonic() + 3
            conn.settimeout(0.05)
            while len(received) < len(HTTP_RESPONSE):
                assert time.monotonic() < deadline
                server.poll_once(0.05)
                try:
                    received += conn.recv(1024)
                except socket.timeout:
                    pass
            assert received == HTTP_RESPONSE


def test_disconnect_removes_client(server):
    conn = _connect(server)
    _poll_until(server, lambda: server.client_count == 1)
    conn.close()
    _poll_until(server, lambda: server.client_count == 0)
    assert "Client disconnected" in server._output.getvalue()


def test_rejects_clients_beyond_limit():
    srv = Server("127.0.0.1", 0, max_clients=1, output=io.StringIO(), errors=io.StringIO())
    with srv:
        first = _connect(srv)
        _poll_until(srv, lambda: srv.client_count == 1)
        second = _connect(srv)
        _poll_until(srv, lambda: "Max clients reached" in srv._output.getvalue())
        assert second.recv(1024) == b""
        assert srv.client_count == 1
        first.close()
        second.close()


def test_close_releases_everything(server):
    conn = _connect(server)
    _poll_until(server, lambda: server.client_count == 1)
    server.close()
    assert server.client_count == 0
    with pytest.raises(RuntimeError):
        server.poll_once(0)
    conn.settimeout(3)
    assert conn.recv(1024) == b""
    conn.close()


def test_start_on_busy_port_raises():
    with socket.socket() as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        srv = Server("127.0.0.1", port, output=io.StringIO())
        with pytest.raises(OSError):
            srv.start()


def test_main_fails_on_busy_port(capsys):
    with socket.socket() as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        assert main(["--host", "127.0.0.1", "--port", str(port)]) == 1
    assert "Server start failed" in capsys.readouterr().err