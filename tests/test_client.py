import io
import socket
import threading

import pytest

from webserv.client import main, send_messages
from webserv.server import HTTP_RESPONSE, Server


@pytest.fixture
def running_server():
    server = Server("127.0.0.1", 0, output=io.StringIO(), errors=io.StringIO())
    server.start()
    stop = threading.Event()

    def loop():
        while not stop.is_set():
            server.poll_once(0.05)

    worker = threading.Thread(target=loop, daemon=True)
    worker.start()
    yield server
    stop.set()
    worker.join(3)
    server.close()


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_exchanges_with_server(running_server):
    host, port = running_server.address
    exchanges = list(send_messages(host, port, 3, 0))
    assert len(exchanges) == 3
    assert exchanges[0][0] == "1 : Hello, Server!\n"
    for number, (message, reply) in enumerate(exchanges, start=1):
        assert message.startswith(f"{number} : ")
        assert reply == HTTP_RESPONSE.decode()


def test_zero_count_sends_nothing(running_server):
    host, port = running_server.address
    assert list(send_messages(host, port, 0, 0)) == []


def test_refused_connection_raises():
    port = _free_port()
    with pytest.raises(OSError):
        list(send_messages("127.0.0.1", port, 1, 0))


def test_main_prints_exchange(running_server, capsys):
    _, port = running_server.address
    code = main(["--port", str(port), "--count", "2", "--delay", "0"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Client's message to server: 1 : Hello, Server!" in out
    assert "1th message received from server: HTTP/1.1 200 OK" in out


def test_main_reports_connection_failure(capsys):
    port = _free_port()
    assert main(["--port", str(port), "--count", "1", "--delay", "0"]) == 1
    assert "Connection failed" in capsys.readouterr().err