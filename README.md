# webserv

`webserv` is a small TCP server with a matching test client. The server multiplexes its connections with `selectors`. By default it listens on all interfaces on port 8080 and serves up to ten clients at once. It logs every message it receives and answers each one with the same fixed reply, which begins with `HTTP/1.1 200 OK` and carries the text `Hello, World!`.

The package also includes:

- `webserv.status`: the `HttpStatus` enum of standard HTTP status codes. Its `is_informational`, `is_success`, `is_redirect`, `is_client_error` and `is_server_error` properties tell you which class a code belongs to.
- `webserv.charclass`: ASCII character tests and case conversion. The functions are `isalpha`, `isdigit`, `isalnum`, `isascii`, `isprint`, `toupper` and `tolower`. Each accepts an integer code or a one-character string.
- `webserv.numconv`: `atoi`, `itoa` and `putnbr`.
- `webserv.textutil`: C-style string and byte helpers. The functions are `split`, `strtrim`, `substr`, `strnstr`, `strncmp`, `strcmp`, `memcmp`, `memchr`, `strchr`, `strrchr`, `strmapi` and `strlcat`.
  - The search functions return an index, or `None` when nothing is found.
  - The compare functions return the difference between the first pair of codes that differ, or 0 when there is none.
  - `strlcat` returns the new string together with the length that the full concatenation would have had.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Running the server

```
webserv-server [--host HOST] [--port PORT] [--max-clients N]
```

The server runs until it is interrupted. When all client slots are full, it accepts each further connection and then closes it at once. If the server cannot bind or listen, it reports the error and exits with status 1.

## Running the client

While the server is running, open another terminal and run:

```
webserv-client [--host HOST] [--port PORT] [--count N] [--delay SECONDS]
```

By default the client connects to `127.0.0.1` on port 8080. It sends five numbered lines of the form `1 : Hello, Server!`, waits two seconds after each one, and prints every message it sent along with the reply it received. If the connection fails, it exits with status 1.

## Using it from Python

```python
from webserv.status import HttpStatus
from webserv.numconv import atoi, itoa
from webserv.textutil import split, strtrim, strchr
from webserv.server import Server, to_uppercase
from webserv.client import send_messages

HttpStatus.NOT_FOUND                 # 404
HttpStatus.NOT_FOUND.is_client_error # True
atoi("  -42abc")                     # -42
itoa(-2147483648)                    # "-2147483648"
split("a,,b,c", ",")                 # ["a", "b", "c"]
strtrim("xxhixx", "x")               # "hi"
strchr("hello", "z")                 # None
to_uppercase(b"hello")               # b"HELLO"
```

### Embedding the server

1. Create a `Server(host, port, max_clients=..., backlog=...)`.
2. Call `start()`.
3. To handle events, either:
   - call `poll_once(timeout)` to handle one round of events (it returns the number of sockets that were ready), or
   - call `serve_forever()`, which keeps handling events until the server is closed.
4. Call `close()` when you are finished.

`Server` also works as a context manager that starts the server on entry and closes it on exit. The `address` and `client_count` properties report where the server is bound and how many clients are connected. The `output` and `errors` arguments let you redirect the server's log lines.

### Running the client exchange

`send_messages(host, port, count, delay)` is a generator. It carries out the client's exchange with any host and port, and for each message it yields a `(message, reply)` pair. `reply` is `None` when the server sent nothing back.

## What it does not do

The server does not parse HTTP. It does not look at request lines, headers or paths. It serves no files and sends no status code other than 200. Its reply is the same for every message. The reply has no blank line between its header and its body, so an ordinary HTTP client may not accept it. `to_uppercase` is provided as a helper, but the server does not apply it to what it sends.