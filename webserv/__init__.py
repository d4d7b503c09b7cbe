"""Poll-driven TCP server and test client, HTTP status codes and C-style string helpers."""

__version__ = "0.1.0"