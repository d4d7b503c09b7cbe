[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webserv"
version = "0.1.0"
description = "A small poll-driven TCP server and test client, with HTTP status codes and C-style string helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "socket", "poll", "tcp", "client", "status-codes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
webserv-server = "webserv.server:main"
webserv-client = "webserv.client:main"

[tool.hatch.build.targets.wheel]
packages = ["webserv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
