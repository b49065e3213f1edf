"""Command-line parsing for the file transfer server."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from filetransfer.client_args import _UNKNOWN, _parse_long, _scan_options

MIN_CONNECTIONS = 1
MAX_CONNECTIONS = 2147483647
MAX_THREADS = 2147483647

_LETTERS = frozenset(string.ascii_letters)
_ALNUM = frozenset(string.ascii_letters + string.digits)


@dataclass(frozen=True)
class ServerConfig:
    """Validated server settings."""

    threads: int
    file_prefix: str
    max_connections: int


class ServerArgsStatus(Enum):
    """Outcome of parsing the server's command line."""

    OK = auto()
    UNKNOWN_FLAG = auto()
    WRONG_USAGE = auto()
    ONLY_HELP = auto()

    MISSING_THREADS = auto()
    MALFORMED_THREADS = auto()
    MULTIPLE_THREADS = auto()

    MISSING_FILE_PREFIX = auto()
    MALFORMED_FILE_PREFIX = auto()
    MULTIPLE_FILE_PREFIX = auto()

    MISSING_MAX_CONNECTIONS = auto()
    MALFORMED_MAX_CONNECTIONS = auto()
    MULTIPLE_MAX_CONNECTIONS = auto()

    def describe(self) -> str:
        """Human-readable message for this status."""
        return _MESSAGES[self]


_MESSAGES = {
    ServerArgsStatus.OK: "success",
    ServerArgsStatus.UNKNOWN_FLAG: "unknown flag",
    ServerArgsStatus.WRONG_USAGE: "args could not be parsed",
    ServerArgsStatus.ONLY_HELP: "",
    ServerArgsStatus.MISSING_THREADS: "must specify the number of threads",
    ServerArgsStatus.MALFORMED_THREADS: "number of threads is invalid",
    ServerArgsStatus.MULTIPLE_THREADS: "must specify the number of threads only once",
    ServerArgsStatus.MISSING_FILE_PREFIX: "must specify file prefix",
    ServerArgsStatus.MALFORMED_FILE_PREFIX: "file prefix is invalid",
    ServerArgsStatus.MULTIPLE_FILE_PREFIX: "must specify file prefix only once",
    ServerArgsStatus.MISSING_MAX_CONNECTIONS: "must specify max number of connections",
    ServerArgsStatus.MALFORMED_MAX_CONNECTIONS: "max number of connections is invalid",
    ServerArgsStatus.MULTIPLE_MAX_CONNECTIONS: (
        "must specify max number of connections only once"
    ),
}


class ServerArgsError(Exception):
    """Raised when the server's command line cannot be turned into a config."""

    def __init__(self, status: ServerArgsStatus) -> None:
        super().__init__(status.describe())
        self.status = status


_SHORT_OPTIONS = {"t": True, "c": True, "p": True, "h": False}
_LONG_OPTIONS = {
    "threads": "t",
    "prefix": "p",
    "connections": "c",
    "help": "h",
}
_DUPLICATE = {
    "t": ServerArgsStatus.MULTIPLE_THREADS,
    "c": ServerArgsStatus.MULTIPLE_MAX_CONNECTIONS,
    "p": ServerArgsStatus.MULTIPLE_FILE_PREFIX,
}


def is_valid_prefix(prefix: str) -> bool:
    """Tell whether ``prefix`` may be used as a file name prefix.

    An empty prefix is allowed. Otherwise the first character must be an ASCII
    letter or an underscore; a prefix starting with an underscore is accepted
    as is, any other must consist of ASCII letters and digits only.
    """
    if not prefix:
        return True
    first = prefix[0]
    if first == "_":
        return True
    if first not in _LETTERS:
        return False
    return all(char in _ALNUM for char in prefix)


def parse_server_args(argv: Sequence[str]) -> ServerConfig:
    """Parse the server's arguments (without the program name).

    Raises ``ServerArgsError`` on any problem; a request for help is reported
    with the ``ONLY_HELP`` status.
    """
    values: dict[str, str | None] = {}
    for option, value, following in _scan_options(argv, _SHORT_OPTIONS, _LONG_OPTIONS):
        if option == "h":
            raise ServerArgsError(ServerArgsStatus.ONLY_HELP)
        if option == _UNKNOWN:
            raise ServerArgsError(ServerArgsStatus.UNKNOWN_FLAG)
        if option in values:
            raise ServerArgsError(_DUPLICATE[option])
        values[option] = value
        # a stray token right after the value means a second value was given
        if following is not None and not following.startswith("-"):
            raise ServerArgsError(_DUPLICATE[option])

    threads_text = values.get("t")
    if threads_text is None:
        raise ServerArgsError(ServerArgsStatus.MISSING_THREADS)
    threads = _parse_long(threads_text)
    if threads is None or not 1 <= threads <= MAX_THREADS:
        raise ServerArgsError(ServerArgsStatus.MALFORMED_THREADS)

    file_prefix = values.get("p")
    if file_prefix is None:
        raise ServerArgsError(ServerArgsStatus.MISSING_FILE_PREFIX)
    if not is_valid_prefix(file_prefix):
        raise ServerArgsError(ServerArgsStatus.MALFORMED_FILE_PREFIX)

    connections_text = values.get("c")
    if connections_text is None:
        raise ServerArgsError(ServerArgsStatus.MISSING_MAX_CONNECTIONS)
    connections = _parse_long(connections_text)
    if connections is None or not MIN_CONNECTIONS <= connections <= MAX_CONNECTIONS:
        raise ServerArgsError(ServerArgsStatus.MALFORMED_MAX_CONNECTIONS)

    return ServerConfig(
        threads=threads,
        file_prefix=file_prefix,
        max_connections=connections,
    )


def server_usage(program_name: str) -> str:
    """Usage text for the server."""
    return (
        "Usage:\n"
        f"  {program_name} -t <threads> -p <file prefix> -c <max connections> [-h]\n"
        "\n"
        "Options:\n"
        "  -t <threads>          number of threads to use for encryption\n"
        "  -p <file prefix>      prefix for all received files\n"
        "  -c <max connections>  max concurrent connections\n"
        "  -h                    show this help (ignores everything else)\n"
    )