"""Command-line parsing for the file transfer client."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Mapping, Sequence

KEY_LENGTH = 8
MIN_PORT = 0
MAX_PORT = 65535
MAX_THREADS = 4294967295

_INTEGER = re.compile(r"[+-]?[0-9]+")
_C_SPACE = " \t\n\v\f\r"


@dataclass(frozen=True)
class ClientConfig:
    """Validated client settings."""

    file_path: str
    key: int
    threads: int
    server_ip: str
    server_port: int


class ClientArgsStatus(Enum):
    """Outcome of parsing the client's command line."""

    OK = auto()
    UNKNOWN_FLAG = auto()
    WRONG_USAGE = auto()
    ONLY_HELP = auto()

    MISSING_FILE = auto()
    FILE_NOT_FOUND = auto()
    MULTIPLE_FILES = auto()

    MISSING_KEY = auto()
    MALFORMED_KEY = auto()
    MULTIPLE_KEYS = auto()

    MISSING_THREADS = auto()
    MALFORMED_THREADS = auto()
    MULTIPLE_THREADS = auto()

    MISSING_SERVER_IP = auto()
    MULTIPLE_SERVER_IP = auto()

    MISSING_SERVER_PORT = auto()
    MALFORMED_SERVER_PORT = auto()
    MULTIPLE_SERVER_PORT = auto()

    def describe(self) -> str:
        """Human-readable message for this status."""
        return _MESSAGES[self]


_MESSAGES = {
    ClientArgsStatus.OK: "success",
    ClientArgsStatus.UNKNOWN_FLAG: "unknown flag",
    ClientArgsStatus.WRONG_USAGE: "args could not be parsed",
    ClientArgsStatus.ONLY_HELP: "",
    ClientArgsStatus.MISSING_FILE: "must specify a file",
    ClientArgsStatus.FILE_NOT_FOUND: "file could not be found",
    ClientArgsStatus.MULTIPLE_FILES: "must specify only 1 file",
    ClientArgsStatus.MISSING_KEY: "must specify the key to use",
    ClientArgsStatus.MALFORMED_KEY: "key is invalid",
    ClientArgsStatus.MULTIPLE_KEYS: "must specify only 1 key to use",
    ClientArgsStatus.MISSING_THREADS: "must specify the number of threads",
    ClientArgsStatus.MALFORMED_THREADS: "number of threads is invalid",
    ClientArgsStatus.MULTIPLE_THREADS: "must specify the number of threads only once",
    ClientArgsStatus.MISSING_SERVER_IP: "must specify the server IP",
    ClientArgsStatus.MULTIPLE_SERVER_IP: "must specify the server IP only once",
    ClientArgsStatus.MISSING_SERVER_PORT: "must specify the server port",
    ClientArgsStatus.MALFORMED_SERVER_PORT: "server port is invalid",
    ClientArgsStatus.MULTIPLE_SERVER_PORT: "must specify the server port only once",
}


class ClientArgsError(Exception):
    """Raised when the client's command line cannot be turned into a config."""

    def __init__(self, status: ClientArgsStatus) -> None:
        super().__init__(status.describe())
        self.status = status


_SHORT_OPTIONS = {"f": True, "k": True, "t": True, "a": True, "p": True, "h": False}
_LONG_OPTIONS = {
    "file": "f",
    "key": "k",
    "threads": "t",
    "ip": "a",
    "port": "p",
    "help": "h",
}
_DUPLICATE = {
    "f": ClientArgsStatus.MULTIPLE_FILES,
    "k": ClientArgsStatus.MULTIPLE_KEYS,
    "t": ClientArgsStatus.MULTIPLE_THREADS,
    "a": ClientArgsStatus.MULTIPLE_SERVER_IP,
    "p": ClientArgsStatus.MULTIPLE_SERVER_PORT,
}

_UNKNOWN = "?"


def _scan_options(
    args: Sequence[str],
    short_options: Mapping[str, bool],
    long_options: Mapping[str, str],
) -> Iterator[tuple[str, str | None, str | None]]:
    """Yield ``(option, value, following_token)`` in getopt_long style.

    ``option`` is ``"?"`` for an unknown option, an ambiguous long option or a
    missing required value. Tokens that are not options are skipped and
    ``--`` ends option processing.
    """
    tokens = list(args)
    position = 0

    def following() -> str | None:
        return tokens[position] if position < len(tokens) else None

    while position < len(tokens):
        token = tokens[position]
        position += 1
        if token == "--":
            return
        if not token.startswith("-") or token == "-":
            continue

        if token.startswith("--"):
            name, has_value, attached = token[2:].partition("=")
            if name in long_options:
                matches = [name]
            else:
                matches = [known for known in long_options if known.startswith(name)]
            if len(matches) != 1:
                yield _UNKNOWN, None, following()
                return
            option = long_options[matches[0]]
            if short_options[option]:
                if has_value:
                    value = attached
                elif position < len(tokens):
                    value = tokens[position]
                    position += 1
                else:
                    yield _UNKNOWN, None, None
                    return
                yield option, value, following()
            elif has_value:
                yield _UNKNOWN, None, following()
                return
            else:
                yield option, None, following()
            continue

        cluster = token[1:]
        for offset, option in enumerate(cluster):
            if option not in short_options:
                yield _UNKNOWN, None, following()
                return
            if not short_options[option]:
                yield option, None, following()
                continue
            rest = cluster[offset + 1 :]
            if rest:
                value = rest
            elif position < len(tokens):
                value = tokens[position]
                position += 1
            else:
                yield _UNKNOWN, None, None
                return
            yield option, value, following()
            break


def _parse_long(text: str) -> int | None:
    """Read a whole base-10 integer the way ``strtol`` does, or return None."""
    stripped = text.lstrip(_C_SPACE)
    if _INTEGER.fullmatch(stripped):
        return int(stripped)
    if text == "":
        return 0
    return None


def _file_is_readable(path: str) -> bool:
    try:
        with open(path, "rb"):
            return True
    except IsADirectoryError:
        return True
    except OSError:
        return False


def parse_key(text: str) -> int:
    """Pack the eight bytes of ``text`` into an unsigned 64-bit integer, big end first."""
    data = os.fsencode(text)
    if len(data) != KEY_LENGTH:
        raise ValueError(f"key must be exactly {KEY_LENGTH} bytes long")
    return int.from_bytes(data, "big")


def parse_client_args(argv: Sequence[str]) -> ClientConfig:
    """Parse the client's arguments (without the program name).

    Raises ``ClientArgsError`` on any problem; a request for help is reported
    with the ``ONLY_HELP`` status.
    """
    values: dict[str, str | None] = {}
    for option, value, following in _scan_options(argv, _SHORT_OPTIONS, _LONG_OPTIONS):
        if option == "h":
            raise ClientArgsError(ClientArgsStatus.ONLY_HELP)
        if option == _UNKNOWN:
            raise ClientArgsError(ClientArgsStatus.UNKNOWN_FLAG)
        if option in values:
            raise ClientArgsError(_DUPLICATE[option])
        values[option] = value
        # a stray token right after the value means a second value was given
        if following is not None and not following.startswith("-"):
            raise ClientArgsError(_DUPLICATE[option])

    file_path = values.get("f")
    if file_path is None:
        raise ClientArgsError(ClientArgsStatus.MISSING_FILE)
    if not _file_is_readable(file_path):
        raise ClientArgsError(ClientArgsStatus.FILE_NOT_FOUND)

    key_text = values.get("k")
    if key_text is None:
        raise ClientArgsError(ClientArgsStatus.MISSING_KEY)
    try:
        key = parse_key(key_text)
    except ValueError:
        raise ClientArgsError(ClientArgsStatus.MALFORMED_KEY) from None

    threads_text = values.get("t")
    if threads_text is None:
        raise ClientArgsError(ClientArgsStatus.MISSING_THREADS)
    threads = _parse_long(threads_text)
    if threads is None or not 1 <= threads <= MAX_THREADS:
        raise ClientArgsError(ClientArgsStatus.MALFORMED_THREADS)

    server_ip = values.get("a")
    if server_ip is None:
        raise ClientArgsError(ClientArgsStatus.MISSING_SERVER_IP)

    port_text = values.get("p")
    if port_text is None:
        raise ClientArgsError(ClientArgsStatus.MISSING_SERVER_PORT)
    port = _parse_long(port_text)
    if port is None or not MIN_PORT <= port <= MAX_PORT:
        raise ClientArgsError(ClientArgsStatus.MALFORMED_SERVER_PORT)

    return ClientConfig(
        file_path=file_path,
        key=key,
        threads=threads,
        server_ip=server_ip,
        server_port=port,
    )


def client_usage(program_name: str) -> str:
    """Usage text for the client."""
    return (
        "Usage:\n"
        f"  {program_name} -f <input> -k <key> -t <threads> -a <server ip> "
        "-p <server port> [-h]\n"
        "\n"
        "Options:\n"
        "  -f <input>       input file\n"
        "  -k <key>         the encryption key to use\n"
        "  -t <threads>     number of threads to use for encryption\n"
        "  -a <server ip>   server ip\n"
        "  -p <server port> server port\n"
        "  -h               show this help (ignores everything else)\n"
    )