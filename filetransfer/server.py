"""Entry point of the file transfer server."""

from __future__ import annotations

import sys
from typing import Sequence

from filetransfer.server_args import (
    ServerArgsError,
    ServerArgsStatus,
    parse_server_args,
    server_usage,
)

PROGRAM_NAME = "server"


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, report the configuration and return an exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_server_args(args)
    except ServerArgsError as err:
        if err.status is ServerArgsStatus.ONLY_HELP:
            print(server_usage(PROGRAM_NAME), end="", file=sys.stderr)
            return 0
        print(err.status.describe(), file=sys.stderr)
        print(server_usage(PROGRAM_NAME), end="", file=sys.stderr)
        return 1

    print("Hello form server")
    print(
        "Config:\n"
        f"  -t: {config.threads}\n"
        f"  -p: '{config.file_prefix}'\n"
        f"  -c: {config.max_connections}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())