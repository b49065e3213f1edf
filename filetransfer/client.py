"""Entry point of the file transfer client."""

from __future__ import annotations

import sys
from typing import Sequence

from filetransfer.client_args import (
    ClientArgsError,
    ClientArgsStatus,
    client_usage,
    parse_client_args,
)

PROGRAM_NAME = "client"


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, report the configuration and return an exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_client_args(args)
    except ClientArgsError as err:
        if err.status is ClientArgsStatus.ONLY_HELP:
            print(client_usage(PROGRAM_NAME), end="", file=sys.stderr)
            return 0
        print(err.status.describe(), file=sys.stderr)
        print(client_usage(PROGRAM_NAME), end="", file=sys.stderr)
        return 1

    print("Hello from client")
    print(
        "Config:\n"
        f"  -k: {config.key}\n"
        f"  -t: {config.threads}\n"
        f"  -f: '{config.file_path}'\n"
        f"  -a: '{config.server_ip}'\n"
        f"  -p: {config.server_port}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())