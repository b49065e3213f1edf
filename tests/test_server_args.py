import pytest

from filetransfer.server_args import (
    ServerArgsError,
    ServerArgsStatus,
    ServerConfig,
    is_valid_prefix,
    parse_server_args,
    server_usage,
)


def _args(flat: str) -> list[str]:
    return flat.split()[1:]


@pytest.mark.parametrize(
    "flat, expected",
    [
        ("program", ServerArgsStatus.MISSING_THREADS),
        ("program -x idk", ServerArgsStatus.UNKNOWN_FLAG),
        ("program -t xyz", ServerArgsStatus.MALFORMED_THREADS),
        ("program -t -1", ServerArgsStatus.MALFORMED_THREADS),
        ("program -t 1 -p 123", ServerArgsStatus.MALFORMED_FILE_PREFIX),
        ("program -t 1 -p abc", ServerArgsStatus.MISSING_MAX_CONNECTIONS),
        ("program -t 1 -p abc -c abc", ServerArgsStatus.MALFORMED_MAX_CONNECTIONS),
    ],
)
def test_source_error_cases(flat, expected):
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(_args(flat))
    assert info.value.status is expected


def test_source_ok_case():
    config = parse_server_args(_args("program -t 1 -p abc -c 2"))
    assert config == ServerConfig(threads=1, file_prefix="abc", max_connections=2)


def test_long_options():
    config = parse_server_args(
        ["--threads", "4", "--prefix", "recv", "--connections", "10"]
    )
    assert config == ServerConfig(threads=4, file_prefix="recv", max_connections=10)


def test_help_wins():
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(["-t", "1", "-h"])
    assert info.value.status is ServerArgsStatus.ONLY_HELP


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["-t", "1", "-t", "2"], ServerArgsStatus.MULTIPLE_THREADS),
        (["-t", "1", "2"], ServerArgsStatus.MULTIPLE_THREADS),
        (["-p", "a", "-p", "b"], ServerArgsStatus.MULTIPLE_FILE_PREFIX),
        (["-p", "a", "b"], ServerArgsStatus.MULTIPLE_FILE_PREFIX),
        (["-c", "1", "-c", "2"], ServerArgsStatus.MULTIPLE_MAX_CONNECTIONS),
        (["-c", "1", "2"], ServerArgsStatus.MULTIPLE_MAX_CONNECTIONS),
    ],
)
def test_repeated_values(argv, expected):
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(argv)
    assert info.value.status is expected


@pytest.mark.parametrize("count", ["0", "-5", "2147483648", "3x"])
def test_bad_connection_counts(count):
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(["-t", "1", "-p", "abc", "-c", count])
    assert info.value.status is ServerArgsStatus.MALFORMED_MAX_CONNECTIONS


def test_thread_upper_bound():
    config = parse_server_args(["-t", "2147483647", "-p", "", "-c", "1"])
    assert config.threads == 2147483647
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(["-t", "2147483648", "-p", "", "-c", "1"])
    assert info.value.status is ServerArgsStatus.MALFORMED_THREADS


def test_missing_prefix():
    with pytest.raises(ServerArgsError) as info:
        parse_server_args(["-t", "1"])
    assert info.value.status is ServerArgsStatus.MISSING_FILE_PREFIX


@pytest.mark.parametrize(
    "prefix, valid",
    [
        ("", True),
        ("abc", True),
        ("a1", True),
        ("_", True),
        ("_a-b", True),
        ("123", False),
        ("a-b", False),
        ("-a", False),
        ("ab c", False),
    ],
)
def test_is_valid_prefix(prefix, valid):
    assert is_valid_prefix(prefix) is valid


def test_error_message_matches_status():
    with pytest.raises(ServerArgsError) as info:
        parse_server_args([])
    assert str(info.value) == "must specify the number of threads"


@pytest.mark.parametrize(
    "status, message",
    [
        (ServerArgsStatus.OK, "success"),
        (ServerArgsStatus.ONLY_HELP, ""),
        (ServerArgsStatus.MALFORMED_FILE_PREFIX, "file prefix is invalid"),
        (
            ServerArgsStatus.MULTIPLE_MAX_CONNECTIONS,
            "must specify max number of connections only once",
        ),
    ],
)
def test_describe(status, message):
    assert status.describe() == message


def test_usage_names_program():
    text = server_usage("srv")
    assert text.startswith("Usage:\n  srv -t <threads> -p <file prefix>")
    assert "  -c <max connections>  max concurrent connections\n" in text