# filetransfer

`filetransfer` holds the command-line front ends of a client/server file
transfer tool. Each front end checks its arguments and prints the
configuration it parsed. The package also holds a small thread pool that caps
how many tasks run at the same time.

## What the package does not do

The package transfers no files. It does not encrypt anything and opens no
network connections. Both commands parse and check their arguments, print the
result and exit. The server does not listen for clients.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Client

```
filetransfer-client -f <input> -k <key> -t <threads> -a <server ip> -p <server port> [-h]
```

| Option | Long form | Meaning |
| --- | --- | --- |
| `-f` | `--file` | The input file. It must be openable for reading. |
| `-k` | `--key` | The encryption key. It must be exactly 8 bytes long. |
| `-t` | `--threads` | The number of threads, from 1 to 4294967295. |
| `-a` | `--ip` | The server IP. It is taken as given and is not checked. |
| `-p` | `--port` | The server port, from 0 to 65535. |
| `-h` | `--help` | Shows the usage text and ignores every other option. |

Example:

```
filetransfer-client -f notes.txt -k password -t 2 -a 127.0.0.1 -p 8080
```

On success the client prints `Hello from client` and then the parsed
configuration. It shows the key as the unsigned 64-bit integer that its 8
bytes make, read big-endian. The command exits with status 0.

## Server

```
filetransfer-server -t <threads> -p <file prefix> -c <max connections> [-h]
```

| Option | Long form | Meaning |
| --- | --- | --- |
| `-t` | `--threads` | The number of threads, from 1 to 2147483647. |
| `-p` | `--prefix` | The prefix for received files (see below). |
| `-c` | `--connections` | The maximum number of concurrent connections, from 1 to 2147483647. |
| `-h` | `--help` | Shows the usage text and ignores every other option. |

The rules for the prefix are:

- It may be empty.
- If it starts with `_`, it is accepted as it is.
- Otherwise it must start with an ASCII letter and hold only ASCII letters and
  digits.

On success the server prints `Hello form server` and then the parsed
configuration. The command exits with status 0.

## Argument rules

These rules hold for both commands.

- Give each option at most once. A second use is an error.
- A word that follows an option's value and does not start with `-` also
  counts as a second value.
- Long options accept `--name value` and `--name=value`. A unique abbreviation
  such as `--thr` also works.
- `--` ends option processing.
- A number may have leading whitespace and a sign. It must otherwise be a
  whole base-10 integer.
- Options are checked in the order of the tables above, and the first problem
  found is reported.

When the arguments are wrong, the command prints a short message and the usage
text to standard error, then exits with status 1. `-h` prints the usage text
to standard error and exits with status 0. The usage text names the program as
`client` or `server`.

## Using the library

The parsers take the argument list without the program name. They return a
frozen dataclass or raise an exception whose `status` member is an enum value.

```python
from filetransfer.server_args import ServerArgsError, ServerArgsStatus, parse_server_args

try:
    config = parse_server_args(["-t", "4", "-p", "recv", "-c", "16"])
except ServerArgsError as error:
    if error.status is ServerArgsStatus.ONLY_HELP:
        ...
    print(error.status.describe())
else:
    print(config.threads, config.file_prefix, config.max_connections)
```

Each module provides the following:

- `filetransfer.server_args`: `parse_server_args`, `ServerConfig`,
  `ServerArgsStatus`, `ServerArgsError`, `is_valid_prefix` and
  `server_usage(program_name)`.
- `filetransfer.client_args`: `parse_client_args`, `ClientConfig` (with the
  members `file_path`, `key`, `threads`, `server_ip` and `server_port`),
  `ClientArgsStatus`, `ClientArgsError`, `client_usage(program_name)` and
  `parse_key(text)`. `parse_key` packs an 8-byte string into an integer
  big-endian. It raises `ValueError` for any other length.
- `filetransfer.client` and `filetransfer.server`: each has a
  `main(argv=None)` function that returns the exit status.

### Thread pool

`filetransfer.thread_pool.ThreadPool(max_threads)` runs each submitted task on
a new thread. At most `max_threads` tasks run at once, and `max_threads` must
be at least 1.

- `submit(fn, *args)` waits for a free slot.
- `try_submit(fn, *args)` raises `PoolBusy` instead of waiting.
- `join()` blocks until every task has finished.
- `close()` joins the pool, and after that any further submission raises
  `RuntimeError`.
- `active` gives the number of running tasks.
- `TaskStartError` is raised if a thread cannot be started.

The pool is a context manager that closes itself on exit.

```python
from filetransfer.thread_pool import PoolBusy, ThreadPool

with ThreadPool(4) as pool:
    for n in range(10):
        pool.submit(print, n)      # blocks while the pool is full
    try:
        pool.try_submit(print, "x")
    except PoolBusy:
        pass                        # every slot was taken
# leaving the block waits for every task to finish
```