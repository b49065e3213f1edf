"""Argument parsing for a file transfer client and server, plus a bounded thread pool."""

__version__ = "0.1.0"
__all__ = ["__version__"]