[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filetransfer"
version = "0.1.0"
description = "Command-line argument handling and a bounded thread pool for a client/server file transfer tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["file transfer", "thread pool", "command line", "argument parsing", "client", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
filetransfer-client = "filetransfer.client:main"
filetransfer-server = "filetransfer.server:main"

[tool.hatch.build.targets.wheel]
packages = ["filetransfer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
