# python
"""hackerfs package"""
__version__ = "0.1"

from hackerfs.env import load_env
from hackerfs.errors import (
    AlreadyExists,
    FileSystemError,
    NoSuchFileOrDirectory,
    NotEmpty,
    SnapshotError,
)
from hackerfs.filesystem import FileSystem
from hackerfs.nodes import Directory, File, Node

# Load .env values at import time so configuration relies on python-dotenv instead of manual parsing.
load_env()

__all__ = [
    "AlreadyExists",
    "Directory",
    "File",
    "FileSystem",
    "FileSystemError",
    "NoSuchFileOrDirectory",
    "Node",
    "NotEmpty",
    "SnapshotError",
]
