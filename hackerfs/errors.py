# python
"""
hackerfs/errors.py
Error kinds raised by the namespace tree and the FileSystem facade.
"""


class FileSystemError(Exception):
    """Base class for every precondition failure of a filesystem operation."""


class NoSuchFileOrDirectory(FileSystemError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such file or directory: {name}")


class AlreadyExists(FileSystemError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} already exists")


class NotEmpty(FileSystemError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory not empty: {path}")


class SnapshotError(FileSystemError):
    """Snapshot data that does not describe a valid tree."""
