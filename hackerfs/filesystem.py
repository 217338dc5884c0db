# python
"""
hackerfs/filesystem.py
FileSystem facade: a root directory plus a working-directory cursor. All
name arguments are resolved against the working directory only.
"""
from __future__ import annotations

import logging
from typing import Optional

from .errors import NoSuchFileOrDirectory
from .nodes import DIR, FILE, Directory, File, Node

logger = logging.getLogger(__name__)


class FileSystem:
    def __init__(self, root: Optional[Directory] = None):
        self.root: Directory = root if root is not None else Directory("")
        self.working_directory: Directory = self.root

    def _entry(self, name: str, kind: Optional[str] = None) -> Node:
        """
        Return the child ``name`` of the working directory. An entry of the
        wrong kind is reported the same way as a missing one.
        """
        node = self.working_directory.lookup(name)
        if node is None or (kind is not None and node.type != kind):
            raise NoSuchFileOrDirectory(name)
        return node

    # navigation

    def enter_root(self) -> None:
        self.working_directory = self.root

    def enter(self, name: str) -> None:
        self.working_directory = self._entry(name, DIR)

    def leave(self) -> None:
        parent = self.working_directory.parent
        if parent is not None:
            self.working_directory = parent

    def working_directory_path(self) -> str:
        return self.working_directory.path()

    # creation

    def create_directory(self, name: str) -> Directory:
        directory = Directory(name, self.working_directory)
        self.working_directory.insert_child(directory)
        logger.debug("mkdir %s", directory.path())
        return directory

    def create_file(self, name: str) -> File:
        file = File(name, self.working_directory)
        self.working_directory.insert_child(file)
        logger.debug("touch %s", file.path())
        return file

    # content

    def write_file(self, name: str, content: str) -> None:
        file = self._entry(name, FILE)
        file.content = content
        logger.debug("write %s (%d chars)", file.path(), len(content))

    def read_file(self, name: str) -> str:
        file = self._entry(name, FILE)
        return file.content or ""

    def remove(self, name: str) -> None:
        node = self._entry(name)
        path = node.path()
        node.remove()
        logger.debug("rm %s", path)

    # traversals

    def list(self) -> str:
        return self.working_directory.list()

    def list_long(self) -> str:
        return self.working_directory.list_long()

    def find(self, term: Optional[str] = None) -> str:
        return self.working_directory.find(term)
