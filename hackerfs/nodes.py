# python
"""
hackerfs/nodes.py
Node model of the namespace tree: directories own their children, every node
keeps a weak back-reference to its parent for path derivation and removal.
"""
from __future__ import annotations

import weakref
from typing import List, Optional

from .errors import AlreadyExists, NotEmpty

SEP = "/"

DIR = "dir"
FILE = "file"


class Node:
    """
    Identity shared by directories and files.

    The parent link is a weakref so that ownership only flows from a
    directory to its children.
    """

    type: str = ""

    def __init__(self, name: str, parent: Optional[Directory] = None):
        self.name = name
        self._parent_ref: Optional[weakref.ReferenceType] = None
        self.parent = parent

    @property
    def parent(self) -> Optional[Directory]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: Optional[Directory]) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    def path(self) -> str:
        raise NotImplementedError

    def remove(self) -> None:
        """
        Detach this node from its parent's children and clear the parent link.
        """
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)
        self.parent = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path()!r}>"


class File(Node):
    type = FILE

    def __init__(self, name: str, parent: Optional[Directory] = None):
        super().__init__(name, parent)
        self.content: Optional[str] = None

    @property
    def size(self) -> int:
        if self.content is None:
            return 0
        return len(self.content)

    def path(self) -> str:
        parent = self.parent
        if parent is None:
            return self.name
        return parent.path() + self.name


class Directory(Node):
    type = DIR

    def __init__(self, name: str, parent: Optional[Directory] = None):
        super().__init__(name, parent)
        self.children: List[Node] = []

    def path(self) -> str:
        parent = self.parent
        if parent is None:
            return SEP
        return parent.path() + self.name + SEP

    def is_empty(self) -> bool:
        return not self.children

    def remove(self) -> None:
        if not self.is_empty():
            raise NotEmpty(self.path())
        super().remove()

    def lookup(self, name: str) -> Optional[Node]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def insert_child(self, node: Node) -> None:
        """
        Append ``node`` to the children. The caller sets ``node.parent``.
        """
        if self.lookup(node.name) is not None:
            raise AlreadyExists(self.path() + node.name)
        self.children.append(node)

    def remove_child(self, node: Node) -> None:
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                return

    # Traversals: depth-first, pre-order, insertion order. Every entry is
    # terminated by a newline.

    def list(self) -> str:
        out: List[str] = []
        for child in self.children:
            out.append(child.name + "\n")
            if child.type == DIR:
                out.append(child.list())
        return "".join(out)

    def list_long(self) -> str:
        out: List[str] = []
        for child in self.children:
            if child.type == FILE:
                out.append(f"f {child.name} (size {child.size})\n")
            elif child.type == DIR:
                state = "empty" if child.is_empty() else "not empty"
                out.append(f"d {child.name} ({state})\n")
                out.append(child.list_long())
        return "".join(out)

    def find(self, term: Optional[str] = None) -> str:
        """
        Full paths of all descendants. With ``term``, only entries whose bare
        name contains it are emitted, but every subdirectory is still searched.
        """
        out: List[str] = []
        for child in self.children:
            if term is None or term in child.name:
                out.append(child.path() + "\n")
            if child.type == DIR:
                out.append(child.find(term))
        return "".join(out)
