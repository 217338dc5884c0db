"""Filesystem snapshot helpers: nested-dict form of a tree, validated with jsonschema."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Union

import jsonschema

from .errors import AlreadyExists, SnapshotError
from .filesystem import FileSystem
from .nodes import DIR, FILE, Directory, File, Node

logger = logging.getLogger(__name__)

FS_NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "enum": [DIR, FILE]},
        "name": {"type": "string"},
        "children": {
            "type": "array",
            "items": {"$ref": "#"},
        },
        "content": {"type": "string"},
    },
    "required": ["type", "name"],
    "additionalProperties": False,
}

FS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": "filesystem.schema.json",
    **FS_NODE_SCHEMA,
}


def validate_snapshot(data: Mapping[str, Any]) -> None:
    try:
        jsonschema.validate(instance=data, schema=FS_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise SnapshotError(f"invalid filesystem snapshot: {exc.message}") from exc
    if data.get("type") != DIR:
        raise SnapshotError("snapshot root must be a directory")


def _populate(directory: Directory, children: Iterable[Mapping[str, Any]]) -> None:
    for entry in children:
        node: Node
        if entry["type"] == DIR:
            node = Directory(entry["name"], directory)
        else:
            node = File(entry["name"], directory)
            if "content" in entry:
                node.content = entry["content"]
        try:
            directory.insert_child(node)
        except AlreadyExists as exc:
            raise SnapshotError(f"duplicate entry in snapshot: {exc.path}") from exc
        if entry["type"] == DIR:
            _populate(node, entry.get("children", []))


def load_snapshot(data: Mapping[str, Any]) -> FileSystem:
    """
    Build a new FileSystem from a snapshot dict. The top-level node is the
    root; its own name is ignored.
    """
    validate_snapshot(data)
    fs = FileSystem()
    _populate(fs.root, data.get("children", []))
    logger.debug("loaded snapshot with %d top-level entries", len(fs.root.children))
    return fs


def _dump(node: Node) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": node.type, "name": node.name}
    if node.type == DIR:
        out["children"] = [_dump(child) for child in node.children]
    elif node.content is not None:
        out["content"] = node.content
    return out


def snapshot(source: Union[FileSystem, Directory]) -> Dict[str, Any]:
    """
    Export a FileSystem (from its root) or a single directory subtree.
    """
    directory = source.root if isinstance(source, FileSystem) else source
    return _dump(directory)
