"""
Directory tree preview of a file set.

Turns the flat (path, content) list that will be synced into the nested
folder/file structure shown before pushing.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from codesyncer.services.github.types import FileObject

NodeType = Literal["folder", "file"]


@dataclass
class TreeNode:
    """A folder or file in the preview tree."""

    name: str
    type: NodeType
    path: str
    children: list["TreeNode"] | None = None  # Folders only
    content: str | None = None  # Files only


def _sort_key(node: TreeNode) -> tuple[int, str, str]:
    # Folders before files, then case-insensitive name
    return (0 if node.type == "folder" else 1, node.name.lower(), node.name)


def _sort_tree(nodes: list[TreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        if node.children:
            _sort_tree(node.children)


def build_file_tree(files: Iterable[FileObject]) -> list[TreeNode]:
    """
    Build the sorted folder/file tree for a list of files.

    Empty path segments are ignored. A folder and a file with the same name
    at the same level are kept as separate nodes. When the same path occurs
    twice, the first file wins.

    Args:
        files: Files to lay out

    Returns:
        Top-level nodes
    """
    root: list[TreeNode] = []

    for file in files:
        parts = [p for p in file.path.split("/") if p]
        siblings = root
        for index, part in enumerate(parts):
            is_file = index == len(parts) - 1
            node_type: NodeType = "file" if is_file else "folder"
            node = next((n for n in siblings if n.name == part and n.type == node_type), None)
            if node is None:
                node = TreeNode(name=part, type=node_type, path="/".join(parts[: index + 1]))
                if is_file:
                    node.content = file.content
                else:
                    node.children = []
                siblings.append(node)
            if node.children is not None:
                siblings = node.children

    _sort_tree(root)
    return root


def count_files(nodes: Iterable[TreeNode]) -> int:
    """Count the file leaves under nodes."""
    return sum(
        1 if node.type == "file" else count_files(node.children or []) for node in nodes
    )
