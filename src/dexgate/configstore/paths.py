"""Dotted-path addressing over nested configuration trees.

A path such as ``ethereum.networks.base.tokenListSource`` is split into
segments and walked through nested dicts. Lists are opaque leaves: they are
never indexed by a path segment.
"""

from enum import Enum
from typing import Any

from dexgate.errors import InvalidPath, TypeMismatch


class _Sentinel:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# Returned by READ resolution when nothing lives at the path
ABSENT = _Sentinel("ABSENT")

# Passed as the value to WRITE resolution to remove the terminal key
DELETE = _Sentinel("DELETE")


class Mode(str, Enum):
    """Resolution mode."""

    READ = "read"
    WRITE = "write"


def parse_path(path: str) -> list[str]:
    """Split a dotted path into segments.

    Raises:
        InvalidPath: If the path is empty or contains an empty segment.
    """
    if not isinstance(path, str) or not path:
        raise InvalidPath("Configuration path must be a non-empty string")

    segments = path.split(".")
    if any(not segment for segment in segments):
        raise InvalidPath(f"Configuration path '{path}' contains an empty segment")
    return segments


def resolve(tree: dict, segments: list[str], mode: Mode = Mode.READ, value: Any = ABSENT) -> Any:
    """Resolve segments against a tree.

    READ returns the terminal node, or ABSENT if any step is missing or not
    a dict. WRITE creates missing intermediate dicts and sets ``value`` at
    the terminal segment (or removes it when ``value`` is DELETE). WRITE
    returns True if the tree changed.

    Raises:
        InvalidPath: No segments given.
        TypeMismatch: WRITE would descend into a scalar or list.
    """
    if not segments:
        raise InvalidPath("Configuration path must have at least one segment")

    if mode == Mode.READ:
        node: Any = tree
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return ABSENT
            node = node[segment]
        return node

    *parents, leaf = segments
    node = tree
    for depth, segment in enumerate(parents):
        child = node.get(segment, ABSENT)
        if child is ABSENT:
            if value is DELETE:
                # Nothing to remove below a missing branch
                return False
            child = {}
            node[segment] = child
        elif not isinstance(child, dict):
            if value is DELETE:
                return False
            walked = ".".join(segments[: depth + 1])
            raise TypeMismatch(
                f"Cannot descend into '{walked}': it holds a {type(child).__name__}, not an object"
            )
        node = child

    if value is DELETE:
        if leaf not in node:
            return False
        del node[leaf]
        return True

    node[leaf] = value
    return True
