"""
Node model, name mapping and tree navigation.
"""
from .interfaces import Tag, Node, Child, TEXT
from .naming import to_internal, to_wire
from .navigator import Cursor, skip_while, skip_while_left, take_while, update_while

__all__ = [
    "Tag",
    "Node",
    "Child",
    "TEXT",
    "to_internal",
    "to_wire",
    "Cursor",
    "skip_while",
    "skip_while_left",
    "take_while",
    "update_while",
]
