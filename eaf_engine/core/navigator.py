# eaf_engine/core/navigator.py
"""
Cursor navigation over immutable node trees.

A :class:`Cursor` is a position in a tree plus the path of frames leading
to it from the root. Moving never copies anything; :meth:`Cursor.replace`
copies only the nodes on the path back to the root, sharing every other
subtree with the original.
"""
from dataclasses import dataclass, replace as _dc_replace
from typing import Callable, List, Optional, Tuple

from .interfaces import Child, Node, tag_of

Predicate = Callable[[Child], bool]


@dataclass(frozen=True)
class _Frame:
    """One step of the path from the root to a cursor."""
    parent: Node
    siblings: Tuple[Child, ...]
    index: int
    above: Optional["_Frame"]
    changed: bool = False


@dataclass(frozen=True)
class Cursor:
    """Position of one child inside a node tree."""
    node: Child
    frame: Optional[_Frame] = None

    @classmethod
    def from_root(cls, root: Node) -> "Cursor":
        return cls(root)

    @property
    def tag(self) -> Optional[str]:
        return tag_of(self.node)

    @property
    def index(self) -> int:
        return self.frame.index if self.frame else 0

    def down(self) -> Optional["Cursor"]:
        """Move to the first child, or None for a leaf or an empty node."""
        if not isinstance(self.node, Node) or not self.node.children:
            return None
        frame = _Frame(self.node, self.node.children, 0, self.frame)
        return Cursor(self.node.children[0], frame)

    def up(self) -> Optional["Cursor"]:
        """Move to the parent, rebuilding it if anything below was replaced."""
        if self.frame is None:
            return None
        frame = self.frame
        parent = Cursor(frame.parent, frame.above)
        if not frame.changed:
            return parent
        return parent.replace(frame.parent.with_children(frame.siblings))

    def right(self) -> Optional["Cursor"]:
        if self.frame is None or self.frame.index + 1 >= len(self.frame.siblings):
            return None
        index = self.frame.index + 1
        return Cursor(self.frame.siblings[index], _dc_replace(self.frame, index=index))

    def left(self) -> Optional["Cursor"]:
        if self.frame is None or self.frame.index == 0:
            return None
        index = self.frame.index - 1
        return Cursor(self.frame.siblings[index], _dc_replace(self.frame, index=index))

    def replace(self, node: Child) -> "Cursor":
        """Cursor at the same position with ``node`` substituted."""
        if self.frame is None:
            return Cursor(node)
        siblings = list(self.frame.siblings)
        siblings[self.frame.index] = node
        frame = _dc_replace(self.frame, siblings=tuple(siblings), changed=True)
        return Cursor(node, frame)

    def root(self) -> Child:
        """Walk back to the top and return the (possibly rebuilt) root."""
        cursor = self
        while cursor.frame is not None:
            cursor = cursor.up()
        return cursor.node


def skip_while(cursor: Optional[Cursor], pred: Predicate) -> Optional[Cursor]:
    """
    Move right while ``pred`` holds for the current node.

    Returns:
        The first position where ``pred`` fails, or None if the siblings
        run out first
    """
    while cursor is not None and pred(cursor.node):
        cursor = cursor.right()
    return cursor


def skip_while_left(cursor: Optional[Cursor], pred: Predicate) -> Optional[Cursor]:
    """Like :func:`skip_while`, moving left."""
    while cursor is not None and pred(cursor.node):
        cursor = cursor.left()
    return cursor


def take_while(cursor: Optional[Cursor], pred: Predicate) -> List[Child]:
    """Collect the contiguous run of siblings, starting at ``cursor``, that satisfy ``pred``."""
    taken = []
    while cursor is not None and pred(cursor.node):
        taken.append(cursor.node)
        cursor = cursor.right()
    return taken


def update_while(
    cursor: Optional[Cursor],
    pred: Predicate,
    func: Callable[[Child], Child]
) -> Optional[Child]:
    """
    Replace each node of the matching run with ``func(node)``.

    Args:
        cursor: Start of the run
        pred: Run membership test, checked on the original node
        func: Replacement builder
    Returns:
        Root of the rebuilt tree, or None if ``cursor`` is None
    """
    if cursor is None:
        return None
    while True:
        if not pred(cursor.node):
            return cursor.root()
        cursor = cursor.replace(func(cursor.node))
        following = cursor.right()
        if following is None:
            return cursor.root()
        cursor = following
