# eaf_engine/resolution.py
"""
Time and hierarchy resolution on top of the derived indexes.
"""
from typing import List, NamedTuple, Optional

from .core.interfaces import Child, Node
from .core.navigator import Cursor, skip_while, skip_while_left
from .errors import CyclicReferenceError, InvalidTimeValueError, MissingTimeValueError
from .index import AlignableEntry, DerivedIndexCache, RefEntry, default_cache
from .sections import get_time_order


class AnnotationTimes(NamedTuple):
    """Resolved start and end time of an annotation, as strings."""
    time1: str
    time2: str


def _lacks_time_value(child: Child) -> bool:
    return not (isinstance(child, Node) and "time-value" in child.attrs)


def _as_int(time_slot_id: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidTimeValueError(time_slot_id, value) from None


def resolve_time_slot_value(document: Node, time_slot_id: str) -> Optional[str]:
    """
    Value of a time slot, interpolating when the slot has none.

    The first slot with a matching id is used. If it lacks a value, the
    result is the truncated mean of the nearest explicit values before it
    (0 if there is none) and after it.

    Args:
        document: EAF document
        time_slot_id: TIME_SLOT_ID to look up
    Returns:
        The value as a string, or None if no slot has this id
    Raises:
        MissingTimeValueError: no slot after it carries a value
        InvalidTimeValueError: a neighbouring value is not a whole number
    """
    time_order = get_time_order(document)
    if time_order is None:
        return None
    cursor = skip_while(
        Cursor.from_root(time_order).down(),
        lambda n: not (isinstance(n, Node) and n.attrs.get("time-slot-id") == time_slot_id),
    )
    if cursor is None:
        return None
    value = cursor.node.attrs.get("time-value")
    if value is not None:
        return value

    left = skip_while_left(cursor, _lacks_time_value)
    right = skip_while(cursor, _lacks_time_value)
    if right is None:
        raise MissingTimeValueError(time_slot_id)
    left_value = 0
    if left is not None:
        left_value = _as_int(left.node.attrs["time-slot-id"], left.node.attrs["time-value"])
    right_value = _as_int(right.node.attrs["time-slot-id"], right.node.attrs["time-value"])
    return str((left_value + right_value) // 2)


def get_annotation_times(
    document: Node,
    annotation_id: str,
    cache: Optional[DerivedIndexCache] = None
) -> Optional[AnnotationTimes]:
    """
    Start and end time of an annotation, following ref annotations to the
    alignable annotation they ultimately depend on.

    Returns:
        The resolved times, or None if the id (or a referenced id) is unknown
    Raises:
        CyclicReferenceError: the reference chain loops
        MissingTimeValueError: a time slot of the target cannot be resolved
    """
    index = (cache or default_cache).annotation_index(document)
    chain = [annotation_id]
    entry = index.get(annotation_id)
    while isinstance(entry, RefEntry):
        if entry.ref_id in chain:
            raise CyclicReferenceError("annotation", chain + [entry.ref_id])
        chain.append(entry.ref_id)
        entry = index.get(entry.ref_id)
    if not isinstance(entry, AlignableEntry):
        return None
    time1, time2 = entry.time1, entry.time2
    # re-resolve directly so the precise error surfaces
    if time1 is None:
        time1 = resolve_time_slot_value(document, entry.time_slot_ref1)
    if time2 is None:
        time2 = resolve_time_slot_value(document, entry.time_slot_ref2)
    if time1 is None or time2 is None:
        return None
    return AnnotationTimes(time1, time2)


def get_parent_tiers(
    document: Node,
    tier_id: str,
    cache: Optional[DerivedIndexCache] = None
) -> List[str]:
    """
    Ancestors of a tier, nearest first.

    Raises:
        CyclicReferenceError: the parent-ref chain loops
    """
    parents = (cache or default_cache).tier_parent_index(document)
    chain = [tier_id]
    ancestors: List[str] = []
    current = parents.get(tier_id)
    while current is not None:
        if current in chain:
            raise CyclicReferenceError("tier", chain + [current])
        chain.append(current)
        ancestors.append(current)
        current = parents.get(current)
    return ancestors


def is_parent_tier(
    document: Node,
    tier_id: str,
    cache: Optional[DerivedIndexCache] = None
) -> bool:
    """True if some tier names ``tier_id`` as its parent-ref."""
    parents = (cache or default_cache).tier_parent_index(document)
    return any(parent == tier_id for parent in parents.values())
