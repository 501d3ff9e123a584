# eaf_engine/index.py
"""
Derived indexes over a document and their single-slot cache.
File: eaf_engine/index.py

Annotation and tier-hierarchy queries need whole-document lookups. Hosts
query the same "current" document over and over, so the cache remembers the
last document it saw and rebuilds both indexes only when it is handed a
document that differs from that one by value.
"""
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Union
from loguru import logger

from .core.interfaces import Node, Tag
from .errors import StructuralTypeError
from .sections import get_annotations, get_tiers, get_time_slots


class AlignableEntry(NamedTuple):
    """
    Index entry for an alignable annotation.

    ``time1``/``time2`` are None when the slot value could not be resolved.
    """
    time_slot_ref1: str
    time_slot_ref2: str
    time1: Optional[str]
    time2: Optional[str]


class RefEntry(NamedTuple):
    """Index entry for a ref annotation pointing at ``ref_id``."""
    ref_id: str


IndexEntry = Union[AlignableEntry, RefEntry]
AnnotationIndex = Mapping[str, IndexEntry]
TierParentIndex = Mapping[str, str]


def interpolate_time_slots(slots: List[Node]) -> Dict[str, Optional[str]]:
    """
    Resolve every slot's value in one pass.

    Slots with an explicit value keep it. A slot without one takes the
    truncated mean of the nearest explicit values on either side, the left
    side defaulting to 0. Slots with no explicit value to their right, or
    whose neighbours are not whole numbers, map to None.
    """
    values = [slot.attrs.get("time-value") for slot in slots]
    following: List[Optional[str]] = [None] * len(slots)
    upcoming = None
    for i in range(len(slots) - 1, -1, -1):
        following[i] = upcoming
        if values[i] is not None:
            upcoming = values[i]

    table: Dict[str, Optional[str]] = {}
    preceding = "0"
    for slot, value, right in zip(slots, values, following):
        if value is not None:
            resolved: Optional[str] = value
            preceding = value
        elif right is None:
            resolved = None
        else:
            try:
                resolved = str((int(preceding) + int(right)) // 2)
            except ValueError:
                resolved = None
        # first slot wins when ids repeat
        table.setdefault(slot.attrs.get("time-slot-id", ""), resolved)
    return table


def build_annotation_index(document: Node) -> Dict[str, IndexEntry]:
    """Map every annotation id to its alignable or ref entry."""
    slot_values = interpolate_time_slots(get_time_slots(document))
    index: Dict[str, IndexEntry] = {}
    for tier in get_tiers(document):
        for annotation in get_annotations(tier):
            inner = next(iter(annotation.elements), None)
            if inner is None:
                continue
            attrs = inner.attrs
            annotation_id = attrs.get("annotation-id")
            if annotation_id is None:
                continue
            if inner.tag == Tag.REF_ANNOTATION.value or "annotation-ref" in attrs:
                index[annotation_id] = RefEntry(attrs.get("annotation-ref", ""))
                continue
            ref1 = attrs.get("time-slot-ref1", "")
            ref2 = attrs.get("time-slot-ref2", "")
            entry = AlignableEntry(ref1, ref2, slot_values.get(ref1), slot_values.get(ref2))
            if entry.time1 is None or entry.time2 is None:
                logger.warning(
                    f"Annotation {annotation_id} has an unresolvable time slot "
                    f"({ref1}={entry.time1}, {ref2}={entry.time2})"
                )
            index[annotation_id] = entry
    return index


def build_tier_parent_index(document: Node) -> Dict[str, str]:
    """Map tier-id to parent-ref; root tiers are left out."""
    return {
        tier.attrs["tier-id"]: tier.attrs["parent-ref"]
        for tier in get_tiers(document)
        if "parent-ref" in tier.attrs and "tier-id" in tier.attrs
    }


@dataclass(frozen=True)
class _Slot:
    document: Node
    annotation_index: AnnotationIndex
    tier_parent_index: TierParentIndex


class DerivedIndexCache:
    """
    One-entry memo of the annotation and tier-parent indexes.

    The cache holds a reference to the last document it indexed, compared by
    value on every access. :meth:`clear` drops it; the next access rebuilds.
    Access is serialized with a lock so concurrent readers never observe a
    half-replaced slot.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._slot: Optional[_Slot] = None
        self.rebuilds = 0

    @property
    def last_document(self) -> Optional[Node]:
        slot = self._slot
        return slot.document if slot is not None else None

    def clear(self) -> None:
        with self._lock:
            self._slot = None

    def _current(self, document: Node) -> _Slot:
        if not isinstance(document, Node):
            raise StructuralTypeError(f"Expected a Node, got {document!r}")
        with self._lock:
            slot = self._slot
            if slot is not None and (slot.document is document or slot.document == document):
                return slot
            annotation_index = build_annotation_index(document)
            tier_parent_index = build_tier_parent_index(document)
            slot = _Slot(
                document,
                MappingProxyType(annotation_index),
                MappingProxyType(tier_parent_index),
            )
            self._slot = slot
            self.rebuilds += 1
            logger.debug(
                f"Rebuilt derived indexes: {len(annotation_index)} annotations, "
                f"{len(tier_parent_index)} tier links"
            )
            return slot

    def annotation_index(self, document: Node) -> AnnotationIndex:
        return self._current(document).annotation_index

    def tier_parent_index(self, document: Node) -> TierParentIndex:
        return self._current(document).tier_parent_index


default_cache = DerivedIndexCache()
