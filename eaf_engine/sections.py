# eaf_engine/sections.py
"""
Lookups for the sections of an EAF document.

Document sections always appear in the same order (licenses, header, time
order, tiers, linguistic types, ...), so every lookup is a single forward
scan: skip siblings until the first one with the wanted tag, then take the
contiguous run of that tag.
"""
from typing import Callable, List, Optional

from .core.interfaces import Child, Node, Tag, tag_of
from .core.navigator import Cursor, skip_while, take_while, update_while


def _has_tag(tag: Tag) -> Callable[[Child], bool]:
    return lambda child: tag_of(child) == tag.value


def _lacks_tag(tag: Tag) -> Callable[[Child], bool]:
    return lambda child: tag_of(child) != tag.value


def go_to(document: Node, tag: Tag) -> Optional[Cursor]:
    """Cursor at the first top-level section with ``tag``, or None."""
    return skip_while(Cursor.from_root(document).down(), _lacks_tag(tag))


def _go_to_in(node: Optional[Node], tag: Tag) -> Optional[Cursor]:
    if node is None:
        return None
    return skip_while(Cursor.from_root(node).down(), _lacks_tag(tag))


def _section(document: Node, tag: Tag) -> List[Node]:
    return take_while(go_to(document, tag), _has_tag(tag))


def _single(document: Node, tag: Tag) -> Optional[Node]:
    cursor = go_to(document, tag)
    return cursor.node if cursor is not None else None


# Root attributes

def get_author(document: Node) -> Optional[str]:
    return document.attrs.get("author")


def get_date(document: Node) -> Optional[str]:
    return document.attrs.get("date")


def get_version(document: Node) -> Optional[str]:
    return document.attrs.get("version")


def get_format(document: Node) -> Optional[str]:
    return document.attrs.get("format")


# Top-level sections

def get_licenses(document: Node) -> List[Node]:
    return _section(document, Tag.LICENSE)


def get_header(document: Node) -> Optional[Node]:
    return _single(document, Tag.HEADER)


def get_time_order(document: Node) -> Optional[Node]:
    return _single(document, Tag.TIME_ORDER)


def get_tiers(document: Node) -> List[Node]:
    return _section(document, Tag.TIER)


def get_linguistic_types(document: Node) -> List[Node]:
    return _section(document, Tag.LINGUISTIC_TYPE)


def get_locales(document: Node) -> List[Node]:
    return _section(document, Tag.LOCALE)


def get_languages(document: Node) -> List[Node]:
    return _section(document, Tag.LANGUAGE)


def get_constraints(document: Node) -> List[Node]:
    return _section(document, Tag.CONSTRAINT)


def get_controlled_vocabularies(document: Node) -> List[Node]:
    return _section(document, Tag.CONTROLLED_VOCABULARY)


def get_lexicon_refs(document: Node) -> List[Node]:
    return _section(document, Tag.LEXICON_REF)


def get_ref_link_sets(document: Node) -> List[Node]:
    return _section(document, Tag.REF_LINK_SET)


def get_external_refs(document: Node) -> List[Node]:
    return _section(document, Tag.EXTERNAL_REF)


# Inside the header and time order

def get_media_descriptors(document: Node) -> List[Node]:
    cursor = _go_to_in(get_header(document), Tag.MEDIA_DESCRIPTOR)
    return take_while(cursor, _has_tag(Tag.MEDIA_DESCRIPTOR))


def get_linked_file_descriptors(document: Node) -> List[Node]:
    cursor = _go_to_in(get_header(document), Tag.LINKED_FILE_DESCRIPTOR)
    return take_while(cursor, _has_tag(Tag.LINKED_FILE_DESCRIPTOR))


def get_properties(document: Node) -> List[Node]:
    cursor = _go_to_in(get_header(document), Tag.PROPERTY)
    return take_while(cursor, _has_tag(Tag.PROPERTY))


def get_time_slots(document: Node) -> List[Node]:
    cursor = _go_to_in(get_time_order(document), Tag.TIME_SLOT)
    return take_while(cursor, _has_tag(Tag.TIME_SLOT))


# Tiers

def get_annotations(tier: Node) -> List[Node]:
    """Annotation wrappers of a tier, in order."""
    return [c for c in tier.children if tag_of(c) == Tag.ANNOTATION.value]


def find_tier(document: Node, tier_id: str) -> Optional[Node]:
    """First tier whose tier-id is ``tier_id``."""
    cursor = skip_while(
        go_to(document, Tag.TIER),
        lambda n: tag_of(n) == Tag.TIER.value and n.attrs.get("tier-id") != tier_id,
    )
    if cursor is None or cursor.tag != Tag.TIER.value:
        return None
    return cursor.node


def update_tiers(document: Node, func: Callable[[Node], Node]) -> Node:
    """
    New document with every tier replaced by ``func(tier)``.

    Sections other than the tiers are shared with ``document``.
    """
    updated = update_while(go_to(document, Tag.TIER), _has_tag(Tag.TIER), func)
    return document if updated is None else updated
