# eaf_engine/core/interfaces.py
"""
Core data model for EAF documents.

A document is a tree of immutable :class:`Node` values. Each node has a tag,
an attribute mapping (always present, possibly empty) and an ordered tuple of
children, each of which is either another node or a raw text leaf. The tree
converts losslessly to and from a Hiccup-like JSON structure::

    ["tier", {"tier-id": "default", "linguistic-type-ref": "default-lt"}]
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import StructuralTypeError


class Tag(str, Enum):
    """Every element kind of the EAF 3.0 taxonomy, in internal spelling."""
    ANNOTATION_DOCUMENT = "annotation-document"
    LICENSE = "license"
    HEADER = "header"
    MEDIA_DESCRIPTOR = "media-descriptor"
    LINKED_FILE_DESCRIPTOR = "linked-file-descriptor"
    PROPERTY = "property"
    TIME_ORDER = "time-order"
    TIME_SLOT = "time-slot"
    TIER = "tier"
    ANNOTATION = "annotation"
    ALIGNABLE_ANNOTATION = "alignable-annotation"
    REF_ANNOTATION = "ref-annotation"
    ANNOTATION_VALUE = "annotation-value"
    LINGUISTIC_TYPE = "linguistic-type"
    CONSTRAINT = "constraint"
    CONTROLLED_VOCABULARY = "controlled-vocabulary"
    CV_ENTRY_ML = "cv-entry-ml"
    CVE_VALUE = "cve-value"
    # DESCRIPTION on the wire; only legal inside a controlled vocabulary
    CV_DESCRIPTION = "description"
    EXTERNAL_REF = "external-ref"
    LOCALE = "locale"
    LANGUAGE = "language"
    LEXICON_REF = "lexicon-ref"
    REF_LINK_SET = "ref-link-set"
    CROSS_REF_LINK = "cross-ref-link"
    GROUP_REF_LINK = "group-ref-link"

    def __str__(self) -> str:
        return self.value


# Pseudo-tag used by the schema for text leaves in a child sequence
TEXT = "#text"


@dataclass(frozen=True)
class Node:
    """
    An element of an EAF tree.

    Args:
        tag: Internal (kebab-case) tag name
        attrs: Attribute names to string values
        children: Nested nodes and text leaves, in document order
    """
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: Tuple["Child", ...] = ()

    def __post_init__(self):
        if isinstance(self.tag, Tag):
            object.__setattr__(self, "tag", self.tag.value)
        if not isinstance(self.tag, str):
            raise StructuralTypeError(f"Node tag must be a string, got {self.tag!r}")
        if not isinstance(self.attrs, dict):
            raise StructuralTypeError(
                f"<{self.tag}> must have an attrs mapping, even if it is empty"
            )
        for key, value in self.attrs.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise StructuralTypeError(
                    f"<{self.tag}> attribute {key!r} must map a string to a string"
                )
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            if not isinstance(child, (Node, str)):
                raise StructuralTypeError(
                    f"<{self.tag}> child must be a Node or a string, got {child!r}"
                )

    @property
    def text(self) -> str:
        """Concatenated text leaves directly under this node."""
        return "".join(c for c in self.children if isinstance(c, str))

    @property
    def elements(self) -> List["Node"]:
        """Child nodes, skipping text leaves."""
        return [c for c in self.children if isinstance(c, Node)]

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name, default)

    def with_children(self, children) -> "Node":
        """Copy of this node with new children; attrs are shared."""
        return Node(self.tag, self.attrs, tuple(children))

    def to_json(self) -> list:
        """Hiccup-style JSON form: ``[tag, attrs, *children]``."""
        return [self.tag, dict(self.attrs)] + [
            c.to_json() if isinstance(c, Node) else c for c in self.children
        ]

    @classmethod
    def from_json(cls, data: Any) -> "Node":
        """Rebuild a node from :meth:`to_json` output."""
        if not isinstance(data, (list, tuple)) or not data:
            raise StructuralTypeError(f"Expected a non-empty list for a node, got {data!r}")
        if len(data) < 2 or not isinstance(data[1], dict):
            raise StructuralTypeError(
                f"EAF node {data[0]!r} must have an attrs map, even if it is empty"
            )
        children = []
        for child in data[2:]:
            if isinstance(child, str):
                children.append(child)
            elif isinstance(child, (list, tuple)):
                children.append(cls.from_json(child))
            else:
                raise StructuralTypeError(f"Unexpected child in {data[0]!r}: {child!r}")
        return cls(data[0], dict(data[1]), tuple(children))


Child = Union[Node, str]


def tag_of(child: Child) -> Optional[str]:
    """Tag of a child, or None for a text leaf."""
    return child.tag if isinstance(child, Node) else None
