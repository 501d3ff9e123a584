# eaf_engine/builder.py
"""
Construction of fresh EAF 3.0 documents.
"""
from typing import Iterable, Mapping, Union

from .core.interfaces import Node, Tag
from .errors import StructuralTypeError

EAF_VERSION = "3.0"

# Descriptions ELAN attaches to its four predefined constraints
CONSTRAINT_DESCRIPTIONS = {
    "Time_Subdivision": (
        "Time subdivision of parent annotation's time interval, "
        "no time gaps allowed within this interval"
    ),
    "Symbolic_Subdivision": (
        "Symbolic subdivision of a parent annotation. "
        "Annotations refering to the same parent are ordered"
    ),
    "Symbolic_Association": "1-1 association with a parent annotation",
    "Included_In": (
        "Time alignable annotations within the parent annotation's time interval, "
        "gaps are allowed"
    ),
}

MediaDescriptorLike = Union[Node, Mapping[str, str]]


def media_descriptor(media_url: str, mime_type: str, **extra: str) -> Node:
    """Build a media-descriptor node; ``extra`` keys use snake_case."""
    attrs = {"media-url": media_url, "mime-type": mime_type}
    attrs.update({key.replace("_", "-"): value for key, value in extra.items()})
    return Node(Tag.MEDIA_DESCRIPTOR, attrs)


def _as_media_descriptor(descriptor: MediaDescriptorLike) -> Node:
    if isinstance(descriptor, Node):
        if descriptor.tag != Tag.MEDIA_DESCRIPTOR.value:
            raise StructuralTypeError(f"Expected a media-descriptor node, got <{descriptor.tag}>")
        return descriptor
    if isinstance(descriptor, Mapping):
        missing = [key for key in ("media-url", "mime-type") if key not in descriptor]
        if missing:
            raise StructuralTypeError(f"Media descriptor {dict(descriptor)!r} lacks {', '.join(missing)}")
        return Node(Tag.MEDIA_DESCRIPTOR, {
            "media-url": descriptor["media-url"],
            "mime-type": descriptor["mime-type"],
        })
    raise StructuralTypeError(f"Cannot build a media descriptor from {descriptor!r}")


def create_document(
    author: str,
    date: str,
    media_descriptors: Iterable[MediaDescriptorLike] = ()
) -> Node:
    """
    Create a minimal EAF 3.0 document, much like ELAN 5.1 does for a new
    project.

    Args:
        author: Value of AUTHOR
        date: Value of DATE; must be a timestamp for the result to validate
        media_descriptors: media-descriptor nodes, or mappings with
            ``media-url`` and ``mime-type``
    Returns:
        Root annotation-document node
    """
    header = Node(
        Tag.HEADER,
        {"media-file": "", "time-units": "milliseconds"},
        tuple(_as_media_descriptor(md) for md in media_descriptors)
        + (Node(Tag.PROPERTY, {"name": "lastUsedAnnotationId"}, ("0",)),),
    )
    constraints = tuple(
        Node(Tag.CONSTRAINT, {"stereotype": stereotype, "description": description})
        for stereotype, description in CONSTRAINT_DESCRIPTIONS.items()
    )
    return Node(
        Tag.ANNOTATION_DOCUMENT,
        {"author": author, "date": date, "format": EAF_VERSION, "version": EAF_VERSION},
        (
            header,
            Node(Tag.TIME_ORDER),
            Node(Tag.TIER, {"tier-id": "default", "linguistic-type-ref": "default-lt"}),
            Node(Tag.LINGUISTIC_TYPE, {
                "linguistic-type-id": "default-lt",
                "time-alignable": "true",
                "graphic-references": "false",
            }),
        ) + constraints,
    )
