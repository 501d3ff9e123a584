# eaf_engine/__init__.py
"""
EAF 3.0 document engine: parsing, validation, navigation and queries.
"""
from .__about__ import __version__

from .core.interfaces import Node, Tag
from .core.navigator import Cursor
from .conversion import parse_document, serialize_document, ParserOptions, SerializerOptions
from .schema.validator import validate, explain, Validator, ValidatorOptions, ValidationViolation
from .builder import create_document, media_descriptor
from .index import DerivedIndexCache
from .resolution import (
    AnnotationTimes,
    resolve_time_slot_value,
    get_annotation_times,
    get_parent_tiers,
    is_parent_tier,
)
from .sections import (
    get_author,
    get_date,
    get_version,
    get_format,
    get_licenses,
    get_header,
    get_time_order,
    get_time_slots,
    get_tiers,
    get_annotations,
    find_tier,
    update_tiers,
    get_linguistic_types,
    get_locales,
    get_languages,
    get_constraints,
    get_controlled_vocabularies,
    get_lexicon_refs,
    get_ref_link_sets,
    get_external_refs,
    get_media_descriptors,
    get_linked_file_descriptors,
    get_properties,
)
from .errors import (
    EafError,
    MalformedXmlError,
    StructuralTypeError,
    MissingTimeValueError,
    InvalidTimeValueError,
    CyclicReferenceError,
)

__all__ = [
    "__version__",
    "Node",
    "Tag",
    "Cursor",
    "parse_document",
    "serialize_document",
    "ParserOptions",
    "SerializerOptions",
    "validate",
    "explain",
    "Validator",
    "ValidatorOptions",
    "ValidationViolation",
    "create_document",
    "media_descriptor",
    "DerivedIndexCache",
    "AnnotationTimes",
    "resolve_time_slot_value",
    "get_annotation_times",
    "get_parent_tiers",
    "is_parent_tier",
    "get_author",
    "get_date",
    "get_version",
    "get_format",
    "get_licenses",
    "get_header",
    "get_time_order",
    "get_time_slots",
    "get_tiers",
    "get_annotations",
    "find_tier",
    "update_tiers",
    "get_linguistic_types",
    "get_locales",
    "get_languages",
    "get_constraints",
    "get_controlled_vocabularies",
    "get_lexicon_refs",
    "get_ref_link_sets",
    "get_external_refs",
    "get_media_descriptors",
    "get_linked_file_descriptors",
    "get_properties",
    "EafError",
    "MalformedXmlError",
    "StructuralTypeError",
    "MissingTimeValueError",
    "InvalidTimeValueError",
    "CyclicReferenceError",
]
