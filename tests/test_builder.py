"""Tests for document construction."""
import pytest

from eaf_engine.builder import CONSTRAINT_DESCRIPTIONS, create_document, media_descriptor
from eaf_engine.core.interfaces import Node, Tag
from eaf_engine.errors import StructuralTypeError
from eaf_engine.schema import STEREOTYPES
from eaf_engine.schema.validator import Validator, ValidatorOptions, validate
from eaf_engine import sections


@pytest.fixture
def document():
    return create_document(author="jimbob", date="2002-05-30T09:30:10.5", media_descriptors=[])


def test_created_document_is_valid(document):
    """Test that a fresh document passes validation, strictly too."""
    assert validate(document)
    strict = Validator(ValidatorOptions(strict_attributes=True, require_sections=True))
    assert strict.explain(document) == []


def test_root_attributes(document):
    assert document.attrs == {
        "author": "jimbob",
        "date": "2002-05-30T09:30:10.5",
        "format": "3.0",
        "version": "3.0",
    }


def test_default_tier(document):
    """Test the single default tier and its linguistic type."""
    tiers = sections.get_tiers(document)
    assert len(tiers) == 1
    assert tiers[0].attrs == {"tier-id": "default", "linguistic-type-ref": "default-lt"}
    assert tiers[0].children == ()
    assert sections.get_linguistic_types(document) == [
        Node(Tag.LINGUISTIC_TYPE, {
            "linguistic-type-id": "default-lt",
            "time-alignable": "true",
            "graphic-references": "false",
        })
    ]


def test_constraints(document):
    """Test one constraint per stereotype, each described."""
    constraints = sections.get_constraints(document)
    assert len(constraints) == 4
    assert sorted(c.attrs["stereotype"] for c in constraints) == sorted(STEREOTYPES)
    for constraint in constraints:
        assert constraint.attrs["description"] == CONSTRAINT_DESCRIPTIONS[constraint.attrs["stereotype"]]


def test_header(document):
    header = sections.get_header(document)
    assert header.attrs["time-units"] == "milliseconds"
    assert sections.get_properties(document) == [
        Node(Tag.PROPERTY, {"name": "lastUsedAnnotationId"}, ("0",))
    ]
    assert sections.get_time_order(document) == Node(Tag.TIME_ORDER)


def test_media_descriptors():
    """Test both accepted media descriptor forms."""
    document = create_document("jimbob", "2002-05-30T09:30:10.5", [
        {"media-url": "file:///a.wav", "mime-type": "audio/x-wav"},
        media_descriptor("file:///b.mp4", "video/mp4", relative_media_url="./b.mp4"),
    ])
    descriptors = sections.get_media_descriptors(document)
    assert [d.attrs["media-url"] for d in descriptors] == ["file:///a.wav", "file:///b.mp4"]
    assert descriptors[1].attrs["relative-media-url"] == "./b.mp4"
    # descriptors come before the property
    header = sections.get_header(document)
    assert [c.tag for c in header.children] == ["media-descriptor", "media-descriptor", "property"]
    assert validate(document)


def test_bad_media_descriptor():
    with pytest.raises(StructuralTypeError):
        create_document("jimbob", "2002-05-30T09:30:10.5", [Node(Tag.TIER)])
    with pytest.raises(StructuralTypeError):
        create_document("jimbob", "2002-05-30T09:30:10.5", ["file:///a.wav"])


def test_invalid_date_is_reported_not_raised():
    document = create_document("jimbob", "not a date")
    assert not validate(document)


def test_incomplete_media_descriptor_mapping():
    """Test that a mapping without media-url or mime-type is rejected."""
    with pytest.raises(StructuralTypeError, match="mime-type"):
        create_document("jimbob", "2002-05-30T09:30:10.5", [{"media-url": "file:///a.wav"}])
    with pytest.raises(StructuralTypeError, match="media-url"):
        create_document("jimbob", "2002-05-30T09:30:10.5", [{"mime-type": "audio/x-wav"}])
