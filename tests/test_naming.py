"""Tests for wire/internal name mapping."""
import pytest

from eaf_engine.core.naming import to_internal, to_wire


@pytest.mark.parametrize("wire, internal", [
    ("ANNOTATION_DOCUMENT", "annotation-document"),
    ("TIME_SLOT_REF1", "time-slot-ref1"),
    ("CV_ENTRY_ML", "cv-entry-ml"),
    ("LICENSE", "license"),
])
def test_names_map_both_ways(wire, internal):
    """Test that the two mappings are inverse to each other."""
    assert to_internal(wire) == internal
    assert to_wire(internal) == wire


def test_mixed_case_is_normalized():
    """Test that wire names are case-folded."""
    assert to_internal("Time_Units") == "time-units"
    assert to_wire("Time-Units") == "TIME_UNITS"
