# eaf_engine/core/naming.py
"""
Tag and attribute name mapping between the wire form (CAPS_SNAKE_CASE)
and the internal form (kebab-case).
"""


def to_internal(name: str) -> str:
    """TIME_SLOT_REF1 -> time-slot-ref1"""
    return name.lower().replace("_", "-")


def to_wire(name: str) -> str:
    """time-slot-ref1 -> TIME_SLOT_REF1"""
    return name.upper().replace("-", "_")
