# eaf_engine/errors.py
"""
Exceptions raised by the EAF document engine.

Validation problems are never raised; they are returned as
:class:`eaf_engine.schema.validator.ValidationViolation` records.
"""
from typing import List, Optional


class EafError(Exception):
    """Base class for every error raised by this package."""


class MalformedXmlError(EafError, ValueError):
    """The document text could not be parsed as XML."""

    def __init__(self, message: str, position: Optional[tuple] = None):
        super().__init__(message)
        self.position = position


class StructuralTypeError(EafError, TypeError):
    """A value that must be a tree node is not one."""


class MissingTimeValueError(EafError, LookupError):
    """No explicit time value follows a slot that needs interpolation."""

    def __init__(self, time_slot_id: str):
        super().__init__(
            f"Time slot {time_slot_id!r} has no value and no following "
            "slot carries one to interpolate from"
        )
        self.time_slot_id = time_slot_id


class InvalidTimeValueError(EafError, ValueError):
    """An explicit time value is not a whole number."""

    def __init__(self, time_slot_id: str, value: str):
        super().__init__(f"Time slot {time_slot_id!r} has non-numeric value {value!r}")
        self.time_slot_id = time_slot_id
        self.value = value


class CyclicReferenceError(EafError, RuntimeError):
    """A chain of annotation or tier references loops back on itself."""

    def __init__(self, kind: str, cycle: List[str]):
        super().__init__(f"Cyclic {kind} reference: {' -> '.join(cycle)}")
        self.kind = kind
        self.cycle = cycle
