"""
EAF 3.0 element taxonomy and validation.
"""
from .taxonomy import SCHEMA, ElementRule, ChildRule, Multiplicity, STEREOTYPES, parse_timestamp
from .validator import Validator, ValidatorOptions, ValidationViolation, validate, explain

__all__ = [
    "SCHEMA",
    "ElementRule",
    "ChildRule",
    "Multiplicity",
    "STEREOTYPES",
    "parse_timestamp",
    "Validator",
    "ValidatorOptions",
    "ValidationViolation",
    "validate",
    "explain",
]
