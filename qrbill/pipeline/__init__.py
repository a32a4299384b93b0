"""Pipeline stages for payment document encoding and decoding."""

from .check_digit import compute_check_digit, validate as validate_check_digit
from .schema_registry import CURRENT_SCHEMA, EARLIER_SCHEMA, find_schema, resolve_schema

__all__ = [
    "compute_check_digit",
    "validate_check_digit",
    "CURRENT_SCHEMA",
    "EARLIER_SCHEMA",
    "find_schema",
    "resolve_schema",
]
