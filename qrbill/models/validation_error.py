"""Validation error data model: coded problems found while parsing a document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional


class ErrorCode(IntEnum):
    """Stable numeric codes reported to callers."""
    EMPTY_INPUT = 1
    INPUT_TOO_LONG = 2
    MALFORMED_DATA = 3
    VERSION_UNSUPPORTED = 4
    TYPE_IDENTIFIER_INVALID = 5
    CODING_INVALID = 6
    ACCOUNT_INVALID = 7
    CURRENCY_INVALID = 8
    REFERENCE_INVALID = 9
    ACTOR_DEPENDENCY = 10


DEFAULT_MESSAGES = {
    ErrorCode.EMPTY_INPUT: "Input data empty or null.",
    ErrorCode.INPUT_TOO_LONG: "Input data exceeds maximum allowed limit.",
    ErrorCode.MALFORMED_DATA: "Malformed Data - insufficient fields.",
    ErrorCode.VERSION_UNSUPPORTED: "Version invalid or not supported",
    ErrorCode.TYPE_IDENTIFIER_INVALID: "QR Type invalid or not supported",
    ErrorCode.CODING_INVALID: "Valid Coding type Missing",
    ErrorCode.ACCOUNT_INVALID: "Valid IBAN Missing",
    ErrorCode.CURRENCY_INVALID: "Valid Currency Missing",
    ErrorCode.REFERENCE_INVALID: "Valid Reference Missing",
    ErrorCode.ACTOR_DEPENDENCY: "Mandatory actor dependancies not met.",
}


@dataclass(frozen=True)
class DocumentError:
    """One problem found in a payment document.

    Attributes:
        code: Numeric error code
        message: Human-readable description
    """

    code: ErrorCode
    message: str

    @classmethod
    def of(cls, code: ErrorCode, message: Optional[str] = None) -> "DocumentError":
        """Build an error with the default message for its code."""
        return cls(code=code, message=message or DEFAULT_MESSAGES[code])

    def __str__(self) -> str:
        return f"[{int(self.code)}] {self.message}"


class DocumentRejectedError(Exception):
    """Raised by strict callers when a document carries validation errors."""

    def __init__(self, errors: Iterable[DocumentError]):
        self.errors: List[DocumentError] = list(errors)
        summary = "; ".join(str(e) for e in self.errors) or "unknown error"
        super().__init__(f"Payment document rejected: {summary}")

    @property
    def codes(self) -> List[int]:
        return [int(e.code) for e in self.errors]


def raise_for_errors(errors: Iterable[DocumentError]) -> None:
    """Apply the strict policy: raise if any error was collected.

    Raises:
        DocumentRejectedError: If errors is non-empty
    """
    errors = list(errors)
    if errors:
        raise DocumentRejectedError(errors)
