"""Parse raw payment document text into a PaymentDocument with collected errors."""

import logging
import re
from typing import List, NamedTuple, Optional

from ..models.document import PaymentDocument
from ..models.fields import (
    MAX_INPUT_LENGTH,
    MIN_LINE_COUNT,
    FieldRole,
    get_field_spec,
)
from ..models.validation_error import DocumentError, ErrorCode, raise_for_errors
from .amount_format import parse_amount
from .dependency_validator import validate_actors
from .schema_registry import VERSION_POSITION, Schema, find_schema, parse_version


logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

TRAILER_MESSAGE = "Malformed Data - trailer missing or invalid."


class ParseResult(NamedTuple):
    """Parsed document together with every error found.

    Unpacks as (document, errors). An empty error list means the document
    is fully valid.
    """
    document: PaymentDocument
    errors: List[DocumentError]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[int]:
        return [int(e.code) for e in self.errors]


def split_lines(raw_text: str) -> List[str]:
    """Trim surrounding whitespace and split on any line break style."""
    return _LINE_BREAK.split(raw_text.strip())


def _dispatch(document: PaymentDocument, role: FieldRole, value: str, reference_type: str) -> Optional[DocumentError]:
    """Apply one line to its field setter; return an error for failed required fields."""
    spec = get_field_spec(role)
    if spec.actor is not None:
        document.set_actor_field(spec.actor, spec.actor_attribute, value)
        return None

    if role == FieldRole.TYPE_IDENTIFIER:
        if not document.set_type_identifier(value):
            return DocumentError.of(ErrorCode.TYPE_IDENTIFIER_INVALID)
    elif role == FieldRole.VERSION:
        pass  # resolved before dispatch
    elif role == FieldRole.CODING:
        if not document.set_coding(value):
            return DocumentError.of(ErrorCode.CODING_INVALID)
    elif role == FieldRole.ACCOUNT:
        if not document.set_account(value):
            return DocumentError.of(ErrorCode.ACCOUNT_INVALID)
    elif role == FieldRole.AMOUNT:
        # unreadable amounts count as "no amount"
        document.set_amount(parse_amount(value))
    elif role == FieldRole.CURRENCY:
        if not document.set_currency(value):
            return DocumentError.of(ErrorCode.CURRENCY_INVALID)
    elif role == FieldRole.DUE_DATE:
        document.set_due_date_text(value)
    elif role == FieldRole.REFERENCE_TYPE:
        pass  # applied together with the reference line
    elif role == FieldRole.REFERENCE:
        if not document.set_reference(reference_type, value):
            return DocumentError.of(ErrorCode.REFERENCE_INVALID)
    elif role == FieldRole.UNSTRUCTURED_MESSAGE:
        document.set_unstructured_message(value)
    elif role == FieldRole.TRAILER:
        if not document.set_trailer(value):
            return DocumentError.of(ErrorCode.MALFORMED_DATA, TRAILER_MESSAGE)
    elif role == FieldRole.BILL_INFO:
        document.set_bill_info(value)
    elif role == FieldRole.ALTERNATIVE_SCHEMA_1:
        document.set_alternative_schema(value, 0)
    elif role == FieldRole.ALTERNATIVE_SCHEMA_2:
        document.set_alternative_schema(value, 1)
    return None


def _parse_fields(document: PaymentDocument, schema: Schema, lines: List[str]) -> List[DocumentError]:
    errors = []
    reference_type = ""
    for position, role in enumerate(schema.fields):
        # lines trimmed off the end count as empty
        value = lines[position] if position < len(lines) else ""
        if role == FieldRole.REFERENCE_TYPE:
            reference_type = value
        error = _dispatch(document, role, value, reference_type)
        if error is not None:
            logger.debug(f"Line {position + 1} ({role.value}): {error.message}")
            errors.append(error)

    if len(lines) > len(schema):
        logger.debug(f"Ignoring {len(lines) - len(schema)} line(s) beyond the {schema.name} schema")
    return errors


def parse(raw_text: Optional[str]) -> ParseResult:
    """Parse raw payment document text.

    Never raises for malformed content. Every problem found is collected
    and returned alongside a best-effort document.

    Steps:
    1. Reject empty input and input over 997 characters
    2. Split into lines; reject fewer than 25
    3. Resolve the schema from the version line (second line); without a
       schema no further line has a meaning and parsing stops
    4. Dispatch each line to its field setter, collecting errors
    5. Check the actor dependencies once for all three actors

    Args:
        raw_text: Newline-separated document text

    Returns:
        ParseResult(document, errors)
    """
    document = PaymentDocument()
    errors: List[DocumentError] = []

    if not raw_text:
        return ParseResult(document, [DocumentError.of(ErrorCode.EMPTY_INPUT)])
    if len(raw_text) > MAX_INPUT_LENGTH:
        return ParseResult(document, [DocumentError.of(ErrorCode.INPUT_TOO_LONG)])

    lines = split_lines(raw_text)
    if len(lines) < MIN_LINE_COUNT:
        return ParseResult(document, [DocumentError.of(ErrorCode.MALFORMED_DATA)])

    version_line = lines[VERSION_POSITION]
    schema = find_schema(parse_version(version_line))
    if schema is None or not document.set_version(version_line):
        logger.info(f"Unsupported format version {version_line.strip()!r}")
        return ParseResult(document, [DocumentError.of(ErrorCode.VERSION_UNSUPPORTED)])

    errors.extend(_parse_fields(document, schema, lines))

    if not validate_actors(document.actors, document.format_version):
        errors.append(DocumentError.of(ErrorCode.ACTOR_DEPENDENCY))

    if errors:
        logger.info(
            f"Parsed {schema.name} payment document with {len(errors)} error(s): "
            f"{', '.join(str(int(e.code)) for e in errors)}"
        )
    else:
        logger.debug(f"Parsed valid {schema.name} payment document ({len(lines)} lines)")
    return ParseResult(document, errors)


def parse_strict(raw_text: Optional[str]) -> PaymentDocument:
    """Parse and reject the document if any error was found.

    Raises:
        DocumentRejectedError: If the document is not fully valid
    """
    document, errors = parse(raw_text)
    raise_for_errors(errors)
    return document


def validate_document(document: PaymentDocument) -> List[DocumentError]:
    """Re-validate a document by rendering and parsing it again."""
    from .serializer import render
    return parse(render(document)).errors
