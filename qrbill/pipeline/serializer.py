"""Render a PaymentDocument back to canonical newline-separated text."""

import logging
from typing import List, Optional

from ..models.document import PaymentDocument
from ..models.fields import FieldRole, get_field_spec
from .schema_registry import Schema


logger = logging.getLogger(__name__)


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def render_field(document: PaymentDocument, role: FieldRole) -> str:
    """Text of one field as it appears on its line ("" if unresolved)."""
    spec = get_field_spec(role)
    if spec.actor is not None:
        return _text(getattr(document.get_actor(spec.actor), spec.actor_attribute))

    if role == FieldRole.TYPE_IDENTIFIER:
        return _text(document.type_identifier)
    if role == FieldRole.VERSION:
        return document.formatted_version
    if role == FieldRole.CODING:
        return "" if document.coding is None else str(document.coding)
    if role == FieldRole.ACCOUNT:
        return _text(document.account)
    if role == FieldRole.AMOUNT:
        return document.formatted_amount
    if role == FieldRole.CURRENCY:
        return _text(document.currency)
    if role == FieldRole.DUE_DATE:
        return document.formatted_due_date
    if role == FieldRole.REFERENCE_TYPE:
        return _text(document.reference_type)
    if role == FieldRole.REFERENCE:
        return _text(document.reference_value)
    if role == FieldRole.UNSTRUCTURED_MESSAGE:
        return _text(document.unstructured_message)
    if role == FieldRole.TRAILER:
        return _text(document.trailer)
    if role == FieldRole.BILL_INFO:
        return _text(document.bill_info)
    if role == FieldRole.ALTERNATIVE_SCHEMA_1:
        return _text(document.alternative_schema[0])
    if role == FieldRole.ALTERNATIVE_SCHEMA_2:
        return _text(document.alternative_schema[1])
    return ""


def render_lines(document: PaymentDocument, schema: Optional[Schema] = None) -> List[str]:
    """One line per schema slot, in schema order.

    Args:
        document: Document to render
        schema: Schema to follow (default: the one selected by the document's version)

    Returns:
        List of lines, empty if no schema applies
    """
    schema = schema or document.schema
    if schema is None:
        logger.debug(f"No schema for format version {document.format_version}, nothing rendered")
        return []
    return [render_field(document, role) for role in schema.fields]


def render(document: PaymentDocument, schema: Optional[Schema] = None) -> str:
    """Render a document as payment document text.

    Never fails: unresolved fields render as empty lines. Lines are joined
    with a single line break and trailing whitespace is trimmed.
    """
    return "\n".join(render_lines(document, schema)).rstrip()
