"""Field catalog: every semantic field a payment document can carry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Optional, Tuple


TYPE_SPC = "SPC"
CODING_LATIN_1 = 1
CURRENCY_CHF = "CHF"
CURRENCY_EUR = "EUR"
REFTYPE_QRR = "QRR"
REFTYPE_SCOR = "SCOR"
REFTYPE_NON = "NON"
TRAILER_EPD = "EPD"
ADDTYPE_STRUCTURED = "S"
ADDTYPE_COMBINED = "K"

ACCOUNT_COUNTRIES = ("CH", "LI")
CURRENCIES = (CURRENCY_CHF, CURRENCY_EUR)
REFERENCE_TYPES = (REFTYPE_QRR, REFTYPE_SCOR, REFTYPE_NON)
ADDRESS_TYPES = (ADDTYPE_STRUCTURED, ADDTYPE_COMBINED)
CODING_TYPES = (CODING_LATIN_1,)

MAX_INPUT_LENGTH = 997
MIN_LINE_COUNT = 25


class ActorRole(IntEnum):
    """The three fixed actor roles, in document order."""
    CREDITOR = 0
    ULTIMATE_CREDITOR = 1
    ULTIMATE_DEBTOR = 2


class FieldRole(Enum):
    """Semantic meaning of one line of a payment document."""
    TYPE_IDENTIFIER = "type_identifier"
    VERSION = "version"
    CODING = "coding"
    ACCOUNT = "account"
    AMOUNT = "amount"
    CURRENCY = "currency"
    DUE_DATE = "due_date"
    REFERENCE_TYPE = "reference_type"
    REFERENCE = "reference"
    CR_ADDRESS_TYPE = "cr_address_type"
    CR_NAME = "cr_name"
    CR_ADDRESS_LINE_1 = "cr_address_line_1"
    CR_ADDRESS_LINE_2 = "cr_address_line_2"
    CR_POSTCODE = "cr_postcode"
    CR_LOCATION = "cr_location"
    CR_COUNTRY = "cr_country"
    UCR_ADDRESS_TYPE = "ucr_address_type"
    UCR_NAME = "ucr_name"
    UCR_ADDRESS_LINE_1 = "ucr_address_line_1"
    UCR_ADDRESS_LINE_2 = "ucr_address_line_2"
    UCR_POSTCODE = "ucr_postcode"
    UCR_LOCATION = "ucr_location"
    UCR_COUNTRY = "ucr_country"
    UDR_ADDRESS_TYPE = "udr_address_type"
    UDR_NAME = "udr_name"
    UDR_ADDRESS_LINE_1 = "udr_address_line_1"
    UDR_ADDRESS_LINE_2 = "udr_address_line_2"
    UDR_POSTCODE = "udr_postcode"
    UDR_LOCATION = "udr_location"
    UDR_COUNTRY = "udr_country"
    UNSTRUCTURED_MESSAGE = "unstructured_message"
    TRAILER = "trailer"
    BILL_INFO = "bill_info"
    ALTERNATIVE_SCHEMA_1 = "alternative_schema_1"
    ALTERNATIVE_SCHEMA_2 = "alternative_schema_2"


@dataclass(frozen=True)
class FieldSpec:
    """Constraints carried by a field role.

    Attributes:
        required: Field must be non-empty for a valid document
        max_length: Maximum number of characters (None if the setter decides)
        allowed_values: Closed value set, or None for free values
        actor: Owning actor role for per-actor fields
        actor_attribute: Actor attribute the line maps to
        min_length: Minimum number of characters of a non-empty value
    """
    required: bool = False
    max_length: Optional[int] = None
    allowed_values: Optional[FrozenSet[str]] = None
    actor: Optional[ActorRole] = None
    actor_attribute: Optional[str] = None
    min_length: Optional[int] = None


def _actor_fields(prefix: str, role: ActorRole) -> Dict[FieldRole, FieldSpec]:
    # address_line_2 length depends on the address type, resolved by the setter
    layout = (
        ("ADDRESS_TYPE", "address_type", True, None, 1, frozenset(ADDRESS_TYPES)),
        ("NAME", "name", True, None, 70, None),
        ("ADDRESS_LINE_1", "address_line_1", False, None, 70, None),
        ("ADDRESS_LINE_2", "address_line_2", False, None, None, None),
        ("POSTCODE", "postcode", True, None, 16, None),
        ("LOCATION", "location", True, None, 35, None),
        ("COUNTRY", "country", True, 2, 2, None),
    )
    return {
        FieldRole[f"{prefix}_{suffix}"]: FieldSpec(
            required=required,
            max_length=max_length,
            allowed_values=allowed,
            actor=role,
            actor_attribute=attribute,
            min_length=min_length,
        )
        for suffix, attribute, required, min_length, max_length, allowed in layout
    }


FIELD_CATALOG: Dict[FieldRole, FieldSpec] = {
    FieldRole.TYPE_IDENTIFIER: FieldSpec(True, 3, frozenset({TYPE_SPC})),
    FieldRole.VERSION: FieldSpec(True, 4),
    FieldRole.CODING: FieldSpec(True, 1, frozenset(str(c) for c in CODING_TYPES)),
    FieldRole.ACCOUNT: FieldSpec(True, 21),
    FieldRole.AMOUNT: FieldSpec(False, 12),
    FieldRole.CURRENCY: FieldSpec(True, 3, frozenset(CURRENCIES)),
    FieldRole.DUE_DATE: FieldSpec(False, 10),
    FieldRole.REFERENCE_TYPE: FieldSpec(True, 4, frozenset(REFERENCE_TYPES)),
    FieldRole.REFERENCE: FieldSpec(False, 27),
    FieldRole.UNSTRUCTURED_MESSAGE: FieldSpec(False, 140),
    FieldRole.TRAILER: FieldSpec(True, 3, frozenset({TRAILER_EPD})),
    FieldRole.BILL_INFO: FieldSpec(False, 140),
    FieldRole.ALTERNATIVE_SCHEMA_1: FieldSpec(False, 100),
    FieldRole.ALTERNATIVE_SCHEMA_2: FieldSpec(False, 100),
    **_actor_fields("CR", ActorRole.CREDITOR),
    **_actor_fields("UCR", ActorRole.ULTIMATE_CREDITOR),
    **_actor_fields("UDR", ActorRole.ULTIMATE_DEBTOR),
}

ACTOR_FIELD_ROLES: Dict[Tuple[ActorRole, str], FieldRole] = {
    (spec.actor, spec.actor_attribute): role
    for role, spec in FIELD_CATALOG.items()
    if spec.actor is not None
}


def get_field_spec(role: FieldRole) -> FieldSpec:
    """Return the catalog entry for a field role."""
    return FIELD_CATALOG[role]


def get_actor_field_role(actor: ActorRole, attribute: str) -> FieldRole:
    """Return the field role of one actor sub-field.

    Raises:
        ValueError: If attribute is not an actor sub-field
    """
    try:
        return ACTOR_FIELD_ROLES[(ActorRole(actor), attribute)]
    except KeyError:
        raise ValueError(f"Unknown actor field: {attribute!r}") from None


def clean_text(entry: Optional[str], required: bool, max_length: Optional[int] = None) -> Optional[str]:
    """Trim a raw field value and apply presence and length constraints.

    Returns the trimmed value when it fits on one line. An empty, oversized
    or multi-line value becomes None for required fields and "" for optional
    ones, so a failed required field stays detectable while serialization
    remains defined.
    """
    value = entry.strip() if entry is not None else ""
    fits = max_length is None or len(value) <= max_length
    if value and fits and "\n" not in value and "\r" not in value:
        return value
    return None if required else ""


def clean_field(
    role: FieldRole,
    entry: Optional[str],
    required: Optional[bool] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """Apply the catalog constraints of a field role to a raw value.

    Args:
        role: Field role whose FieldSpec applies
        entry: Raw value
        required: Overrides FieldSpec.required (e.g. version-dependent fields)
        max_length: Overrides FieldSpec.max_length (e.g. type-dependent lengths)

    Returns:
        Trimmed value, or None/"" (required/optional) if any constraint fails
    """
    spec = get_field_spec(role)
    required = spec.required if required is None else required
    max_length = spec.max_length if max_length is None else max_length

    value = clean_text(entry, required, max_length)
    if not value:
        return value
    too_short = spec.min_length is not None and len(value) < spec.min_length
    not_allowed = spec.allowed_values is not None and value not in spec.allowed_values
    if too_short or not_allowed:
        return None if required else ""
    return value
