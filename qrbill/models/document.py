"""PaymentDocument data model: the validated content of one payment bill."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, Union

from .actor import Actor, new_actors
from .fields import (
    ACCOUNT_COUNTRIES,
    CODING_LATIN_1,
    CURRENCY_CHF,
    REFTYPE_NON,
    REFTYPE_QRR,
    REFTYPE_SCOR,
    TRAILER_EPD,
    TYPE_SPC,
    ActorRole,
    FieldRole,
    clean_field,
    get_actor_field_role,
    get_field_spec,
)
from ..pipeline import check_digit
from ..pipeline.alternative_schema import (
    ALTERNATIVE_SCHEMA_COUNT,
    AlternativeSchemaEntry,
    split_alternative_schema,
)
from ..pipeline.amount_format import AmountInput, format_amount, to_decimal
from ..pipeline.dependency_validator import ADDRESS_TYPE_MIN_VERSION, validate_actor
from ..pipeline.schema_registry import (
    VERSION_SUPPORTED,
    Schema,
    find_schema,
    format_version,
    parse_version,
)

if TYPE_CHECKING:
    from .validation_error import DocumentError


logger = logging.getLogger(__name__)

ACCOUNT_CHARSET = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ")
# QRR references use the full REFERENCE length
SCOR_MAX_LENGTH = 25
DUE_DATE_MIN_YEAR = 2018
DUE_DATE_MAX_YEAR = 9999
# February allows 29 here; the leap-year rule is applied separately
DAYS_PER_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass
class PaymentDocument:
    """Represents one payment document (QR bill payload).

    Every field is written through a setter that validates and returns a
    bool, so documents built by hand and documents produced by the parser
    obey the same rules. A required field that failed validation holds None.

    Attributes:
        type_identifier: QR type, always "SPC"
        format_version: Format version (e.g. Decimal("2.00")), selects the schema
        coding: Character set code, 1 = Latin-1
        account: IBAN, spaces removed, upper case, CH or LI
        amount: Amount with two decimals, or None when no amount is set
        currency: "CHF" or "EUR"
        due_date: Payable-by date, earlier schema only, or None
        reference_type: "QRR", "SCOR" or "NON"
        reference_value: Reference matching reference_type ("" for NON)
        unstructured_message: Free text (max 140)
        trailer: End-of-payment-data marker "EPD", current schema only
        bill_info: Structured bill information as free text (max 140)
        alternative_schema: Two raw alternative schema lines (max 100 each)
        actors: Creditor, ultimate creditor and ultimate debtor
    """

    type_identifier: Optional[str] = None
    format_version: Optional[Decimal] = None
    coding: Optional[int] = None
    account: Optional[str] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    due_date: Optional[date] = None
    reference_type: Optional[str] = None
    reference_value: Optional[str] = None
    unstructured_message: Optional[str] = ""
    trailer: Optional[str] = None
    bill_info: Optional[str] = ""
    alternative_schema: List[str] = field(default_factory=lambda: [""] * ALTERNATIVE_SCHEMA_COUNT)
    actors: Tuple[Actor, Actor, Actor] = field(default_factory=new_actors)

    def __post_init__(self):
        """Validate the actor triple."""
        if len(self.actors) != len(ActorRole):
            raise ValueError(
                f"actors must hold exactly {len(ActorRole)} entries, got {len(self.actors)}"
            )
        for expected, actor in zip(ActorRole, self.actors):
            if actor.role != expected:
                raise ValueError(
                    f"actor at position {int(expected)} must be {expected.name}, got {actor.role.name}"
                )

    @classmethod
    def create(cls, version: Union[str, Decimal, float, None] = None) -> "PaymentDocument":
        """Create a document pre-filled with the standard defaults.

        Defaults: type SPC, the configured default version, coding Latin-1,
        reference type NON, no amount, currency CHF and trailer EPD.

        Raises:
            ValueError: If version is given but not supported
        """
        if version is None:
            from ..config.settings import get_default_version
            version = get_default_version()

        document = cls()
        document.set_type_identifier(TYPE_SPC)
        if not document.set_version(version):
            raise ValueError(f"Unsupported format version: {version!r}")
        document.set_coding(CODING_LATIN_1)
        document.set_reference()
        document.set_amount()
        document.set_currency(CURRENCY_CHF)
        document.set_trailer(TRAILER_EPD)
        return document

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def formatted_version(self) -> str:
        """Version as the 4-digit field value ("0200"), "" when unset."""
        if self.format_version is None:
            return ""
        return format_version(self.format_version)

    @property
    def schema(self) -> Optional[Schema]:
        return find_schema(self.format_version)

    @property
    def uses_address_type(self) -> bool:
        return self.format_version is not None and self.format_version >= ADDRESS_TYPE_MIN_VERSION

    @property
    def formatted_amount(self) -> str:
        return "" if self.amount is None else format_amount(self.amount)

    @property
    def formatted_due_date(self) -> str:
        return "" if self.due_date is None else self.due_date.isoformat()

    @property
    def creditor(self) -> Actor:
        return self.actors[ActorRole.CREDITOR]

    @property
    def ultimate_creditor(self) -> Actor:
        return self.actors[ActorRole.ULTIMATE_CREDITOR]

    @property
    def ultimate_debtor(self) -> Actor:
        return self.actors[ActorRole.ULTIMATE_DEBTOR]

    def get_actor(self, role: Union[ActorRole, int]) -> Actor:
        """Return the actor for a role.

        Raises:
            ValueError: If role is not one of the three actor roles
        """
        return self.actors[ActorRole(role)]

    def get_due_date(self) -> Optional[Tuple[int, int, int]]:
        """Due date as (year, month, day), or None if absent."""
        if self.due_date is None:
            return None
        return (self.due_date.year, self.due_date.month, self.due_date.day)

    def get_alternative_schema(self, index: int) -> Optional[AlternativeSchemaEntry]:
        """Decompose one alternative schema line.

        Args:
            index: 0 or 1

        Returns:
            AlternativeSchemaEntry, or None if the line is shorter than 3 characters

        Raises:
            ValueError: If index is not 0 or 1
        """
        if index not in range(ALTERNATIVE_SCHEMA_COUNT):
            raise ValueError(f"Alternative schema index must be 0 or 1, got {index}")
        return split_alternative_schema(self.alternative_schema[index])

    @property
    def errors(self) -> List["DocumentError"]:
        """Errors found when re-validating the rendered document."""
        from ..pipeline.parser import validate_document
        return validate_document(self)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    # ------------------------------------------------------------------
    # Header fields
    # ------------------------------------------------------------------

    def set_type_identifier(self, value: Optional[str]) -> bool:
        """Set the QR type. Only "SPC" (any case) is accepted."""
        self.type_identifier = clean_field(FieldRole.TYPE_IDENTIFIER, (value or "").upper())
        if self.type_identifier is None:
            logger.debug(f"Rejected type identifier {value!r}")
        return self.type_identifier is not None

    def set_version(self, value: Union[str, Decimal, float, int, None]) -> bool:
        """Set the format version.

        Args:
            value: 4-digit field text ("0200") or a number (2.0)

        Returns:
            True if the version is at most the supported version and a schema
            exists for it; otherwise the stored version is left unchanged
        """
        if isinstance(value, str):
            version = parse_version(value)
        elif value is None or isinstance(value, bool):
            version = None
        else:
            try:
                version = to_decimal(value)
            except ValueError:
                version = None

        if version is None or version > VERSION_SUPPORTED or find_schema(version) is None:
            logger.debug(f"Rejected format version {value!r}")
            return False
        self.format_version = version
        return True

    def set_coding(self, value: Union[int, str, None]) -> bool:
        """Set the character set code. Only 1 (Latin-1) is accepted."""
        text = None if value is None or isinstance(value, bool) else str(value)
        cleaned = clean_field(FieldRole.CODING, text)
        self.coding = int(cleaned) if cleaned is not None else None
        return self.coding is not None

    def set_account(self, value: Optional[str]) -> bool:
        """Set the account (IBAN).

        Spaces are removed and the value upper-cased. It must hold only
        digits and latin letters, be at most 21 characters long and start
        with CH or LI.
        """
        cleaned = clean_field(FieldRole.ACCOUNT, (value or "").replace(" ", "").upper())
        valid = (
            cleaned is not None
            and all(char in ACCOUNT_CHARSET for char in cleaned)
            and cleaned[:2] in ACCOUNT_COUNTRIES
        )
        self.account = cleaned if valid else None
        if not valid:
            logger.debug(f"Rejected account {value!r}")
        return valid

    def set_amount(self, value: Optional[AmountInput] = None) -> bool:
        """Set the amount payable.

        None or a negative value clears the amount. Other values are cut to
        two decimals; the amount is stored even if its text form exceeds 12
        characters, but False is returned.
        """
        if value is None:
            self.amount = None
            return True
        try:
            amount = to_decimal(value)
        except ValueError:
            logger.debug(f"Rejected amount {value!r}")
            self.amount = None
            return False
        if amount < 0:
            self.amount = None
            return True
        text = format_amount(amount)
        self.amount = Decimal(text)
        return len(text) <= get_field_spec(FieldRole.AMOUNT).max_length

    def set_currency(self, value: Optional[str]) -> bool:
        self.currency = clean_field(FieldRole.CURRENCY, (value or "").upper())
        return self.currency is not None

    def set_due_date(self, year: int, month: int, day: int) -> bool:
        """Set the due date.

        Invalid dates (year outside 2018-9999, unknown month, day beyond
        the month, February 29 outside a leap year) leave the due date
        absent. Always returns True.
        """
        valid = DUE_DATE_MIN_YEAR <= year <= DUE_DATE_MAX_YEAR and 1 <= month <= 12
        if valid and not 1 <= day <= DAYS_PER_MONTH[month - 1]:
            valid = False
        if valid and month == 2 and day == 29:
            if year % 4 > 0 or (year % 100 == 0 and year % 400 > 0):
                valid = False

        self.due_date = date(year, month, day) if valid else None
        if not valid:
            logger.debug(f"Due date {year}-{month}-{day} is not a valid date, left absent")
        return True

    def set_due_date_text(self, value: Optional[str]) -> bool:
        """Set the due date from "YYYY-MM-DD" text; unreadable text clears it."""
        parts = (value or "").strip().split("-")
        try:
            year, month, day = (int(part) for part in parts)
        except ValueError:
            self.due_date = None
            return True
        return self.set_due_date(year, month, day)

    def clear_due_date(self) -> None:
        self.due_date = None

    def set_reference(self, reference_type: Optional[str] = REFTYPE_NON, reference_value: Optional[str] = None) -> bool:
        """Set the reference type and reference.

        Args:
            reference_type: "QRR", "SCOR" or "NON" (any case)
            reference_value: QRR: max 27 characters with a valid check digit.
                SCOR: max 25 characters. NON: ignored, reference left empty.

        Returns:
            True if type and reference are valid
        """
        ref_type = clean_field(FieldRole.REFERENCE_TYPE, (reference_type or "").upper())
        value = reference_value.replace(" ", "") if reference_value is not None else None

        if ref_type is None:
            self.reference_type = None
            self.reference_value = None
            logger.debug(f"Rejected reference type {reference_type!r}")
            return False

        self.reference_type = ref_type
        if ref_type == REFTYPE_QRR:
            self.reference_value = clean_field(FieldRole.REFERENCE, value, required=True)
            if self.reference_value is None or not check_digit.validate(self.reference_value):
                self.reference_value = None
                return False
        elif ref_type == REFTYPE_SCOR:
            self.reference_value = clean_field(FieldRole.REFERENCE, value, True, SCOR_MAX_LENGTH)
            if self.reference_value is None:
                return False
        else:
            self.reference_value = ""
        return True

    # ------------------------------------------------------------------
    # Free text and trailer
    # ------------------------------------------------------------------

    def set_unstructured_message(self, value: Optional[str]) -> bool:
        """Set the unstructured message; over 140 characters or a line break clears it."""
        self.unstructured_message = clean_field(FieldRole.UNSTRUCTURED_MESSAGE, value)
        return self.unstructured_message == (value or "").strip()

    def set_bill_info(self, value: Optional[str]) -> bool:
        """Set the bill information; over 140 characters or a line break clears it."""
        self.bill_info = clean_field(FieldRole.BILL_INFO, value)
        return self.bill_info == (value or "").strip()

    def set_trailer(self, value: Optional[str]) -> bool:
        self.trailer = clean_field(FieldRole.TRAILER, (value or "").upper())
        return self.trailer is not None

    def set_alternative_schema(self, value: Optional[str], index: int) -> bool:
        """Store one raw alternative schema line.

        None clears the entry, over 100 characters or a line break stores "".
        An index other than 0 or 1 is rejected.
        """
        if index not in range(ALTERNATIVE_SCHEMA_COUNT):
            return False
        role = (FieldRole.ALTERNATIVE_SCHEMA_1, FieldRole.ALTERNATIVE_SCHEMA_2)[index]
        self.alternative_schema[index] = clean_field(role, value)
        return self.alternative_schema[index] == (value or "").strip()

    def set_alternative_schemas(self, values: Optional[Iterable[Optional[str]]]) -> bool:
        """Replace both alternative schema lines.

        None clears both; a single entry clears the second; entries after the
        second are ignored.
        """
        entries = list(values or [])[:ALTERNATIVE_SCHEMA_COUNT]
        entries += [None] * (ALTERNATIVE_SCHEMA_COUNT - len(entries))
        results = [self.set_alternative_schema(entry, index) for index, entry in enumerate(entries)]
        return all(results)

    def clear_alternative_schemas(self) -> None:
        self.set_alternative_schemas(None)

    # ------------------------------------------------------------------
    # Actors
    # ------------------------------------------------------------------

    def set_actor_field(self, role: Union[ActorRole, int], attribute: str, value: Optional[str]) -> bool:
        """Set one sub-field of an actor.

        Returns:
            True if the value was stored unchanged apart from trimming

        Raises:
            ValueError: If role or attribute is unknown
        """
        actor = self.get_actor(role)
        field_role = get_actor_field_role(actor.role, attribute)
        raw = (value or "").strip()
        if attribute in ("address_type", "country"):
            raw = raw.upper()

        required = None
        max_length = None
        if attribute == "address_type":
            # the earlier schema has no address type line
            required = get_field_spec(field_role).required and self.uses_address_type
        elif attribute == "address_line_2":
            max_length = actor.address_line_2_max_length
        cleaned = clean_field(field_role, raw, required, max_length)

        setattr(actor, attribute, cleaned)
        return cleaned == raw

    def set_actor(
        self,
        role: Union[ActorRole, int],
        name: Optional[str],
        address_type: Optional[str] = None,
        address_line_1: Optional[str] = None,
        address_line_2: Optional[str] = None,
        postcode: Optional[str] = None,
        location: Optional[str] = None,
        country: Optional[str] = None,
    ) -> bool:
        """Replace an actor and validate its dependencies.

        The address type is only meaningful from version 2.00 on and may be
        left out for earlier documents.

        Returns:
            Result of the actor dependency rules for the current version
        """
        role = ActorRole(role)
        actors = list(self.actors)
        actors[role] = Actor(role=role)
        self.actors = tuple(actors)

        # address type first: it bounds the length of address_line_2
        self.set_actor_field(role, "address_type", address_type)
        self.set_actor_field(role, "name", name)
        self.set_actor_field(role, "address_line_1", address_line_1)
        self.set_actor_field(role, "address_line_2", address_line_2)
        self.set_actor_field(role, "postcode", postcode)
        self.set_actor_field(role, "location", location)
        self.set_actor_field(role, "country", country)
        return validate_actor(self.actors[role], self.format_version)

    def clear_actor(self, role: Union[ActorRole, int]) -> None:
        """Remove an actor from the document (leave the role absent)."""
        role = ActorRole(role)
        actors = list(self.actors)
        actors[role] = Actor(role=role)
        self.actors = tuple(actors)
