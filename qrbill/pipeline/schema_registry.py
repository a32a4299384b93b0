"""Schema registry: line-position-to-field mapping per format version family."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from ..models.fields import FieldRole as F


VERSION_SUPPORTED = Decimal("2.00")


class UnsupportedVersionError(ValueError):
    """Raised when no schema exists for a format version."""
    pass


@dataclass(frozen=True)
class Schema:
    """Ordered field roles of one format version family.

    Attributes:
        name: Family name ("earlier" or "current")
        min_version: Lowest version covered (inclusive)
        max_version: Highest version covered
        fields: Field roles in emission/parse order
        max_inclusive: Whether max_version itself is covered
    """
    name: str
    min_version: Decimal
    max_version: Decimal
    fields: Tuple[F, ...]
    max_inclusive: bool = True

    def covers(self, version: Decimal) -> bool:
        if self.max_inclusive:
            return self.min_version <= version <= self.max_version
        return self.min_version <= version < self.max_version

    def role_at(self, position: int) -> Optional[F]:
        """Field role at a zero-based line position, None past the end."""
        if 0 <= position < len(self.fields):
            return self.fields[position]
        return None

    def __contains__(self, role: F) -> bool:
        return role in self.fields

    def __len__(self) -> int:
        return len(self.fields)


EARLIER_SCHEMA = Schema(
    name="earlier",
    min_version=Decimal("1.00"),
    max_version=Decimal("2.00"),
    max_inclusive=False,
    fields=(
        F.TYPE_IDENTIFIER, F.VERSION, F.CODING, F.ACCOUNT,
        F.CR_NAME, F.CR_ADDRESS_LINE_1, F.CR_ADDRESS_LINE_2,
        F.CR_POSTCODE, F.CR_LOCATION, F.CR_COUNTRY,
        F.UCR_NAME, F.UCR_ADDRESS_LINE_1, F.UCR_ADDRESS_LINE_2,
        F.UCR_POSTCODE, F.UCR_LOCATION, F.UCR_COUNTRY,
        F.AMOUNT, F.CURRENCY, F.DUE_DATE,
        F.UDR_NAME, F.UDR_ADDRESS_LINE_1, F.UDR_ADDRESS_LINE_2,
        F.UDR_POSTCODE, F.UDR_LOCATION, F.UDR_COUNTRY,
        F.REFERENCE_TYPE, F.REFERENCE, F.UNSTRUCTURED_MESSAGE,
        F.ALTERNATIVE_SCHEMA_1, F.ALTERNATIVE_SCHEMA_2,
    ),
)

CURRENT_SCHEMA = Schema(
    name="current",
    min_version=Decimal("2.00"),
    max_version=Decimal("2.00"),
    fields=(
        F.TYPE_IDENTIFIER, F.VERSION, F.CODING, F.ACCOUNT,
        F.CR_ADDRESS_TYPE, F.CR_NAME, F.CR_ADDRESS_LINE_1, F.CR_ADDRESS_LINE_2,
        F.CR_POSTCODE, F.CR_LOCATION, F.CR_COUNTRY,
        F.UCR_ADDRESS_TYPE, F.UCR_NAME, F.UCR_ADDRESS_LINE_1, F.UCR_ADDRESS_LINE_2,
        F.UCR_POSTCODE, F.UCR_LOCATION, F.UCR_COUNTRY,
        F.AMOUNT, F.CURRENCY,
        F.UDR_ADDRESS_TYPE, F.UDR_NAME, F.UDR_ADDRESS_LINE_1, F.UDR_ADDRESS_LINE_2,
        F.UDR_POSTCODE, F.UDR_LOCATION, F.UDR_COUNTRY,
        F.REFERENCE_TYPE, F.REFERENCE, F.UNSTRUCTURED_MESSAGE,
        F.TRAILER, F.BILL_INFO,
        F.ALTERNATIVE_SCHEMA_1, F.ALTERNATIVE_SCHEMA_2,
    ),
)

SCHEMAS = (CURRENT_SCHEMA, EARLIER_SCHEMA)

# Zero-based line position of the version field, identical in every family
VERSION_POSITION = 1


def find_schema(version: Optional[Decimal]) -> Optional[Schema]:
    """Return the schema covering a version, or None."""
    if version is None:
        return None
    for schema in SCHEMAS:
        if schema.covers(version):
            return schema
    return None


def resolve_schema(version: Optional[Decimal]) -> Schema:
    """Return the schema covering a version.

    Raises:
        UnsupportedVersionError: If no schema covers the version
    """
    schema = find_schema(version)
    if schema is None:
        raise UnsupportedVersionError(f"Format version not supported: {version}")
    return schema


def parse_version(text: Optional[str]) -> Optional[Decimal]:
    """Parse a 4-digit version field ("0200" -> Decimal("2.00")).

    Returns None for anything that is not exactly four digits.
    """
    if text is None:
        return None
    text = text.strip()
    if len(text) != 4 or not text.isdigit():
        return None
    return Decimal(text) / 100


def format_version(version: Decimal) -> str:
    """Render a version as its 4-digit field ("2.00" -> "0200")."""
    return f"{int(version * 100):04d}"
