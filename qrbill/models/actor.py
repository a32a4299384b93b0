"""Actor data model: one of the three parties named on a payment document."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Tuple

from .fields import ADDTYPE_COMBINED, ActorRole


ADDRESS_LINE_2_STRUCTURED_MAX_LENGTH = 16
ADDRESS_LINE_2_COMBINED_MAX_LENGTH = 70


@dataclass
class Actor:
    """Represents the creditor, ultimate creditor or ultimate debtor.

    A value of None marks a required sub-field that was supplied empty or
    oversized; "" marks an absent optional sub-field.

    Attributes:
        role: Fixed role of this actor within the document
        name: Full name (max 70)
        address_type: "S" (structured) or "K" (combined), current schema only
        address_line_1: Street, or street and number when combined (max 70)
        address_line_2: Building number (max 16), or postcode and town when combined (max 70)
        postcode: Postcode (max 16)
        location: Town or city (max 35)
        country: ISO 3166-1 two-letter country code
    """

    role: ActorRole
    name: Optional[str] = ""
    address_type: Optional[str] = ""
    address_line_1: Optional[str] = ""
    address_line_2: Optional[str] = ""
    postcode: Optional[str] = ""
    location: Optional[str] = ""
    country: Optional[str] = ""

    def __post_init__(self):
        """Validate actor role."""
        self.role = ActorRole(self.role)

    @staticmethod
    def value_fields() -> Tuple[str, ...]:
        """Names of the textual sub-fields, in document order."""
        return tuple(f.name for f in fields(Actor) if f.name != "role")

    @property
    def address_line_2_max_length(self) -> int:
        if self.address_type == ADDTYPE_COMBINED:
            return ADDRESS_LINE_2_COMBINED_MAX_LENGTH
        return ADDRESS_LINE_2_STRUCTURED_MAX_LENGTH

    def has_entry(self) -> bool:
        """True if any field apart from the address type carries text.

        The address type alone does not make an actor present.
        """
        return any(
            (getattr(self, name) or "").strip()
            for name in self.value_fields()
            if name != "address_type"
        )

    def normalize(self) -> None:
        """Replace unset sub-fields with empty strings."""
        for name in self.value_fields():
            if getattr(self, name) is None:
                setattr(self, name, "")


def new_actors() -> Tuple[Actor, Actor, Actor]:
    """Create a fresh, independently owned actor triple."""
    return tuple(Actor(role=role) for role in ActorRole)
