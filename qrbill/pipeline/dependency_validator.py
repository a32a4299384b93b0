"""Cross-field rules for the three actor roles."""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from ..models.actor import Actor
from ..models.fields import ADDTYPE_COMBINED, ADDTYPE_STRUCTURED, ActorRole


logger = logging.getLogger(__name__)

ADDRESS_TYPE_MIN_VERSION = Decimal("2.00")


def _filled(value: Optional[str]) -> bool:
    return bool(value)


def missing_fields(actor: Actor, format_version: Optional[Decimal]) -> List[str]:
    """List the sub-fields that keep an actor from being valid.

    Rules:
    - An actor with no entry is valid (role absent), except the creditor,
      which is always mandatory
    - Earlier schema: name, postcode, location and country are mandatory
    - Current schema (2.00+): name and address type are mandatory; a
      structured address needs address_line_1, postcode, location and
      country, a combined address needs address_line_1 and address_line_2
    """
    if not actor.has_entry():
        if actor.role == ActorRole.CREDITOR:
            return ["name"]
        return []

    required = ["name"]
    address_type_invalid = False
    if format_version is not None and format_version >= ADDRESS_TYPE_MIN_VERSION:
        if actor.address_type == ADDTYPE_STRUCTURED:
            required += ["address_line_1", "postcode", "location", "country"]
        elif actor.address_type == ADDTYPE_COMBINED:
            required += ["address_line_1", "address_line_2"]
        else:
            address_type_invalid = True
    else:
        required += ["postcode", "location", "country"]

    missing = [name for name in required if not _filled(getattr(actor, name))]
    if address_type_invalid:
        missing.append("address_type")
    return missing


def validate_actor(actor: Actor, format_version: Optional[Decimal]) -> bool:
    """Check the dependency rules for one actor.

    An actor that passes has its unset sub-fields normalized to "".
    Calling this repeatedly gives the same result.
    """
    missing = missing_fields(actor, format_version)
    if missing:
        logger.debug(f"Actor {actor.role.name} missing: {', '.join(missing)}")
        return False
    actor.normalize()
    return True


def validate_actors(actors: Iterable[Actor], format_version: Optional[Decimal]) -> bool:
    """Validate every actor; True only if all pass.

    Each actor is checked even after a failure so that all get normalized.
    """
    results = [validate_actor(actor, format_version) for actor in actors]
    return all(results)
