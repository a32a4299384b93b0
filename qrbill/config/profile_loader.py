"""Bill profile loader: reusable creditor data for generating payment documents."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..models.document import PaymentDocument
from ..models.fields import CURRENCY_CHF, REFTYPE_NON, ActorRole
from .settings import DEFAULT_VERSION, get_profiles_dir

logger = logging.getLogger(__name__)

ACTOR_KEYS = (
    "name",
    "address_type",
    "address_line_1",
    "address_line_2",
    "postcode",
    "location",
    "country",
)


@dataclass
class BillProfile:
    """Fixed part of the bills one creditor issues."""
    name: str
    description: str = ""
    version: str = DEFAULT_VERSION
    account: str = ""
    currency: str = CURRENCY_CHF
    creditor: Dict[str, str] = field(default_factory=dict)
    ultimate_creditor: Dict[str, str] = field(default_factory=dict)
    reference_type: str = REFTYPE_NON
    unstructured_message: str = ""
    bill_info: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BillProfile':
        """Create BillProfile from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            version=str(data.get('version', DEFAULT_VERSION)),
            account=str(data.get('account', '')),
            currency=data.get('currency', CURRENCY_CHF),
            creditor=_actor_dict(data.get('creditor')),
            ultimate_creditor=_actor_dict(data.get('ultimate_creditor')),
            reference_type=data.get('reference_type', REFTYPE_NON),
            unstructured_message=data.get('unstructured_message', '') or '',
            bill_info=data.get('bill_info', '') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'version': self.version,
            'account': self.account,
            'currency': self.currency,
            'creditor': dict(self.creditor),
            'ultimate_creditor': dict(self.ultimate_creditor),
            'reference_type': self.reference_type,
            'unstructured_message': self.unstructured_message,
            'bill_info': self.bill_info,
        }

    def build_document(
        self,
        amount: Optional[Union[Decimal, float, str]] = None,
        reference: Optional[str] = None,
        reference_type: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> PaymentDocument:
        """Build a payment document from this profile.

        All values go through the document setters; the result may still be
        invalid (check PaymentDocument.errors).

        Args:
            amount: Amount payable, None for an open amount
            reference: Reference matching the reference type
            reference_type: Overrides the profile's reference type
            due_date: "YYYY-MM-DD", earlier schema only

        Raises:
            ValueError: If the profile version is not supported
        """
        document = PaymentDocument.create(self.version)
        document.set_account(self.account)
        document.set_currency(self.currency)
        document.set_amount(amount)
        document.set_reference(reference_type or self.reference_type, reference)
        document.set_unstructured_message(self.unstructured_message)
        document.set_bill_info(self.bill_info)
        if due_date:
            document.set_due_date_text(due_date)

        document.set_actor(ActorRole.CREDITOR, **_actor_args(self.creditor))
        if self.ultimate_creditor:
            document.set_actor(ActorRole.ULTIMATE_CREDITOR, **_actor_args(self.ultimate_creditor))
        return document


def _actor_dict(data: Optional[Dict[str, Any]]) -> Dict[str, str]:
    if not data:
        return {}
    unknown = set(data) - set(ACTOR_KEYS)
    if unknown:
        raise ValueError(f"Unknown actor keys: {', '.join(sorted(unknown))}")
    return {key: str(value) for key, value in data.items() if value is not None}


def _actor_args(data: Dict[str, str]) -> Dict[str, Optional[str]]:
    return {key: data.get(key) for key in ACTOR_KEYS}


def load_profile(profile_name: str = "default", profiles_dir: Optional[Path] = None) -> BillProfile:
    """Load a bill profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)
        profiles_dir: Directory to look in (default: get_profiles_dir())

    Returns:
        BillProfile object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profiles_dir = Path(profiles_dir) if profiles_dir is not None else get_profiles_dir()
    profile_path = profiles_dir / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}")

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Profile {profile_name} must be a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded bill profile {profile_name} from {profile_path}")
    return BillProfile.from_dict(data)


def list_available_profiles(profiles_dir: Optional[Path] = None) -> List[str]:
    """List all available profile names.

    Returns:
        Sorted profile names (without .yaml extension)
    """
    profiles_dir = Path(profiles_dir) if profiles_dir is not None else get_profiles_dir()

    if not profiles_dir.exists():
        return []

    return sorted(profile_file.stem for profile_file in profiles_dir.glob("*.yaml"))


def get_default_profile() -> BillProfile:
    """Get default profile.

    Falls back to an empty profile when default.yaml cannot be loaded.
    """
    try:
        return load_profile("default")
    except (FileNotFoundError, ValueError) as e:
        logger.warning(f"Default profile unavailable ({e}), using empty profile")
        return BillProfile(name="default")
