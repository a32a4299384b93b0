"""Unit tests for Actor model and field catalog helpers."""

import pytest

from qrbill.models.actor import Actor, new_actors
from qrbill.models.fields import (
    FIELD_CATALOG,
    ActorRole,
    FieldRole,
    clean_field,
    clean_text,
    get_actor_field_role,
    get_field_spec,
)


class TestActor:
    """Test Actor dataclass."""

    def test_actor_creation(self):
        """Test creating Actor with a role given as int."""
        actor = Actor(role=1, name="Robert Schneider AG", country="CH")

        assert actor.role == ActorRole.ULTIMATE_CREDITOR
        assert actor.name == "Robert Schneider AG"
        assert actor.postcode == ""

    def test_actor_invalid_role(self):
        """Test that an unknown role raises ValueError."""
        with pytest.raises(ValueError):
            Actor(role=3)

    def test_has_entry_ignores_address_type(self):
        """Test that the address type alone does not make an actor present."""
        assert not Actor(role=ActorRole.ULTIMATE_DEBTOR).has_entry()
        assert not Actor(role=ActorRole.ULTIMATE_DEBTOR, address_type="S").has_entry()
        assert not Actor(role=ActorRole.ULTIMATE_DEBTOR, name=None, location="  ").has_entry()
        assert Actor(role=ActorRole.ULTIMATE_DEBTOR, country="CH").has_entry()

    def test_address_line_2_max_length(self):
        """Test address line 2 length per address type."""
        assert Actor(role=0, address_type="S").address_line_2_max_length == 16
        assert Actor(role=0, address_type="K").address_line_2_max_length == 70
        assert Actor(role=0).address_line_2_max_length == 16

    def test_normalize(self):
        """Test that normalize replaces None with empty strings."""
        actor = Actor(role=0, name=None, postcode=None, location="Biel")
        actor.normalize()

        assert actor.name == ""
        assert actor.postcode == ""
        assert actor.location == "Biel"

    def test_value_fields_order(self):
        """Test sub-field names in document order."""
        assert Actor.value_fields() == (
            "name",
            "address_type",
            "address_line_1",
            "address_line_2",
            "postcode",
            "location",
            "country",
        )

    def test_new_actors_are_independent(self):
        """Test that each call returns a fresh actor triple."""
        first, second = new_actors(), new_actors()
        first[0].name = "Changed"

        assert [actor.role for actor in first] == list(ActorRole)
        assert second[0].name == ""


class TestCleanText:
    """Test trimming and length rules for raw values."""

    @pytest.mark.parametrize(
        "entry,required,max_length,expected",
        [
            ("  Biel ", True, 35, "Biel"),
            ("", True, 35, None),
            (None, True, 35, None),
            ("", False, 35, ""),
            ("x" * 36, True, 35, None),
            ("x" * 36, False, 35, ""),
            ("x" * 36, False, None, "x" * 36),
        ],
    )
    def test_clean_text(self, entry, required, max_length, expected):
        """Test presence and length constraints."""
        assert clean_text(entry, required, max_length) == expected

    @pytest.mark.parametrize("entry", ["Order\nof June", "Order\rof June", "Order\r\nof June"])
    def test_line_breaks_rejected(self, entry):
        """Test that values spanning several lines are rejected."""
        assert clean_text(entry, True, 140) is None
        assert clean_text(entry, False, 140) == ""

    def test_surrounding_line_breaks_trimmed(self):
        """Test that leading and trailing line breaks are trimmed, not rejected."""
        assert clean_text("\nBiel\r\n", True, 35) == "Biel"


class TestFieldCatalog:
    """Test catalog entries and catalog-driven cleaning."""

    def test_field_catalog_covers_every_role(self):
        """Test that every field role has a catalog entry."""
        assert set(FIELD_CATALOG) == set(FieldRole)

    def test_actor_field_specs(self):
        """Test actor sub-field entries."""
        spec = get_field_spec(FieldRole.UDR_COUNTRY)

        assert spec.actor == ActorRole.ULTIMATE_DEBTOR
        assert spec.actor_attribute == "country"
        assert spec.min_length == 2
        assert spec.max_length == 2
        assert get_field_spec(FieldRole.ACCOUNT).actor is None

    def test_get_actor_field_role(self):
        """Test lookup of the field role of an actor sub-field."""
        assert get_actor_field_role(ActorRole.CREDITOR, "name") == FieldRole.CR_NAME
        assert get_actor_field_role(2, "address_type") == FieldRole.UDR_ADDRESS_TYPE
        with pytest.raises(ValueError):
            get_actor_field_role(ActorRole.CREDITOR, "street")

    @pytest.mark.parametrize(
        "role,entry,expected",
        [
            (FieldRole.CURRENCY, " EUR ", "EUR"),
            (FieldRole.CURRENCY, "USD", None),
            (FieldRole.TRAILER, "EPD", "EPD"),
            (FieldRole.CODING, "2", None),
            (FieldRole.CR_COUNTRY, "CH", "CH"),
            (FieldRole.CR_COUNTRY, "C", None),
            (FieldRole.CR_COUNTRY, "CHE", None),
            (FieldRole.UDR_ADDRESS_TYPE, "X", None),
            (FieldRole.UNSTRUCTURED_MESSAGE, "x" * 141, ""),
            (FieldRole.BILL_INFO, "a\nb", ""),
            (FieldRole.ALTERNATIVE_SCHEMA_1, "AB;1", "AB;1"),
        ],
    )
    def test_clean_field(self, role, entry, expected):
        """Test that catalog length, allowed values and presence apply."""
        assert clean_field(role, entry) == expected

    def test_clean_field_overrides(self):
        """Test overriding the catalog's required flag and maximum length."""
        assert clean_field(FieldRole.CR_ADDRESS_TYPE, "", required=False) == ""
        assert clean_field(FieldRole.CR_ADDRESS_TYPE, "", required=True) is None
        assert clean_field(FieldRole.REFERENCE, "R" * 26, True, 25) is None
        assert clean_field(FieldRole.CR_ADDRESS_LINE_2, "x" * 17, max_length=16) == ""
