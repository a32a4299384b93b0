"""Unit tests for alternative schema decomposition."""

from qrbill.pipeline.alternative_schema import AlternativeSchemaEntry, split_alternative_schema


def test_split_alternative_schema():
    """Test splitting a line into tag, delimiter and values."""
    entry = split_alternative_schema("AB;x;y;;z")

    assert entry.tag == "AB"
    assert entry.delimiter == ";"
    assert entry.values == ["x", "y", "", "z"]
    assert entry.as_list() == ["AB", ";", "x", "y", "", "z"]


def test_split_keeps_trailing_empty_value():
    """Test that a trailing delimiter yields an empty last value."""
    entry = split_alternative_schema("eB/B/41010560425610173/")

    assert entry.tag == "eB"
    assert entry.delimiter == "/"
    assert entry.values == ["B", "41010560425610173", ""]


def test_split_tag_and_delimiter_only():
    """Test a line holding only tag and delimiter."""
    assert split_alternative_schema("AB;") == AlternativeSchemaEntry("AB", ";", [""])


def test_split_too_short():
    """Test that lines under 3 characters are not decomposed."""
    assert split_alternative_schema("AB") is None
    assert split_alternative_schema("") is None
    assert split_alternative_schema(None) is None
