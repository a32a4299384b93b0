"""Unit tests for the recursive modulo 10 check digit."""

import pytest

from qrbill.pipeline.check_digit import append_check_digit, compute_check_digit, validate


@pytest.mark.parametrize(
    "reference",
    [
        "210000000003139471430009017",
        "21 00000 00003 13947 14300 09017",
        "0" * 27,
    ],
)
def test_validate_accepts_valid_references(reference):
    """Test valid QR references."""
    assert validate(reference) is True


@pytest.mark.parametrize(
    "reference",
    [
        "210000000003139471430009018",
        "21000000000313947143000901",
        "21000000000313947143000901A",
        "2100000000031394714300090X7",
        "",
        None,
    ],
)
def test_validate_rejects_invalid_references(reference):
    """Test references with a wrong digit, length or character."""
    assert validate(reference) is False


def test_compute_check_digit():
    """Test check digit computation."""
    assert compute_check_digit("21000000000313947143000901") == 7
    assert compute_check_digit("1") == 1
    assert compute_check_digit("") == 0


def test_compute_check_digit_non_digit():
    """Test that non-digits give no check digit."""
    assert compute_check_digit("12a4") is None


def test_append_check_digit():
    """Test appending the check digit."""
    assert append_check_digit("21000000000313947143000901") == "210000000003139471430009017"
    assert validate(append_check_digit("12345678901234567890123456"))


def test_append_check_digit_rejects_letters():
    """Test that letters raise ValueError."""
    with pytest.raises(ValueError):
        append_check_digit("RF12")
