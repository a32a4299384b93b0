"""Recursive modulo 10 check digit for QR references."""

from typing import Optional


REFERENCE_LENGTH = 27

# Row = current carry, column = next digit
_TRANSITIONS = (
    (0, 9, 4, 6, 8, 2, 7, 1, 3, 5),
    (9, 4, 6, 8, 2, 7, 1, 3, 5, 0),
    (4, 6, 8, 2, 7, 1, 3, 5, 0, 9),
    (6, 8, 2, 7, 1, 3, 5, 0, 9, 4),
    (8, 2, 7, 1, 3, 5, 0, 9, 4, 6),
    (2, 7, 1, 3, 5, 0, 9, 4, 6, 8),
    (7, 1, 3, 5, 0, 9, 4, 6, 8, 2),
    (1, 3, 5, 0, 9, 4, 6, 8, 2, 7),
    (3, 5, 0, 9, 4, 6, 8, 2, 7, 1),
    (5, 0, 9, 4, 6, 8, 2, 7, 1, 3),
)

_CHECK_DIGITS = (0, 9, 8, 7, 6, 5, 4, 3, 2, 1)


def compute_check_digit(digits: str) -> Optional[int]:
    """Compute the check digit for a reference without its last character.

    Args:
        digits: Reference body, digits only

    Returns:
        Expected check digit (0-9), or None if digits contains a non-digit
    """
    state = 0
    for char in digits:
        if char not in "0123456789":
            return None
        state = _TRANSITIONS[state][int(char)]
    return _CHECK_DIGITS[state]


def validate(reference: Optional[str]) -> bool:
    """Check that a reference ends in the check digit of its preceding digits.

    Spaces are ignored. Anything shorter than 27 characters or containing a
    non-digit is invalid.
    """
    if reference is None:
        return False
    cleaned = reference.replace(" ", "").strip()
    if len(cleaned) < REFERENCE_LENGTH:
        return False
    expected = compute_check_digit(cleaned[:-1])
    if expected is None or cleaned[-1] not in "0123456789":
        return False
    return int(cleaned[-1]) == expected


def append_check_digit(digits: str) -> str:
    """Return digits followed by their check digit.

    Raises:
        ValueError: If digits contains a non-digit character
    """
    cleaned = digits.replace(" ", "")
    check = compute_check_digit(cleaned)
    if check is None:
        raise ValueError(f"Reference must contain digits only: {digits!r}")
    return f"{cleaned}{check}"
