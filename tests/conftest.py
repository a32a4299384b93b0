"""Shared sample payment documents."""

import pytest


QR_REFERENCE = "210000000003139471430009017"

CURRENT_LINES = [
    "SPC",
    "0200",
    "1",
    "CH4431999123000889012",
    "S",
    "Robert Schneider AG",
    "Rue du Lac",
    "1268",
    "2501",
    "Biel",
    "CH",
    "", "", "", "", "", "", "",
    "1949.75",
    "CHF",
    "S",
    "Pia-Maria Rutschmann-Schnyder",
    "Grosse Marktgasse",
    "28",
    "9400",
    "Rorschach",
    "CH",
    "QRR",
    QR_REFERENCE,
    "Order of 15 June 2020",
    "EPD",
]

EARLIER_LINES = [
    "SPC",
    "0100",
    "1",
    "CH9300762011623852957",
    "Robert Schneider AG",
    "Rue du Lac",
    "1268",
    "2501",
    "Biel",
    "CH",
    "", "", "", "", "", "",
    "199.95",
    "CHF",
    "2019-10-31",
    "Pia-Maria Rutschmann-Schnyder",
    "Grosse Marktgasse",
    "28",
    "9400",
    "Rorschach",
    "CH",
    "NON",
]


def build_text(lines, **replacements):
    """Join sample lines, replacing positions given as line_<index>=value."""
    lines = list(lines)
    for key, value in replacements.items():
        lines[int(key.split("_")[1])] = value
    return "\n".join(lines)


@pytest.fixture
def current_text():
    """Valid 2.00 document, canonical form."""
    return "\n".join(CURRENT_LINES)


@pytest.fixture
def earlier_text():
    """Valid 1.00 document, canonical form."""
    return "\n".join(EARLIER_LINES)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep QRBILL_* settings from the caller's shell out of the tests."""
    for name in ("QRBILL_STRICT", "QRBILL_DEFAULT_VERSION", "QRBILL_LOG_LEVEL", "QRBILL_PROFILES_DIR"):
        monkeypatch.delenv(name, raising=False)
