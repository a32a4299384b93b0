"""Unit tests for rendering documents back to text."""

from decimal import Decimal

from conftest import CURRENT_LINES, EARLIER_LINES, build_text
from qrbill.models.document import PaymentDocument
from qrbill.models.fields import ActorRole, FieldRole
from qrbill.pipeline.parser import parse
from qrbill.pipeline.schema_registry import CURRENT_SCHEMA, EARLIER_SCHEMA
from qrbill.pipeline.serializer import render, render_field, render_lines


def test_round_trip_current(current_text):
    """Test that the current sample renders back unchanged."""
    assert render(parse(current_text).document) == current_text


def test_round_trip_earlier(earlier_text):
    """Test that the earlier sample renders back unchanged."""
    assert render(parse(earlier_text).document) == earlier_text


def test_render_normalizes_input():
    """Test that rendering uses normalized field values."""
    text = build_text(CURRENT_LINES, line_3="ch44 3199 9123 0008 8901 2", line_18="1949.7", line_19="chf")
    rendered = render(parse(text).document).split("\n")

    assert rendered[3] == "CH4431999123000889012"
    assert rendered[18] == "1949.70"
    assert rendered[19] == "CHF"


def test_render_lines_follow_schema():
    """Test one rendered line per schema field."""
    document = parse("\n".join(CURRENT_LINES)).document

    lines = render_lines(document)
    assert len(lines) == len(CURRENT_SCHEMA)
    assert lines[-4:] == ["EPD", "", "", ""]


def test_render_without_schema():
    """Test rendering a document without version."""
    assert render_lines(PaymentDocument()) == []
    assert render(PaymentDocument()) == ""


def test_render_with_explicit_schema():
    """Test rendering with a given schema."""
    document = parse("\n".join(EARLIER_LINES)).document
    assert len(render_lines(document, EARLIER_SCHEMA)) == 30


def test_trailing_empty_lines_trimmed():
    """Test that trailing empty lines are dropped."""
    document = PaymentDocument.create("0200")
    document.set_bill_info("")
    document.set_alternative_schemas(None)

    assert render(document).endswith("\nEPD")


def test_alternative_schema_keeps_inner_empty_lines():
    """Test that empty lines before a set field are kept."""
    document = parse("\n".join(CURRENT_LINES)).document
    document.set_alternative_schema("AB;1", 1)

    assert render(document).endswith("EPD\n\n\nAB;1")


def test_created_document_renders_defaults():
    """Test the rendered defaults of a created document."""
    document = PaymentDocument.create("0200")
    lines = render(document).split("\n")

    assert lines[:3] == ["SPC", "0200", "1"]
    assert lines[3] == ""
    assert lines[18] == ""
    assert lines[19] == "CHF"
    assert lines[27] == "NON"
    assert lines[30] == "EPD"


def test_render_field():
    """Test rendering single fields."""
    document = PaymentDocument.create("0100")
    document.set_amount(Decimal("0"))
    document.set_due_date(2020, 1, 5)
    document.set_actor_field(ActorRole.ULTIMATE_DEBTOR, "location", "Bern")

    assert render_field(document, FieldRole.AMOUNT) == "0.00"
    assert render_field(document, FieldRole.DUE_DATE) == "2020-01-05"
    assert render_field(document, FieldRole.UDR_LOCATION) == "Bern"
    assert render_field(document, FieldRole.CR_NAME) == ""
    assert render_field(document, FieldRole.VERSION) == "0100"


def test_unresolved_fields_render_empty():
    """Test that failed required fields render empty."""
    document, errors = parse(build_text(CURRENT_LINES, line_19="USD", line_28="123"))

    assert errors
    lines = render(document).split("\n")
    assert lines[19] == ""
    assert lines[28] == ""


def test_multi_line_values_keep_line_positions():
    """Test that values with embedded line breaks never shift rendered lines."""
    document = parse("\n".join(CURRENT_LINES)).document
    document.set_unstructured_message("Order of 15 June\n2020")
    document.set_bill_info("//S1/10\r\n/11/200615")
    document.set_actor_field(ActorRole.ULTIMATE_DEBTOR, "address_line_1", "Grosse\nMarktgasse")

    rendered = render(document)
    lines = rendered.split("\n")

    assert len(lines) == len(CURRENT_LINES)
    assert lines[29] == ""
    assert render(parse(rendered).document) == rendered
