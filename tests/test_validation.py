"""Tests for field validation of part and product drafts."""

import logging
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from inventory_catalog.application.validation import (
    PartDraft,
    ProductDraft,
    parse_decimal,
    parse_integer,
    validate_part,
    validate_product,
)
from inventory_catalog.domain.entities import InHouse, Outsourced
from inventory_catalog.domain.exceptions import ErrorKind, ValidationError

quantities = st.integers(min_value=0, max_value=10_000)


def _product(stock: int, low: int, high: int) -> ProductDraft:
    return ProductDraft(
        name="Widget", price="1", stock=str(stock), min=str(low), max=str(high)
    )


def test_valid_part_draft_builds_in_house_part(make_part_draft):
    result = validate_part(make_part_draft(name="  Bolt  ", id="3"))

    assert result.ok
    part = result.unwrap()
    assert part.id == 3
    assert part.name == "Bolt"
    assert part.price == Decimal("0.50")
    assert (part.stock, part.min, part.max) == (10, 0, 100)
    assert part.source == InHouse(7)


def test_valid_outsourced_draft_keeps_company_name(make_part_draft):
    draft = make_part_draft(in_house=False, source="Acme Corp", id="2")
    part = validate_part(draft).unwrap()

    assert part.source == Outsourced("Acme Corp")


def test_blank_company_name_is_accepted(make_part_draft):
    """Company names are not checked for blanks, unlike entity names."""
    result = validate_part(make_part_draft(in_house=False, source="", id="2"))

    assert result.ok
    assert result.unwrap().company_name == ""


@pytest.mark.parametrize("source", ["abc", "", "1.5", "7a"])
def test_in_house_source_must_be_integer(make_part_draft, source):
    result = validate_part(make_part_draft(source=source, id="1"))

    assert result.errors == {"source": ErrorKind.INVALID_MACHINE_ID}


def test_negative_machine_id_is_accepted(make_part_draft):
    assert validate_part(make_part_draft(source="-4", id="1")).unwrap().machine_id == -4


@pytest.mark.parametrize("name", ["", "   ", "\t"])
def test_blank_name_is_rejected(make_product_draft, name):
    result = validate_product(make_product_draft(name=name, id="1"))

    assert result.errors == {"name": ErrorKind.BLANK_FIELD}


@pytest.mark.parametrize(
    ("price", "kind"),
    [
        ("abc", ErrorKind.NOT_A_NUMBER),
        ("", ErrorKind.NOT_A_NUMBER),
        ("NaN", ErrorKind.NOT_A_NUMBER),
        ("Infinity", ErrorKind.NOT_A_NUMBER),
        ("1_000", ErrorKind.NOT_A_NUMBER),
        ("\u0663.5", ErrorKind.NOT_A_NUMBER),
        ("0x10", ErrorKind.NOT_A_NUMBER),
        ("1e", ErrorKind.NOT_A_NUMBER),
        ("-0.01", ErrorKind.NEGATIVE_VALUE),
    ],
)
def test_invalid_price_is_rejected(make_product_draft, price, kind):
    result = validate_product(make_product_draft(price=price, id="1"))

    assert result.errors == {"price": kind}


@pytest.mark.parametrize(
    "price", ["0", "12", "3.75", " 4.5 ", "1e2", ".5", "2.", "+1.25"]
)
def test_decimal_prices_are_accepted(make_product_draft, price):
    result = validate_product(make_product_draft(price=price, id="1"))

    assert result.unwrap().price == Decimal(price.strip())


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        ("seven", ErrorKind.NOT_AN_INTEGER),
        ("1.5", ErrorKind.NOT_AN_INTEGER),
        ("", ErrorKind.NOT_AN_INTEGER),
        ("1_000", ErrorKind.NOT_AN_INTEGER),
        ("-3", ErrorKind.NEGATIVE_VALUE),
    ],
)
def test_invalid_stock_is_rejected(make_product_draft, raw, kind):
    result = validate_product(make_product_draft(stock=raw, id="1"))

    assert result.errors == {"stock": kind}


def test_invalid_id_is_rejected(make_product_draft):
    assert validate_product(make_product_draft(id="x")).errors == {
        "id": ErrorKind.NOT_AN_INTEGER
    }
    assert validate_product(make_product_draft(id="-2")).errors == {
        "id": ErrorKind.NEGATIVE_VALUE
    }


def test_errors_are_cumulative(make_part_draft):
    """Every offending field is reported in a single submission."""
    draft = make_part_draft(name="", price="cheap", stock="lots", source="M-1")
    result = validate_part(draft, id_factory=lambda: 1)

    assert result.errors == {
        "name": ErrorKind.BLANK_FIELD,
        "price": ErrorKind.NOT_A_NUMBER,
        "stock": ErrorKind.NOT_AN_INTEGER,
        "source": ErrorKind.INVALID_MACHINE_ID,
    }
    assert result.value is None


def test_inverted_range_flags_min_and_max(make_product_draft):
    result = validate_product(make_product_draft(min="10", max="5", stock="7", id="1"))

    assert result.errors == {
        "min": ErrorKind.RANGE_INVERTED,
        "max": ErrorKind.RANGE_INVERTED,
    }


def test_stock_out_of_range_flags_stock_only(make_product_draft):
    """A product with min 5 and max 10 rejects stock 12 and accepts stock 7."""
    rejected = validate_product(make_product_draft(stock="12", id="1"))
    accepted = validate_product(make_product_draft(stock="7", id="1"))

    assert rejected.errors == {"stock": ErrorKind.STOCK_OUT_OF_RANGE}
    assert accepted.ok


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"min": "x", "stock": "100"}, {"min": ErrorKind.NOT_AN_INTEGER}),
        ({"max": "-1", "stock": "100"}, {"max": ErrorKind.NEGATIVE_VALUE}),
        ({"stock": "many", "min": "9", "max": "1"}, {"stock": ErrorKind.NOT_AN_INTEGER}),
    ],
)
def test_range_checks_skipped_when_an_operand_is_invalid(
    make_product_draft, overrides, expected
):
    result = validate_product(make_product_draft(id="1", **overrides))

    assert result.errors == expected


def test_validation_starts_fresh_each_run(make_product_draft):
    """Fixing a field and validating again reports only what is still wrong."""
    first = validate_product(make_product_draft(name="", stock="12", id="1"))
    second = validate_product(make_product_draft(stock="12", id="1"))
    third = validate_product(make_product_draft(id="1"))

    assert set(first.errors) == {"name", "stock"}
    assert second.errors == {"stock": ErrorKind.STOCK_OUT_OF_RANGE}
    assert third.ok


def test_id_factory_only_called_for_valid_drafts(make_part_draft):
    issued: list[int] = []

    def next_id() -> int:
        issued.append(len(issued) + 1)
        return issued[-1]

    validate_part(make_part_draft(name=""), id_factory=next_id)
    part = validate_part(make_part_draft(), id_factory=next_id).unwrap()

    assert issued == [1]
    assert part.id == 1


def test_draft_id_takes_precedence_over_factory(make_part_draft):
    part = validate_part(make_part_draft(id="12"), id_factory=lambda: 99).unwrap()
    assert part.id == 12


def test_draft_without_id_needs_factory(make_part_draft):
    with pytest.raises(TypeError):
        validate_part(make_part_draft())


def test_unwrap_raises_validation_error(make_product_draft):
    result = validate_product(make_product_draft(name="", id="1"))

    with pytest.raises(ValidationError) as exc_info:
        result.unwrap()
    assert exc_info.value.errors == {"name": ErrorKind.BLANK_FIELD}
    assert "name=blank_field" in str(exc_info.value)


def test_rejected_fields_are_logged(make_product_draft, caplog):
    with caplog.at_level(logging.WARNING, logger="validation"):
        validate_product(make_product_draft(price="free", id="1"))

    assert "Validation failed for field 'price': not_a_number" in caplog.text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        (" 8 ", 8),
        ("+3", 3),
        ("-5", -5),
        ("007", 7),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
        ("00000000002147483647", 2147483647),
        ("2147483648", None),
        ("-2147483649", None),
        ("9" * 5000, None),
        ("", None),
        ("4.0", None),
        ("\u0661\u0662", None),
    ],
)
def test_parse_integer(raw, expected):
    assert parse_integer(raw) == expected


@given(data=st.data())
def test_stock_within_range_always_validates(data):
    low = data.draw(quantities)
    high = data.draw(st.integers(min_value=low, max_value=low + 10_000))
    stock = data.draw(st.integers(min_value=low, max_value=high))

    result = validate_product(_product(stock, low, high), id_factory=lambda: 1)

    assert result.ok


@given(stock=st.integers(min_value=0, max_value=20_000), data=st.data())
def test_inverted_range_always_flags_both_bounds(stock, data):
    high = data.draw(quantities)
    low = data.draw(st.integers(min_value=high + 1, max_value=high + 10_000))

    result = validate_product(_product(stock, low, high), id_factory=lambda: 1)

    assert result.errors["min"] == ErrorKind.RANGE_INVERTED
    assert result.errors["max"] == ErrorKind.RANGE_INVERTED
    assert "stock" not in result.errors


@given(data=st.data())
def test_stock_outside_range_flags_stock_only(data):
    low = data.draw(quantities)
    high = data.draw(st.integers(min_value=low, max_value=low + 10_000))
    below = st.integers(min_value=0, max_value=low - 1) if low > 0 else st.nothing()
    stock = data.draw(below | st.integers(min_value=high + 1, max_value=high + 500))

    result = validate_product(_product(stock, low, high), id_factory=lambda: 1)

    assert result.errors == {"stock": ErrorKind.STOCK_OUT_OF_RANGE}


def test_oversized_numbers_are_reported_not_raised(make_part_draft):
    """Every numeric field reports an error for digit runs too long to convert."""
    huge = "9" * 5000
    draft = make_part_draft(
        id=huge, price=huge, stock=huge, min=huge, max=huge, source=huge
    )

    result = validate_part(draft)

    assert result.errors == {
        "id": ErrorKind.NOT_AN_INTEGER,
        "stock": ErrorKind.NOT_AN_INTEGER,
        "min": ErrorKind.NOT_AN_INTEGER,
        "max": ErrorKind.NOT_AN_INTEGER,
        "source": ErrorKind.INVALID_MACHINE_ID,
    }


def test_stock_above_integer_range_is_rejected(make_product_draft):
    result = validate_product(make_product_draft(stock="9" * 5000, id="1"))

    assert result.errors == {"stock": ErrorKind.NOT_AN_INTEGER}


def test_machine_id_above_integer_range_is_rejected(make_part_draft):
    result = validate_part(make_part_draft(source="2147483648", id="1"))

    assert result.errors == {"source": ErrorKind.INVALID_MACHINE_ID}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.50", Decimal("1.50")),
        (" 3 ", Decimal(3)),
        ("1E3", Decimal("1E3")),
        ("1_000", None),
        ("\u0661", None),
        ("NaN", None),
        ("-Infinity", None),
        ("1e1234567", None),
    ],
)
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == expected


def test_new_outsourced_part_takes_factory_id(make_part_draft):
    draft = make_part_draft(in_house=False, source="Acme Corp")

    part = validate_part(draft, id_factory=lambda: 41).unwrap()

    assert part.id == 41
    assert part.source == Outsourced("Acme Corp")
    assert part.machine_id is None
