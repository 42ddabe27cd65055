"""Line-item amounts and pre-invoice listing helpers."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from backoffice.schemas.pre_invoice import Professional
from backoffice.services.pre_invoice_service import (
    PreInvoiceService,
    build_items,
    compute_line_item,
    summarize_names,
)

pytestmark = pytest.mark.unit


def test_given_subtotal_with_vat():
    amounts = compute_line_item(Decimal("10"), Decimal("50"), Decimal("500"), Decimal("19"))

    assert amounts.subtotal == Decimal("500")
    assert amounts.vat == Decimal("19")
    assert amounts.total == Decimal("595")


def test_subtotal_derived_from_hours_and_rate():
    amounts = compute_line_item(Decimal("12.5"), Decimal("40"), vat=Decimal("10"))

    assert amounts.subtotal == Decimal("500.00")
    assert amounts.total == Decimal("550.00")


def test_missing_vat_means_no_tax():
    amounts = compute_line_item(Decimal("3"), Decimal("33.33"))

    assert amounts.vat == Decimal("0.00")
    assert amounts.total == amounts.subtotal == Decimal("99.99")


@pytest.mark.parametrize(
    "subtotal, vat",
    [
        (Decimal("0"), Decimal("19")),
        (Decimal("1234.56"), Decimal("19")),
        (Decimal("99.99"), Decimal("7.5")),
        (Decimal("100"), Decimal("0")),
        (Decimal("333"), Decimal("0.5")),
        (Decimal("1"), Decimal("19.555")),
        (Decimal("0.0001"), Decimal("999.9999")),
    ],
)
def test_total_is_subtotal_plus_vat_share(subtotal, vat):
    amounts = compute_line_item(Decimal("0"), Decimal("0"), subtotal, vat)

    assert amounts.subtotal == subtotal
    assert amounts.vat == vat
    assert amounts.total == subtotal + subtotal * vat / 100


def test_totals_are_not_rounded_to_cents():
    assert compute_line_item(Decimal("0"), Decimal("0"), Decimal("333"), Decimal("0.5")).total == Decimal("334.665")
    assert compute_line_item(Decimal("0"), Decimal("0"), Decimal("1"), Decimal("19.555")).total == Decimal("1.19555")


@pytest.mark.parametrize(
    "field, value",
    [
        ("subtotal", "-1"),
        ("vat", "-1"),
        ("hoursWorked", "-1"),
        ("vat", "19.55555"),
        ("hourValue", "10.001"),
    ],
)
def test_professional_amounts_are_bounded(field, value):
    with pytest.raises(ValidationError):
        Professional.model_validate({"id": 1, field: value})


def test_build_items_reads_camel_case_keys():
    professionals = [
        Professional.model_validate(
            {"id": 7, "hoursWorked": "8", "hourValue": "25", "vat": "19", "service": "QA"}
        )
    ]

    [item] = build_items(professionals)

    assert item["candidate_id"] == 7
    assert item["service"] == "QA"
    assert item["description"] == ""
    assert item["subtotal"] == Decimal("200.00")
    assert item["total"] == Decimal("238.00")


def test_total_value_defaults_to_sum_of_item_totals():
    items = [{"total": Decimal("595.00")}, {"total": Decimal("10.50")}]

    assert PreInvoiceService._total_value(None, items) == Decimal("605.50")
    assert PreInvoiceService._total_value(Decimal("1000"), items) == Decimal("1000.00")
    assert PreInvoiceService._total_value(None, []) == Decimal("0.00")


def test_summarize_names():
    assert summarize_names([]) == ""
    assert summarize_names(["Ana", "Luis"]) == "Ana, Luis"
    assert summarize_names(["Ana", "Luis", "Eva", "Juan", "Rosa"]) == "Ana, Luis, Eva y otros 2"
