from decimal import Decimal

import pytest

from domain.listing_ledger import ListingLedger
from services.price_adjuster import AdjustmentOutcome, AdjustmentResult, PriceAdjustment
from utils.formatting import format_price
from utils.listing_report import render_adjustments, render_listing_ids, render_listings
from tests.helpers.listings import make_listing


def test_format_price_drops_cents() -> None:
    assert format_price(Decimal("500000.99")) == "500000"
    assert format_price(Decimal("-0.40")) == "0"
    assert format_price(Decimal("-1200.40")) == "-1200"


def test_render_listings_table(ledger: ListingLedger, capsys: pytest.CaptureFixture[str]) -> None:
    render_listings(ledger)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["MLS#", "Asking", "Price", "Status", "Zip", "Code", "Realtor"]
    assert set(lines[1]) == {"-"}
    assert lines[2].split() == ["123456", "500000", "Available", "12345-6789", "Acme", "Realty"]
    assert lines[3].split() == ["234567", "325000", "Contract", "54321-0001", "Harbor", "View", "Homes"]
    assert lines[4].split() == ["345678", "189900", "Sold", "90210-1234", "Summit"]


def test_render_listings_empty(capsys: pytest.CaptureFixture[str]) -> None:
    render_listings(ListingLedger())
    assert capsys.readouterr().out == "There are no listings currently stored.\n"


def test_render_listing_ids_seven_per_line(capsys: pytest.CaptureFixture[str]) -> None:
    ledger = ListingLedger([make_listing(100000 + index) for index in range(9)])

    render_listing_ids(ledger)

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].split() == [str(100000 + index) for index in range(7)]
    assert lines[1].split() == ["100007", "100008"]


def test_render_adjustments_table(capsys: pytest.CaptureFixture[str]) -> None:
    result = AdjustmentResult(
        outcome=AdjustmentOutcome.APPLIED,
        adjustments=[PriceAdjustment(listing_id=123456, reduction=Decimal("25000"), new_price=Decimal("475000"))],
    )

    render_adjustments(result)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["MLS", "number", "New", "Asking", "Price"]
    assert lines[2].split() == ["123456", "475000"]


@pytest.mark.parametrize(
    ("outcome", "message"),
    [
        (AdjustmentOutcome.FILE_MISSING, "Changes file does not exist"),
        (AdjustmentOutcome.NOTHING_TO_SEARCH, "There are no records currently on file to search."),
        (AdjustmentOutcome.APPLIED, "No matches were found for the file. No price reductions were made"),
    ],
)
def test_render_adjustments_messages(
    outcome: AdjustmentOutcome, message: str, capsys: pytest.CaptureFixture[str]
) -> None:
    render_adjustments(AdjustmentResult(outcome=outcome))
    assert capsys.readouterr().out == f"{message}\n"
