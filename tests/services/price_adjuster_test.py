from decimal import Decimal
from pathlib import Path

from domain.listing_ledger import ListingLedger
from services.price_adjuster import AdjustmentOutcome, PriceAdjustment, apply_price_changes
from tests.constants import ACME_ID, HARBOR_ID, MISSING_ID, SUMMIT_ID
from tests.helpers.listings import make_listing


def write_changes(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "CHANGES.TXT"
    path.write_text(text, encoding="utf-8")
    return path


def prices(ledger: ListingLedger) -> dict[int, Decimal]:
    return {listing.id: listing.price for listing in ledger}


def test_single_reduction_is_applied(ledger: ListingLedger, tmp_path: Path) -> None:
    changes = write_changes(tmp_path, "123456 25000\n")

    result = apply_price_changes(changes, ledger)

    assert result.outcome == AdjustmentOutcome.APPLIED
    assert result.match_count == 1
    assert not result.no_reductions_made
    listing = ledger.find(ACME_ID)
    assert listing is not None
    assert listing.price == Decimal("475000")


def test_no_matching_ids_leaves_ledger_unchanged(ledger: ListingLedger, tmp_path: Path) -> None:
    before = prices(ledger)
    changes = write_changes(tmp_path, f"{MISSING_ID} 25000\n111111 10\n")

    result = apply_price_changes(changes, ledger)

    assert result.outcome == AdjustmentOutcome.APPLIED
    assert result.match_count == 0
    assert result.no_reductions_made
    assert prices(ledger) == before


def test_missing_changes_file_is_a_no_op(ledger: ListingLedger, tmp_path: Path) -> None:
    before = prices(ledger)

    result = apply_price_changes(tmp_path / "CHANGES.TXT", ledger)

    assert result.outcome == AdjustmentOutcome.FILE_MISSING
    assert result.match_count == 0
    assert not result.no_reductions_made
    assert prices(ledger) == before


def test_missing_file_is_reported_before_empty_ledger(tmp_path: Path) -> None:
    result = apply_price_changes(tmp_path / "CHANGES.TXT", ListingLedger())
    assert result.outcome == AdjustmentOutcome.FILE_MISSING


def test_empty_ledger_has_nothing_to_search(tmp_path: Path) -> None:
    changes = write_changes(tmp_path, "123456 25000\n")

    result = apply_price_changes(changes, ListingLedger())

    assert result.outcome == AdjustmentOutcome.NOTHING_TO_SEARCH
    assert result.match_count == 0


def test_matches_are_reported_in_file_order(ledger: ListingLedger, tmp_path: Path) -> None:
    changes = write_changes(tmp_path, f"{SUMMIT_ID} 900\n{MISSING_ID} 5\n{ACME_ID} 1000\n{SUMMIT_ID} 1000\n")
    seen: list[PriceAdjustment] = []

    result = apply_price_changes(changes, ledger, on_match=seen.append)

    assert seen == result.adjustments
    assert [(adjustment.listing_id, adjustment.new_price) for adjustment in result.adjustments] == [
        (SUMMIT_ID, Decimal("189000")),
        (ACME_ID, Decimal("499000")),
        (SUMMIT_ID, Decimal("188000")),
    ]
    assert result.match_count == 3


def test_reduction_may_make_price_negative(ledger: ListingLedger, tmp_path: Path) -> None:
    changes = write_changes(tmp_path, f"{HARBOR_ID} 400000.50\n")

    apply_price_changes(changes, ledger)

    listing = ledger.find(HARBOR_ID)
    assert listing is not None
    assert listing.price == Decimal("-75000.50")


def test_only_first_duplicate_is_adjusted(tmp_path: Path) -> None:
    ledger = ListingLedger([make_listing(ACME_ID, price="1000"), make_listing(ACME_ID, price="2000")])
    changes = write_changes(tmp_path, f"{ACME_ID} 100\n")

    apply_price_changes(changes, ledger)

    assert [listing.price for listing in ledger] == [Decimal("900"), Decimal("2000")]


def test_malformed_line_stops_processing(ledger: ListingLedger, tmp_path: Path) -> None:
    changes = write_changes(tmp_path, f"{ACME_ID} 1000\n{HARBOR_ID} oops\n{SUMMIT_ID} 1000\n")

    result = apply_price_changes(changes, ledger)

    assert result.match_count == 1
    assert prices(ledger) == {
        ACME_ID: Decimal("499000"),
        HARBOR_ID: Decimal("325000"),
        SUMMIT_ID: Decimal("189900"),
    }
