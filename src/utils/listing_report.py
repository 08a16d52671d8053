from __future__ import annotations

from typing import Iterable

from domain.listing import Listing
from domain.listing_ledger import ListingLedger
from services.price_adjuster import AdjustmentOutcome, AdjustmentResult

from .formatting import format_price

LISTING_IDS_PER_LINE = 7


def render_listings(listings: Iterable[Listing]) -> None:
    rows = [
        (
            str(listing.id),
            format_price(listing.price),
            listing.status.label,
            listing.zip_code,
            listing.company_name,
        )
        for listing in listings
    ]
    if not rows:
        print("There are no listings currently stored.")
        return

    labels = ("MLS#", "Asking Price", "Status", "Zip Code", "Realtor")
    widths = [max(len(label), max(len(row[column]) for row in rows)) for column, label in enumerate(labels)]

    header = (
        f"{labels[0]:<{widths[0]}} "
        f"{labels[1]:>{widths[1]}} "
        f"{labels[2]:<{widths[2]}} "
        f"{labels[3]:<{widths[3]}} "
        f"{labels[4]}"
    )
    lines = [header, "-" * (sum(widths[:4]) + 4 + widths[4])]

    for listing_id, price, status, zip_code, company in rows:
        lines.append(
            f"{listing_id:<{widths[0]}} "
            f"{price:>{widths[1]}} "
            f"{status:<{widths[2]}} "
            f"{zip_code:<{widths[3]}} "
            f"{company}"
        )

    print("\n".join(lines))


def render_listing_ids(ledger: ListingLedger, *, per_line: int = LISTING_IDS_PER_LINE) -> None:
    ids = [str(listing_id) for listing_id in ledger.listing_ids()]
    if not ids:
        print("There are no records currently on file.")
        return
    for start in range(0, len(ids), per_line):
        print(" ".join(ids[start : start + per_line]))


def render_adjustments(result: AdjustmentResult) -> None:
    if result.outcome == AdjustmentOutcome.FILE_MISSING:
        print("Changes file does not exist")
        return
    if result.outcome == AdjustmentOutcome.NOTHING_TO_SEARCH:
        print("There are no records currently on file to search.")
        return
    if result.no_reductions_made:
        print("No matches were found for the file. No price reductions were made")
        return

    id_label = "MLS number"
    price_label = "New Asking Price"
    prices = [format_price(adjustment.new_price) for adjustment in result.adjustments]
    price_width = max(len(price_label), max(len(price) for price in prices))

    header = f"{id_label:<{len(id_label)}} {price_label:>{price_width}}"
    lines = [header, "-" * len(header)]
    for adjustment, price in zip(result.adjustments, prices):
        lines.append(f"{adjustment.listing_id:<{len(id_label)}} {price:>{price_width}}")

    print("\n".join(lines))
