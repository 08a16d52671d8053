from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from pathlib import Path
from typing import Callable

from domain.listing_ledger import ListingLedger
from importers.changes_importer import parse_price_changes

logger = logging.getLogger(__name__)


class AdjustmentOutcome(StrEnum):
    APPLIED = "APPLIED"
    FILE_MISSING = "FILE_MISSING"
    NOTHING_TO_SEARCH = "NOTHING_TO_SEARCH"


@dataclass(frozen=True)
class PriceAdjustment:
    listing_id: int
    reduction: Decimal
    new_price: Decimal


@dataclass
class AdjustmentResult:
    outcome: AdjustmentOutcome
    adjustments: list[PriceAdjustment] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.adjustments)

    @property
    def no_reductions_made(self) -> bool:
        return self.outcome == AdjustmentOutcome.APPLIED and not self.adjustments


def apply_price_changes(
    changes_path: Path,
    ledger: ListingLedger,
    *,
    on_match: Callable[[PriceAdjustment], None] | None = None,
) -> AdjustmentResult:
    """Reduce listing prices by the amounts in a changes file.

    Each pair is applied to the first listing with a matching id, in file
    order, as soon as it is read. Pairs without a matching listing are skipped.
    Prices are not floored, so a reduction may leave a price at or below zero.
    """
    try:
        handle = changes_path.open(encoding="utf-8")
    except OSError:
        logger.info("Changes file %s does not exist", changes_path)
        return AdjustmentResult(outcome=AdjustmentOutcome.FILE_MISSING)

    with handle:
        if ledger.is_empty():
            logger.info("No listings to search for changes from %s", changes_path)
            return AdjustmentResult(outcome=AdjustmentOutcome.NOTHING_TO_SEARCH)

        result = AdjustmentResult(outcome=AdjustmentOutcome.APPLIED)
        for change in parse_price_changes(handle, source=str(changes_path)):
            listing = ledger.adjust_price(change.listing_id, change.reduction)
            if listing is None:
                continue
            adjustment = PriceAdjustment(
                listing_id=listing.id,
                reduction=change.reduction,
                new_price=listing.price,
            )
            result.adjustments.append(adjustment)
            logger.info("Listing %d reduced by %s to %s", listing.id, change.reduction, listing.price)
            if on_match is not None:
                on_match(adjustment)

    if result.no_reductions_made:
        logger.info("No matches found in %s; no price reductions were made", changes_path)
    return result


__all__ = ["AdjustmentOutcome", "AdjustmentResult", "PriceAdjustment", "apply_price_changes"]
