from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator, TextIO

from pydantic import BaseModel, ValidationError, field_validator

from domain.validators import parse_decimal

logger = logging.getLogger(__name__)


class PriceChange(BaseModel):
    listing_id: int
    reduction: Decimal

    @field_validator("listing_id", mode="before")
    @classmethod
    def _parse_listing_id(cls, value: str | int) -> int:
        if isinstance(value, str):
            return int(value)
        return value

    @field_validator("reduction", mode="before")
    @classmethod
    def _parse_reduction(cls, value: str | int | Decimal) -> Decimal:
        return parse_decimal(value)


def _tokens(handle: TextIO) -> Iterator[str]:
    for line in handle:
        yield from line.split()


def parse_price_changes(handle: TextIO, *, source: str = "<changes>") -> Iterator[PriceChange]:
    """Yield ``(listing id, reduction)`` pairs from an open changes file in file order.

    Pairs are whitespace separated and need not sit one per line. Reading stops
    at the first token that is not a number; a trailing id without a reduction
    is dropped.
    """
    tokens = _tokens(handle)
    for raw_id in tokens:
        raw_reduction = next(tokens, None)
        if raw_reduction is None:
            logger.info("Changes file %s ends with unpaired listing id %s", source, raw_id)
            return
        try:
            change = PriceChange.model_validate({"listing_id": raw_id, "reduction": raw_reduction})
        except ValidationError:
            logger.info("Stopped reading %s at unparsable pair %r %r", source, raw_id, raw_reduction)
            return
        yield change


def read_price_changes(path: Path) -> list[PriceChange]:
    """Raises ``FileNotFoundError`` (or another ``OSError``) if ``path`` cannot be opened."""
    with path.open(encoding="utf-8") as handle:
        return list(parse_price_changes(handle, source=str(path)))


__all__ = ["PriceChange", "parse_price_changes", "read_price_changes"]
