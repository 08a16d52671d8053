from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from domain.base_types import ListingStatus
from domain.listing import Listing
from domain.listing_ledger import LedgerFullError, ListingLedger
from utils.formatting import format_price

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " "


class ListingStoreError(Exception):
    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not save listings to {path}: {cause}")


class ListingParseError(ValueError):
    pass


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load; ``exists`` is False when the file could not be opened."""

    ledger: ListingLedger
    exists: bool


class ListingStore(Protocol):
    def load(self, path: Path) -> LoadResult: ...

    def exists(self, path: Path) -> bool: ...

    def save(self, ledger: ListingLedger, path: Path) -> None: ...


def format_listing_line(listing: Listing) -> str:
    return FIELD_SEPARATOR.join(
        [
            str(listing.id),
            format_price(listing.price),
            str(int(listing.status)),
            listing.zip_code,
            listing.company_name,
        ]
    )


def parse_listing_line(line: str) -> Listing:
    """Parse one listings-file line.

    The company name is everything after the zip code minus exactly one
    separator character, so embedded and repeated spaces survive.
    """
    text = line.rstrip("\r\n")
    remainder = text.lstrip()
    tokens: list[str] = []
    for _ in range(4):
        token, _, remainder = remainder.partition(FIELD_SEPARATOR)
        if not token:
            raise ListingParseError(f"missing field in line {line!r}")
        tokens.append(token)
        if len(tokens) < 4:
            remainder = remainder.lstrip()
    raw_id, raw_price, raw_status, zip_code = tokens

    try:
        status = ListingStatus(int(raw_status))
    except ValueError as exc:
        raise ListingParseError(f"unknown status tag {raw_status!r}") from exc

    try:
        return Listing(
            id=raw_id,
            price=raw_price,
            status=status,
            zip_code=zip_code,
            company_name=remainder,
        )
    except ValidationError as exc:
        raise ListingParseError(f"invalid listing in line {line!r}: {exc}") from exc


def _target_mode(path: Path) -> int:
    # Keep the permissions of the file being replaced; new files get the umask default.
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class TextListingStore(ListingStore):
    def __init__(self, *, capacity: int | None = None, encoding: str = "utf-8") -> None:
        self.capacity = capacity
        self.encoding = encoding

    def load(self, path: Path) -> LoadResult:
        ledger = ListingLedger(capacity=self.capacity)
        try:
            handle = path.open("r", encoding=self.encoding)
        except OSError:
            logger.info("Listings file %s could not be opened", path)
            return LoadResult(ledger=ledger, exists=False)

        with handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    listing = parse_listing_line(line)
                except ListingParseError as exc:
                    logger.info("Stopped loading %s at line %d: %s", path, line_number, exc)
                    break
                try:
                    ledger.append(listing)
                except LedgerFullError as exc:
                    logger.warning("Stopped loading %s at line %d: %s", path, line_number, exc)
                    break

        logger.info("Loaded %d listings from %s", len(ledger), path)
        return LoadResult(ledger=ledger, exists=True)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def save(self, ledger: ListingLedger, path: Path) -> None:
        """Write every listing to ``path``, replacing it only once all lines are written."""
        lines = [format_listing_line(listing) + "\n" for listing in ledger]
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self.encoding,
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.writelines(lines)
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise ListingStoreError(path, exc) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.info("Saved %d listings to %s", len(lines), path)


__all__ = [
    "ListingParseError",
    "ListingStore",
    "ListingStoreError",
    "LoadResult",
    "TextListingStore",
    "format_listing_line",
    "parse_listing_line",
]
