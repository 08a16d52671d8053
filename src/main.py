from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from config import LOG_FORMAT, config
from domain.listing import Listing
from domain.listing_ledger import LedgerFullError, ListingLedger
from domain.validators import (
    FieldRejected,
    validate_company_name,
    validate_listing_id,
    validate_price,
    validate_status,
    validate_zip_code,
)
from services.listing_store import ListingStoreError, TextListingStore
from services.price_adjuster import apply_price_changes
from utils.listing_report import render_adjustments, render_listing_ids, render_listings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_store() -> TextListingStore:
    return TextListingStore(capacity=config().max_listings)


def load_ledger(store: TextListingStore, path: Path) -> ListingLedger:
    result = store.load(path)
    if not result.exists:
        print(f"Listings file {path} not found; starting with no listings.")
    return result.ledger


def save_ledger(store: TextListingStore, ledger: ListingLedger, path: Path) -> int:
    try:
        store.save(ledger, path)
    except ListingStoreError as exc:
        print(f"Error: {exc}")
        return EXIT_FAILED
    return EXIT_OK


def cmd_show(args: argparse.Namespace) -> int:
    store = build_store()
    render_listings(load_ledger(store, args.file))
    return EXIT_OK


def cmd_ids(args: argparse.Namespace) -> int:
    store = build_store()
    render_listing_ids(load_ledger(store, args.file))
    return EXIT_OK


def cmd_add(args: argparse.Namespace) -> int:
    fields: dict[str, object] = {}
    rejections: list[FieldRejected] = []
    for name, validator, raw in (
        ("listing_id", validate_listing_id, args.id),
        ("price", validate_price, args.price),
        ("status", validate_status, args.status),
        ("zip_code", validate_zip_code, args.zip),
        ("company_name", validate_company_name, args.company),
    ):
        try:
            fields[name] = validator(raw)
        except FieldRejected as exc:
            rejections.append(exc)

    if rejections:
        for rejection in rejections:
            for reason in rejection.reasons:
                print(f"Invalid {rejection.field} - {reason}")
        return EXIT_INVALID_INPUT

    listing = Listing.create(**fields)
    store = build_store()
    ledger = load_ledger(store, args.file)
    try:
        ledger.append(listing)
    except LedgerFullError:
        print("Memory is full. No more listings can be added.")
        return EXIT_FAILED

    logger.info("Added listing %d", listing.id)
    return save_ledger(store, ledger, args.file)


def cmd_remove(args: argparse.Namespace) -> int:
    try:
        listing_id = validate_listing_id(args.id)
    except FieldRejected as exc:
        print(f"Invalid {exc.field} - {' '.join(exc.reasons)}")
        return EXIT_INVALID_INPUT

    store = build_store()
    ledger = load_ledger(store, args.file)
    if ledger.is_empty():
        print("There are no records currently on file.")
        return EXIT_FAILED
    if not ledger.remove(listing_id):
        print("Listing not found in records.")
        return EXIT_FAILED

    print(f"The listing for MLS Number {listing_id} has been deleted.")
    return save_ledger(store, ledger, args.file)


def cmd_apply_changes(args: argparse.Namespace) -> int:
    changes_path = args.changes or config().changes_file
    store = build_store()
    ledger = load_ledger(store, args.file)
    result = apply_price_changes(changes_path, ledger)
    render_adjustments(result)
    if result.match_count == 0:
        return EXIT_OK
    return save_ledger(store, ledger, args.file)


def cmd_copy(args: argparse.Namespace) -> int:
    store = build_store()
    ledger = load_ledger(store, args.file)
    if store.exists(args.destination) and not args.overwrite:
        print(f"File {args.destination} already exists. Pass --overwrite to replace it or choose another file.")
        return EXIT_FAILED
    return save_ledger(store, ledger, args.destination)


def build_parser() -> argparse.ArgumentParser:
    settings = config()
    parser = argparse.ArgumentParser(description="Maintain records of real estate listings.")
    parser.add_argument("--file", type=Path, default=settings.listings_file, help="listings file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level.upper(),
        help="logging threshold",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="display all listings")
    show.set_defaults(handler=cmd_show)

    ids = subparsers.add_parser("ids", help="list MLS numbers")
    ids.set_defaults(handler=cmd_ids)

    add = subparsers.add_parser("add", help="add a listing")
    add.add_argument("--id", required=True, help="MLS number (6 digits, first digit not 0)")
    add.add_argument("--price", required=True)
    add.add_argument("--status", required=True, help="A (available), C (contract) or S (sold)")
    add.add_argument("--zip", required=True, help="zip code in 12345-6789 form")
    add.add_argument("--company", required=True, help="realty company name")
    add.set_defaults(handler=cmd_add)

    remove = subparsers.add_parser("remove", help="remove a listing by MLS number")
    remove.add_argument("id")
    remove.set_defaults(handler=cmd_remove)

    apply_changes = subparsers.add_parser("apply-changes", help="apply price reductions from a changes file")
    apply_changes.add_argument("--changes", type=Path, default=None)
    apply_changes.set_defaults(handler=cmd_apply_changes)

    copy = subparsers.add_parser("copy", help="save the listings to another file")
    copy.add_argument("destination", type=Path)
    copy.add_argument("--overwrite", action="store_true")
    copy.set_defaults(handler=cmd_copy)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
