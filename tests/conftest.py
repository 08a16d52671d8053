from pathlib import Path
from typing import Generator

import pytest

from config import config
from domain.base_types import ListingStatus
from domain.listing_ledger import ListingLedger
from services.listing_store import TextListingStore
from tests.constants import ACME_ID, HARBOR_ID, SUMMIT_ID
from tests.helpers.listings import make_listing


@pytest.fixture(scope="function")
def ledger() -> ListingLedger:
    return ListingLedger(
        [
            make_listing(ACME_ID),
            make_listing(
                HARBOR_ID,
                price="325000",
                status=ListingStatus.CONTRACT,
                zip_code="54321-0001",
                company_name="Harbor View Homes",
            ),
            make_listing(
                SUMMIT_ID,
                price="189900",
                status=ListingStatus.SOLD,
                zip_code="90210-1234",
                company_name="Summit",
            ),
        ]
    )


@pytest.fixture(scope="function")
def store() -> TextListingStore:
    return TextListingStore()


@pytest.fixture(scope="function")
def listings_file(tmp_path: Path) -> Path:
    return tmp_path / "LISTINGS.TXT"


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    # Keep a developer's .env from leaking into tests.
    monkeypatch.chdir(tmp_path)
    config.cache_clear()
    yield
    config.cache_clear()
