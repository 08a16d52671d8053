from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_validator

from .base_types import ListingId, ListingStatus
from .validators import (
    parse_decimal,
    validate_company_name,
    validate_listing_id,
    validate_price,
    validate_zip_code,
)


class Listing(BaseModel):
    """A single real-estate listing.

    Field formats are checked on construction. Assignment is not validated, so
    a price adjustment may leave ``price`` at zero or below; only listings
    entered through ``create`` are guaranteed a positive price.
    """

    id: ListingId
    price: Decimal
    status: ListingStatus
    zip_code: str
    company_name: str

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: str | int) -> int:
        return validate_listing_id(value)

    @field_validator("price", mode="before")
    @classmethod
    def _validate_price(cls, value: str | int | float | Decimal) -> Decimal:
        return parse_decimal(value)

    @field_validator("zip_code")
    @classmethod
    def _validate_zip_code(cls, value: str) -> str:
        return validate_zip_code(value)

    @field_validator("company_name")
    @classmethod
    def _validate_company_name(cls, value: str) -> str:
        return validate_company_name(value)

    @classmethod
    def create(
        cls,
        *,
        listing_id: str | int,
        price: str | int | float | Decimal,
        status: ListingStatus,
        zip_code: str,
        company_name: str,
    ) -> Listing:
        """Build a new listing from user input; the price must be positive."""
        return cls(
            id=ListingId(validate_listing_id(listing_id)),
            price=validate_price(price),
            status=status,
            zip_code=zip_code,
            company_name=company_name,
        )


__all__ = ["Listing"]
