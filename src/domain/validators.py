"""Field validators for listing records.

Each validator takes a raw candidate value (text as typed, or an already typed
number) and either returns the well-formed value or raises ``FieldRejected``
with every reason the value was refused. Re-prompting is left to the caller.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .base_types import ListingStatus

MLS_MIN = 100000
MLS_MAX = 999999
ZIP_CODE_LENGTH = 10
ZIP_SEPARATOR_INDEX = 5
ZIP_SEPARATOR = "-"
COMPANY_NAME_MAX_LENGTH = 20

STATUS_CODES = {
    "A": ListingStatus.AVAILABLE,
    "C": ListingStatus.CONTRACT,
    "S": ListingStatus.SOLD,
}

_MLS_RULE = "Must be 6 digits long and first digit cannot be '0'."
_ZIP_PATTERN = re.compile(r"[0-9]{5}-[0-9]{4}")
_DIGITS = frozenset("0123456789")


class FieldRejected(ValueError):
    def __init__(self, field: str, reasons: list[str]) -> None:
        self.field = field
        self.reasons = reasons
        super().__init__(f"Invalid {field}: {' '.join(reasons)}")


def validate_listing_id(raw: str | int) -> int:
    if isinstance(raw, bool):
        raise FieldRejected("MLS number", ["MLS number must be a whole number."])
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            raise FieldRejected("MLS number", ["MLS number must be a whole number."]) from None
    else:
        raise FieldRejected("MLS number", ["MLS number must be a whole number."])

    if value < MLS_MIN:
        raise FieldRejected("MLS number", ["Number entered is too short.", _MLS_RULE])
    if value > MLS_MAX:
        raise FieldRejected("MLS number", ["Number entered is too long.", _MLS_RULE])
    return value


def parse_decimal(raw: str | int | float | Decimal) -> Decimal:
    """Convert ``raw`` to a finite Decimal, raising ``ValueError`` otherwise."""
    if isinstance(raw, bool):
        raise ValueError(f"not a number: {raw!r}")
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, float):
        # Go through str() so 0.1 stays 0.1 rather than its binary expansion.
        value = Decimal(str(raw))
    elif isinstance(raw, int):
        value = Decimal(raw)
    else:
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            raise ValueError(f"not a number: {raw!r}") from None
    if not value.is_finite():
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def validate_price(raw: str | int | float | Decimal) -> Decimal:
    try:
        value = parse_decimal(raw)
    except ValueError:
        raise FieldRejected("price", ["Price must be a number."]) from None
    if value <= 0:
        raise FieldRejected("price", ["Price must be greater than $0.00."])
    return value


def is_valid_zip_code(value: str) -> bool:
    return _ZIP_PATTERN.fullmatch(value) is not None


def validate_zip_code(raw: str) -> str:
    # No trimming: surrounding whitespace is a malformed zip code.
    value = raw
    reasons: list[str] = []

    if len(value) > ZIP_CODE_LENGTH:
        reasons.append(f"Input too long: must be {ZIP_CODE_LENGTH} characters.")
    if len(value) < ZIP_CODE_LENGTH:
        reasons.append(f"Input too short: must be {ZIP_CODE_LENGTH} characters.")
    if len(value) <= ZIP_SEPARATOR_INDEX or value[ZIP_SEPARATOR_INDEX] != ZIP_SEPARATOR:
        reasons.append(f"6th character of zip code must be '{ZIP_SEPARATOR}'.")
    if any(char not in _DIGITS for index, char in enumerate(value) if index != ZIP_SEPARATOR_INDEX):
        reasons.append("Only digits are allowed.")

    if reasons:
        raise FieldRejected("zip code", reasons)
    return value


def validate_status(raw: str) -> ListingStatus:
    status = STATUS_CODES.get(raw.strip().upper())
    if status is None:
        raise FieldRejected("status", ["Must be 'A', 'C', or 'S'."])
    return status


def normalize_company_name(name: str) -> str:
    """Upper-case the first character and every character after a space, lower-case the rest."""
    chars: list[str] = []
    previous = " "
    for char in name:
        chars.append(char.upper() if previous.isspace() else char.lower())
        previous = char
    return "".join(chars)


def validate_company_name(raw: str) -> str:
    reasons: list[str] = []
    if not raw:
        reasons.append("Company name must not be empty.")
    if len(raw) > COMPANY_NAME_MAX_LENGTH:
        reasons.append(f"Input too long - must be {COMPANY_NAME_MAX_LENGTH} characters or less (including spaces).")
    if any(not (char.isascii() and (char.isalpha() or char == " ")) for char in raw):
        reasons.append("Only letters and spaces are allowed.")
    if reasons:
        raise FieldRejected("company name", reasons)
    return normalize_company_name(raw)


__all__ = [
    "COMPANY_NAME_MAX_LENGTH",
    "FieldRejected",
    "MLS_MAX",
    "MLS_MIN",
    "STATUS_CODES",
    "ZIP_CODE_LENGTH",
    "is_valid_zip_code",
    "normalize_company_name",
    "parse_decimal",
    "validate_company_name",
    "validate_listing_id",
    "validate_price",
    "validate_status",
    "validate_zip_code",
]
