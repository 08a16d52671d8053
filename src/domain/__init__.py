"""Domain models and types for the listings tracker.

This package contains the in-memory (Pydantic) listing model, the field
validators that define a legal listing and the ordered ledger holding them.
They are independent from the file format so that business logic and testing
can evolve without I/O coupling.
"""

__all__ = [
    "base_types",
    "listing",
    "listing_ledger",
    "validators",
]
