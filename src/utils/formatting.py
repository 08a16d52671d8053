from __future__ import annotations

from decimal import ROUND_DOWN, Decimal


def format_price(value: Decimal) -> str:
    # Whole units only; cents are dropped rather than rounded.
    whole = value.quantize(Decimal(1), rounding=ROUND_DOWN)
    if whole == 0:
        whole = Decimal(0)
    return f"{whole:.0f}"
