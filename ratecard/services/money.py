"""Money / rounding helpers.

Centralized so calculators and currency conversion use identical rounding
semantics: half away from zero on the decimal representation, which for the
positive amounts handled here matches conventional "round to nearest".
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
