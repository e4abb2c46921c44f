from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from apps.common.money import to_money


def compute_total(lines: Iterable) -> Decimal:
    """Sum of price x quantity over ``lines``, rounded to cents. Empty is 0.00."""
    return to_money(
        sum(
            (Decimal(str(line.price)) * int(line.quantity) for line in lines),
            Decimal("0"),
        )
    )
