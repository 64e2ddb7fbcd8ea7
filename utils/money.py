"""
Money Helpers
Exact decimal handling for prices stored as BSON Decimal128
"""

from __future__ import annotations
from decimal import Decimal
from typing import Any, Union

from bson.decimal128 import Decimal128

CENT = Decimal('0.01')


def to_decimal(value: Any) -> Decimal:
    """Convert a stored or submitted amount to Decimal without float drift"""
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    if isinstance(value, Decimal128):
        return value.to_decimal()
    # str() keeps 0.1 as Decimal('0.1') instead of the binary expansion
    return Decimal(str(value))


def to_decimal128(value: Any) -> Decimal128:
    return Decimal128(to_decimal(value))


def to_json_number(value: Any) -> Union[int, float]:
    """Render an amount for JSON responses, rounded to cents"""
    amount = to_decimal(value).quantize(CENT)
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)
