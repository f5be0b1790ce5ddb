"""Scalar quantity arithmetic for same-unit quantities.

Units are opaque tokens: two quantities combine only when their unit
strings are identical. There is no conversion table.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from mealplanner.normalize.errors import InvalidQuantityError, UnitMismatchError

# Results are rounded to this many decimal places
QUANTITY_PRECISION = 2

_QUANTUM = Decimal(1).scaleb(-QUANTITY_PRECISION)


@dataclass(frozen=True)
class Quantity:
    """A non-negative amount expressed in a single unit."""

    value: float
    unit: str


def round_quantity(value: float) -> float:
    """
    Round a value to QUANTITY_PRECISION decimal places, half away from zero.

    Rounding is applied to the shortest decimal representation of the float,
    so 0.1 + 0.2 rounds to 0.3 and 1.005 rounds to 1.01.
    """
    return _round_decimal(_to_decimal(value))


def _to_decimal(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def _round_decimal(value: Decimal) -> float:
    return float(value.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def _is_valid_number(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value >= 0


def is_valid_quantity(q: Quantity) -> bool:
    """Check that a quantity is a finite, non-negative number."""
    return _is_valid_number(q.value)


def _require_valid(*quantities: Quantity) -> None:
    if not all(is_valid_quantity(q) for q in quantities):
        raise InvalidQuantityError("Quantities must be non-negative")


def _require_same_unit(q1: Quantity, q2: Quantity) -> None:
    if q1.unit != q2.unit:
        raise UnitMismatchError(
            f"Cannot add quantities with different units: {q1.unit!r} and {q2.unit!r}"
        )


def add_quantities(q1: Quantity, q2: Quantity) -> Quantity:
    """
    Add two quantities that share a unit.

    Validity of both quantities is checked before the units are compared.

    Raises:
        InvalidQuantityError: If either quantity is negative or non-finite.
        UnitMismatchError: If the unit tokens differ.
    """
    _require_valid(q1, q2)
    _require_same_unit(q1, q2)

    return Quantity(value=round_quantity(q1.value + q2.value), unit=q1.unit)


def multiply_quantity(q: Quantity, factor: float) -> Quantity:
    """
    Multiply a quantity by a non-negative factor.

    Raises:
        InvalidQuantityError: If the quantity is invalid or the factor is
            negative or non-finite.
    """
    _require_valid(q)
    if not _is_valid_number(factor):
        raise InvalidQuantityError(f"Factor must be a non-negative number, got {factor!r}")

    return Quantity(value=round_quantity(q.value * factor), unit=q.unit)


def compare_quantities(q1: Quantity, q2: Quantity) -> int:
    """
    Compare two quantities that share a unit.

    Returns:
        -1 if q1 < q2, 0 if equal, 1 if q1 > q2.

    Raises:
        InvalidQuantityError: If either quantity is invalid.
        UnitMismatchError: If the unit tokens differ.
    """
    _require_valid(q1, q2)
    if q1.unit != q2.unit:
        raise UnitMismatchError(
            f"Cannot compare quantities with different units: {q1.unit!r} and {q2.unit!r}"
        )

    if q1.value < q2.value:
        return -1
    if q1.value > q2.value:
        return 1
    return 0


def sum_quantities(quantities: Iterable[Quantity]) -> Quantity:
    """
    Sum any number of same-unit quantities, rounding only the final total.

    Values are summed as exact decimals, so the result does not depend on
    the order of the inputs and small amounts are not lost to rounding
    partial sums.

    Raises:
        ValueError: If no quantities are given.
        InvalidQuantityError: If any quantity is negative or non-finite.
        UnitMismatchError: If the unit tokens differ.
    """
    quantities = list(quantities)
    if not quantities:
        raise ValueError("Cannot sum an empty sequence of quantities")

    _require_valid(*quantities)
    first = quantities[0]
    for q in quantities[1:]:
        _require_same_unit(first, q)

    total = sum((_to_decimal(q.value) for q in quantities), Decimal(0))
    return Quantity(value=_round_decimal(total), unit=first.unit)
