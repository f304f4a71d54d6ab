"""
Values -- Decimal coercion and deterministic rounding.

Responsibility:
    Every amount and factor in the billing engines is a ``Decimal``.
    Datastore rows may hand us ints, strings or floats; ``to_decimal``
    converts them once at the boundary and ``round_half_up`` applies the
    single rounding rule used everywhere (two places, half up).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - ``to_decimal`` raises ``ValueError`` on non-numeric input.
    - ``to_decimal_or_zero`` never raises.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

Numeric = Decimal | int | str | float


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric amount: {value!r}") from exc
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise ValueError(f"Not a numeric amount: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return result


def to_decimal_or_zero(value: object) -> Decimal:
    """Lenient variant for nullable datastore columns: bad input is zero."""
    if value is None:
        return ZERO
    try:
        return to_decimal(value)  # type: ignore[arg-type]
    except ValueError:
        return ZERO


def round_half_up(value: Decimal, places: Decimal = TWO_PLACES) -> Decimal:
    """Round with ROUND_HALF_UP to ``places`` (default two decimals)."""
    return value.quantize(places, rounding=ROUND_HALF_UP)
