"""
Values -- numeric coercion and display helpers for pricing data.

Responsibility:
    Converts caller-supplied numbers (int, float, str, Decimal, or
    missing) into ``Decimal`` at the domain boundary, and renders
    ``Decimal`` values back to the short human form used in messages.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by the pricing types, the engines and the config loader.

Invariants enforced:
    - Floats are converted through ``str()`` so ``0.1`` becomes
      ``Decimal("0.1")`` rather than its binary expansion.
    - NaN, infinities, booleans, unparseable values and magnitudes beyond
      ``10**MAX_EXPONENT`` (or below ``10**-MAX_EXPONENT``) coerce to
      ``None``; callers choose the neutral default.  Products of a handful
      of coerced values therefore stay inside the default context.

Failure modes:
    - None. Every helper is total over its input domain.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

MAX_EXPONENT = 99999


def to_decimal(value: Any) -> Decimal | None:
    """Coerce a caller value to a finite Decimal, or None.

    Postconditions:
        Returns a finite ``Decimal`` for int, float, numeric str and
        finite ``Decimal`` inputs.  Returns ``None`` for ``None``,
        ``bool``, blank strings, NaN, infinities, out-of-range exponents
        and anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    if result and abs(result.adjusted()) > MAX_EXPONENT:
        return None
    return result


def decimal_or(value: Any, default: Decimal) -> Decimal:
    """Coerce ``value`` to Decimal, substituting ``default`` when it is not usable."""
    result = to_decimal(value)
    return default if result is None else result


def format_number(value: Decimal) -> str:
    """Render a Decimal the way a plain number prints: ``1.50`` -> ``1.5``, ``3.0`` -> ``3``."""
    if value == ZERO:
        return "0"
    return format(value.normalize(), "f")


def is_blank(value: Any) -> bool:
    """True when ``value`` is missing or a string holding only whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def to_wire(value: Decimal | None) -> float | None:
    """JSON number for a Decimal field; ``None`` stays ``None``."""
    return None if value is None else float(value)


def to_fixed(value: Decimal, places: int) -> str:
    """Render ``value`` with exactly ``places`` decimals, rounding ties away from zero.

    ``format(value, ".2f")`` rounds ties to even (``90.125`` -> ``90.12``);
    the calculator shows ``90.13``.
    """
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return format(value.quantize(exponent, rounding=ROUND_HALF_UP), "f")
