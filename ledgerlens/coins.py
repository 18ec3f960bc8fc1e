"""
coins.py - Fixed-point rendering of coin amounts

Amounts are integers in subunits, DECIMAL (10**9) subunits to the unit.
All arithmetic here is exact integer arithmetic; no float is ever involved.

Rounding in format_coins() is a ceiling within the display granularity:
any residue below the last displayed digit bumps that digit up by one.
It is not round-to-nearest. For example 999999999 at precision 6 is "1".
"""

from __future__ import annotations
import re
from typing import Optional

from .core import DECIMAL, DECIMAL_COUNT, DEFAULT_PRECISION, NOT_APPLICABLE


_DECIMAL_PATTERN = re.compile(r"^(\d+)(?:\.(\d*))?$|^\.(\d+)$")


def _check_precision(precision: int) -> None:
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise TypeError(f"precision must be int, got {type(precision)}")
    if not 0 <= precision <= DECIMAL_COUNT:
        raise ValueError(f"precision must be in [0, {DECIMAL_COUNT}], got {precision}")


def format_coins_pure(value: int, precision: int = DEFAULT_PRECISION) -> str:
    """
    Render a non-negative subunit amount as a decimal string.

    Args:
        value: Amount in subunits.
        precision: Fractional digits to keep, 0..9.

    Returns:
        "<whole>" or "<whole>.<frac>" with trailing zeros trimmed.

    Raises:
        TypeError: value or precision is not an int.
        ValueError: value is negative or precision is outside [0, 9].
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"value must be int, got {type(value)}")
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    _check_precision(precision)

    whole, frac = divmod(value, DECIMAL)
    step = 10 ** (DECIMAL_COUNT - precision)

    if frac % step > 0:
        frac += step
        if frac >= DECIMAL:
            frac -= DECIMAL
            whole += 1
    frac //= step

    if frac == 0:
        return str(whole)
    return f"{whole}.{str(frac).zfill(precision).rstrip('0')}"


def format_coins(value: Optional[int], precision: int = DEFAULT_PRECISION) -> str:
    """
    Render an amount, or NOT_APPLICABLE ("∞") when the amount is absent.

    Absent means unbounded / not applicable, which is not the same as zero.
    """
    if value is None:
        return NOT_APPLICABLE
    return format_coins_pure(value, precision)


def from_nano(value: int) -> str:
    """Exact rendering with all nine fractional digits available."""
    return format_coins_pure(value, DECIMAL_COUNT)


def to_nano(text: str) -> int:
    """
    Parse a non-negative decimal string into subunits.

    Example:
        to_nano("0.05") == 50_000_000
        to_nano("1") == 1_000_000_000

    Raises:
        ValueError: malformed text, or more than nine fractional digits.
    """
    match = _DECIMAL_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Invalid coin amount: {text!r}")
    whole_text, frac_text, bare_frac = match.groups()
    if bare_frac is not None:
        whole_text, frac_text = "0", bare_frac
    frac_text = frac_text or ""
    if len(frac_text) > DECIMAL_COUNT:
        raise ValueError(f"Too many fractional digits in {text!r} (max {DECIMAL_COUNT})")
    return int(whole_text) * DECIMAL + int(frac_text.ljust(DECIMAL_COUNT, "0"))
