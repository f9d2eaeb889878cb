"""Structured conversion values and their string rendering.

Examples:
    >>> v = Value(80.0, 'oz', 'mass')
    >>> format_value(v)
    '80.00 oz'
    >>> format_value(v, allow_exact_results=True)
    '80 oz'
    >>> format_value(Value(5.1875, 'lb_oz', 'mass'))
    '5 lb 3.00 oz'
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from typing_extensions import TypeAlias

from py_unitconv.registry import Kind, Unit
from py_unitconv.settings import get_settings
from py_unitconv.specials import INCHES_PER_FOOT, OUNCES_PER_POUND

__all__ = (
    'Value',
    'format_number',
    'format_value',
    'CompositeFormatter',
    'COMPOSITE_FORMATTERS',
)


@dataclass(frozen=True)
class Value:
    """Immutable quantity: magnitude, canonical unit and the kind owning the unit.

    Values are produced by `Converter.parse`, `Converter.value` and `Converter.to`, which only
    build them for units registered under `kind`.
    """

    value: float
    unit: Unit
    kind: Kind

    def with_value(self, value: float, unit: Optional[Unit] = None) -> Value:
        """Copy with another magnitude (and optionally unit) of the same kind."""
        return replace(self, value=value, unit=self.unit if unit is None else unit)

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        settings = get_settings()
        return format_value(self, settings.precision, settings.allow_exact_results)


def format_number(number: float, precision: int = 2, allow_exact_results: bool = False) -> str:
    """Render a magnitude with fixed decimals, or without decimals when exact results are allowed."""
    if allow_exact_results and float(number).is_integer():
        return str(int(number))
    return f"{number:.{precision}f}"


def _split(number: float, ratio: float, precision: int) -> Tuple[str, int, float]:
    """Split a finite magnitude into sign, whole major units and minor units rounded to `precision`."""
    sign = '-' if number < 0 else ''
    number = abs(number)
    major = math.floor(number)
    minor = round((number - major) * ratio, precision)
    if minor >= ratio:
        major, minor = major + 1, 0.
    return sign, major, minor


def _format_feet_and_inches(number: float, precision: int, allow_exact_results: bool) -> str:
    if not math.isfinite(number):
        return f"{format_number(number, precision, allow_exact_results)} ft_in"
    sign, feet, inches = _split(number, INCHES_PER_FOOT, precision)
    return f"{sign}{feet}' {format_number(inches, precision, allow_exact_results)}\""


def _format_pounds_and_ounces(number: float, precision: int, allow_exact_results: bool) -> str:
    if not math.isfinite(number):
        return f"{format_number(number, precision, allow_exact_results)} lb_oz"
    sign, pounds, ounces = _split(number, OUNCES_PER_POUND, precision)
    return f"{sign}{pounds} lb {format_number(ounces, precision, allow_exact_results)} oz"


CompositeFormatter: TypeAlias = Callable[[float, int, bool], str]

#: Renderers of composite units, by canonical unit.
COMPOSITE_FORMATTERS: Dict[str, CompositeFormatter] = {
    'ft_in': _format_feet_and_inches,
    'lb_oz': _format_pounds_and_ounces,
}


def format_value(value: Value, precision: int = 2, allow_exact_results: bool = False) -> str:
    """Render a value as `"<magnitude> <unit>"`, e.g. `"80.00 oz"`.

    Composite units are rendered by their entry in `COMPOSITE_FORMATTERS`; infinite and NaN
    magnitudes of the packaged composite units render in the plain form (`"inf ft_in"`).
    """
    if (formatter := COMPOSITE_FORMATTERS.get(value.unit)) is not None:
        return formatter(value.value, precision, allow_exact_results)
    return f"{format_number(value.value, precision, allow_exact_results)} {value.unit}"
