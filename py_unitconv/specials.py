"""Named special procedures and composite unit detectors.

Special procedures are referenced by name from conversion tables (`m_to_ft_in = "meters_to_feet"`)
and cover conversions a plain factor can't describe: affine temperature scales with exact fractions,
and conversions into composite units such as feet-and-inches (`ft_in`) or pounds-and-ounces (`lb_oz`).
A composite unit value carries its magnitude in the major unit (feet, pounds); only its rendering
is composite.

Composite detectors recognize composite notations in source strings (`5' 2"`, `5 lb 2 oz`) ahead
of generic decimal parsing and turn them into one magnitude in the detector's base unit.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, NamedTuple, Optional, Pattern, Tuple

from typing_extensions import TypeAlias

from py_unitconv.logger import logger

__all__ = (
    'register_special',
    'special',
    'get_special',
    'special_names',
    'CompositeDetector',
    'FEET_AND_INCHES',
    'POUNDS_AND_OUNCES',
    'DEFAULT_DETECTORS',
)

Procedure: TypeAlias = Callable[[float], float]

_SPECIALS: Dict[str, Procedure] = {}

INCHES_PER_FOOT: float = 12.
OUNCES_PER_POUND: float = 16.
METERS_PER_FOOT: float = 0.3048
KILOGRAMS_PER_POUND: float = 0.45359237


def register_special(name: str, procedure: Procedure) -> Procedure:
    """Register a named special procedure.

    Special procedures are expected to be registered once, at import time,
    before any conversion table referencing them is built.

    Raises:
        ValueError: If another procedure is already registered under `name`.
    """
    if not callable(procedure):
        raise TypeError(f"Special procedure {name!r} must be callable")
    if (existing := _SPECIALS.get(name)) is not None and existing is not procedure:
        raise ValueError(f"Special procedure {name!r} is already registered")
    _SPECIALS[name] = procedure
    return procedure


def special(name: Optional[str] = None) -> Callable[[Procedure], Procedure]:
    """Decorator form of `register_special`, defaults to the function name."""
    def decorator(func: Procedure) -> Procedure:
        return register_special(name or func.__name__, func)
    return decorator


def get_special(name: str) -> Optional[Procedure]:
    return _SPECIALS.get(name)


def special_names() -> Tuple[str, ...]:
    return tuple(sorted(_SPECIALS))


# region temperature
@special()
def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


@special()
def fahrenheit_to_kelvin(value: float) -> float:
    return (value - 32) * 5 / 9 + 273.15


@special()
def kelvin_to_fahrenheit(value: float) -> float:
    return (value - 273.15) * 9 / 5 + 32
# endregion temperature


# region composite units
@special()
def feet_to_feet_and_inches(value: float) -> float:
    return value


@special()
def inches_to_feet_and_inches(value: float) -> float:
    return value / INCHES_PER_FOOT


@special()
def meters_to_feet_and_inches(value: float) -> float:
    return value / METERS_PER_FOOT


@special()
def feet_and_inches_to_feet(value: float) -> float:
    return value


@special()
def feet_and_inches_to_inches(value: float) -> float:
    return value * INCHES_PER_FOOT


@special()
def pounds_to_pounds_and_ounces(value: float) -> float:
    return value


@special()
def ounces_to_pounds_and_ounces(value: float) -> float:
    return value / OUNCES_PER_POUND


@special()
def kilograms_to_pounds_and_ounces(value: float) -> float:
    return value / KILOGRAMS_PER_POUND


@special()
def pounds_and_ounces_to_pounds(value: float) -> float:
    return value


@special()
def pounds_and_ounces_to_ounces(value: float) -> float:
    return value * OUNCES_PER_POUND
# endregion composite units


class CompositeDetector(NamedTuple):
    """Recognizer for one composite notation.

    Attributes:
        name: Readable name of the notation.
        pattern: Regex with two groups, the major and the minor quantity.
        combine: Function of (major, minor) giving the magnitude in `unit`.
        unit: Alias of the base unit the combined magnitude is expressed in.
    """

    name: str
    pattern: Pattern[str]
    combine: Callable[[float, float], float]
    unit: str

    def detect(self, text: str) -> Optional[Tuple[float, str]]:
        if (match := self.pattern.match(text)) is None:
            return None
        major, minor = (float(group) for group in match.groups())
        logger.debug(f"{self.name} notation detected in {text!r}")
        return self.combine(major, minor), self.unit


_NUMBER = r"(\d+(?:\.\d+)?|\.\d+)"

FEET_AND_INCHES = CompositeDetector(
    name='feet and inches',
    pattern=re.compile(
        rf"""^\s*{_NUMBER}\s*(?:'|′|ft|feet|foot)\s*,?\s*{_NUMBER}\s*(?:"|″|''|inches|inch|in)\s*$"""
    ),
    combine=lambda feet, inches: feet * INCHES_PER_FOOT + inches,
    unit='in',
)

POUNDS_AND_OUNCES = CompositeDetector(
    name='pounds and ounces',
    pattern=re.compile(
        rf"^\s*{_NUMBER}\s*(?:lbs|lb|pounds|pound)\s*,?\s*{_NUMBER}\s*(?:oz|ounces|ounce)\s*$"
    ),
    combine=lambda pounds, ounces: pounds + ounces / OUNCES_PER_POUND,
    unit='lb',
)

DEFAULT_DETECTORS: Tuple[CompositeDetector, ...] = (POUNDS_AND_OUNCES, FEET_AND_INCHES)
