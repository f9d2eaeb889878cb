"""Conversion rules attached to the edges of a kind's conversion graph.

A rule is one of three variants, tagged with `RuleType`:

* `Factor` - a real multiplier. Invertible (reciprocal) and composable along a path.
* `Formula` - an arbitrary one-argument function. Usable only in the direction it is defined.
* `Special` - a named, externally implemented procedure (see `py_unitconv.specials`).
  Usable only in the direction it is defined.

Examples:
    >>> Factor(1000).apply(2.5)
    2500.0
    >>> Factor(1000).invert()
    Factor(factor=0.001)
    >>> Formula.affine(scale=1.8, offset=32).apply(100)
    212.0
    >>> Formula.affine(offset=273.15).invert() is None
    True
"""

from __future__ import annotations

import math
from enum import Enum
from functools import reduce
from typing import Callable, NamedTuple, Optional, Union, Iterable

from typing_extensions import TypeAlias, Final

__all__ = (
    'RuleType',
    'Factor',
    'Formula',
    'Special',
    'ConversionRule',
    'IDENTITY',
    'compose_factors',
    'rule_from_value',
)

Procedure: TypeAlias = Callable[[float], float]


class RuleType(Enum):
    """Tag of a conversion rule variant."""

    FACTOR = 'factor'
    FORMULA = 'formula'
    SPECIAL = 'special'


class Factor(NamedTuple):
    """Multiplicative conversion rule."""

    factor: float

    @property
    def rule_type(self) -> RuleType:
        return RuleType.FACTOR

    def apply(self, value: float) -> float:
        return value * self.factor

    def invert(self) -> Factor:
        """Reciprocal factor of the reverse direction."""
        return Factor(1 / self.factor)

    def __str__(self) -> str:
        return f"x * {self.factor:g}"


class Formula:
    """Conversion by an arbitrary one-argument function.

    Args:
        func: Function mapping a magnitude in the source unit to the target unit.
        description: Optional readable form of the function, used for display.
    """

    __slots__ = ('func', 'description')

    def __init__(self, func: Procedure, description: str = ''):
        if not callable(func):
            raise TypeError(f"Formula expects a callable, got {type(func).__name__}")
        self.func: Procedure = func
        self.description: str = description or getattr(func, '__name__', 'formula')

    @classmethod
    def affine(cls, scale: float = 1., offset: float = 0.) -> Formula:
        """Build the formula `x * scale + offset`."""
        scale, offset = float(scale), float(offset)

        def _affine(value: float) -> float:
            return value * scale + offset

        if offset >= 0:
            description = f"x * {scale:g} + {offset:g}"
        else:
            description = f"x * {scale:g} - {-offset:g}"
        return cls(_affine, description)

    @property
    def rule_type(self) -> RuleType:
        return RuleType.FORMULA

    def apply(self, value: float) -> float:
        return float(self.func(value))

    def invert(self) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self.func is other.func

    def __hash__(self) -> int:
        return hash(self.func)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"Formula({self.description!r})"


class Special(NamedTuple):
    """Conversion by a named procedure from the special procedures registry."""

    name: str
    procedure: Procedure

    @property
    def rule_type(self) -> RuleType:
        return RuleType.SPECIAL

    def apply(self, value: float) -> float:
        return float(self.procedure(value))

    def invert(self) -> None:
        return None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Special({self.name!r})"


ConversionRule: TypeAlias = Union[Factor, Formula, Special]

IDENTITY: Final[Factor] = Factor(1.)


def compose_factors(factors: Iterable[Factor]) -> Factor:
    """Compose factor rules along a path by multiplying them."""
    return Factor(reduce(lambda acc, f: acc * f.factor, factors, 1.))


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_factor(value: object) -> bool:
    """Finite non-zero real, the only factors with a reciprocal."""
    return _is_number(value) and value != 0


def rule_from_value(value: object, specials: Optional[Callable[[str], Optional[Procedure]]] = None) \
        -> Optional[ConversionRule]:
    """Build a rule from a configuration value.

    * number -> `Factor`
    * callable -> `Formula`
    * mapping with `scale` and/or `offset` -> affine `Formula`
    * string -> `Special` resolved through `specials`
    * an existing rule is returned as is, factors only when their factor is usable

    Returns:
        The rule or None when the value has no rule form (zero or non-finite factors,
        non-numeric affine coefficients, unknown specials).
    """
    if isinstance(value, Factor):
        return value if _is_factor(value.factor) else None
    if isinstance(value, (Formula, Special)):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return Factor(float(value)) if _is_factor(value) else None
    if isinstance(value, str):
        if specials is None or (procedure := specials(value)) is None:
            return None
        return Special(value, procedure)
    if isinstance(value, dict):
        if not value or set(value) - {'scale', 'offset'}:
            return None
        if not all(_is_number(coefficient) for coefficient in value.values()):
            return None
        return Formula.affine(value.get('scale', 1.), value.get('offset', 0.))
    if callable(value):
        return Formula(value)  # type: ignore[arg-type]
    return None
