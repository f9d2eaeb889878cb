"""Value parser: turn a free-form string into a magnitude and a unit alias.

Composite notations (`5' 2"`, `5 lb 2 oz`) are tried first; otherwise the leading decimal number
is the magnitude and the trimmed remainder is the unit alias.

Examples:
    >>> parser = ValueParser()
    >>> parser.parse('5  km')
    (5.0, 'km')
    >>> parser.parse('-1.5e3mg')
    (-1500.0, 'mg')
    >>> parser.parse('5\\' 2"')
    (62.0, 'in')
    >>> parser.parse('5 lb 2 oz')
    (5.125, 'lb')
    >>> parser.parse('km') is None
    True
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Tuple

from py_unitconv.logger import logger
from py_unitconv.specials import DEFAULT_DETECTORS, CompositeDetector

__all__ = ('ValueParser', 'parse_value')

_DECIMAL_RE: Pattern[str] = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)(.*)$",
    re.DOTALL,
)


class ValueParser:
    """Parser of `(magnitude, unit alias)` pairs.

    Args:
        detectors: Composite notation detectors, tried in order before decimal parsing.
    """

    __slots__ = ('detectors',)

    def __init__(self, detectors: Iterable[CompositeDetector] = DEFAULT_DETECTORS):
        self.detectors: Tuple[CompositeDetector, ...] = tuple(detectors)

    def parse(self, text: str) -> Optional[Tuple[float, str]]:
        """Parse `text` into `(magnitude, unit alias)`.

        Returns:
            The pair, or None if `text` isn't a string or has no numeric prefix.
            The alias is returned as found (trimmed); it isn't checked against any registry.
        """
        if not isinstance(text, str):
            return None
        for detector in self.detectors:
            if (detected := detector.detect(text)) is not None:
                return detected
        if (match := _DECIMAL_RE.match(text)) is None:
            logger.debug(f"No numeric value in {text!r}")
            return None
        number, alias = match.groups()
        return float(number), alias.strip()


_default_parser = ValueParser()


def parse_value(text: str) -> Optional[Tuple[float, str]]:
    """Parse with the default composite detectors."""
    return _default_parser.parse(text)
