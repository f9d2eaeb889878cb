"""Display settings of the py_unitconv library"""
from typing import NamedTuple

from py_unitconv.exceptions import ConfigurationError

__all__ = ('FormatSettings', 'basic_settings', 'get_settings', 'reset_settings')


class FormatSettings(NamedTuple):
    """Formatting of conversion results.

    Attributes:
        precision: Decimal places used to render magnitudes.
        allow_exact_results: Render integral magnitudes without decimals ("77 F" instead of "77.00 F").
    """

    precision: int = 2
    allow_exact_results: bool = False

    @classmethod
    def create(cls, precision: object = None, allow_exact_results: object = None) -> 'FormatSettings':
        """Validated construction, None arguments take the defaults."""
        if precision is None:
            precision = cls._field_defaults['precision']
        if allow_exact_results is None:
            allow_exact_results = cls._field_defaults['allow_exact_results']
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise ConfigurationError(f"precision has to be a non-negative integer, got {precision!r}")
        if not isinstance(allow_exact_results, bool):
            raise ConfigurationError(f"allow_exact_results has to be a boolean, got {allow_exact_results!r}")
        return cls(precision, allow_exact_results)


_PYUC_SETTINGS = FormatSettings()


def basic_settings(settings: FormatSettings) -> None:
    global _PYUC_SETTINGS
    _PYUC_SETTINGS = settings


def get_settings() -> FormatSettings:
    return _PYUC_SETTINGS


def reset_settings() -> None:
    basic_settings(FormatSettings())
