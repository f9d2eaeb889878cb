"""Unit conversion within kinds of measurement, driven by per-kind conversion graphs.

Examples:
    ```python
    import py_unitconv as uc

    uc.from_("500 mg")                    # Value(value=500.0, unit='mg', kind='mass')
    uc.to("15C", "K")                     # Value(value=288.15, unit='K', kind='temperature')
    uc.convert("5 pounds", "oz")          # '80.00 oz'
    uc.as_string(uc.to("5' 2\\"", "m"))   # '1.57 m'
    uc.get_conversion("km", "m")          # Factor(factor=1000.0)
    ```
"""

import importlib.metadata

__version__ = importlib.metadata.version("py_unitconv")

# Standard library imports
from typing import Dict, Iterable, Optional, Union

# Local imports
from .config import (UnitConfig, KindDefinition, default_config, find_config_file, load_config,
                     parse_config, DEFAULT_KINDS)
from .converter import Converter, ResultType, SourceType
from .exceptions import ConversionError, UndefinedOriginError, UndefinedConversionError, ConfigurationError
from .logger import logger, set_log_level, enable_file_logging, disable_file_logging
from .parser import ValueParser, parse_value
from .registry import Unit, Kind, UnitRegistry
from .resolver import ConversionResolver
from .rules import RuleType, Factor, Formula, Special, ConversionRule, IDENTITY
from .settings import FormatSettings, basic_settings, get_settings
from .specials import CompositeDetector, register_special, special, get_special
from .table import ConversionEdge, ConversionTable
from .value import Value, format_value

_DEFAULT_CONVERTER: Optional[Converter] = None


def _basic_config(filename: Optional[str] = None,
                  precision: Optional[int] = None,
                  allow_exact_results: Optional[bool] = None,
                  kinds: Iterable[KindDefinition] = (),
                  suppress_warnings: bool = False) -> Converter:
    """Rebuild the default converter used by the module-level functions.

    The packaged kinds are loaded first, then `filename` (or the first `.pyuc.toml`/`pyuc.toml`
    found from the working directory upwards), then Python defined `kinds`, then explicit settings.

    Args:
        filename: Configuration file path.
        precision: Decimal places of rendered results.
        allow_exact_results: Render integral results without decimals.
        kinds: Additional `KindDefinition` objects.
        suppress_warnings: If True, suppress warning messages about the configuration file.

    Returns:
        The new default converter.

    Raises:
        ConfigurationError: If the resulting configuration is malformed.
    """
    global _DEFAULT_CONVERTER
    config = default_config()
    if filename is None and (filename := find_config_file()) is not None:
        logger.debug(f"Found config file {filename}")
    if filename is not None:
        config = load_config(filename, base=config, suppress_warnings=suppress_warnings)
    config = config.with_kinds(*kinds).with_settings(precision, allow_exact_results)

    converter = Converter.from_config(config)
    basic_settings(config.settings)
    _DEFAULT_CONVERTER = converter
    logger.debug("Default converter load success")
    return converter


basicConfig = _basic_config


def get_converter() -> Converter:
    """Default converter, built on first use."""
    if _DEFAULT_CONVERTER is None:
        return _basic_config()
    return _DEFAULT_CONVERTER


def from_(text: str) -> Optional[Value]:
    """Parse a string into a value; None when it can't be parsed into a registered unit."""
    return get_converter().parse(text)


parse = from_


def to(source: SourceType, unit_to: str, raise_error: bool = False) -> ResultType:
    """Convert a value or string to `unit_to`; errors are returned, not raised."""
    return get_converter().to(source, unit_to, raise_error)


def as_string(result: Union[ResultType, None]) -> str:
    return get_converter().as_string(result)


def convert(source: str, unit_to: str) -> str:
    """Parse, convert and render, e.g. `convert("5 pounds", "oz") == "80.00 oz"`."""
    return get_converter().convert(source, unit_to)


def units() -> Dict[str, Dict[str, str]]:
    return get_converter().units()


def kind_of_unit(unit: str) -> Optional[str]:
    return get_converter().kind_of_unit(unit)


def get_conversion(unit_from: str, unit_to: str) -> Union[ConversionRule, ConversionError]:
    return get_converter().get_conversion(unit_from, unit_to)


__all__ = [
    '__version__',
    'basicConfig', 'get_converter',
    'from_', 'parse', 'to', 'as_string', 'convert', 'units', 'kind_of_unit', 'get_conversion',
    'UnitConfig', 'KindDefinition', 'default_config', 'find_config_file', 'load_config', 'parse_config',
    'DEFAULT_KINDS',
    'Converter', 'ResultType', 'SourceType',
    'ConversionError', 'UndefinedOriginError', 'UndefinedConversionError', 'ConfigurationError',
    'logger', 'set_log_level', 'enable_file_logging', 'disable_file_logging',
    'ValueParser', 'parse_value',
    'Unit', 'Kind', 'UnitRegistry',
    'ConversionResolver',
    'RuleType', 'Factor', 'Formula', 'Special', 'ConversionRule', 'IDENTITY',
    'FormatSettings', 'get_settings',
    'CompositeDetector', 'register_special', 'special', 'get_special',
    'ConversionEdge', 'ConversionTable',
    'Value', 'format_value',
]
