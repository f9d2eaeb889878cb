"""Unit configuration: kind tables, conversion edges and display settings.

Configuration is read from TOML files shaped as:

```toml
[pyuc]
precision = 2
allow_exact_results = false

[pyuc.kinds.mass.units]
g = ["gram", "grams"]
kg = ["kilogram", "kilograms"]

[pyuc.kinds.mass.conversions]
kg_to_g = 1000                          # factor
C_to_K = { offset = 273.15 }            # formula: x * scale + offset
F_to_C = "fahrenheit_to_celsius"        # special procedure
```

Files are merged in order: later settings override earlier ones, kinds are extended (new units
and conversions are added, same-named ones are replaced). Python defined kinds implementing
`KindDefinition` can be merged the same way with `UnitConfig.with_kinds`.
"""

from __future__ import annotations

import importlib.resources
import os
import sys
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional, Protocol, Tuple, runtime_checkable

from py_unitconv.exceptions import ConfigurationError
from py_unitconv.logger import logger
from py_unitconv.registry import AliasesType, UnitRegistry
from py_unitconv.settings import FormatSettings
from py_unitconv.table import ConversionTable

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib

__all__ = (
    'CONFIG_SECTION',
    'CONFIG_FILENAMES',
    'DEFAULT_KINDS',
    'KindDefinition',
    'UnitConfig',
    'load_toml',
    'parse_config',
    'load_config',
    'default_config',
    'find_config_file',
)

CONFIG_SECTION: str = 'pyuc'
CONFIG_FILENAMES: Tuple[str, ...] = ('.pyuc.toml', 'pyuc.toml')

#: Packaged kinds, in registration order.
DEFAULT_KINDS: Tuple[str, ...] = ('length', 'mass', 'time', 'temperature', 'speed', 'pressure', 'memory')


@runtime_checkable
class KindDefinition(Protocol):
    """A set of units of the same kind with conversions among them.

    `units()` maps every canonical unit to its aliases. `conversions()` maps edge keys
    `<unit_from>_to_<unit_to>` to a factor, a formula (callable or `{scale, offset}`) or
    the name of a special procedure. Only edges connecting every unit as a graph are required;
    factor edges are usable in both directions.
    """

    name: str

    def units(self) -> Mapping[str, AliasesType]: ...

    def conversions(self) -> Mapping[str, Any]: ...


class UnitConfig(NamedTuple):
    """Configuration consumed by the converter.

    Attributes:
        units: `kind -> {canonical unit -> aliases}`.
        conversions: `kind -> {edge key -> rule value}`.
        settings: Display settings.
    """

    units: Mapping[str, Mapping[str, AliasesType]] = {}
    conversions: Mapping[str, Mapping[str, Any]] = {}
    settings: FormatSettings = FormatSettings()

    def merge(self, units: Optional[Mapping[str, Mapping[str, AliasesType]]] = None,
              conversions: Optional[Mapping[str, Mapping[str, Any]]] = None,
              settings: Optional[FormatSettings] = None) -> UnitConfig:
        """New config with kinds extended by `units`/`conversions` and settings replaced."""
        merged_units: Dict[str, Dict[str, AliasesType]] = {k: dict(v) for k, v in self.units.items()}
        merged_conversions: Dict[str, Dict[str, Any]] = {k: dict(v) for k, v in self.conversions.items()}
        for kind, table in (units or {}).items():
            merged_units.setdefault(kind, {}).update(table)
        for kind, table in (conversions or {}).items():
            merged_conversions.setdefault(kind, {}).update(table)
        return UnitConfig(merged_units, merged_conversions, settings or self.settings)

    def with_kinds(self, *kinds: KindDefinition) -> UnitConfig:
        """New config extended by Python defined kinds."""
        config = self
        for kind in kinds:
            if not isinstance(kind, KindDefinition):
                raise TypeError(f"KindDefinition expected, got {type(kind).__name__}")
            config = config.merge({kind.name: kind.units()}, {kind.name: kind.conversions()})
        return config

    def with_settings(self, precision: Optional[int] = None,
                      allow_exact_results: Optional[bool] = None) -> UnitConfig:
        if precision is None:
            precision = self.settings.precision
        if allow_exact_results is None:
            allow_exact_results = self.settings.allow_exact_results
        return self._replace(settings=FormatSettings.create(precision, allow_exact_results))

    def build(self) -> Tuple[UnitRegistry, ConversionTable]:
        """Build the registry and the conversion table.

        Raises:
            ConfigurationError: On malformed kinds or conversions.
        """
        registry = UnitRegistry(self.units)
        conversions = {kind: table for kind, table in self.conversions.items() if table}
        return registry, ConversionTable(registry, conversions)


def load_toml(filepath: str) -> Dict[str, Any]:
    with open(filepath, "rb") as fp:
        try:
            return tomllib.load(fp)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Can't parse {filepath}: {exc}") from exc


def _get_table(props: Mapping[str, Any], key: str, section: str) -> Mapping[str, Any]:
    if (ret := props.get(key, {})) is None or not isinstance(ret, dict):
        raise ConfigurationError(f"'{section}.{key}' has to be a table, got {type(ret).__name__}")
    return ret


def parse_config(data: Mapping[str, Any], base: Optional[UnitConfig] = None,
                 source: str = '<mapping>', suppress_warnings: bool = False) -> UnitConfig:
    """Apply one parsed TOML document to `base` (an empty config by default).

    Raises:
        ConfigurationError: If sections have unexpected types or settings are invalid.
    """
    base = base or UnitConfig()
    if (pyuc := data.get(CONFIG_SECTION)) is None:
        if not suppress_warnings:
            logger.warning(f"Config {source} has no `{CONFIG_SECTION}` section")
        return base
    if not isinstance(pyuc, dict):
        raise ConfigurationError(f"'{CONFIG_SECTION}' has to be a table in {source}")

    settings = base.settings
    if 'precision' in pyuc or 'allow_exact_results' in pyuc:
        settings = FormatSettings.create(pyuc.get('precision', settings.precision),
                                         pyuc.get('allow_exact_results', settings.allow_exact_results))

    units: Dict[str, Mapping[str, AliasesType]] = {}
    conversions: Dict[str, Mapping[str, Any]] = {}
    kinds = _get_table(pyuc, 'kinds', CONFIG_SECTION)
    for kind, kind_props in kinds.items():
        section = f"{CONFIG_SECTION}.kinds.{kind}"
        if not isinstance(kind_props, dict):
            raise ConfigurationError(f"'{section}' has to be a table in {source}")
        if unknown := set(kind_props) - {'units', 'conversions'}:
            logger.warning(f"Unknown keys {sorted(unknown)} in '{section}' of {source}")
        units[kind] = _get_table(kind_props, 'units', section)
        conversions[kind] = _get_table(kind_props, 'conversions', section)
    logger.debug(f"Loaded {len(kinds)} kinds from {source}")
    return base.merge(units, conversions, settings)


def load_config(*filepaths: str, base: Optional[UnitConfig] = None,
                suppress_warnings: bool = False) -> UnitConfig:
    """Load and merge TOML configuration files in order."""
    config = base or UnitConfig()
    for filepath in filepaths:
        logger.debug(f"Loading {os.path.basename(filepath)} from {os.path.dirname(filepath)}")
        config = parse_config(load_toml(filepath), config, filepath, suppress_warnings)
    return config


def _resolve_resource_path(path: str) -> str:
    return str(importlib.resources.files('py_unitconv').joinpath(path))


def default_config(kinds: Iterable[str] = DEFAULT_KINDS) -> UnitConfig:
    """Configuration of the packaged kinds and default settings."""
    files = [_resolve_resource_path(f'assets/units/{kind}.toml') for kind in kinds]
    return load_config(_resolve_resource_path('assets/.pyuc.toml'), *files, suppress_warnings=True)


def find_config_file(start_dir: Optional[str] = None) -> Optional[str]:
    """Search `.pyuc.toml` or `pyuc.toml` from `start_dir` (cwd by default) upwards.

    Returns:
        The absolute path of the first file found, otherwise None.
    """
    current_dir = os.path.abspath(start_dir or os.getcwd())
    while True:
        for filename in CONFIG_FILENAMES:
            if os.path.exists(path := os.path.join(current_dir, filename)):
                return os.path.abspath(path)

        parent_dir = os.path.dirname(current_dir)
        if parent_dir == current_dir:
            return None
        current_dir = parent_dir
