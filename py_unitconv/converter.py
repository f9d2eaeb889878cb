"""Conversion facade.

`Converter` wires the unit registry, the conversion table, the resolver and the value parser
together: parse -> look up kind -> resolve conversion -> apply -> new value.

Failures are returned as `ConversionError` values (`UndefinedOriginError`,
`UndefinedConversionError`), never raised unless explicitly requested, so results can be
chained and rendered uniformly:

Examples:
    >>> from py_unitconv.config import default_config
    >>> converter = Converter.from_config(default_config())
    >>> converter.parse('500 mg')
    Value(value=500.0, unit='mg', kind='mass')
    >>> converter.to(converter.parse('20 g'), 'mg')
    Value(value=20000.0, unit='mg', kind='mass')
    >>> converter.convert('5 pounds', 'oz')
    '80.00 oz'
    >>> converter.as_string(converter.to('10 kg', 'xl'))
    'undefined conversion'
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from typing_extensions import TypeAlias

from py_unitconv.config import UnitConfig
from py_unitconv.exceptions import ConversionError, UndefinedConversionError, UndefinedOriginError
from py_unitconv.logger import logger
from py_unitconv.parser import ValueParser
from py_unitconv.registry import Kind, Unit, UnitRegistry
from py_unitconv.resolver import ConversionResolver
from py_unitconv.rules import ConversionRule
from py_unitconv.settings import FormatSettings
from py_unitconv.table import ConversionTable
from py_unitconv.value import Value, format_value

__all__ = ('Converter', 'SourceType', 'ResultType')

#: Accepted conversion sources: a string to parse, a value, or a mapping with `value` and `unit`.
SourceType: TypeAlias = Union[str, Value, Mapping[str, Any], None]
ResultType: TypeAlias = Union[Value, ConversionError]


class Converter:
    """Unit conversion within kinds.

    Args:
        registry: Unit registry.
        table: Conversion table built against `registry`.
        settings: Display settings used by `as_string` and `convert`.
        parser: Value parser, defaults to one with the feet-and-inches and pounds-and-ounces detectors.
    """

    __slots__ = ('registry', 'table', 'resolver', 'parser', 'settings')

    def __init__(self, registry: UnitRegistry, table: ConversionTable,
                 settings: FormatSettings = FormatSettings(),
                 parser: Optional[ValueParser] = None):
        self.registry: UnitRegistry = registry
        self.table: ConversionTable = table
        self.resolver: ConversionResolver = ConversionResolver(table)
        self.parser: ValueParser = parser or ValueParser()
        self.settings: FormatSettings = settings

    @classmethod
    def from_config(cls, config: UnitConfig, parser: Optional[ValueParser] = None) -> Converter:
        """Build a converter from a `UnitConfig`.

        Raises:
            ConfigurationError: On malformed kinds or conversions.
        """
        registry, table = config.build()
        return cls(registry, table, config.settings, parser)

    def parse(self, text: str) -> Optional[Value]:
        """Parse a string into a value.

        Returns:
            The value, or None when no number can be parsed or the unit isn't registered.

        Examples:
            ```python
            converter.parse("5' 2\\"")  # Value(62.0, 'in', 'length')
            converter.parse("5 alien")  # None
            ```
        """
        if (parsed := self.parser.parse(text)) is None:
            return None
        magnitude, alias = parsed
        return self.value(magnitude, alias)

    from_ = parse

    def value(self, magnitude: float, unit: str) -> Optional[Value]:
        """Build a value for a registered unit alias, None for unregistered ones."""
        if (resolved := self.registry.resolve_unit(unit)) is None:
            logger.debug(f"Unit {unit!r} is not registered")
            return None
        try:
            magnitude = float(magnitude)
        except (TypeError, ValueError):
            return None
        return Value(magnitude, *resolved)

    def _origin(self, source: SourceType) -> Optional[Value]:
        if source is None:
            return None
        if isinstance(source, str):
            return self.parse(source)
        if isinstance(source, Value):
            if (unit := self.registry.canonical_unit_for(source.unit, source.kind)) is None:
                logger.debug(f"Kind {source.kind!r} doesn't own unit {source.unit!r}")
                return None
            try:
                return Value(float(source.value), unit, Kind(source.kind))
            except (TypeError, ValueError):
                return None
        if isinstance(source, Mapping):
            if 'value' not in source or 'unit' not in source:
                return None
            if (value := self.value(source['value'], source['unit'])) is None:
                return None
            if (kind := source.get('kind')) is not None and kind != value.kind:
                logger.debug(f"Kind {kind!r} doesn't own unit {value.unit!r}")
                return None
            return value
        return None

    def to(self, source: SourceType, unit_to: str, raise_error: bool = False) -> ResultType:
        """Convert a value (or a string to parse) to another unit of its kind.

        Args:
            source: String, `Value` or mapping `{"value", "unit"[, "kind"]}`.
            unit_to: Target unit alias.
            raise_error: Raise the conversion error instead of returning it.

        Returns:
            New value in the canonical target unit, or the conversion error:
            `UndefinedOriginError` when `source` is absent or can't be parsed/resolved,
            `UndefinedConversionError` when no conversion path exists (including conversions
            across kinds).

        Examples:
            ```python
            converter.to("15C", "K")                       # Value(288.15, 'K', 'temperature')
            converter.to(Value(20, 'g', 'mass'), "mg")     # Value(20000.0, 'mg', 'mass')
            converter.to(None, "g")                        # UndefinedOriginError()
            ```
        """
        result = self._to(source, unit_to)
        if raise_error and isinstance(result, ConversionError):
            raise result
        return result

    def _to(self, source: SourceType, unit_to: str) -> ResultType:
        if (origin := self._origin(source)) is None:
            return UndefinedOriginError()
        if (rule := self._rule(origin.kind, origin.unit, unit_to)) is None:
            return UndefinedConversionError()
        target = self.registry.canonical_unit_for(unit_to, origin.kind)
        return origin.with_value(rule.apply(origin.value), target)

    def _rule(self, kind: Kind, unit_from: Unit, unit_to: str) -> Optional[ConversionRule]:
        if (target := self.registry.canonical_unit_for(unit_to, kind)) is None:
            logger.debug(f"Unit {unit_to!r} is not a unit of {kind!r}")
            return None
        return self.resolver.resolve(kind, unit_from, target)

    def as_string(self, result: Union[ResultType, None]) -> str:
        """Render a value with the converter's settings, or an error as its message."""
        if result is None:
            return UndefinedOriginError.message
        if isinstance(result, ConversionError):
            return result.message
        return format_value(result, self.settings.precision, self.settings.allow_exact_results)

    def convert(self, source: str, unit_to: str) -> str:
        """Parse, convert and render in one step.

        Examples:
            ```python
            converter.convert("5 pounds", "oz")  # '80.00 oz'
            ```
        """
        return self.as_string(self.to(self.parse(source), unit_to))

    def units(self) -> Dict[str, Dict[str, str]]:
        """Alias tables of every kind, `{kind: {alias: canonical unit}}`."""
        return self.registry.as_dict()

    def kind_of_unit(self, unit: str) -> Optional[str]:
        return self.registry.kind_of(unit)

    def get_conversion(self, unit_from: str, unit_to: str) -> Union[ConversionRule, ConversionError]:
        """Conversion rule between two unit aliases.

        Returns:
            The rule, or `UndefinedConversionError` when the units aren't connected
            (unknown units and units of different kinds included).
        """
        if (resolved := self.registry.resolve_unit(unit_from)) is None:
            return UndefinedConversionError()
        unit, kind = resolved
        if (rule := self._rule(kind, unit, unit_to)) is None:
            return UndefinedConversionError()
        return rule

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {', '.join(self.registry.kinds)}>"
