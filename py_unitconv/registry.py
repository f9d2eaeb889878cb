"""Unit registry: kinds, canonical units and their aliases.

The registry is built once from configuration and is read-only afterwards. Every canonical unit
belongs to exactly one kind and is an alias of itself.

Examples:
    >>> registry = UnitRegistry({'mass': {'g': ['gram', 'grams'], 'kg': 'kilogram'}})
    >>> registry.resolve_unit(' grams ')
    ('g', 'mass')
    >>> registry.kind_of('kilogram')
    'mass'
    >>> registry.canonical_unit_for('gram', 'length') is None
    True
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, NewType, Optional, Tuple, Union

from typing_extensions import TypeAlias

from py_unitconv.exceptions import ConfigurationError
from py_unitconv.logger import logger

__all__ = (
    'Unit',
    'Kind',
    'AliasesType',
    'UnitRegistry',
)

Unit = NewType('Unit', str)
Kind = NewType('Kind', str)

#: Aliases of one canonical unit as found in configuration: a list of strings or a single string.
AliasesType: TypeAlias = Union[str, Iterable[str], None]


def _normalize_aliases(aliases: AliasesType) -> Tuple[str, ...]:
    if aliases is None:
        return ()
    if isinstance(aliases, str):
        return (aliases,)
    return tuple(aliases)


class UnitRegistry:
    """Per-kind tables of canonical units and aliases.

    Args:
        units: Mapping `kind -> {canonical unit -> aliases}`. Kinds and units are registered
               in mapping order, which decides which kind wins an ambiguous alias.

    Raises:
        ConfigurationError: If a canonical unit is declared under two kinds, or a unit/alias is
                            not a non-empty string.
    """

    __slots__ = ('_aliases', '_units', '_lookup')

    def __init__(self, units: Mapping[str, Mapping[str, AliasesType]]):
        aliases: Dict[Kind, Dict[str, Unit]] = {}
        kind_units: Dict[Kind, Tuple[Unit, ...]] = {}
        owner: Dict[Unit, Kind] = {}
        lookup: Dict[str, Tuple[Unit, Kind]] = {}

        for kind_name, kind_table in units.items():
            kind = Kind(kind_name)
            table: Dict[str, Unit] = {}
            declared = []
            for unit_name, unit_aliases in kind_table.items():
                unit = Unit(self._check_name(unit_name, kind))
                if unit in owner:
                    raise ConfigurationError(
                        f"Unit {unit!r} of kind {kind!r} is already defined by kind {owner[unit]!r}"
                    )
                owner[unit] = kind
                declared.append(unit)
                for alias in (unit, *_normalize_aliases(unit_aliases)):
                    alias = self._check_name(alias, kind)
                    if alias in table and table[alias] != unit:
                        logger.warning(f"Alias {alias!r} of {kind!r} maps to both {table[alias]!r} "
                                       f"and {unit!r}, keeping {table[alias]!r}")
                        continue
                    table.setdefault(alias, unit)
                    if (first := lookup.get(alias)) is not None and first[1] != kind:
                        logger.warning(f"Alias {alias!r} is registered by kinds {first[1]!r} and {kind!r}, "
                                       f"resolving to {first[1]!r}")
                        continue
                    lookup.setdefault(alias, (unit, kind))
            aliases[kind] = table
            kind_units[kind] = tuple(declared)

        self._aliases: Mapping[Kind, Mapping[str, Unit]] = MappingProxyType(
            {k: MappingProxyType(v) for k, v in aliases.items()})
        self._units: Mapping[Kind, Tuple[Unit, ...]] = MappingProxyType(kind_units)
        self._lookup: Mapping[str, Tuple[Unit, Kind]] = MappingProxyType(lookup)
        logger.debug(f"Unit registry built: {len(self._aliases)} kinds, {len(owner)} units")

    @staticmethod
    def _check_name(name: object, kind: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Units and aliases of {kind!r} must be non-empty strings, got {name!r}")
        return name.strip()

    def resolve_unit(self, alias: str) -> Optional[Tuple[Unit, Kind]]:
        """Resolve an alias to its canonical unit and kind.

        Lookup is case-sensitive and exact after trimming surrounding whitespace.

        Returns:
            `(unit, kind)` or None if the alias isn't registered under any kind.
        """
        if not isinstance(alias, str):
            return None
        return self._lookup.get(alias.strip())

    def canonical_unit_for(self, alias: str, kind: str) -> Optional[Unit]:
        """Resolve an alias within one kind's alias table."""
        if not isinstance(alias, str) or (table := self._aliases.get(Kind(kind))) is None:
            return None
        return table.get(alias.strip())

    def kind_of(self, unit_or_alias: str) -> Optional[Kind]:
        if (resolved := self.resolve_unit(unit_or_alias)) is None:
            return None
        return resolved[1]

    @property
    def kinds(self) -> Tuple[Kind, ...]:
        return tuple(self._aliases)

    def units_of(self, kind: str) -> Tuple[Unit, ...]:
        """Canonical units of a kind in registration order (empty for unknown kinds)."""
        return self._units.get(Kind(kind), ())

    def aliases(self, kind: str) -> Mapping[str, Unit]:
        """Alias table `alias -> canonical unit` of a kind (empty for unknown kinds)."""
        return self._aliases.get(Kind(kind), MappingProxyType({}))

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        """Copy of every alias table, `{kind: {alias: unit}}`."""
        return {kind: dict(table) for kind, table in self._aliases.items()}

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and self.resolve_unit(alias) is not None

    def __iter__(self) -> Iterator[Kind]:
        return iter(self._aliases)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {', '.join(self._aliases)}>"
