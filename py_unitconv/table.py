"""Conversion table: per-kind directed edges `unit_from -> unit_to` carrying conversion rules.

Edges are declared in configuration under keys `<unit_from>_to_<unit_to>`. Only a spanning set of
edges is needed per kind; factor edges are usable in both directions and the resolver composes
paths between units that are not directly connected.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Tuple

from py_unitconv.exceptions import ConfigurationError
from py_unitconv.logger import logger
from py_unitconv.registry import Kind, Unit, UnitRegistry
from py_unitconv.rules import ConversionRule, Factor, RuleType, rule_from_value
from py_unitconv.specials import get_special

__all__ = (
    'EDGE_SEPARATOR',
    'ConversionEdge',
    'ConversionTable',
    'edge_key',
    'split_edge_key',
)

EDGE_SEPARATOR: str = '_to_'


class ConversionEdge(NamedTuple):
    """Directed edge of a kind's conversion graph."""

    unit_from: Unit
    unit_to: Unit
    rule: ConversionRule

    @property
    def key(self) -> str:
        return edge_key(self.unit_from, self.unit_to)


def edge_key(unit_from: str, unit_to: str) -> str:
    return f"{unit_from}{EDGE_SEPARATOR}{unit_to}"


def split_edge_key(key: str, units: FrozenSet[str]) -> Optional[Tuple[Unit, Unit]]:
    """Split `<unit_from>_to_<unit_to>` into a pair of known units.

    Unit names may contain underscores (`ft_in_to_ft`), so every occurrence of the separator
    is tried and the first split naming two units of `units` wins.

    Examples:
        >>> split_edge_key('ft_in_to_ft', frozenset({'ft', 'ft_in'}))
        ('ft_in', 'ft')
        >>> split_edge_key('ft_to_ft_in', frozenset({'ft', 'ft_in'}))
        ('ft', 'ft_in')
        >>> split_edge_key('ft_to_yd', frozenset({'ft', 'ft_in'})) is None
        True
    """
    start = 0
    while (pos := key.find(EDGE_SEPARATOR, start)) != -1:
        unit_from, unit_to = key[:pos], key[pos + len(EDGE_SEPARATOR):]
        if unit_from in units and unit_to in units:
            return Unit(unit_from), Unit(unit_to)
        start = pos + 1
    return None


class ConversionTable:
    """Per-kind sets of conversion edges.

    Args:
        registry: Unit registry the edges must agree with.
        conversions: Mapping `kind -> {"<from>_to_<to>": rule value}`. A rule value is a number
                     (factor), a callable or `{scale, offset}` table (formula), a special
                     procedure name, or an already built rule.
        specials: Lookup of special procedures by name, defaults to the global special registry.

    Raises:
        ConfigurationError: If a kind is unknown to the registry, an edge key doesn't name two
                            units of its kind, or a rule value can't be turned into a rule.
    """

    __slots__ = ('_edges', '_rules', '_neighbours')

    def __init__(self, registry: UnitRegistry,
                 conversions: Mapping[str, Mapping[str, object]],
                 specials: Callable[[str], Optional[Callable[[float], float]]] = get_special):
        edges: Dict[Kind, Tuple[ConversionEdge, ...]] = {}
        rules: Dict[Kind, Dict[Tuple[Unit, Unit], ConversionRule]] = {}

        for kind_name, kind_conversions in conversions.items():
            kind = Kind(kind_name)
            if kind not in registry.kinds:
                raise ConfigurationError(f"Conversions defined for unknown kind {kind!r}")
            units = frozenset(registry.units_of(kind))
            kind_edges: List[ConversionEdge] = []
            kind_rules: Dict[Tuple[Unit, Unit], ConversionRule] = {}
            for key, value in kind_conversions.items():
                if (pair := split_edge_key(key, units)) is None:
                    raise ConfigurationError(
                        f"Conversion {key!r} of kind {kind!r} must be '<unit_from>{EDGE_SEPARATOR}<unit_to>' "
                        f"with units of that kind"
                    )
                if pair[0] == pair[1]:
                    raise ConfigurationError(f"Conversion {key!r} of kind {kind!r} converts a unit to itself")
                if (rule := rule_from_value(value, specials)) is None:
                    raise ConfigurationError(f"Unsupported conversion {key}={value!r} of kind {kind!r}")
                kind_edges.append(ConversionEdge(pair[0], pair[1], rule))
                kind_rules[pair] = rule
            edges[kind] = tuple(kind_edges)
            rules[kind] = kind_rules

        self._edges: Mapping[Kind, Tuple[ConversionEdge, ...]] = MappingProxyType(edges)
        self._rules: Mapping[Kind, Mapping[Tuple[Unit, Unit], ConversionRule]] = MappingProxyType(
            {k: MappingProxyType(v) for k, v in rules.items()})
        self._neighbours = MappingProxyType({k: self._build_adjacency(v) for k, v in edges.items()})
        logger.debug(f"Conversion table built: {sum(len(e) for e in edges.values())} edges")

    @staticmethod
    def _build_adjacency(edges: Tuple[ConversionEdge, ...]) -> Mapping[Unit, Tuple[Tuple[Unit, Factor], ...]]:
        """Adjacency over factor edges; stored edges first, then inferred inverses."""
        forward: Dict[Unit, List[Tuple[Unit, Factor]]] = {}
        inverse: Dict[Unit, List[Tuple[Unit, Factor]]] = {}
        stored = {(e.unit_from, e.unit_to) for e in edges}
        for edge in edges:
            if edge.rule.rule_type is not RuleType.FACTOR:
                continue
            forward.setdefault(edge.unit_from, []).append((edge.unit_to, edge.rule))  # type: ignore[arg-type]
            if (edge.unit_to, edge.unit_from) not in stored:
                inverse.setdefault(edge.unit_to, []).append((edge.unit_from, edge.rule.invert()))  # type: ignore
        return MappingProxyType({
            unit: tuple(forward.get(unit, []) + inverse.get(unit, []))
            for unit in (*forward, *(u for u in inverse if u not in forward))
        })

    @property
    def kinds(self) -> Tuple[Kind, ...]:
        return tuple(self._edges)

    def edges_for(self, kind: str) -> FrozenSet[ConversionEdge]:
        return frozenset(self._edges.get(Kind(kind), ()))

    def direct_rule(self, kind: str, unit_from: str, unit_to: str) -> Optional[ConversionRule]:
        """Rule of the stored edge `unit_from -> unit_to`, if any."""
        if (rules := self._rules.get(Kind(kind))) is None:
            return None
        return rules.get((Unit(unit_from), Unit(unit_to)))

    def inverse_rule(self, kind: str, unit_from: str, unit_to: str) -> Optional[Factor]:
        """Reciprocal of a stored factor edge `unit_to -> unit_from`.

        Formula and special rules are never inverted.
        """
        if (rule := self.direct_rule(kind, unit_to, unit_from)) is None:
            return None
        if rule.rule_type is not RuleType.FACTOR:
            return None
        return rule.invert()  # type: ignore[return-value]

    def factor_neighbours(self, kind: str, unit: str) -> Tuple[Tuple[Unit, Factor], ...]:
        """Units reachable from `unit` by one factor hop, with the hop's factor."""
        if (adjacency := self._neighbours.get(Kind(kind))) is None:
            return ()
        return adjacency.get(Unit(unit), ())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {sum(len(e) for e in self._edges.values())} edges>"
