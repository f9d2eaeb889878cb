"""Conversion resolver: finds a usable conversion rule between two units of one kind.

Resolution order:

1. same unit - identity factor;
2. stored edge `unit_from -> unit_to`;
3. reciprocal of a stored factor edge `unit_to -> unit_from`;
4. breadth-first search over factor edges (and their reciprocals), multiplying factors along
   the shortest path found. Formula and special edges are only usable as single direct hops.

Examples:
    >>> from py_unitconv.registry import UnitRegistry
    >>> from py_unitconv.table import ConversionTable
    >>> registry = UnitRegistry({'length': {'km': [], 'm': [], 'mm': []}})
    >>> table = ConversionTable(registry, {'length': {'km_to_m': 1000, 'm_to_mm': 1000}})
    >>> resolver = ConversionResolver(table)
    >>> resolver.resolve('length', 'km', 'mm')
    Factor(factor=1000000.0)
    >>> resolver.path('length', 'mm', 'km')
    ['mm', 'm', 'km']
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from py_unitconv.logger import logger
from py_unitconv.registry import Unit
from py_unitconv.rules import IDENTITY, ConversionRule, Factor, compose_factors
from py_unitconv.table import ConversionTable

__all__ = ('ConversionResolver',)


class ConversionResolver:
    """Resolve conversion rules over a `ConversionTable`.

    The resolver keeps no state besides the (immutable) table, so one instance can be shared.
    """

    __slots__ = ('table',)

    def __init__(self, table: ConversionTable):
        self.table: ConversionTable = table

    def resolve(self, kind: str, unit_from: str, unit_to: str) -> Optional[ConversionRule]:
        """Find a conversion rule `unit_from -> unit_to` within `kind`.

        Both units are canonical units already known to belong to `kind`.

        Returns:
            The rule, or None if the units aren't connected.
        """
        if unit_from == unit_to:
            return IDENTITY
        if (rule := self.table.direct_rule(kind, unit_from, unit_to)) is not None:
            logger.debug(f"{kind}: {unit_from} -> {unit_to} direct {rule!r}")
            return rule
        if (rule := self.table.inverse_rule(kind, unit_from, unit_to)) is not None:
            logger.debug(f"{kind}: {unit_from} -> {unit_to} inverse {rule!r}")
            return rule
        if (hops := self._search(kind, unit_from, unit_to)) is None:
            logger.debug(f"{kind}: {unit_from} -> {unit_to} undefined")
            return None
        rule = compose_factors(factor for _, factor in hops)
        logger.debug(f"{kind}: {unit_from} -> {unit_to} via "
                     f"{' -> '.join([unit_from, *(unit for unit, _ in hops)])} {rule!r}")
        return rule

    def path(self, kind: str, unit_from: str, unit_to: str) -> Optional[List[Unit]]:
        """Units visited by the factor path search from `unit_from` to `unit_to` (inclusive).

        Returns None when no path of factor edges connects the units.
        """
        if unit_from == unit_to:
            return [Unit(unit_from)]
        if (hops := self._search(kind, unit_from, unit_to)) is None:
            return None
        return [Unit(unit_from), *(unit for unit, _ in hops)]

    def _search(self, kind: str, unit_from: str, unit_to: str) -> Optional[List[Tuple[Unit, Factor]]]:
        """Breadth-first search over factor edges, shortest hop count wins."""
        start, goal = Unit(unit_from), Unit(unit_to)
        came_from: Dict[Unit, Tuple[Unit, Factor]] = {}
        visited = {start}
        queue: Deque[Unit] = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour, factor in self.table.factor_neighbours(kind, current):
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                came_from[neighbour] = (current, factor)
                if neighbour == goal:
                    return self._unwind(came_from, start, goal)
                queue.append(neighbour)
        return None

    @staticmethod
    def _unwind(came_from: Dict[Unit, Tuple[Unit, Factor]], start: Unit, goal: Unit) -> List[Tuple[Unit, Factor]]:
        hops: List[Tuple[Unit, Factor]] = []
        unit = goal
        while unit != start:
            previous, factor = came_from[unit]
            hops.append((unit, factor))
            unit = previous
        hops.reverse()
        return hops
