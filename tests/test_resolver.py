import pytest

from py_unitconv.registry import UnitRegistry
from py_unitconv.resolver import ConversionResolver
from py_unitconv.rules import IDENTITY, Factor, Formula
from py_unitconv.table import ConversionTable


@pytest.fixture
def resolver(toy_config):
    registry, table = toy_config.build()
    return ConversionResolver(table)


class TestResolve:

    def test_identity(self, resolver):
        assert resolver.resolve('length', 'm', 'm') is IDENTITY

    def test_direct(self, resolver):
        assert resolver.resolve('length', 'km', 'm') == Factor(1000.)

    def test_inverse(self, resolver):
        rule = resolver.resolve('length', 'm', 'km')
        assert rule.factor == pytest.approx(0.001)

    @pytest.mark.parametrize(
        "unit_from, unit_to, factor",
        [
            ('km', 'cm', 1e5),
            ('km', 'mm', 1e6),
            ('mm', 'km', 1e-6),
            ('mm', 'm', 1e-3),
            ('cm', 'km', 1e-5),
        ],
    )
    def test_path(self, resolver, unit_from, unit_to, factor):
        rule = resolver.resolve('length', unit_from, unit_to)
        assert isinstance(rule, Factor)
        assert rule.factor == pytest.approx(factor)

    def test_formula_edge_used_only_directly(self, resolver):
        assert isinstance(resolver.resolve('mass', 'g', 'x'), Formula)
        assert resolver.resolve('mass', 'x', 'g') is None
        assert resolver.resolve('mass', 'kg', 'x') is None

    def test_unknown_kind(self, resolver):
        assert resolver.resolve('time', 's', 'ms') is None

    def test_round_trip(self, resolver):
        there = resolver.resolve('length', 'mm', 'km')
        back = resolver.resolve('length', 'km', 'mm')
        assert back.apply(there.apply(123.4)) == pytest.approx(123.4)


class TestPath:

    def test_shortest_path(self, resolver):
        assert resolver.path('length', 'mm', 'km') == ['mm', 'cm', 'm', 'km']
        assert resolver.path('length', 'km', 'cm') == ['km', 'm', 'cm']
        assert resolver.path('length', 'm', 'm') == ['m']

    def test_no_path(self, resolver):
        assert resolver.path('mass', 'x', 'kg') is None

    def test_fewest_hops_wins(self):
        registry = UnitRegistry({'length': {u: [] for u in ('a', 'b', 'c', 'd')}})
        table = ConversionTable(registry, {'length': {'a_to_b': 2, 'b_to_c': 3, 'c_to_d': 5, 'a_to_d': 7}})
        resolver = ConversionResolver(table)
        assert resolver.path('length', 'd', 'a') == ['d', 'a']
        assert resolver.path('length', 'b', 'd') == ['b', 'c', 'd']
        assert resolver.resolve('length', 'b', 'd') == Factor(15.)

    def test_disconnected_components(self):
        registry = UnitRegistry({'length': {u: [] for u in ('a', 'b', 'c', 'd')}})
        table = ConversionTable(registry, {'length': {'a_to_b': 2, 'c_to_d': 5}})
        resolver = ConversionResolver(table)
        assert resolver.resolve('length', 'a', 'd') is None
        assert resolver.path('length', 'a', 'd') is None

    def test_stored_reverse_wins_over_reciprocal(self):
        registry = UnitRegistry({'length': {'a': [], 'b': []}})
        table = ConversionTable(registry, {'length': {'a_to_b': 2, 'b_to_a': 0.4}})
        assert ConversionResolver(table).resolve('length', 'b', 'a') == Factor(0.4)
