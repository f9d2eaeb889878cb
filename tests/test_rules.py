import pytest

from py_unitconv.rules import (IDENTITY, Factor, Formula, RuleType, Special, compose_factors,
                               rule_from_value)
from py_unitconv.specials import fahrenheit_to_celsius, get_special


class TestFactor:

    def test_apply_and_invert(self):
        rule = Factor(1000.)
        assert rule.rule_type is RuleType.FACTOR
        assert rule.apply(2.5) == 2500.
        assert rule.invert() == Factor(0.001)
        assert rule.invert().apply(rule.apply(3.3)) == pytest.approx(3.3)

    def test_identity(self):
        assert IDENTITY.apply(42.) == 42.
        assert IDENTITY.invert() == IDENTITY

    def test_compose(self):
        assert compose_factors([Factor(1000.), Factor(100.), Factor(10.)]) == Factor(1e6)
        assert compose_factors([]) == IDENTITY

    def test_str(self):
        assert str(Factor(2.54)) == "x * 2.54"


class TestFormula:

    def test_affine(self):
        rule = Formula.affine(scale=1.8, offset=32)
        assert rule.rule_type is RuleType.FORMULA
        assert rule.apply(100) == pytest.approx(212.)
        assert rule.apply(-40) == pytest.approx(-40.)
        assert str(rule) == "x * 1.8 + 32"
        assert str(Formula.affine(offset=-273.15)) == "x * 1 - 273.15"

    def test_not_invertible(self):
        assert Formula.affine(offset=273.15).invert() is None

    def test_callable(self):
        def double(x):
            return x * 2

        rule = Formula(double)
        assert rule.apply(4) == 8.
        assert rule.description == "double"
        assert rule == Formula(double, "another description")
        assert rule != Formula(lambda x: x * 2)

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            Formula(42)  # type: ignore[arg-type]


class TestSpecial:

    def test_apply(self):
        rule = Special('fahrenheit_to_celsius', fahrenheit_to_celsius)
        assert rule.rule_type is RuleType.SPECIAL
        assert rule.apply(212) == pytest.approx(100.)
        assert rule.invert() is None
        assert str(rule) == 'fahrenheit_to_celsius'
        assert repr(rule) == "Special('fahrenheit_to_celsius')"


class TestRuleFromValue:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1000, Factor(1000.)),
            (2.54, Factor(2.54)),
            (Factor(3.), Factor(3.)),
        ],
    )
    def test_factors(self, value, expected):
        assert rule_from_value(value) == expected

    @pytest.mark.parametrize(
        "value",
        [0, 0., True, False, None, [1, 2], {}, {'slope': 2}, "unknown_special",
         float('inf'), float('nan'), Factor(0.), Factor(float('-inf')), {'scale': 'x'}, {'offset': float('nan')}],
    )
    def test_unsupported(self, value):
        assert rule_from_value(value, get_special) is None

    def test_affine_mapping(self):
        rule = rule_from_value({'offset': 273.15})
        assert isinstance(rule, Formula)
        assert rule.apply(15) == pytest.approx(288.15)

    def test_callable(self):
        rule = rule_from_value(lambda x: x + 1)
        assert isinstance(rule, Formula)
        assert rule.apply(1) == 2.

    def test_special_name(self):
        rule = rule_from_value('fahrenheit_to_celsius', get_special)
        assert rule == Special('fahrenheit_to_celsius', fahrenheit_to_celsius)

    def test_special_name_without_lookup(self):
        assert rule_from_value('fahrenheit_to_celsius') is None
