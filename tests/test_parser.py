import pytest

from py_unitconv.parser import ValueParser, parse_value
from py_unitconv.specials import FEET_AND_INCHES, POUNDS_AND_OUNCES


class TestDecimalParsing:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5km", (5.0, 'km')),
            ("5 km", (5.0, 'km')),
            ("5  km", (5.0, 'km')),
            ("  5 km  ", (5.0, 'km')),
            ("500 mg", (500.0, 'mg')),
            ("15C", (15.0, 'C')),
            ("-40 F", (-40.0, 'F')),
            ("+2.5 kg", (2.5, 'kg')),
            (".5 h", (0.5, 'h')),
            ("5. m", (5.0, 'm')),
            ("1.5e3mg", (1500.0, 'mg')),
            ("2E-3 s", (0.002, 's')),
            ("5 pounds", (5.0, 'pounds')),
            ("1 feet and inches", (1.0, 'feet and inches')),
            ("5", (5.0, '')),
        ],
    )
    def test_parse(self, text, expected):
        magnitude, alias = parse_value(text)
        assert magnitude == pytest.approx(expected[0])
        assert alias == expected[1]

    @pytest.mark.parametrize("text", ["", "   ", "km", "five km", "- 5 km", None, 5])
    def test_no_number(self, text):
        assert parse_value(text) is None

    def test_alias_is_not_checked(self):
        assert parse_value("5 alien") == (5.0, 'alien')


class TestCompositeParsing:

    @pytest.mark.parametrize(
        "text, inches",
        [
            ("5' 2\"", 62.0),
            ("5'2\"", 62.0),
            ("5′ 2″", 62.0),
            ("5 ft 2 in", 62.0),
            ("5 feet, 2.5 inches", 62.5),
            ("6 foot 0 inch", 72.0),
            ("5' 2''", 62.0),
        ],
    )
    def test_feet_and_inches(self, text, inches):
        assert parse_value(text) == (pytest.approx(inches), 'in')

    @pytest.mark.parametrize(
        "text, pounds",
        [
            ("5 lb 2 oz", 5.125),
            ("5lbs 8oz", 5.5),
            ("1 pound 4 ounces", 1.25),
            ("0 pounds, 1 ounce", 0.0625),
        ],
    )
    def test_pounds_and_ounces(self, text, pounds):
        assert parse_value(text) == (pytest.approx(pounds), 'lb')

    def test_single_unit_is_not_composite(self):
        assert parse_value("5'") == (5.0, "'")
        assert parse_value("2\"") == (2.0, '"')
        assert parse_value("5 lb") == (5.0, 'lb')

    def test_detectors(self):
        assert FEET_AND_INCHES.detect("5 lb 2 oz") is None
        assert POUNDS_AND_OUNCES.detect("5' 2\"") is None
        assert FEET_AND_INCHES.detect("1' 6\"") == (18.0, 'in')

    def test_without_detectors(self):
        parser = ValueParser(detectors=())
        assert parser.parse("5' 2\"") == (5.0, "' 2\"")
        assert parser.parse("5 lb 2 oz") == (5.0, 'lb 2 oz')

    def test_custom_detector_order(self):
        parser = ValueParser(detectors=(FEET_AND_INCHES,))
        assert parser.parse("5 lb 2 oz") == (5.0, 'lb 2 oz')
        assert parser.parse("5 ft 2 in") == (62.0, 'in')
