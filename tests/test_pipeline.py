"""
End-to-end tests: text in, resolved numerals out, through the reference scheduler.

These exercise the rules the way a host runs them: saturation over spans,
word/digit boundaries, whitespace gaps, and longest-span resolution.
"""

from __future__ import annotations

import logging

import pytest

from numeral_es.exceptions import RuleRegistryError
from numeral_es.literals import rule_integer_numeric
from numeral_es.models import ResolvedNumeral
from numeral_es.patterns import Rule, regex
from numeral_es.pipeline import NumeralPipeline, parse_numerals, to_number
from numeral_es.rules import RULES, get_rule


def _values(pipeline: NumeralPipeline, text: str) -> list[float]:
    return [n.value for n in pipeline.run(text)]


# ═══════════════════════════════════════════════════════════════════════
# WHOLE-TEXT NUMERALS
# ═══════════════════════════════════════════════════════════════════════


class TestToNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0", 0),
            ("42", 42),
            ("123456789012345678", 123456789012345678),
            ("1.234.567,89", 1234567.89),
            ("3,5", 3.5),
            (",5", 0.5),
            ("1.234", 1234),
            ("dieciséis", 16),
            ("diesiseis", 16),
            ("diesiséis", 16),
            ("dieciseis", 16),
            ("treinta y siete", 37),
            ("diez y siete", 17),
            ("tres cientos veinte", 320),
            ("tres punto cinco", 3.5),
            ("cinco punto veinticinco", 5.25),
            ("-5", -5),
            ("menos cinco", -5),
            ("2k", 2000),
            ("2,5m", 2500000),
            ("3G", 3e9),
            ("mil", 1000),
            ("  Noventa Y Nueve  ", 99),
            ("menos tres punto cinco", -3.5),
            ("- 2 punto 5", -2.5),
            ("menos cinco punto veinticinco", -5.25),
            ("menos tres punto cinco k", -3500),
        ],
    )
    def test_documented_examples(self, text, expected):
        assert to_number(text) == pytest.approx(expected)

    def test_nineteen_digits_are_unrecognized(self):
        assert to_number("1234567890123456789") is None
        assert parse_numerals("1234567890123456789") == []

    def test_non_numeral_text(self):
        assert to_number("hola") is None

    def test_partial_numeral_is_not_whole(self):
        assert to_number("treinta gatos") is None

    def test_empty_text(self):
        assert to_number("") is None


# ═══════════════════════════════════════════════════════════════════════
# BOUNDARIES
# ═══════════════════════════════════════════════════════════════════════


class TestBoundaries:
    def test_suffix_inside_a_word_does_not_fire(self, pipeline):
        assert _values(pipeline, "2king") == [2]

    def test_suffix_before_currency(self, pipeline):
        assert _values(pipeline, "5k€") == [5000]

    def test_units_inside_compound_word_are_ignored(self, pipeline):
        numerals = pipeline.run("veinticinco")
        assert len(numerals) == 1
        assert numerals[0].value == 25
        assert numerals[0].rule == "number (16..19 21..29)"

    def test_un_inside_punto_is_ignored(self, pipeline):
        assert _values(pipeline, "punto") == []

    def test_conjunction_must_be_a_word(self, pipeline):
        assert _values(pipeline, "treinta ya siete") == [30, 7]

    def test_hundreds_word_is_not_split(self, pipeline):
        assert _values(pipeline, "doscientos") == [200]


# ═══════════════════════════════════════════════════════════════════════
# RESOLUTION
# ═══════════════════════════════════════════════════════════════════════


class TestResolution:
    def test_several_numerals_in_order(self, pipeline):
        numerals = pipeline.run("entre treinta y siete y 1.234,5 euros, menos 2k")
        assert [n.text for n in numerals] == ["treinta y siete", "1.234,5", "menos 2k"]
        assert [n.value for n in numerals] == pytest.approx([37, 1234.5, -2000])

    def test_spans_point_back_into_text(self, pipeline):
        text = "cuesta tres cientos veinte euros"
        (numeral,) = pipeline.run(text)
        assert text[numeral.start:numeral.end] == "tres cientos veinte"
        assert numeral.rule == "numbers 200..999"
        assert isinstance(numeral, ResolvedNumeral)

    def test_grouped_decimal_wins_over_parts(self, pipeline):
        (numeral,) = pipeline.run("1.234.567,89")
        assert numeral.rule == "decimal with thousands separator"
        assert numeral.value == pytest.approx(1234567.89)

    def test_grouped_integer_wins_over_digit_runs(self, pipeline):
        (numeral,) = pipeline.run("1.234")
        assert numeral.rule == "integer with thousands separator ."

    def test_decimal_join_then_suffix(self, pipeline):
        # "cinco k" could also be read as the fraction; the earlier join wins
        assert _values(pipeline, "tres punto cinco k") == pytest.approx([3500])

    def test_grain_is_absent_on_all_results(self, pipeline):
        assert all(n.grain is None for n in pipeline.run("dos, 3,5 y 4k"))

    def test_same_text_same_result(self, pipeline):
        text = "menos cinco punto veinticinco"
        assert pipeline.run(text) == pipeline.run(text)

    def test_sign_applies_to_the_whole_decimal(self, pipeline):
        (numeral,) = pipeline.run("menos tres punto cinco")
        assert numeral.rule == "numbers prefix with -, negative or minus"
        assert numeral.value == pytest.approx(-3.5)

    def test_too_many_groups_are_not_a_grouped_integer(self, pipeline):
        numerals = pipeline.run("1.234.567.890.123.456.789")
        assert all(n.rule != "integer with thousands separator ." for n in numerals)
        assert all(n.value < 1000 for n in numerals)


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════


class TestConfiguration:
    def test_default_rule_set_is_the_registry(self, pipeline):
        assert pipeline.rules == RULES

    def test_custom_rule_subset(self):
        only_digits = NumeralPipeline(rules=[rule_integer_numeric])
        assert _values(only_digits, "cinco y 5") == [5]

    def test_duplicate_rule_names_are_refused(self):
        with pytest.raises(RuleRegistryError) as exc:
            NumeralPipeline(rules=[rule_integer_numeric, rule_integer_numeric])
        assert "DUPLICATE_RULE_NAME" in exc.value.details["codes"]

    def test_empty_pattern_is_refused(self):
        broken = Rule(name="broken", pattern=(), produce=lambda window: None)
        with pytest.raises(RuleRegistryError):
            NumeralPipeline(rules=[broken])

    def test_pass_limit_is_logged(self, caplog):
        negation = get_rule("numbers prefix with -, negative or minus")
        limited = NumeralPipeline(rules=[rule_integer_numeric, negation], max_passes=1)
        with caplog.at_level(logging.WARNING, logger="numeral_es.pipeline"):
            assert _values(limited, "- 5") == [5]
        assert "No fixed point" in caplog.text

    def test_get_rule_unknown_name(self):
        with pytest.raises(KeyError):
            get_rule("number (1000..)")

    def test_regex_helper_is_case_insensitive(self):
        assert regex("punto").pattern.fullmatch("PUNTO") is not None
