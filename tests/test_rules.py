"""
Tests for rules.py - loading and validating conjo.csv.
"""

import logging

import pytest

from katsuyou.constants import ConjType
from katsuyou.errors import ConfigurationError
from katsuyou.pos import PosClass
from katsuyou.rules import ConjugationRule, RuleKey, RuleTable, load_conj_rules, parse_rule_row


VALID_ROW = ["10", "1", "f", "f", "1", "1", "る", "", ""]


class TestBundledTable:
    """The table shipped with the package."""

    def test_loads(self, rule_table):
        assert len(rule_table) > 1000

    def test_covers_every_class(self, rule_table):
        expected = {p for p in PosClass if p != PosClass.UNINFLECTABLE}
        assert rule_table.pos_classes() == expected

    def test_no_unreachable_formal_rules(self, rule_table):
        assert rule_table.orphan_formal_keys() == []

    def test_get(self, rule_table):
        rule = rule_table.get(PosClass.V1, ConjType.PAST, False, False, 1)
        assert rule.stem == 1
        assert rule.okuri == "た"

    def test_get_missing(self, rule_table):
        assert rule_table.get(PosClass.ADJ_I, ConjType.POTENTIAL, False, False, 1) is None

    def test_contains_key(self, rule_table):
        assert RuleKey(PosClass.V1, ConjType.NON_PAST, False, False, 1) in rule_table

    def test_rules_for_sorted(self, rule_table):
        keys = [r.key for r in rule_table.rules_for(PosClass.V5K)]
        assert keys == sorted(keys)
        assert all(r.pos == PosClass.V5K for r in rule_table.rules_for(PosClass.V5K))

    def test_every_class_has_dictionary_form(self, rule_table):
        for pos in rule_table.pos_classes():
            assert rule_table.get(pos, ConjType.NON_PAST, False, False, 1) is not None

    def test_loader_logs_count(self, caplog):
        with caplog.at_level(logging.INFO, logger="katsuyou.rules"):
            load_conj_rules()
        assert any("conjugation rules" in r.message for r in caplog.records)


class TestConjugationRule:
    def test_effective_stem_with_override(self):
        rule = ConjugationRule(40, 1, True, False, 1, 1, "ない", "こ", "")
        assert rule.effective_stem(True) == 2
        assert rule.effective_stem(False) == 1

    def test_euphonic(self):
        rule = ConjugationRule(40, 1, True, False, 1, 1, "ない", "こ", "X")
        assert rule.euphonic(True) == "こ"
        assert rule.euphonic(False) == "X"

    def test_key(self):
        rule = ConjugationRule(10, 2, False, True, 3, 1, "ました")
        assert rule.key == (10, 2, False, True, 3)


class TestParseRow:
    def test_valid(self):
        rule = parse_rule_row(VALID_ROW)
        assert rule == ConjugationRule(10, 1, False, False, 1, 1, "る")

    @pytest.mark.parametrize("flag,expected", [("t", True), ("TRUE", True), ("1", True),
                                               ("f", False), ("false", False), ("0", False)])
    def test_boolean_spellings(self, flag, expected):
        row = list(VALID_ROW)
        row[2] = flag
        assert parse_rule_row(row).neg is expected

    @pytest.mark.parametrize("index,value", [
        (0, "99"),   # unknown class
        (0, "v1"),   # not an integer
        (1, "14"),   # unknown conjugation type
        (1, "0"),
        (2, "yes"),  # bad flag
        (4, "0"),    # ordinal out of range
        (4, "10"),
        (5, "-1"),   # negative stem
        (5, "3"),    # removes more than a minimal headword
    ])
    def test_invalid_values(self, index, value):
        row = list(VALID_ROW)
        row[index] = value
        with pytest.raises(ConfigurationError):
            parse_rule_row(row, "conjo.csv", 7)

    def test_override_counts_toward_trim(self):
        row = ["10", "1", "f", "f", "1", "2", "る", "こ", ""]
        with pytest.raises(ConfigurationError, match="removes 3"):
            parse_rule_row(row)

    def test_column_count(self):
        with pytest.raises(ConfigurationError, match="expected 9 columns"):
            parse_rule_row(VALID_ROW[:8])

    def test_error_location(self):
        row = list(VALID_ROW)
        row[1] = "14"
        with pytest.raises(ConfigurationError) as exc_info:
            parse_rule_row(row, "conjo.csv", 7)
        assert str(exc_info.value).startswith("conjo.csv:7: ")
        assert exc_info.value.line == 7


class TestLoadFile:
    def test_loads_custom_file(self, write_conjo):
        path = write_conjo([VALID_ROW, ["10", "1", "f", "t", "1", "1", "ます", "", ""]])
        table = load_conj_rules(path)
        assert len(table) == 2
        assert table.source == str(path)

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "conjo.csv"
        path.write_text("header\n\n" + "\t".join(VALID_ROW) + "\n\n", encoding="utf-8")
        assert len(load_conj_rules(path)) == 1

    def test_duplicate_key(self, write_conjo):
        dup = ["10", "1", "f", "f", "1", "1", "るる", "", ""]
        path = write_conjo([VALID_ROW, dup])
        with pytest.raises(ConfigurationError, match="first on line 2") as exc_info:
            load_conj_rules(path)
        assert exc_info.value.line == 3

    def test_bad_row_rejects_whole_table(self, write_conjo):
        path = write_conjo([VALID_ROW, ["10", "1", "f", "f", "2", "1", "る", ""]])
        with pytest.raises(ConfigurationError):
            load_conj_rules(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_conj_rules(tmp_path / "missing.csv")

    def test_unreachable_formal_rule_warns(self, write_conjo, caplog):
        path = write_conjo([["10", "2", "f", "t", "1", "1", "ました", "", ""]])
        with caplog.at_level(logging.WARNING, logger="katsuyou.rules"):
            table = load_conj_rules(path)
        assert table.orphan_formal_keys() == [(10, 2, False, True, 1)]
        assert any("unreachable" in r.message for r in caplog.records)


class TestRuleTable:
    def test_duplicate_rejected(self):
        rule = ConjugationRule(10, 1, False, False, 1, 1, "る")
        with pytest.raises(ConfigurationError, match="duplicate"):
            RuleTable([rule, rule])

    def test_invalid_rule_rejected(self):
        with pytest.raises(ConfigurationError):
            RuleTable([ConjugationRule(99, 1, False, False, 1, 1, "る")])

    def test_read_only(self):
        table = RuleTable([ConjugationRule(10, 1, False, False, 1, 1, "る")])
        with pytest.raises(TypeError):
            table._rules[RuleKey(10, 2, False, False, 1)] = None

    def test_iterates_rules(self):
        rules = [
            ConjugationRule(10, 1, False, False, 1, 1, "る"),
            ConjugationRule(10, 2, False, False, 1, 1, "た"),
        ]
        assert sorted(RuleTable(rules), key=lambda r: r.key) == rules
