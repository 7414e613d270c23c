"""
Conjugation rule table for Katsuyou.

Rules come from conjo.csv (tab-separated, one header row):
    pos  conj  neg  fml  onum  stem  okuri  euphr  euphk

Each row says: for headwords of class `pos`, the `onum`-th variant of
conjugation type `conj` with negation `neg` and formality `fml` is built
by removing `stem` characters from the end of the headword and appending
`okuri`. When the stem ends in kana and `euphr` is set (or ends in kanji
and `euphk` is set), one more character is removed and the override is
inserted before `okuri`.

The table is built once and is read-only afterwards, so it can be shared
between threads without locking.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, NamedTuple, Optional

from katsuyou.constants import ConjType
from katsuyou.errors import ConfigurationError
from katsuyou.pos import PosClass
from katsuyou.settings import CONJO_CSV_PATH, MAX_ORDINAL, MIN_HEADWORD_LENGTH

logger = logging.getLogger(__name__)

CONJO_COLUMNS = 9

_TRUE_VALUES = frozenset(['t', 'true', '1'])
_FALSE_VALUES = frozenset(['f', 'false', '0'])

_POS_IDS = frozenset(int(p) for p in PosClass if p != PosClass.UNINFLECTABLE)
_CONJ_IDS = frozenset(int(c) for c in ConjType)


class RuleKey(NamedTuple):
    pos: int
    conj: int
    neg: bool
    fml: bool
    onum: int


@dataclass(frozen=True)
class ConjugationRule:
    """
    Represents a conjugation rule from conjo.csv.
    """
    pos: int        # Part of speech ID
    conj: int       # Conjugation type ID
    neg: bool       # Negative form
    fml: bool       # Formal/polite form
    onum: int       # Order number (for multiple rules per conjugation)
    stem: int       # Number of characters to remove from the headword
    okuri: str      # Okurigana to add
    euphr: str = ""  # Euphonic change for a kana stem
    euphk: str = ""  # Euphonic change for a kanji stem

    @property
    def key(self) -> RuleKey:
        return RuleKey(self.pos, self.conj, self.neg, self.fml, self.onum)

    def euphonic(self, iskana: bool) -> str:
        """Get the euphonic override that applies to a kana or kanji stem."""
        return self.euphr if iskana else self.euphk

    def effective_stem(self, iskana: bool) -> int:
        """Characters removed from the headword, counting the euphonic slot."""
        return self.stem + 1 if self.euphonic(iskana) else self.stem


def validate_rule(rule: ConjugationRule, source: str = "<rules>", line: int = 0) -> None:
    """
    Check a rule against the table invariants.

    Raises:
        ConfigurationError: If the rule names an unknown class or type, an
            ordinal outside 1..MAX_ORDINAL, or removes more characters than
            the shortest valid headword has.
    """
    if rule.pos not in _POS_IDS:
        raise ConfigurationError(source, f"unknown part-of-speech id {rule.pos}", line)
    if rule.conj not in _CONJ_IDS:
        raise ConfigurationError(source, f"unknown conjugation id {rule.conj}", line)
    if not 1 <= rule.onum <= MAX_ORDINAL:
        raise ConfigurationError(source, f"ordinal {rule.onum} outside 1..{MAX_ORDINAL}", line)
    if rule.stem < 0:
        raise ConfigurationError(source, f"negative stem {rule.stem}", line)
    trim = max(rule.effective_stem(True), rule.effective_stem(False))
    if trim > MIN_HEADWORD_LENGTH:
        raise ConfigurationError(
            source,
            f"rule removes {trim} characters; headwords may have only {MIN_HEADWORD_LENGTH}",
            line,
        )


class RuleTable:
    """
    Immutable mapping from (pos, conj, neg, fml, onum) to ConjugationRule.
    """

    def __init__(self, rules: Iterable[ConjugationRule], source: str = "<rules>"):
        table: Dict[RuleKey, ConjugationRule] = {}
        for rule in rules:
            validate_rule(rule, source)
            if rule.key in table:
                raise ConfigurationError(source, f"duplicate rule {tuple(rule.key)}")
            table[rule.key] = rule
        self._rules = MappingProxyType(table)
        self.source = source

    def get(self, pos: int, conj: int, neg: bool, fml: bool, onum: int) -> Optional[ConjugationRule]:
        return self._rules.get(RuleKey(pos, conj, neg, fml, onum))

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ConjugationRule]:
        return iter(self._rules.values())

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def pos_classes(self) -> FrozenSet[PosClass]:
        """Get the inflection classes that have at least one rule."""
        return frozenset(PosClass(key.pos) for key in self._rules)

    def rules_for(self, pos: int) -> List[ConjugationRule]:
        """Get all rules of a class, ordered by key."""
        return sorted((r for r in self._rules.values() if r.pos == pos), key=lambda r: r.key)

    def orphan_formal_keys(self) -> List[RuleKey]:
        """
        Find formal rules whose plain sibling is missing.

        The engine stops probing a negation's faces at the first missing
        rule, so these rules are never reached.
        """
        return sorted(
            key for key in self._rules
            if key.fml and key._replace(fml=False) not in self._rules
        )


def _parse_int(value: str, column: str, source: str, line: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(source, f"bad {column} {value!r}", line) from None


def _parse_bool(value: str, column: str, source: str, line: int) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(source, f"bad {column} flag {value!r}", line)


def parse_rule_row(row: List[str], source: str = "<rules>", line: int = 0) -> ConjugationRule:
    """Parse one conjo.csv data row into a validated ConjugationRule."""
    if len(row) != CONJO_COLUMNS:
        raise ConfigurationError(source, f"expected {CONJO_COLUMNS} columns, got {len(row)}", line)

    rule = ConjugationRule(
        pos=_parse_int(row[0], "pos", source, line),
        conj=_parse_int(row[1], "conj", source, line),
        neg=_parse_bool(row[2], "neg", source, line),
        fml=_parse_bool(row[3], "fml", source, line),
        onum=_parse_int(row[4], "onum", source, line),
        stem=_parse_int(row[5], "stem", source, line),
        okuri=row[6],
        euphr=row[7],
        euphk=row[8],
    )
    validate_rule(rule, source, line)
    return rule


def load_conj_rules(csv_path: Optional[Path] = None) -> RuleTable:
    """
    Load conjugation rules from conjo.csv.

    Raises:
        ConfigurationError: On the first malformed or duplicate row; a
            table is never built from partial data.
    """
    if csv_path is None:
        csv_path = CONJO_CSV_PATH

    source = str(csv_path)
    rules: List[ConjugationRule] = []
    seen: Dict[RuleKey, int] = {}

    with open(csv_path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f, delimiter='\t')
        next(reader, None)  # Skip header

        for line, row in enumerate(reader, start=2):
            if not row:
                continue
            rule = parse_rule_row(row, source, line)
            if rule.key in seen:
                raise ConfigurationError(
                    source, f"duplicate rule {tuple(rule.key)} (first on line {seen[rule.key]})", line
                )
            seen[rule.key] = line
            rules.append(rule)

    table = RuleTable(rules, source)
    for key in table.orphan_formal_keys():
        logger.warning(f"Formal rule without plain counterpart is unreachable: {tuple(key)}")

    logger.info(f"Loaded {len(table)} conjugation rules from {source}")
    return table
