"""
Japanese verb and adjective conjugation for Katsuyou.

Builds the full paradigm of a headword from the rule table: every
conjugation type, every ordinal variant 1..9 and, within a variant, the
four faces (plain, formal, plain negative, formal negative).

Conjugation Types:
    1  - Non-past (dictionary form / present-future)
    2  - Past (~た form)
    3  - Conjunctive (~て form)
    4  - Provisional (~ば form)
    5  - Potential
    6  - Passive
    7  - Causative
    8  - Causative-Passive
    9  - Volitional (~う/~よう form)
    10 - Imperative
    11 - Conditional (~たら form)
    12 - Alternative (~たり form)
    13 - Continuative (stem form)
"""

import threading
from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional, Tuple

from katsuyou.characters import stem_is_kana
from katsuyou.constants import CONJ_TYPES, FACE_NAMES, ConjType
from katsuyou.pos import PosClass, PosResolver
from katsuyou.rules import ConjugationRule, RuleTable, load_conj_rules
from katsuyou.settings import MAX_ORDINAL, MIN_HEADWORD_LENGTH


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class Variant:
    """One ordinal variant of a conjugation type."""
    plain: Optional[str] = None
    formal: Optional[str] = None
    plain_negative: Optional[str] = None
    formal_negative: Optional[str] = None

    def faces(self) -> Dict[str, str]:
        """Get the populated faces, keyed by face name."""
        return {
            name: value for name in FACE_NAMES.values()
            if (value := getattr(self, name))
        }

    def is_empty(self) -> bool:
        return not self.faces()


@dataclass
class Conjugations:
    """
    Conjugations of a word, one list of variants per conjugation type.

    Lists are ordered by ascending ordinal. An empty list means the
    conjugation type does not apply to the word's class.
    """
    non_past: List[Variant] = field(default_factory=list)
    past: List[Variant] = field(default_factory=list)
    conjunctive: List[Variant] = field(default_factory=list)
    provisional: List[Variant] = field(default_factory=list)
    potential: List[Variant] = field(default_factory=list)
    passive: List[Variant] = field(default_factory=list)
    causative: List[Variant] = field(default_factory=list)
    causative_passive: List[Variant] = field(default_factory=list)
    volitional: List[Variant] = field(default_factory=list)
    imperative: List[Variant] = field(default_factory=list)
    conditional: List[Variant] = field(default_factory=list)
    alternative: List[Variant] = field(default_factory=list)
    continuative: List[Variant] = field(default_factory=list)

    def for_type(self, conj_type: ConjType) -> List[Variant]:
        return getattr(self, ConjType(conj_type).name.lower())

    def items(self) -> Iterator[Tuple[ConjType, List[Variant]]]:
        """Iterate (type, variants) in canonical order."""
        for conj_type in CONJ_TYPES:
            yield conj_type, self.for_type(conj_type)

    def forms(self) -> List[str]:
        """Get every distinct surface form, in paradigm order."""
        seen = {}
        for _, variants in self.items():
            for variant in variants:
                for value in variant.faces().values():
                    seen.setdefault(value, None)
        return list(seen)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {f.name: [v.faces() for v in getattr(self, f.name)] for f in fields(self)}


# ============================================================================
# Stem Transformer
# ============================================================================

def construct_conjugation(word: str, rule: ConjugationRule) -> str:
    """
    Apply a conjugation rule to a word to produce the conjugated form.

    The character before the last one decides which euphonic override
    applies: a hiragana there means the stem ends in kana, anything else
    means it ends in kanji. A non-empty override replaces one more
    character of the headword.

    Args:
        word: Headword of at least two characters.
        rule: Conjugation rule to apply.

    Returns:
        Conjugated form of the word.
    """
    iskana = stem_is_kana(word)
    stem = rule.effective_stem(iskana)
    return word[:len(word) - stem] + rule.euphonic(iskana) + rule.okuri


# ============================================================================
# Conjugation Engine
# ============================================================================

class Conjugator:
    """
    Conjugation engine over an immutable rule table.

    Holds no per-call state; one instance can serve any number of
    threads.
    """

    def __init__(self, rules: RuleTable, resolver: Optional[PosResolver] = None):
        self.rules = rules
        self.resolver = resolver

    def conjugate(self, word: str, pos: PosClass) -> Optional[Conjugations]:
        """
        Conjugate a word given its inflection class.

        Returns:
            The full paradigm, or None when the word is shorter than two
            characters or the class is not inflectable.
        """
        if len(word) < MIN_HEADWORD_LENGTH or pos == PosClass.UNINFLECTABLE:
            return None

        result = Conjugations()
        for conj_type in CONJ_TYPES:
            result.for_type(conj_type).extend(self._conjugate_type(word, pos, conj_type))
        return result

    def conjugate_tag(self, word: str, tag: str) -> Optional[Conjugations]:
        """Conjugate a word given its JMdict part-of-speech tag."""
        if self.resolver is None:
            raise RuntimeError("Conjugator was built without a part-of-speech resolver")
        return self.conjugate(word, self.resolver.resolve(tag))

    def _conjugate_type(self, word: str, pos: PosClass, conj_type: ConjType) -> List[Variant]:
        variants = []
        for onum in range(1, MAX_ORDINAL + 1):
            faces = {}
            for neg in (False, True):
                for fml in (False, True):
                    rule = self.rules.get(pos, conj_type, neg, fml, onum)
                    if rule is None:
                        break
                    faces[FACE_NAMES[neg, fml]] = construct_conjugation(word, rule)
            if any(faces.values()):
                variants.append(Variant(**faces))
        return variants


# ============================================================================
# Default Conjugator
# ============================================================================

_default_conjugator: Optional[Conjugator] = None
_default_lock = threading.Lock()


def get_default_conjugator() -> Conjugator:
    """
    Get the conjugator built from the bundled data.

    The rule table is loaded on first use; later calls share it.
    """
    global _default_conjugator
    if _default_conjugator is None:
        with _default_lock:
            if _default_conjugator is None:
                _default_conjugator = Conjugator(load_conj_rules(), PosResolver.from_csv())
    return _default_conjugator


def conjugate(word: str, pos: str) -> Optional[Conjugations]:
    """
    Conjugate a word given its JMdict part-of-speech tag.

    Example:
        >>> conjugate("遊ぶ", "v5b").non_past[0].plain_negative
        '遊ばない'
    """
    return get_default_conjugator().conjugate_tag(word, pos)
