"""
Consolidated constants for Katsuyou.

Conjugation type IDs, their human-readable names and the names of the
four faces (plain/formal x affirmative/negative) of a variant.
"""

from enum import IntEnum
from typing import Dict, Optional, Tuple


# ============================================================================
# Conjugation Type Constants
# ============================================================================

class ConjType(IntEnum):
    """Conjugation type IDs, as used by the conj column of conjo.csv."""
    NON_PAST = 1
    PAST = 2
    CONJUNCTIVE = 3  # te-form
    PROVISIONAL = 4  # eba-form
    POTENTIAL = 5
    PASSIVE = 6
    CAUSATIVE = 7
    CAUSATIVE_PASSIVE = 8
    VOLITIONAL = 9
    IMPERATIVE = 10
    CONDITIONAL = 11  # tara-form
    ALTERNATIVE = 12  # tari-form
    CONTINUATIVE = 13  # stem/masu-stem


# Canonical order of the paradigm
CONJ_TYPES: Tuple[ConjType, ...] = tuple(ConjType)

# Conjugation type names mapping
CONJ_TYPE_NAMES: Dict[int, str] = {
    ConjType.NON_PAST: "Non-past",
    ConjType.PAST: "Past (~ta)",
    ConjType.CONJUNCTIVE: "Conjunctive (~te)",
    ConjType.PROVISIONAL: "Provisional (~eba)",
    ConjType.POTENTIAL: "Potential",
    ConjType.PASSIVE: "Passive",
    ConjType.CAUSATIVE: "Causative",
    ConjType.CAUSATIVE_PASSIVE: "Causative-Passive",
    ConjType.VOLITIONAL: "Volitional",
    ConjType.IMPERATIVE: "Imperative",
    ConjType.CONDITIONAL: "Conditional (~tara)",
    ConjType.ALTERNATIVE: "Alternative (~tari)",
    ConjType.CONTINUATIVE: "Continuative (~i)",
}

# English glosses for each conjugation type
CONJ_STEP_GLOSSES: Dict[int, str] = {
    ConjType.NON_PAST: "does/is",
    ConjType.PAST: "did/was",
    ConjType.CONJUNCTIVE: "and/-ing",
    ConjType.PROVISIONAL: "if",
    ConjType.POTENTIAL: "can do",
    ConjType.PASSIVE: "is done (to)",
    ConjType.CAUSATIVE: "makes do",
    ConjType.CAUSATIVE_PASSIVE: "is made to do",
    ConjType.VOLITIONAL: "let's/will",
    ConjType.IMPERATIVE: "do!",
    ConjType.CONDITIONAL: "if/when",
    ConjType.ALTERNATIVE: "doing things like",
    ConjType.CONTINUATIVE: "and (stem)",
}


def get_conj_description(conj_type: int) -> str:
    """Get human-readable description for conjugation type."""
    return CONJ_TYPE_NAMES.get(conj_type, f'Type {conj_type}')


def conj_type_from_name(name: str) -> Optional[ConjType]:
    """
    Look up a conjugation type by name.

    Accepts the enum name in any case with '-' or '_' ("past",
    "causative-passive", "NON_PAST") or the numeric id ("2").
    """
    key = name.strip().upper().replace('-', '_')
    if key.isdigit():
        try:
            return ConjType(int(key))
        except ValueError:
            return None
    return ConjType.__members__.get(key)


# ============================================================================
# Variant Faces
# ============================================================================

# (neg, fml) -> Variant attribute name
FACE_NAMES: Dict[Tuple[bool, bool], str] = {
    (False, False): "plain",
    (False, True): "formal",
    (True, False): "plain_negative",
    (True, True): "formal_negative",
}

FACE_LABELS: Dict[str, str] = {
    "plain": "Plain",
    "formal": "Formal",
    "plain_negative": "Plain negative",
    "formal_negative": "Formal negative",
}
