"""
Text output for Katsuyou.

Renders a conjugation paradigm as aligned plain text and provides the
short English labels for JMdict part-of-speech tags.
"""

from typing import Dict, List, Optional

from katsuyou.conjugations import Conjugations
from katsuyou.constants import FACE_LABELS, ConjType, get_conj_description


# Short labels for part-of-speech tags, for headings
POS_GLOSSES: Dict[str, str] = {
    "adj-i": "adj.",
    "adj-ix": "adj. (良い・いい)",
    "adj-na": "adj-n. or quasi-adjective",
    "adj-no": "may take possessive の",
    "adj-pn": "adj-pre-n.",
    "adv": "adv.",
    "adv-to": "adv. taking the と particle",
    "aux-v": "aux. v.",
    "conj": "conj.",
    "ctr": "counter",
    "exp": "expression",
    "int": "interjection",
    "n": "n.",
    "n-adv": "n. (adverbial)",
    "n-t": "n. (temporal)",
    "pn": "pronoun",
    "prt": "particle",
    # Verbs:
    "vk": "v. くる (special)",
    "vs-s": "v. する (special)",
    "vs-i": "v. する (irr.)",
    "vs": "takes する",
    "vi": "intransitive",
    "vt": "transitive",
    # Ichidan: 一段
    "v1": "v1.",
    "v1-s": "v1. くれる (special)",
    "vz": "v1. ずる (alternative form of -jiru verbs)",
    # Godan: 五段
    "v5aru": "v5. (special)",
    "v5b": "v5.",
    "v5g": "v5.",
    "v5k": "v5.",
    "v5k-s": "v5. Iku/Yuku (special)",
    "v5m": "v5.",
    "v5n": "v5.",
    "v5r": "v5.",
    "v5r-i": "v5. (irr.)",
    "v5s": "v5.",
    "v5t": "v5.",
    "v5u": "v5.",
    "v5u-s": "v5. (special)",
}


def pos_gloss(tag: str) -> str:
    """Get the label for a part-of-speech tag, or the tag itself."""
    return POS_GLOSSES.get(tag, tag)


def format_conjugations(
    word: str,
    pos: str,
    conjugations: Conjugations,
    only: Optional[ConjType] = None,
) -> str:
    """
    Format a conjugation paradigm as text.

    Example output:
        食べる [v1.]

        Non-past
          Plain            食べる
          Formal           食べます
          ...
    """
    lines: List[str] = [f"{word} [{pos_gloss(pos)}]"]
    width = max(len(label) for label in FACE_LABELS.values()) + 2

    for conj_type, variants in conjugations.items():
        if only is not None and conj_type != only:
            continue
        if not variants:
            continue
        lines.append('')
        lines.append(get_conj_description(conj_type))
        for ordinal, variant in enumerate(variants, start=1):
            if ordinal > 1:
                lines.append(f"  ({ordinal})")
            for name, value in variant.faces().items():
                lines.append(f"  {FACE_LABELS[name]:<{width}}{value}")

    return '\n'.join(lines)
