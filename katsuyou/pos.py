"""
Part-of-speech resolution for Katsuyou.

Maps JMdict part-of-speech tags to the inflection classes that have
conjugation rules. Uses kwpos.csv from the bundled data:
    id <TAB> tag <TAB> description

Tags without rules (nouns, na-adjectives, bare suru-nouns) and unknown
tags resolve to PosClass.UNINFLECTABLE.
"""

import csv
import logging
from enum import IntEnum
from pathlib import Path
from typing import Dict, Optional, Tuple

from katsuyou.errors import ConfigurationError
from katsuyou.settings import KWPOS_CSV_PATH

logger = logging.getLogger(__name__)


class PosClass(IntEnum):
    """Inflection classes, numbered as in kwpos.csv."""
    UNINFLECTABLE = 0
    ADJ_I = 1
    ADJ_IX = 2
    V1 = 10
    V1_S = 11
    V5ARU = 20
    V5B = 21
    V5G = 22
    V5K = 23
    V5K_S = 24
    V5M = 25
    V5N = 26
    V5R = 27
    V5R_I = 28
    V5S = 29
    V5T = 30
    V5U = 31
    V5U_S = 32
    VK = 40
    VS_I = 41
    VS_S = 42


POS_CLASS_TAGS: Dict[PosClass, str] = {
    PosClass.ADJ_I: "adj-i",
    PosClass.ADJ_IX: "adj-ix",
    PosClass.V1: "v1",
    PosClass.V1_S: "v1-s",
    PosClass.V5ARU: "v5aru",
    PosClass.V5B: "v5b",
    PosClass.V5G: "v5g",
    PosClass.V5K: "v5k",
    PosClass.V5K_S: "v5k-s",
    PosClass.V5M: "v5m",
    PosClass.V5N: "v5n",
    PosClass.V5R: "v5r",
    PosClass.V5R_I: "v5r-i",
    PosClass.V5S: "v5s",
    PosClass.V5T: "v5t",
    PosClass.V5U: "v5u",
    PosClass.V5U_S: "v5u-s",
    PosClass.VK: "vk",
    PosClass.VS_I: "vs-i",
    PosClass.VS_S: "vs-s",
}

# Parts of speech that should not be conjugated
DO_NOT_CONJUGATE_POS = ["n", "adj-na", "vs"]


def load_pos_index(csv_path: Optional[Path] = None) -> Dict[str, Tuple[int, str]]:
    """
    Load part of speech index from kwpos.csv.
    Maps POS tag to (id, description).

    Raises:
        ConfigurationError: On a malformed row, a duplicate tag, or an id
            that names an inflection class under a different tag.
    """
    if csv_path is None:
        csv_path = KWPOS_CSV_PATH

    source = str(csv_path)
    index: Dict[str, Tuple[int, str]] = {}

    with open(csv_path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f, delimiter='\t')
        next(reader, None)  # Skip header

        for line, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) < 3:
                raise ConfigurationError(source, f"expected 3 columns, got {len(row)}", line)
            try:
                pos_id = int(row[0])
            except ValueError:
                raise ConfigurationError(source, f"bad id {row[0]!r}", line) from None
            tag, description = row[1], row[2]
            if tag in index:
                raise ConfigurationError(source, f"duplicate tag {tag!r}", line)
            expected = POS_CLASS_TAGS.get(_as_pos_class(pos_id))
            if expected is not None and expected != tag:
                raise ConfigurationError(
                    source, f"id {pos_id} is {expected!r}, not {tag!r}", line
                )
            index[tag] = (pos_id, description)

    logger.debug(f"Loaded {len(index)} part-of-speech tags from {source}")
    return index


def _as_pos_class(pos_id: int) -> PosClass:
    try:
        return PosClass(pos_id)
    except ValueError:
        return PosClass.UNINFLECTABLE


class PosResolver:
    """
    Resolves part-of-speech tags to inflection classes.

    Accepts either the short tag ("v5k") or the JMdict entity text
    ("Godan verb with 'ku' ending"), since XML parsers expand JMdict
    entities to their description.
    """

    def __init__(self, pos_index: Dict[str, Tuple[int, str]]):
        classes: Dict[str, PosClass] = {}
        tags: Dict[str, str] = {}
        for tag, (pos_id, description) in pos_index.items():
            pos_class = PosClass.UNINFLECTABLE
            if tag not in DO_NOT_CONJUGATE_POS:
                pos_class = _as_pos_class(pos_id)
            classes[tag] = pos_class
            tags.setdefault(description, tag)
            classes.setdefault(description, pos_class)
        self._classes = classes
        self._tags = tags

    @classmethod
    def from_csv(cls, csv_path: Optional[Path] = None) -> "PosResolver":
        return cls(load_pos_index(csv_path))

    def resolve(self, tag: str) -> PosClass:
        """Get the inflection class for a tag; never fails."""
        if not tag:
            return PosClass.UNINFLECTABLE
        return self._classes.get(tag.strip(), PosClass.UNINFLECTABLE)

    def is_inflectable(self, tag: str) -> bool:
        return self.resolve(tag) != PosClass.UNINFLECTABLE

    def normalize_tag(self, tag: str) -> str:
        """Get the short tag for a JMdict entity description; other text is returned stripped."""
        tag = tag.strip()
        return self._tags.get(tag, tag)


def pos_tag(pos_class: PosClass) -> Optional[str]:
    """Get the JMdict tag of an inflection class."""
    return POS_CLASS_TAGS.get(pos_class)
