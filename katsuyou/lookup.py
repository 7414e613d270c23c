"""
Reverse lookup of conjugated forms.

Given an inflected surface form, finds the headwords and rule
coordinates (conjugation type, ordinal, negation, formality) that
produce it.
"""

from dataclasses import dataclass
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from katsuyou.constants import FACE_NAMES, get_conj_description
from katsuyou.db.models import ConjugatedForm


@dataclass
class FormMatch:
    """A stored form and where it comes from."""
    text: str
    seq: int
    source_text: str
    pos: str
    conj_type: int
    ordinal: int
    neg: bool
    fml: bool

    @property
    def face(self) -> str:
        return FACE_NAMES[self.neg, self.fml]

    def describe(self) -> str:
        """One-line description, e.g. '食べなかった <- 食べる [v1] Past (~ta), plain_negative'."""
        desc = get_conj_description(self.conj_type)
        if self.ordinal > 1:
            desc += f" ({self.ordinal})"
        return f"{self.text} <- {self.source_text} [{self.pos}] {desc}, {self.face}"


def _to_match(row: ConjugatedForm) -> FormMatch:
    return FormMatch(
        text=row.text,
        seq=row.seq,
        source_text=row.source_text,
        pos=row.pos,
        conj_type=row.conj_type,
        ordinal=row.ordinal,
        neg=row.neg,
        fml=row.fml,
    )


def find_conjugated_forms(session: Session, text: str) -> List[FormMatch]:
    """Find every stored form equal to text."""
    stmt = (
        select(ConjugatedForm)
        .where(ConjugatedForm.text == text)
        .order_by(ConjugatedForm.seq, ConjugatedForm.conj_type, ConjugatedForm.ordinal,
                  ConjugatedForm.neg, ConjugatedForm.fml)
    )
    return [_to_match(row) for row in session.scalars(stmt)]


def get_entry_forms(session: Session, seq: int) -> List[FormMatch]:
    """Get every stored form of an entry, in paradigm order."""
    stmt = (
        select(ConjugatedForm)
        .where(ConjugatedForm.seq == seq)
        .order_by(ConjugatedForm.source_text, ConjugatedForm.conj_type, ConjugatedForm.ordinal,
                  ConjugatedForm.neg, ConjugatedForm.fml)
    )
    return [_to_match(row) for row in session.scalars(stmt)]
