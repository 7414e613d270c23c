"""
Pydantic models for Katsuyou results.

These give the conjugation paradigm a stable JSON shape for the CLI and
for any service that wants to expose it:

    from katsuyou.models import ConjugationResult

    result = ConjugationResult.from_conjugations("食べる", "v1", conjugations)
    print(result.model_dump_json(indent=2))
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from katsuyou.conjugations import Conjugations, Variant
from katsuyou.constants import CONJ_STEP_GLOSSES, get_conj_description


class VariantResult(BaseModel):
    """One ordinal variant with its four faces."""
    ordinal: int = Field(..., description="Position of the variant within its conjugation type (1-based)")
    plain: Optional[str] = Field(None, description="Plain affirmative form")
    formal: Optional[str] = Field(None, description="Formal (polite) affirmative form")
    plain_negative: Optional[str] = Field(None, description="Plain negative form")
    formal_negative: Optional[str] = Field(None, description="Formal (polite) negative form")

    @classmethod
    def from_variant(cls, ordinal: int, variant: Variant) -> "VariantResult":
        return cls(ordinal=ordinal, **variant.faces())


class ConjugationGroup(BaseModel):
    """All variants of one conjugation type."""
    conj_type: int = Field(..., description="Conjugation type ID (1-13)")
    name: str = Field(..., description="Conjugation type name (e.g., 'Past (~ta)')")
    gloss: str = Field("", description="Short English gloss")
    variants: List[VariantResult] = Field(default_factory=list)


class ConjugationResult(BaseModel):
    """
    Full conjugation paradigm of a headword.

    Conjugation types that do not apply to the word are left out.
    """
    word: str = Field(..., description="Headword in dictionary form")
    pos: str = Field(..., description="JMdict part-of-speech tag")
    conjugations: List[ConjugationGroup] = Field(default_factory=list)

    @classmethod
    def from_conjugations(cls, word: str, pos: str, conjugations: Conjugations) -> "ConjugationResult":
        groups = []
        for conj_type, variants in conjugations.items():
            if not variants:
                continue
            groups.append(ConjugationGroup(
                conj_type=int(conj_type),
                name=get_conj_description(conj_type),
                gloss=CONJ_STEP_GLOSSES.get(conj_type, ""),
                variants=[
                    VariantResult.from_variant(i, v) for i, v in enumerate(variants, start=1)
                ],
            ))
        return cls(word=word, pos=pos, conjugations=groups)

    def all_forms(self) -> List[str]:
        """Get every distinct form in the paradigm."""
        seen = {}
        for group in self.conjugations:
            for variant in group.variants:
                for value in (variant.plain, variant.formal,
                              variant.plain_negative, variant.formal_negative):
                    if value:
                        seen.setdefault(value, None)
        return list(seen)
