"""
SQLAlchemy ORM models for the Katsuyou database.

Tables:
    entry            - JMdict entry with the part-of-speech tags of its first sense
    headword         - kanji and kana writings of an entry
    conjugated_form  - every generated form, with the rule coordinates that produced it
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class Entry(Base):
    __tablename__ = "entry"

    seq = Column(Integer, primary_key=True)
    pos = Column(Text, nullable=False, default="")  # comma-separated tags

    headwords = relationship(
        "Headword", back_populates="entry", cascade="all, delete-orphan",
        order_by="Headword.ord",
    )
    forms = relationship("ConjugatedForm", back_populates="entry", cascade="all, delete-orphan")

    @property
    def pos_tags(self):
        return [tag for tag in (self.pos or "").split(",") if tag]

    def __repr__(self) -> str:
        return f"<Entry seq={self.seq} pos={self.pos!r}>"


class Headword(Base):
    __tablename__ = "headword"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seq = Column(Integer, ForeignKey("entry.seq"), nullable=False)
    text = Column(Text, nullable=False)
    ord = Column(Integer, nullable=False, default=0)
    kanji_p = Column(Boolean, nullable=False, default=False)

    entry = relationship("Entry", back_populates="headwords")

    __table_args__ = (Index("ix_headword_text", "text"),)

    def __repr__(self) -> str:
        return f"<Headword {self.text} seq={self.seq}>"


class ConjugatedForm(Base):
    __tablename__ = "conjugated_form"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seq = Column(Integer, ForeignKey("entry.seq"), nullable=False)
    source_text = Column(Text, nullable=False)  # headword the form was built from
    pos = Column(String(16), nullable=False)
    conj_type = Column(Integer, nullable=False)
    ordinal = Column(Integer, nullable=False)
    neg = Column(Boolean, nullable=False)
    fml = Column(Boolean, nullable=False)
    text = Column(Text, nullable=False)

    entry = relationship("Entry", back_populates="forms")

    __table_args__ = (
        Index("ix_conjugated_form_text", "text"),
        Index("ix_conjugated_form_seq", "seq"),
    )

    def __repr__(self) -> str:
        return f"<ConjugatedForm {self.text} <- {self.source_text} conj={self.conj_type}>"
