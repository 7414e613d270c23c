"""
Dictionary loading module for Katsuyou.

Streams JMdict entries from the XML file (plain or gzipped), conjugates
every kanji and kana writing under the part-of-speech tags of the first
sense, and stores the generated forms in the database.
"""

import gzip
import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterator, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from katsuyou.conjugations import Conjugations, Conjugator
from katsuyou.constants import FACE_NAMES
from katsuyou.db.models import ConjugatedForm, Entry, Headword
from katsuyou.settings import JMDICT_PATH

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Optional[int]], None]


@dataclass
class DictEntry:
    """Headwords and part-of-speech tags of one JMdict entry."""
    seq: int
    kanji: List[str] = field(default_factory=list)
    readings: List[str] = field(default_factory=list)
    pos: List[str] = field(default_factory=list)

    def headwords(self) -> List[str]:
        """Kanji writings first, then kana readings."""
        return self.kanji + self.readings


def is_gzip_file(path: Union[str, Path]) -> bool:
    """Check the gzip magic bytes of a file."""
    with open(path, 'rb') as f:
        return f.read(2) == b'\x1f\x8b'


def open_dictionary(path: Union[str, Path]) -> BinaryIO:
    """Open a dictionary file for reading, decompressing gzip by extension or magic bytes."""
    path = str(path)
    if path.endswith('.gz') or is_gzip_file(path):
        return gzip.open(path, 'rb')
    return open(path, 'rb')


def _parse_entry(entry_elem: ET.Element) -> DictEntry:
    seq = int(entry_elem.findtext('ent_seq', '0') or 0)
    kanji = [k.findtext('keb', '') for k in entry_elem.findall('k_ele')]
    readings = [r.findtext('reb', '') for r in entry_elem.findall('r_ele')]

    pos: List[str] = []
    first_sense = entry_elem.find('sense')
    if first_sense is not None:
        pos = [(p.text or '').strip() for p in first_sense.findall('pos')]

    return DictEntry(
        seq=seq,
        kanji=[k for k in kanji if k],
        readings=[r for r in readings if r],
        pos=[p for p in pos if p],
    )


def iter_jmdict_entries(path: Union[str, Path]) -> Iterator[DictEntry]:
    """
    Iterate over the entries of a JMdict XML file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"JMdict not found at: {path}")

    with open_dictionary(path) as f:
        # Use iterparse for memory efficiency
        for _, elem in ET.iterparse(f, events=('end',)):
            if elem.tag == 'entry':
                yield _parse_entry(elem)
                # Clear element to save memory
                elem.clear()


def conjugate_entry(conjugator: Conjugator, entry: DictEntry) -> Dict[str, Tuple[str, Conjugations]]:
    """
    Conjugate every writing of an entry.

    Tags are tried in order; a writing keeps the paradigm of the first tag
    that applies to it.

    Returns:
        Mapping of headword -> (short part-of-speech tag, conjugations).
    """
    if conjugator.resolver is None:
        raise RuntimeError("Conjugator was built without a part-of-speech resolver")

    result: Dict[str, Tuple[str, Conjugations]] = {}
    for pos in entry.pos:
        tag = conjugator.resolver.normalize_tag(pos)
        for text in entry.headwords():
            if text in result:
                continue
            conjugations = conjugator.conjugate_tag(text, tag)
            if conjugations is not None:
                result[text] = (tag, conjugations)
    return result


def _form_rows(seq: int, source_text: str, pos: str, conjugations: Conjugations) -> List[ConjugatedForm]:
    rows = []
    for conj_type, variants in conjugations.items():
        for ordinal, variant in enumerate(variants, start=1):
            for (neg, fml), name in FACE_NAMES.items():
                text = getattr(variant, name)
                if not text:
                    continue
                rows.append(ConjugatedForm(
                    seq=seq,
                    source_text=source_text,
                    pos=pos,
                    conj_type=int(conj_type),
                    ordinal=ordinal,
                    neg=neg,
                    fml=fml,
                    text=text,
                ))
    return rows


def store_entry(session: Session, conjugator: Conjugator, entry: DictEntry) -> int:
    """
    Store one entry and its conjugated forms.

    Entries with no conjugatable writing are skipped.

    Returns:
        Number of forms stored.
    """
    conjugated = conjugate_entry(conjugator, entry)
    if not conjugated:
        return 0

    tags = [conjugator.resolver.normalize_tag(p) for p in entry.pos]
    db_entry = Entry(seq=entry.seq, pos=",".join(tags))
    for ord_num, text in enumerate(entry.kanji):
        db_entry.headwords.append(Headword(text=text, ord=ord_num, kanji_p=True))
    for ord_num, text in enumerate(entry.readings):
        db_entry.headwords.append(Headword(text=text, ord=ord_num, kanji_p=False))

    count = 0
    for text, (tag, conjugations) in conjugated.items():
        rows = _form_rows(entry.seq, text, tag, conjugations)
        db_entry.forms.extend(rows)
        count += len(rows)

    session.add(db_entry)
    return count


def load_jmdict(
    session: Session,
    conjugator: Conjugator,
    path: Union[str, Path, None] = None,
    batch_size: int = 1000,
    progress_callback: Optional[ProgressCallback] = None,
) -> int:
    """
    Load JMdict into the database with every conjugated form.

    Args:
        session: Database session.
        conjugator: Conjugator with a part-of-speech resolver.
        path: Path to JMdict XML file (gzipped or plain).
        batch_size: Entries per commit.
        progress_callback: Optional callback(current, total) for progress.

    Returns:
        Number of entries stored.
    """
    path = str(path or JMDICT_PATH)

    # Also check for .gz version
    if not os.path.exists(path) and os.path.exists(path + '.gz'):
        path = path + '.gz'

    logger.info(f"Loading JMdict from {path}")

    seen = 0
    stored = 0
    forms = 0
    for entry in iter_jmdict_entries(path):
        seen += 1
        count = store_entry(session, conjugator, entry)
        if count:
            stored += 1
            forms += count

        if seen % batch_size == 0:
            session.commit()
            if progress_callback:
                progress_callback(seen, None)

    session.commit()
    if progress_callback:
        progress_callback(seen, seen)

    logger.info(f"Stored {stored} of {seen} entries with {forms} conjugated forms")
    return stored
