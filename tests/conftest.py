"""
Shared fixtures for katsuyou tests.
"""

import gzip
from pathlib import Path
from typing import Iterable, List

import pytest

from katsuyou.conjugations import Conjugator
from katsuyou.db.connection import get_session
from katsuyou.pos import PosResolver
from katsuyou.rules import load_conj_rules


CONJO_HEADER = "pos\tconj\tneg\tfml\tonum\tstem\tokuri\teuphr\teuphk"

# Small JMdict excerpt; entities are declared in the internal DTD like the real file
SAMPLE_JMDICT = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE JMdict [
<!ENTITY adj-i "adjective (keiyoushi)">
<!ENTITY n "noun (common) (futsuumeishi)">
<!ENTITY v1 "Ichidan verb">
<!ENTITY v5k "Godan verb with 'ku' ending">
<!ENTITY vt "transitive verb">
]>
<JMdict>
<entry>
<ent_seq>1000001</ent_seq>
<k_ele><keb>書く</keb></k_ele>
<r_ele><reb>かく</reb></r_ele>
<sense><pos>&v5k;</pos><pos>&vt;</pos><gloss>to write</gloss></sense>
</entry>
<entry>
<ent_seq>1000002</ent_seq>
<k_ele><keb>学校</keb></k_ele>
<r_ele><reb>がっこう</reb></r_ele>
<sense><pos>&n;</pos><gloss>school</gloss></sense>
</entry>
<entry>
<ent_seq>1000003</ent_seq>
<k_ele><keb>食べる</keb></k_ele>
<r_ele><reb>たべる</reb></r_ele>
<sense><pos>&v1;</pos><pos>&vt;</pos><gloss>to eat</gloss></sense>
<sense><gloss>to live on (e.g. a salary)</gloss></sense>
</entry>
<entry>
<ent_seq>1000004</ent_seq>
<k_ele><keb>美味しい</keb></k_ele>
<r_ele><reb>おいしい</reb></r_ele>
<sense><pos>&adj-i;</pos><gloss>delicious</gloss></sense>
</entry>
</JMdict>
"""


@pytest.fixture(scope="session")
def rule_table():
    """The bundled conjugation rule table."""
    return load_conj_rules()


@pytest.fixture(scope="session")
def resolver():
    """Resolver over the bundled kwpos.csv."""
    return PosResolver.from_csv()


@pytest.fixture(scope="session")
def conjugator(rule_table, resolver):
    return Conjugator(rule_table, resolver)


@pytest.fixture
def db_session():
    """Session on a fresh in-memory database."""
    session = get_session(":memory:")
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def write_conjo(tmp_path):
    """Write conjo.csv data rows (lists of columns) to a temp file and return its path."""
    def _write(rows: Iterable[List[str]], name: str = "conjo.csv") -> Path:
        path = tmp_path / name
        lines = [CONJO_HEADER] + ["\t".join(row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def jmdict_path(tmp_path) -> Path:
    path = tmp_path / "JMdict_e.xml"
    path.write_text(SAMPLE_JMDICT, encoding="utf-8")
    return path


@pytest.fixture
def jmdict_gz_path(tmp_path) -> Path:
    path = tmp_path / "JMdict_e.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(SAMPLE_JMDICT)
    return path


@pytest.fixture
def broken_jmdict_path(tmp_path) -> Path:
    """JMdict cut off in the middle of an entry."""
    path = tmp_path / "broken.xml"
    path.write_text(SAMPLE_JMDICT[:600], encoding="utf-8")
    return path


@pytest.fixture
def truncated_jmdict_gz_path(tmp_path) -> Path:
    """Gzipped JMdict missing its end-of-stream marker."""
    path = tmp_path / "truncated.gz"
    path.write_bytes(gzip.compress(SAMPLE_JMDICT.encode("utf-8"))[:200])
    return path
