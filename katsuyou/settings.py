"""
Settings and configuration for Katsuyou.

Paths to the bundled rule data and the optional dictionary database.
Every path can be overridden through the environment.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get("KATSUYOU_DATA_DIR", PACKAGE_DIR / "data"))

# Conjugation rule data (bundled with package)
CONJO_CSV_PATH = DATA_DIR / "conjo.csv"
KWPOS_CSV_PATH = DATA_DIR / "kwpos.csv"

# Database path - defaults to data/katsuyou.db
DEFAULT_DB_PATH = DATA_DIR / "katsuyou.db"

# Environment variable for custom database path
DB_PATH = Path(os.environ.get("KATSUYOU_DB_PATH", DEFAULT_DB_PATH))

# External dictionary path (user must download it)
JMDICT_PATH = Path(os.environ.get("JMDICT_PATH", DATA_DIR / "JMdict_e.gz"))
JMDICT_URL = "http://ftp.edrdg.org/pub/Nihongo/JMdict_e.gz"

# Debug mode
DEBUG = os.environ.get("KATSUYOU_DEBUG", "").lower() in ("1", "true", "yes")

# Shortest headword the engine will conjugate
MIN_HEADWORD_LENGTH = 2

# Ordinal variants per conjugation type are numbered 1..MAX_ORDINAL
MAX_ORDINAL = 9
