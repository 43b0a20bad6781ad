"""
Settings and configuration for Shiritorius.

Every value can be overridden through an environment variable so the
ingestion tool can be pointed at a mirror or a different output location.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get("SHIRITORIUS_DATA_DIR", PACKAGE_DIR / "data"))

# Source dictionary archive (mecab-naist-jdic)
SOURCE_NAME = "mecab-naist-jdic-0.6.3b-20111013"
SOURCE_URL = os.environ.get(
    "SHIRITORIUS_SOURCE_URL",
    f"https://jaist.dl.osdn.jp/naist-jdic/53500/{SOURCE_NAME}.tar.gz",
)
SOURCE_CSV_NAME = "naist-jdic.csv"
SOURCE_COPYING_NAME = "COPYING"
SOURCE_ENCODING = "euc_jp"

# Column positions in this revision of the source format
SURFACE_FORM_FIELD = 0
PART_OF_SPEECH_FIELD = 4
READING_FIELD = 11

# Serialized catalogue and its licence notice
CATALOGUE_PATH = Path(
    os.environ.get("SHIRITORIUS_CATALOGUE_PATH", DATA_DIR / "yomiList.json")
)
ABOUT_PATH = DATA_DIR / "aboutDictionary.txt"

# Part of speech selected when the catalogue is first shown
DEFAULT_PART_OF_SPEECH = "名詞"

# Debug mode
DEBUG = os.environ.get("SHIRITORIUS_DEBUG", "").lower() in ("1", "true", "yes")
