"""
Catalogue building, ordering and serialization.

A catalogue is the list of Words produced by one ingestion run, in the
order their readings were first seen. Ids are handed out from two
counters (one for words, one for homonyms) and only mean something
within that run.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter

from shiritorius.characters import is_katakana
from shiritorius.models import Homonym, Word
from shiritorius.records import Record, RecordStats
from shiritorius.settings import (
    PART_OF_SPEECH_FIELD, READING_FIELD, SURFACE_FORM_FIELD,
)

logger = logging.getLogger(__name__)

_WORD_LIST = TypeAdapter(List[Word])


@dataclass
class IngestStats(RecordStats):
    """Decoder counters plus what the builder did with each record."""
    rejected: int = 0
    duplicates: int = 0
    accepted: int = 0
    words: int = 0
    homonyms: int = 0


# ============================================================================
# Building
# ============================================================================

def build_catalogue(
    records: Iterable[Record],
    stats: Optional[IngestStats] = None,
) -> List[Word]:
    """
    Deduplicate records into Words.

    Records are consumed in order; the first record for a reading creates
    its Word, later ones append a Homonym unless the same
    (surface form, part of speech) pair is already there.

    Args:
        records: Parsed source records, typically from decode_records().
        stats: Optional counters to update in place.

    Returns:
        Words in first-discovery order.
    """
    if stats is None:
        stats = IngestStats()

    words: Dict[str, Word] = {}
    next_word_id = 0
    next_homonym_id = 0
    min_fields = max(READING_FIELD, SURFACE_FORM_FIELD, PART_OF_SPEECH_FIELD) + 1

    for record in records:
        if len(record) < min_fields:
            stats.invalid += 1
            logger.debug(f"Record too short ({len(record)} fields): {record!r}")
            continue

        reading = record[READING_FIELD]
        if not is_katakana(reading):
            stats.rejected += 1
            continue

        surface_form = record[SURFACE_FORM_FIELD]
        part_of_speech = record[PART_OF_SPEECH_FIELD]

        word = words.get(reading)
        if word is None:
            word = Word(id=next_word_id, reading=reading)
            words[reading] = word
            next_word_id += 1
        elif word.has_homonym(surface_form, part_of_speech):
            stats.duplicates += 1
            continue

        word.homonyms.append(Homonym(
            id=next_homonym_id,
            surface_form=surface_form,
            part_of_speech=part_of_speech,
        ))
        next_homonym_id += 1
        stats.accepted += 1

    catalogue = list(words.values())
    stats.words = len(catalogue)
    stats.homonyms = next_homonym_id

    assert [w.id for w in catalogue] == list(range(len(catalogue))), "word ids are not dense"

    logger.info(f"Number of skipped records: {stats.skipped}")
    logger.info(f"Number of invalid records: {stats.invalid}")
    logger.info(f"Number of records with readings other than katakana: {stats.rejected}")
    logger.info(f"Number of duplicate homonyms: {stats.duplicates}")
    logger.info(f"Number of accepted records: {stats.accepted}")
    logger.info(f"Number of yomi: {stats.words}")
    return catalogue


# ============================================================================
# Ordering
# ============================================================================

def reading_key(word: Word) -> str:
    return word.reading


def sort_by_reading(words: Iterable[Word]) -> List[Word]:
    """
    Return words sorted by reading.

    Plain string comparison is used (code point order, never the locale),
    so the order is the same on every machine.
    """
    return sorted(words, key=reading_key)


# ============================================================================
# Serialization
# ============================================================================

def dump_catalogue(words: Iterable[Word]) -> List[Dict[str, Any]]:
    """Convert words to JSON-ready dicts with camelCase keys."""
    return [word.model_dump(by_alias=True) for word in words]


def save_catalogue(words: Iterable[Word], path: Union[str, Path]) -> Path:
    """Write the catalogue as a compact JSON array."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Saving: {path}")
    data = dump_catalogue(words)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, separators=(',', ':'))
    logger.info(f"Saved: {path}")
    return path


def load_catalogue(path: Union[str, Path]) -> List[Word]:
    """
    Read a catalogue written by save_catalogue().

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the JSON is not a list of words.
    """
    with open(path, 'rb') as f:
        return _WORD_LIST.validate_json(f.read())
