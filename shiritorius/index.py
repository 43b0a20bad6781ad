"""
Lookup structures derived from a catalogue.

All builders are pure functions of a word list. Buckets keep the order
of the input list, so an index built from a sorted catalogue is sorted
too. CatalogueIndex bundles a sorted snapshot with its indexes and the
accessors the browsing surface reads from.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set

from shiritorius.characters import GYO_ROWS
from shiritorius.catalogue import sort_by_reading
from shiritorius.models import Conditions, Word
from shiritorius.query import filter_words

PrefixIndex = Dict[str, List[Word]]
LengthIndex = Dict[int, List[Word]]


def _bucket_total(index: Dict) -> int:
    return sum(len(bucket) for bucket in index.values())


def prefix_index(words: Sequence[Word]) -> PrefixIndex:
    """Group words by the first character of their reading."""
    index: PrefixIndex = {}
    for word in words:
        index.setdefault(word.reading[0], []).append(word)
    assert _bucket_total(index) == len(words), "prefix index lost words"
    return index


def length_index(words: Sequence[Word]) -> LengthIndex:
    """Group words by reading length in characters."""
    index: LengthIndex = {}
    for word in words:
        index.setdefault(len(word.reading), []).append(word)
    assert _bucket_total(index) == len(words), "length index lost words"
    return index


def parts_of_speech(words: Iterable[Word]) -> Set[str]:
    """Collect every distinct part of speech used by any homonym."""
    return {h.part_of_speech for word in words for h in word.homonyms}


def lengths_for_words(words: Iterable[Word]) -> List[int]:
    return sorted({len(word.reading) for word in words})


class CatalogueIndex:
    """
    A read-only catalogue snapshot and its derived indexes.

    The words are sorted by reading on construction. Nothing here is
    mutated afterwards; build a new CatalogueIndex if the catalogue changes.
    """

    def __init__(self, words: Iterable[Word]):
        self.words: List[Word] = sort_by_reading(words)
        self._prefixes = prefix_index(self.words)
        self._lengths = length_index(self.words)
        self._parts_of_speech = parts_of_speech(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)

    def by_leading_character(self, char: str) -> List[Word]:
        return list(self._prefixes.get(char, ()))

    def by_length(self, length: int) -> List[Word]:
        return list(self._lengths.get(length, ()))

    def all_parts_of_speech(self) -> List[str]:
        return sorted(self._parts_of_speech)

    def leading_characters(self) -> List[str]:
        return sorted(self._prefixes)

    def lengths(self) -> List[int]:
        return sorted(self._lengths)

    # Phonetic row narrowing: row -> leading characters -> words

    def prefixes_for_row(self, row: str) -> List[str]:
        """Leading characters of a gyo row that have at least one word."""
        return [char for char in GYO_ROWS.get(row, '') if char in self._prefixes]

    def words_for_row(self, row: str) -> List[Word]:
        """Words whose reading starts with a character of the row, sorted."""
        prefixes = set(self.prefixes_for_row(row))
        return [word for word in self.words if word.reading[0] in prefixes]

    def filter(self, conditions: Conditions, words: Optional[Sequence[Word]] = None) -> List[Word]:
        """Apply conditions to the whole snapshot (or a subsequence of it)."""
        return filter_words(self.words if words is None else words, conditions)
