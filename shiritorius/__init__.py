"""
Shiritorius: find Japanese readings by how they begin, end, what they
contain, how long they are and which parts of speech they carry.
"""

from typing import Optional

from shiritorius.catalogue import build_catalogue, load_catalogue, save_catalogue, sort_by_reading
from shiritorius.index import CatalogueIndex
from shiritorius.models import Conditions, Homonym, LengthComparator, Word
from shiritorius.query import filter_words

__version__ = "0.1.0"


def load_index(path: Optional[str] = None) -> CatalogueIndex:
    """
    Load a serialized catalogue and index it.

    Args:
        path: Catalogue JSON path. Defaults to settings.CATALOGUE_PATH.

    Example:
        >>> import shiritorius
        >>> index = shiritorius.load_index()
        >>> conditions = shiritorius.Conditions(end_with=("リ",), parts_of_speech={"名詞"})
        >>> [w.reading for w in index.filter(conditions)][:3]
    """
    from shiritorius.settings import CATALOGUE_PATH

    return CatalogueIndex(load_catalogue(path or CATALOGUE_PATH))


__all__ = [
    "CatalogueIndex",
    "Conditions",
    "Homonym",
    "LengthComparator",
    "Word",
    "build_catalogue",
    "filter_words",
    "load_catalogue",
    "load_index",
    "save_catalogue",
    "sort_by_reading",
]
