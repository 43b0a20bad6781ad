"""
Pydantic models for the Shiritorius catalogue.

The JSON form of a catalogue uses camelCase keys:

    [
        {"id": 0, "reading": "ネコ",
         "homonyms": [{"id": 0, "surfaceForm": "猫", "partOfSpeech": "名詞"}]}
    ]

Python code builds and reads the models with snake_case names; the
aliases are only used on the wire.

Usage:
    from shiritorius.models import Word, Homonym, Conditions, LengthComparator

    conditions = Conditions(begin_with=("ネ",), parts_of_speech={"名詞"})
"""

from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shiritorius.characters import is_katakana


class Homonym(BaseModel):
    """One surface form sharing a reading with others."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Run-scoped homonym id")
    surface_form: str = Field(..., description="Headword as written, e.g. 猫")
    part_of_speech: str = Field(..., description="Part of speech label, e.g. 名詞")

    def key(self) -> Tuple[str, str]:
        return (self.surface_form, self.part_of_speech)


class Word(BaseModel):
    """
    A katakana reading and every homonym found for it.

    Words are only grown while a catalogue is being built; once the
    catalogue is complete they are treated as read-only.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Run-scoped word id, dense from 0")
    reading: str = Field(..., description="Katakana reading")
    homonyms: List[Homonym] = Field(default_factory=list)

    def has_homonym(self, surface_form: str, part_of_speech: str) -> bool:
        return any(h.key() == (surface_form, part_of_speech) for h in self.homonyms)

    @field_validator("reading")
    @classmethod
    def _reading_is_katakana(cls, value: str) -> str:
        if not is_katakana(value):
            raise ValueError(f"reading must be non-empty katakana: {value!r}")
        return value


class LengthComparator(str, Enum):
    """How a reading's length is compared to the requested length."""
    AT_MOST = "at-most"
    EXACTLY = "exactly"
    AT_LEAST = "at-least"

    @property
    def label(self) -> str:
        """Japanese suffix shown after the number (e.g. 3文字以内)."""
        return _COMPARATOR_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "LengthComparator":
        """Accept either the wire value or the Japanese label."""
        for comparator, text in _COMPARATOR_LABELS.items():
            if label == text:
                return comparator
        return cls(label)


_COMPARATOR_LABELS = {
    LengthComparator.AT_MOST: "文字以内",
    LengthComparator.EXACTLY: "文字",
    LengthComparator.AT_LEAST: "文字以上",
}


class Conditions(BaseModel):
    """
    A set of predicates to select readings with.

    Fragment lists are OR-ed within one kind, the kinds are AND-ed.
    An empty fragment list or an unset length always passes, but an
    empty ``parts_of_speech`` selection matches nothing.
    """
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    begin_with: Tuple[str, ...] = ()
    not_begin_with: Tuple[str, ...] = ()
    end_with: Tuple[str, ...] = ()
    not_end_with: Tuple[str, ...] = ()
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    length: Optional[int] = None
    length_comparator: LengthComparator = LengthComparator.EXACTLY
    parts_of_speech: FrozenSet[str] = frozenset()

    def replace(self, **changes) -> "Conditions":
        """Return a copy with some fields changed."""
        return type(self).model_validate({**self.model_dump(), **changes})
