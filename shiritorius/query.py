"""
Predicate engine: select the words matching a set of conditions.

Each kind of condition compiles to a plain predicate over a Word and the
predicates are AND-ed together. Fragments are compared as literal text
with startswith/endswith/in, so characters such as "(" or "|" in user
input have no special meaning.

Example:
    >>> from shiritorius.query import filter_words
    >>> from shiritorius.models import Conditions
    >>> conditions = Conditions(begin_with=("ネ",), exclude=("ズ",),
    ...                         parts_of_speech={"名詞"})
    >>> [w.reading for w in filter_words(words, conditions)]
    ['ネコ']
"""

from typing import Callable, Iterable, List, Sequence, Set

from shiritorius.characters import as_katakana, extract_katakana
from shiritorius.models import Conditions, LengthComparator, Word
from shiritorius.settings import DEFAULT_PART_OF_SPEECH

Predicate = Callable[[Word], bool]


def _always(word: Word) -> bool:
    return True


def _fragments(values: Iterable[str]) -> tuple:
    return tuple(value for value in values if value)


def begins_with(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: word.reading.startswith(fragments)


def does_not_begin_with(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: not word.reading.startswith(fragments)


def ends_with(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: word.reading.endswith(fragments)


def does_not_end_with(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: not word.reading.endswith(fragments)


def includes(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: any(fragment in word.reading for fragment in fragments)


def excludes(fragments: Iterable[str]) -> Predicate:
    fragments = _fragments(fragments)
    if not fragments:
        return _always
    return lambda word: not any(fragment in word.reading for fragment in fragments)


def has_length(length, comparator: LengthComparator) -> Predicate:
    """Length test; unset or non-positive lengths always pass."""
    if length is None or length < 1:
        return _always
    comparator = LengthComparator(comparator)
    if comparator is LengthComparator.AT_MOST:
        return lambda word: len(word.reading) <= length
    if comparator is LengthComparator.AT_LEAST:
        return lambda word: len(word.reading) >= length
    return lambda word: len(word.reading) == length


def includes_parts_of_speech(selected: Iterable[str]) -> Predicate:
    """
    Pass when any homonym has a selected part of speech.

    An empty selection passes nothing: the user has to pick at least one
    category before any reading is shown.
    """
    selected = frozenset(selected)
    return lambda word: any(h.part_of_speech in selected for h in word.homonyms)


def compile_conditions(conditions: Conditions) -> Predicate:
    """Combine every condition into a single pass/fail test."""
    predicates = [
        includes_parts_of_speech(conditions.parts_of_speech),
        begins_with(conditions.begin_with),
        does_not_begin_with(conditions.not_begin_with),
        ends_with(conditions.end_with),
        does_not_end_with(conditions.not_end_with),
        includes(conditions.include),
        excludes(conditions.exclude),
        has_length(conditions.length, conditions.length_comparator),
    ]
    active = [p for p in predicates if p is not _always]

    def test(word: Word) -> bool:
        return all(predicate(word) for predicate in active)

    return test


def filter_words(words: Sequence[Word], conditions: Conditions) -> List[Word]:
    """
    Return the words satisfying every condition, in input order.

    Pure function: words and conditions are never modified.
    """
    test = compile_conditions(conditions)
    return [word for word in words if test(word)]


# Alias for the query interface name
filter = filter_words


# ============================================================================
# Condition helpers
# ============================================================================

def parse_fragments(text: str) -> List[str]:
    """
    Turn free text input into katakana fragments.

    Hiragana is converted to katakana first; anything that is not
    katakana separates fragments.
    """
    return extract_katakana(as_katakana(text))


def default_parts_of_speech(labels: Iterable[str]) -> Set[str]:
    """
    Initial part of speech selection.

    Nouns alone when the catalogue has any, otherwise everything.
    """
    labels = set(labels)
    if DEFAULT_PART_OF_SPEECH in labels:
        return {DEFAULT_PART_OF_SPEECH}
    return labels


def default_conditions(all_parts_of_speech: Iterable[str]) -> Conditions:
    """Condition set the browsing surface starts with."""
    return Conditions(
        not_end_with=("ン",),
        length_comparator=LengthComparator.EXACTLY,
        parts_of_speech=frozenset(default_parts_of_speech(all_parts_of_speech)),
    )


def describe_conditions(conditions: Conditions) -> List[str]:
    """Human readable summary, one line per active condition."""
    lines = []
    phrases = [
        (conditions.begin_with, "から始まる"),
        (conditions.not_begin_with, "から始まらない"),
        (conditions.end_with, "で終わる"),
        (conditions.not_end_with, "で終わらない"),
        (conditions.include, "を含む"),
        (conditions.exclude, "を含まない"),
    ]
    for fragments, phrase in phrases:
        if fragments:
            lines.append(f"{'、'.join(fragments)}{phrase}")

    if conditions.length is not None and conditions.length >= 1:
        lines.append(f"{conditions.length}{conditions.length_comparator.label}の")

    if not conditions.parts_of_speech:
        lines.append("品詞が選択されていません")
    else:
        lines.append('、'.join(sorted(conditions.parts_of_speech)))
    return lines
