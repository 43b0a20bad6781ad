"""
Tests for query.py - the predicate engine.
"""

import pytest

from conftest import make_word
from shiritorius.models import Conditions, LengthComparator
from shiritorius.query import (
    compile_conditions,
    default_conditions,
    default_parts_of_speech,
    describe_conditions,
    filter_words,
    has_length,
    parse_fragments,
)

NOUNS = frozenset({"名詞"})
ALL_POS = frozenset({"名詞", "動詞", "形容詞", "副詞"})


def _select(words, **kwargs):
    kwargs.setdefault("parts_of_speech", ALL_POS)
    return [w.reading for w in filter_words(words, Conditions(**kwargs))]


class TestScenarios:
    """End to end filtering examples."""

    def test_begin_with_and_exclude(self, animals):
        assert _select(animals, begin_with=("ネ",), exclude=("ズ",)) == ["ネコ"]

    def test_exact_length_keeps_order(self, animals):
        result = _select(animals, length=2, length_comparator=LengthComparator.EXACTLY)
        assert result == ["ネコ", "イヌ"]

    def test_all_empty_returns_everything(self, mixed_words):
        assert _select(mixed_words) == [w.reading for w in mixed_words]

    def test_empty_parts_of_speech_matches_nothing(self, mixed_words):
        assert _select(mixed_words, parts_of_speech=frozenset()) == []
        assert _select(mixed_words, parts_of_speech=frozenset(), begin_with=("ハ",)) == []

    def test_idempotent(self, mixed_words):
        conditions = Conditions(end_with=("ラ", "シ"), parts_of_speech=NOUNS)
        first = filter_words(mixed_words, conditions)
        second = filter_words(mixed_words, conditions)
        assert first == second
        assert [w.reading for w in first] == ["ハシ", "ゴリラ"]


class TestFragments:
    """Per-kind fragment predicates."""

    def test_begin_with_any(self, mixed_words):
        assert _select(mixed_words, begin_with=("ハ", "ア")) == ["ハシ", "ハシル", "アカイ"]

    def test_not_begin_with(self, animals):
        assert _select(animals, not_begin_with=("ネ",)) == ["イヌ"]

    def test_end_with(self, mixed_words):
        assert _select(mixed_words, end_with=("パ", "キ")) == ["ラッパ", "ケーキ"]

    def test_not_end_with(self, mixed_words):
        result = _select(mixed_words, not_end_with=("ン", "イ", "シ"))
        assert result == ["ハシル", "リンゴ", "ゴリラ", "ラッパ", "スグ", "ケーキ"]

    def test_multi_character_anchor(self, mixed_words):
        assert _select(mixed_words, begin_with=("ハシル",)) == ["ハシル"]
        assert _select(mixed_words, not_begin_with=("ハシ",), end_with=("ル", "シ")) == []

    def test_include(self, mixed_words):
        assert _select(mixed_words, include=("リ",)) == ["リンゴ", "ゴリラ"]

    def test_exclude(self, animals):
        assert _select(animals, exclude=("コ", "ヌ")) == ["ネズミ"]

    def test_fragment_longer_than_reading(self, animals):
        assert _select(animals, end_with=("ネズミネズミ",)) == []

    def test_empty_string_fragment_ignored(self, animals):
        assert _select(animals, begin_with=("",)) == ["ネコ", "ネズミ", "イヌ"]
        assert _select(animals, exclude=("",)) == ["ネコ", "ネズミ", "イヌ"]


class TestLiteralFragments:
    """Pattern metacharacters in fragments are plain text."""

    @pytest.mark.parametrize("fragment", ["(", "|", "ネ|イ", ".*", "[", "\\", "^", "$", "コ)"])
    def test_no_errors_and_no_matches(self, animals, fragment):
        assert _select(animals, begin_with=(fragment,)) == []
        assert _select(animals, include=(fragment,)) == []
        assert _select(animals, exclude=(fragment,)) == ["ネコ", "ネズミ", "イヌ"]
        assert _select(animals, not_end_with=(fragment,)) == ["ネコ", "ネズミ", "イヌ"]



class TestLength:
    """Length comparator semantics."""

    @pytest.mark.parametrize("comparator, expected", [
        (LengthComparator.AT_MOST, ["ハシ", "パン", "スグ"]),
        (LengthComparator.EXACTLY, ["ハシ", "パン", "スグ"]),
        (LengthComparator.AT_LEAST, ["ハシ", "ハシル", "アカイ", "リンゴ", "ゴリラ", "ラッパ", "パン", "スグ", "ケーキ"]),
    ])
    def test_two(self, mixed_words, comparator, expected):
        assert _select(mixed_words, length=2, length_comparator=comparator) == expected

    def test_at_most_three(self, mixed_words):
        assert len(_select(mixed_words, length=3, length_comparator="at-most")) == 9

    @pytest.mark.parametrize("length", [None, 0, -3])
    def test_unset_or_non_positive_passes(self, mixed_words, length):
        result = _select(mixed_words, length=length, length_comparator=LengthComparator.EXACTLY)
        assert result == [w.reading for w in mixed_words]

    def test_counts_code_points(self):
        assert has_length(4, LengthComparator.EXACTLY)(make_word(0, "ラーメン"))


class TestPartsOfSpeech:
    """Part of speech membership."""

    def test_any_homonym_matches(self):
        words = [make_word(0, "カケ", ("掛け", "名詞"), ("掛け", "動詞"))]
        assert _select(words, parts_of_speech=frozenset({"動詞"})) == ["カケ"]

    def test_only_selected(self, mixed_words):
        assert _select(mixed_words, parts_of_speech=frozenset({"副詞", "形容詞"})) == ["アカイ", "スグ"]

    def test_unknown_label(self, mixed_words):
        assert _select(mixed_words, parts_of_speech=frozenset({"助詞"})) == []


class TestCompileConditions:
    """compile_conditions produces a reusable test."""

    def test_predicate(self, animals):
        test = compile_conditions(Conditions(begin_with=("イ",), parts_of_speech=NOUNS))
        assert [test(w) for w in animals] == [False, False, True]

    def test_conditions_not_modified(self, animals):
        conditions = Conditions(include=("コ",), parts_of_speech=NOUNS)
        before = conditions.model_dump()
        filter_words(animals, conditions)
        assert conditions.model_dump() == before


class TestHelpers:
    """Fragment parsing, defaults and descriptions."""

    def test_parse_fragments(self):
        assert parse_fragments("ねこ、いぬ") == ["ネコ", "イヌ"]
        assert parse_fragments("(ネ|コ)") == ["ネ", "コ"]
        assert parse_fragments("") == []

    def test_default_parts_of_speech_prefers_nouns(self):
        assert default_parts_of_speech({"名詞", "動詞"}) == {"名詞"}

    def test_default_parts_of_speech_without_nouns(self):
        assert default_parts_of_speech(["動詞", "副詞"]) == {"動詞", "副詞"}

    def test_default_conditions(self, mixed_words):
        conditions = default_conditions(ALL_POS)
        assert conditions.not_end_with == ("ン",)
        assert conditions.parts_of_speech == NOUNS
        assert conditions.length is None
        assert _select(mixed_words, **{
            "not_end_with": conditions.not_end_with,
            "parts_of_speech": conditions.parts_of_speech,
        }) == ["ハシ", "リンゴ", "ゴリラ", "ラッパ", "ケーキ"]

    def test_describe(self):
        conditions = Conditions(
            begin_with=("ネ", "イ"),
            not_end_with=("ン",),
            length=3,
            length_comparator=LengthComparator.AT_MOST,
            parts_of_speech=NOUNS,
        )
        assert describe_conditions(conditions) == [
            "ネ、イから始まる",
            "ンで終わらない",
            "3文字以内の",
            "名詞",
        ]

    def test_describe_without_parts_of_speech(self):
        assert describe_conditions(Conditions()) == ["品詞が選択されていません"]
