"""
Shared fixtures for Shiritorius tests.
"""

import pytest

from shiritorius.models import Homonym, Word


def make_row(surface: str, pos: str, reading: str) -> str:
    """A naist-jdic style CSV line (13 fields, reading at index 11)."""
    return f"{surface},1285,1285,5000,{pos},一般,*,*,*,*,{surface},{reading},{reading}"


def encode_rows(rows, encoding: str = "euc_jp") -> bytes:
    """Join CSV lines and encode them the way the source file is."""
    return "".join(f"{row}\n" for row in rows).encode(encoding)


def make_word(word_id: int, reading: str, *homonyms) -> Word:
    """Build a Word from (surface_form, part_of_speech) pairs."""
    return Word(
        id=word_id,
        reading=reading,
        homonyms=[
            Homonym(id=word_id * 10 + i, surface_form=surface, part_of_speech=pos)
            for i, (surface, pos) in enumerate(homonyms)
        ],
    )


@pytest.fixture
def animals():
    """Small catalogue: ネコ, ネズミ, イヌ (all nouns), in discovery order."""
    return [
        make_word(0, "ネコ", ("猫", "名詞")),
        make_word(1, "ネズミ", ("鼠", "名詞")),
        make_word(2, "イヌ", ("犬", "名詞")),
    ]


@pytest.fixture
def mixed_words():
    """Catalogue with several parts of speech and lengths."""
    return [
        make_word(0, "ハシ", ("橋", "名詞"), ("箸", "名詞"), ("端", "名詞")),
        make_word(1, "ハシル", ("走る", "動詞")),
        make_word(2, "アカイ", ("赤い", "形容詞")),
        make_word(3, "リンゴ", ("林檎", "名詞")),
        make_word(4, "ゴリラ", ("ゴリラ", "名詞")),
        make_word(5, "ラッパ", ("喇叭", "名詞")),
        make_word(6, "パン", ("パン", "名詞")),
        make_word(7, "スグ", ("直ぐ", "副詞")),
        make_word(8, "ケーキ", ("ケーキ", "名詞")),
    ]
