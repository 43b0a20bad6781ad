"""
Character handling for Shiritorius.

Provides the katakana script set accepted as a reading, the traditional
phonetic rows (gyo) used to narrow leading characters, and hiragana to
katakana conversion for user supplied fragments.
"""

import re
from typing import Dict, List

# ============================================================================
# Kana Character Tables
# ============================================================================

# Every character a reading may consist of, in code point order
KATAKANA = (
    "ァアィイゥウェエォオカガキギクグケゲコゴサザシジスズセゼソゾタダチヂッツヅテデトド"
    "ナニヌネノハバパヒビピフブプヘベペホボポマミムメモャヤュユョヨラリルレロヮワヰヱヲン"
    "ヴヵヶヷヸヹヺー"
)

# Sokuon and small kana modifiers
MODIFIER_CHARACTERS = {
    "sokuon": "っッ",
    "+a": "ぁァ", "+i": "ぃィ", "+u": "ぅゥ", "+e": "ぇェ", "+o": "ぉォ",
    "+ya": "ゃャ", "+yu": "ゅュ", "+yo": "ょョ", "+wa": "ゎヮ",
    "+ka": "ゕヵ", "+ke": "ゖヶ",
}

# Main kana table, hiragana first
KANA_CHARACTERS = {
    "a": "あア",     "i": "いイ",     "u": "うウ",     "e": "えエ",     "o": "おオ",
    "ka": "かカ",    "ki": "きキ",    "ku": "くク",    "ke": "けケ",    "ko": "こコ",
    "sa": "さサ",    "shi": "しシ",   "su": "すス",    "se": "せセ",    "so": "そソ",
    "ta": "たタ",    "chi": "ちチ",   "tsu": "つツ",   "te": "てテ",    "to": "とト",
    "na": "なナ",    "ni": "にニ",    "nu": "ぬヌ",    "ne": "ねネ",    "no": "のノ",
    "ha": "はハ",    "hi": "ひヒ",    "fu": "ふフ",    "he": "へヘ",    "ho": "ほホ",
    "ma": "まマ",    "mi": "みミ",    "mu": "むム",    "me": "めメ",    "mo": "もモ",
    "ya": "やヤ",                     "yu": "ゆユ",                     "yo": "よヨ",
    "ra": "らラ",    "ri": "りリ",    "ru": "るル",    "re": "れレ",    "ro": "ろロ",
    "wa": "わワ",    "wi": "ゐヰ",                     "we": "ゑヱ",    "wo": "をヲ",
    "n": "んン",
    # Voiced consonants (dakuten)
    "ga": "がガ",    "gi": "ぎギ",    "gu": "ぐグ",    "ge": "げゲ",    "go": "ごゴ",
    "za": "ざザ",    "ji": "じジ",    "zu": "ずズ",    "ze": "ぜゼ",    "zo": "ぞゾ",
    "da": "だダ",    "dji": "ぢヂ",   "dzu": "づヅ",   "de": "でデ",    "do": "どド",
    "ba": "ばバ",    "bi": "びビ",    "bu": "ぶブ",    "be": "べベ",    "bo": "ぼボ",
    "pa": "ぱパ",    "pi": "ぴピ",    "pu": "ぷプ",    "pe": "ぺペ",    "po": "ぽポ",
    "vu": "ゔヴ",
}

ALL_CHARACTERS = {
    **MODIFIER_CHARACTERS,
    **KANA_CHARACTERS,
}

# Hiragana -> katakana mapping
HIRAGANA_TO_KATAKANA: Dict[str, str] = {
    chars[0]: chars[-1] for chars in ALL_CHARACTERS.values()
}

# ============================================================================
# Phonetic Rows (gyo)
# ============================================================================

GYO_ROWS = {
    "ア": "ァアィイゥウェエォオ",
    "カ": "カガキギクグケゲコゴヵヶ",
    "サ": "サザシジスズセゼソゾ",
    "タ": "タダチヂッツヅテデトド",
    "ナ": "ナニヌネノ",
    "ハ": "ハバパヒビピフブプヘベペホボポ",
    "マ": "マミムメモ",
    "ヤ": "ャヤュユョヨ",
    "ラ": "ラリルレロ",
    "ワー": "ヮワヰヱヲンヴヷヸヹヺー",
}

# ============================================================================
# Regular Expressions
# ============================================================================

KATAKANA_REGEX = r"[ァ-ヺー]"

_KATAKANA_ONLY_PATTERN = re.compile(rf"^{KATAKANA_REGEX}+$")
_KATAKANA_RUN_PATTERN = re.compile(rf"{KATAKANA_REGEX}+")


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_katakana(word: str) -> bool:
    """Check if word is non-empty and consists entirely of katakana."""
    if not word:
        return False
    return _KATAKANA_ONLY_PATTERN.fullmatch(word) is not None


def as_katakana(text: str) -> str:
    """
    Convert hiragana to katakana.

    Characters without a katakana counterpart are left untouched.
    """
    return ''.join(HIRAGANA_TO_KATAKANA.get(char, char) for char in text)


def extract_katakana(text: str) -> List[str]:
    """
    Split text into its maximal katakana runs.

    Any character outside the katakana set acts as a separator, so
    "ネコ、イヌ" yields ["ネコ", "イヌ"].
    """
    return _KATAKANA_RUN_PATTERN.findall(text)


def gyo_of(char: str) -> str:
    """Return the phonetic row a katakana character belongs to, or ''."""
    for row, chars in GYO_ROWS.items():
        if char in chars:
            return row
    return ''
