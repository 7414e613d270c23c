"""
Character classification for Katsuyou.

Decides whether a headword's stem ends in a phonetic (hiragana) or
logographic (kanji) character, which picks the euphonic override a
conjugation rule applies.
"""

# ============================================================================
# Character Ranges
# ============================================================================

# Hiragana letters ぁ (U+3041) through ゖ (U+3096). あ and the small
# letters count as kana too; iteration marks (ゝゞ) and ー do not.
HIRAGANA_FIRST = "ぁ"
HIRAGANA_LAST = "ゖ"


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_hiragana_char(char: str) -> bool:
    """Check if a single character is a hiragana letter."""
    return HIRAGANA_FIRST <= char <= HIRAGANA_LAST


def stem_is_kana(word: str) -> bool:
    """
    Classify the stem boundary of a headword.

    Looks at the character immediately before the final one: hiragana
    means the stem ends in kana (くる, 勉強する), anything else means the
    final kana follows a kanji (来る, 良い).

    The word must be at least two characters long.
    """
    return is_hiragana_char(word[-2])
