from collections import Counter
from typing import Container, Optional, Sequence

from .errors import ValidationFailed

EMPTY = 'empty'
TOO_SHORT = 'too_short'
INVALID_LETTERS = 'invalid_letters'
NOT_A_WORD = 'not_a_word'


def normalize_word(raw: str) -> str:
    return (raw or '').strip().upper()


def can_form_word(word: str, letters: Sequence[str]) -> bool:
    """True when no letter is used more often than the bag holds it."""
    available = Counter(letters)
    needed = Counter(word.upper())
    return all(available[ch] >= n for ch, n in needed.items())


def check_word(word: str, letters: Sequence[str], min_length: int,
               dictionary: Container[str]) -> Optional[str]:
    """Return the first failed check for ``word``, or None when it is legal."""
    word = normalize_word(word)
    if not word:
        return EMPTY
    if len(word) < min_length:
        return TOO_SHORT
    if not can_form_word(word, letters):
        return INVALID_LETTERS
    if word not in dictionary:
        return NOT_A_WORD
    return None


def validate_word(word: str, letters: Sequence[str], min_length: int,
                  dictionary: Container[str]) -> str:
    """Normalize and validate ``word``; raise ValidationFailed with the reason."""
    reason = check_word(word, letters, min_length, dictionary)
    if reason == EMPTY:
        raise ValidationFailed(EMPTY, 'Empty word')
    if reason == TOO_SHORT:
        raise ValidationFailed(TOO_SHORT, f'The word must be at least {min_length} letters')
    if reason == INVALID_LETTERS:
        raise ValidationFailed(INVALID_LETTERS, 'Invalid letters')
    if reason == NOT_A_WORD:
        raise ValidationFailed(NOT_A_WORD, 'Not a valid Swedish word')
    return normalize_word(word)
