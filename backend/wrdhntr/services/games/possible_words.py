from collections import Counter
from typing import Iterable, List, Sequence, Tuple

# Swedish collation: the three extra letters come after Z
SWEDISH_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZÅÄÖ'
_ORDER = {ch: i for i, ch in enumerate(SWEDISH_ALPHABET)}


def swedish_sort_key(word: str) -> Tuple[int, ...]:
    """Collation key placing Å, Ä, Ö after Z; unknown characters sort last."""
    base = len(SWEDISH_ALPHABET)
    return tuple(_ORDER.get(ch, base + ord(ch)) for ch in word.upper())


def find_possible_words(letters: Sequence[str], min_length: int, words: Iterable[str]) -> List[str]:
    """Every dictionary word spellable from ``letters``, longest first.

    Scans the whole word list, so it only runs once, when a round ends.
    """
    bag = Counter(letters)
    bag_letters = set(bag)
    max_length = len(letters)
    found = []
    for word in words:
        if not min_length <= len(word) <= max_length:
            continue
        if not set(word) <= bag_letters:
            continue
        if all(bag[ch] >= n for ch, n in Counter(word).items()):
            found.append(word)
    found.sort(key=lambda w: (-len(w), swedish_sort_key(w)))
    return found
