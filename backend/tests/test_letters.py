import random
from collections import Counter

import pytest

from wrdhntr.services.games.letters import CONSONANTS, VOWELS, generate_letters


@pytest.mark.parametrize('count', [12, 13, 14, 15, 16])
def test_bag_has_requested_length(count):
    letters = generate_letters(count, random.Random(count))
    assert len(letters) == count
    assert all(ch == ch.upper() for ch in letters)


def test_vowel_share_is_rounded_down():
    for seed in range(20):
        letters = generate_letters(15, random.Random(seed))
        vowels = [ch for ch in letters if ch in VOWELS]
        consonants = [ch for ch in letters if ch in CONSONANTS]
        assert len(vowels) == 5
        assert len(consonants) == 10


def test_same_seed_same_bag():
    assert generate_letters(14, random.Random(7)) == generate_letters(14, random.Random(7))


def test_common_letters_dominate():
    rng = random.Random(1234)
    counts = Counter()
    for _ in range(400):
        counts.update(generate_letters(16, rng))
    common_vowels = sum(counts[ch] for ch in 'AEIO')
    rare_vowels = sum(counts[ch] for ch in 'UYÅÄÖ')
    assert common_vowels > rare_vowels * 2
    assert counts['N'] > counts['X']
