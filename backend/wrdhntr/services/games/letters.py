import random
from typing import List, Optional

# Swedish letters; the common subsets get drawn far more often
VOWELS = ['A', 'E', 'I', 'O', 'U', 'Y', 'Å', 'Ä', 'Ö']
COMMON_VOWELS = ['A', 'E', 'I', 'O']
CONSONANTS = ['B', 'C', 'D', 'F', 'G', 'H', 'J', 'K', 'L', 'M', 'N', 'P', 'R', 'S', 'T', 'V', 'X', 'Z']
COMMON_CONSONANTS = ['N', 'R', 'S', 'T', 'L', 'D', 'G', 'M', 'K']

VOWEL_SHARE = 0.35
COMMON_VOWEL_CHANCE = 0.7
COMMON_CONSONANT_CHANCE = 0.6


def _biased_pick(rng: random.Random, common: List[str], full: List[str], chance: float) -> str:
    if rng.random() < chance:
        return rng.choice(common)
    return rng.choice(full)


def generate_letters(count: int = 14, rng: Optional[random.Random] = None) -> List[str]:
    """Draw a playable bag of ``count`` uppercase letters.

    Roughly 35% vowels (rounded down), the rest consonants, both biased
    towards frequent letters, then shuffled so placement is uniform.
    """
    rng = rng or random.Random()
    vowel_count = int(count * VOWEL_SHARE)
    consonant_count = count - vowel_count

    letters = [_biased_pick(rng, COMMON_VOWELS, VOWELS, COMMON_VOWEL_CHANCE) for _ in range(vowel_count)]
    letters += [
        _biased_pick(rng, COMMON_CONSONANTS, CONSONANTS, COMMON_CONSONANT_CHANCE)
        for _ in range(consonant_count)
    ]
    rng.shuffle(letters)
    return letters
