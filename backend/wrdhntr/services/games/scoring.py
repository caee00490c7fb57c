"""Word scoring for both game modes.

These formulas are shared with clients and must stay exact:

- free-for-all: ``len(word) * max(0, 60 - seconds_elapsed)``, plus 5 for
  words longer than 6 letters
- exclusive: one point per letter
"""

import math

TIME_BONUS_BASE = 60
LONG_WORD_LENGTH = 6
LONG_WORD_BONUS = 5


def free_for_all_score(word: str, seconds_elapsed: float) -> int:
    word_length = len(word)
    time_bonus = max(0, TIME_BONUS_BASE - seconds_elapsed)
    score = word_length * time_bonus
    if word_length > LONG_WORD_LENGTH:
        score += LONG_WORD_BONUS
    # Halves round up, matching the clients (round() would round to even)
    return int(math.floor(score + 0.5))


def exclusive_score(word: str) -> int:
    return len(word)
