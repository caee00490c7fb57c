"""Claim ledgers, one per game mode.

Both ledgers assume their caller already holds the session lock: the
"already claimed?" check and the insert happen inside one call so a
locked caller can never let two submissions of the same word through.
"""

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from .errors import AlreadyClaimed, AlreadyUsedByYou
from .scoring import exclusive_score, free_for_all_score


@dataclass(frozen=True)
class Claim:
    word: str
    player_name: str
    timestamp: int
    score: int


class ExclusiveLedger:
    """First valid submission of a word wins it for the whole room."""

    mode = 'exclusive'

    def __init__(self):
        self._claims: Dict[str, Claim] = {}

    def claim(self, word: str, player_name: str, elapsed: int) -> Claim:
        if word in self._claims:
            raise AlreadyClaimed()
        claim = Claim(word=word, player_name=player_name, timestamp=elapsed, score=exclusive_score(word))
        self._claims[word] = claim
        return claim

    def all(self) -> List[Claim]:
        return list(self._claims.values())

    def for_player(self, player_name: str) -> List[Claim]:
        return [c for c in self._claims.values() if c.player_name == player_name]

    def __len__(self) -> int:
        return len(self._claims)


class FreeForAllLedger:
    """Every player may claim each word once; scores decay with time."""

    mode = 'freeforall'

    def __init__(self):
        self._claims: Dict[Tuple[str, str], Claim] = {}
        self._words_by_player: Dict[str, Set[str]] = {}

    def claim(self, word: str, player_name: str, elapsed: int) -> Claim:
        used = self._words_by_player.setdefault(player_name, set())
        if word in used:
            raise AlreadyUsedByYou()
        claim = Claim(word=word, player_name=player_name, timestamp=elapsed,
                      score=free_for_all_score(word, elapsed))
        used.add(word)
        self._claims[(word, player_name)] = claim
        return claim

    def all(self) -> List[Claim]:
        return list(self._claims.values())

    def for_player(self, player_name: str) -> List[Claim]:
        return [c for c in self._claims.values() if c.player_name == player_name]

    def __len__(self) -> int:
        return len(self._claims)


LEDGERS = {
    ExclusiveLedger.mode: ExclusiveLedger,
    FreeForAllLedger.mode: FreeForAllLedger,
}


def new_ledger(mode: str):
    return LEDGERS[mode]()
