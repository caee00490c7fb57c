"""One game room: players, host, letter bag, claims and round lifecycle.

Every public method that touches mutable state takes the session's lock,
so joins, claims, host transfers, timer ticks and the end of the round
never interleave within a room. Different rooms share nothing but the
read-only dictionary.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .claims import Claim, new_ledger
from .errors import (
    InvalidName, NameTaken, NotHost, PlayerNotFound, SessionEnded, SessionFull, WrongState,
)
from .legality import validate_word
from .letters import generate_letters
from .possible_words import find_possible_words

log = logging.getLogger(__name__)

MODE_FREE_FOR_ALL = 'freeforall'
MODE_EXCLUSIVE = 'exclusive'
MODES = (MODE_FREE_FOR_ALL, MODE_EXCLUSIVE)

STATUS_WAITING = 'waiting'
STATUS_PLAYING = 'playing'
STATUS_ENDED = 'ended'

HIDDEN_LETTER = '?'


@dataclass
class Player:
    id: str
    name: str
    join_order: int
    score: int = 0
    connected: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'connected': self.connected,
        }


@dataclass
class JoinResult:
    player: Player
    is_host: bool
    reconnected: bool = False
    repeated: bool = False
    became_host: bool = False


@dataclass
class SubmitResult:
    player: Player
    claim: Claim

    @property
    def word(self) -> str:
        return self.claim.word

    @property
    def score(self) -> int:
        return self.claim.score

    @property
    def total_score(self) -> int:
        return self.player.score

    def to_dict(self) -> Dict[str, Any]:
        return {'success': True, 'word': self.word, 'score': self.score, 'totalScore': self.total_score}


@dataclass
class DisconnectResult:
    player: Player
    host_changed: bool
    new_host: Optional[Player]


@dataclass
class RoundResults:
    mode: str
    letters: List[str]
    min_word_length: int
    rankings: List[Dict[str, Any]]
    claims: List[Dict[str, Any]]
    possible_words: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rankings': self.rankings,
            'claims': self.claims,
            'gameInfo': {
                'mode': self.mode,
                'letters': self.letters,
                'minWordLength': self.min_word_length,
            },
            'possibleWords': self.possible_words,
        }


@dataclass
class TickResult:
    remaining: int
    results: Optional[RoundResults] = None


class GameSession:
    def __init__(self, session_id: str, dictionary, mode: str = MODE_FREE_FOR_ALL,
                 letter_count: int = 15, min_word_length: int = 3, duration: int = 60,
                 max_players: int = 20, clock: Callable[[], float] = time.time, rng=None):
        if mode not in MODES:
            raise ValueError(f'unknown mode {mode!r}')
        self.id = session_id
        self.mode = mode
        self.letter_count = letter_count
        self.letters = tuple(generate_letters(letter_count, rng))
        self.min_word_length = min_word_length
        self.duration = duration
        self.max_players = max_players
        self.status = STATUS_WAITING
        self.start_time: Optional[float] = None
        self.results: Optional[RoundResults] = None
        self.timer = None

        self._dictionary = dictionary
        self._clock = clock
        self.created_at = clock()
        self._players: List[Player] = []
        self._by_id: Dict[str, Player] = {}
        self._host: Optional[Player] = None
        self._ledger = new_ledger(mode)
        self._lock = threading.RLock()

    # ---- read helpers ----

    @property
    def host_id(self) -> Optional[str]:
        host = self._host
        return host.id if host else None

    @property
    def players(self) -> List[Player]:
        with self._lock:
            return list(self._players)

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._lock:
            return self._by_id.get(player_id)

    def elapsed(self) -> int:
        if self.start_time is None:
            return 0
        return max(0, int(self._clock() - self.start_time))

    def time_remaining(self) -> int:
        if self.start_time is None:
            return self.duration
        return max(0, self.duration - self.elapsed())

    def age(self, now: Optional[float] = None) -> float:
        now = self._clock() if now is None else now
        return now - (self.start_time if self.start_time is not None else self.created_at)

    # ---- player lifecycle ----

    def join(self, player_id: str, name: str) -> JoinResult:
        name = (name or '').strip()
        if not name:
            raise InvalidName()
        with self._lock:
            if self.status == STATUS_ENDED:
                raise SessionEnded()

            existing = self._by_id.get(player_id)
            if existing is not None and existing.connected:
                return JoinResult(existing, is_host=existing is self._host, repeated=True)

            lowered = name.lower()
            if any(p.connected and p.name.lower() == lowered for p in self._players):
                raise NameTaken()

            player = next((p for p in self._players if not p.connected and p.name == name), None)
            reconnected = player is not None
            if reconnected:
                self._by_id.pop(player.id, None)
                player.id = player_id
                player.connected = True
            else:
                if len(self._players) >= self.max_players:
                    raise SessionFull()
                player = Player(id=player_id, name=name, join_order=len(self._players))
                self._players.append(player)
            self._by_id[player_id] = player

            became_host = self._host is None
            if became_host:
                self._host = player
            return JoinResult(player, is_host=player is self._host,
                              reconnected=reconnected, became_host=became_host)

    def disconnect(self, player_id: str) -> Optional[DisconnectResult]:
        """Mark a player offline and hand the host role on if they held it.

        Returns None when the id is unknown or already disconnected.
        """
        with self._lock:
            player = self._by_id.get(player_id)
            if player is None or not player.connected:
                return None
            player.connected = False
            host_changed = self._host is player
            if host_changed:
                self._host = next((p for p in self._players if p.connected), None)
            return DisconnectResult(player, host_changed=host_changed, new_host=self._host)

    # ---- round lifecycle ----

    def start(self, requester_id: str) -> None:
        with self._lock:
            if self._host is None or self._host.id != requester_id:
                raise NotHost()
            if self.status != STATUS_WAITING:
                raise WrongState('The game has already started')
            if not self._players:
                raise WrongState('At least one player is needed')
            self.status = STATUS_PLAYING
            self.start_time = self._clock()

    def submit(self, player_id: str, raw_word: str) -> SubmitResult:
        with self._lock:
            player = self._by_id.get(player_id)
            if player is None:
                raise PlayerNotFound()
            if self.status != STATUS_PLAYING or self.time_remaining() <= 0:
                raise WrongState()
            word = validate_word(raw_word, self.letters, self.min_word_length, self._dictionary)
            claim = self._ledger.claim(word, player.name, self.elapsed())
            player.score += claim.score
            return SubmitResult(player, claim)

    def attach_timer(self, timer) -> None:
        with self._lock:
            if self.status != STATUS_PLAYING:
                raise WrongState()
            self.timer = timer

    def cancel_timer(self) -> bool:
        with self._lock:
            timer = self.timer
            if timer is None:
                return False
            return timer.cancel()

    def tick(self, timer=None) -> Optional[TickResult]:
        """Advance the countdown; ends the round once no time remains.

        Returns None when the tick is stale: the round is over, or ``timer``
        has been cancelled or replaced.
        """
        with self._lock:
            if self.status != STATUS_PLAYING:
                return None
            if timer is not None and (timer is not self.timer or timer.cancelled):
                return None
            remaining = self.time_remaining()
            if remaining > 0:
                return TickResult(remaining)
            return TickResult(0, self._end())

    def end(self) -> RoundResults:
        with self._lock:
            if self.status == STATUS_ENDED:
                return self.results
            if self.status != STATUS_PLAYING:
                raise WrongState('The game has not started')
            return self._end()

    def _end(self) -> RoundResults:
        self.status = STATUS_ENDED
        if self.timer is not None:
            self.timer.cancel()

        # Equal scores rank by join order, earliest first
        ranked = sorted(self._players, key=lambda p: (-p.score, p.join_order))
        possible = find_possible_words(self.letters, self.min_word_length, self._dictionary)
        self.results = RoundResults(
            mode=self.mode,
            letters=list(self.letters),
            min_word_length=self.min_word_length,
            rankings=[{'id': p.id, 'name': p.name, 'score': p.score} for p in ranked],
            claims=[self._claim_to_dict(c) for c in self._ledger.all()],
            possible_words=possible,
        )
        log.info(
            f"[round-end] session={self.id} claims={len(self._ledger)} possible={len(possible)} "
            f"winner={ranked[0].name if ranked else None}"
        )
        return self.results

    # ---- views ----

    def claims_for(self, player_name: str) -> List[Claim]:
        with self._lock:
            return self._ledger.for_player(player_name)

    def claim_payload(self, result: SubmitResult) -> Dict[str, Any]:
        with self._lock:
            payload = self._claim_to_dict(result.claim)
            payload['players'] = [p.to_dict() for p in self._players]
            return payload

    def snapshot(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        with self._lock:
            viewer = self._by_id.get(viewer_id) if viewer_id else None
            claims_view = self._claim_views[self.mode]
            if self.status == STATUS_WAITING:
                letters = [HIDDEN_LETTER] * len(self.letters)
            else:
                letters = list(self.letters)
            return {
                'id': self.id,
                'mode': self.mode,
                'letters': letters,
                'letterCount': self.letter_count,
                'minWordLength': self.min_word_length,
                'duration': self.duration,
                'hostId': self.host_id,
                'players': [p.to_dict() for p in self._players],
                'claims': [self._claim_to_dict(c) for c in claims_view(self, viewer)],
                'status': self.status,
                'startTime': int(self.start_time * 1000) if self.start_time is not None else None,
                'timeRemaining': self.time_remaining(),
            }

    def _exclusive_claims_view(self, viewer: Optional[Player]) -> List[Claim]:
        # Every claim is public in exclusive mode
        return self._ledger.all()

    def _free_for_all_claims_view(self, viewer: Optional[Player]) -> List[Claim]:
        # Players only see their own words until the round is over
        if viewer is not None:
            return self._ledger.for_player(viewer.name)
        if self.status == STATUS_ENDED:
            return self._ledger.all()
        return []

    _claim_views = {
        MODE_EXCLUSIVE: _exclusive_claims_view,
        MODE_FREE_FOR_ALL: _free_for_all_claims_view,
    }

    def _claim_to_dict(self, claim: Claim) -> Dict[str, Any]:
        owner = next((p for p in self._players if p.name == claim.player_name), None)
        return {
            'word': claim.word,
            'playerId': owner.id if owner else None,
            'playerName': claim.player_name,
            'timestamp': claim.timestamp,
            'score': claim.score,
        }
