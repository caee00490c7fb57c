import logging
import random
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from .errors import SessionNotFound
from .session import MODES, STATUS_ENDED, GameSession

log = logging.getLogger(__name__)

ID_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
ID_LENGTH = 6

DEFAULT_OPTIONS = {
    'mode': 'freeforall',
    'letter_count': 15,
    'min_word_length': 3,
    'duration': 60,
}

# Inclusive bounds for numeric overrides; anything outside keeps the default
OPTION_RANGES = {
    'letter_count': (12, 16),
    'min_word_length': (2, 5),
    'duration': (10, 600),
}


def resolve_options(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge ``overrides`` onto ``defaults``, dropping malformed values."""
    options = dict(defaults)
    for key, value in (overrides or {}).items():
        if value is None or key not in options:
            continue
        if key == 'mode':
            if value in MODES:
                options['mode'] = value
            continue
        try:
            value = int(value)
        except (TypeError, ValueError):
            continue
        low, high = OPTION_RANGES[key]
        if low <= value <= high:
            options[key] = value
    return options


class SessionRegistry:
    """Every live session in this process, keyed by its shareable id."""

    def __init__(self, dictionary, defaults: Optional[Dict[str, Any]] = None,
                 max_age: float = 30 * 60, max_players: int = 20,
                 clock: Callable[[], float] = time.time, rng: Optional[random.Random] = None):
        self.dictionary = dictionary
        self.defaults = resolve_options(DEFAULT_OPTIONS, defaults)
        self.max_age = max_age
        self.max_players = max_players
        self._clock = clock
        self._rng = rng or random.Random()
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return isinstance(session_id, str) and session_id.upper() in self._sessions

    def _generate_id(self) -> str:
        while True:
            code = ''.join(self._rng.choices(ID_ALPHABET, k=ID_LENGTH))
            if code not in self._sessions:
                return code

    def create(self, **overrides) -> GameSession:
        options = resolve_options(self.defaults, overrides)
        with self._lock:
            session_id = self._generate_id()
            session = GameSession(
                session_id,
                self.dictionary,
                max_players=self.max_players,
                clock=self._clock,
                rng=self._rng,
                **options,
            )
            self._sessions[session_id] = session
        log.info(
            f"[session-create] session={session_id} mode={session.mode} letters={session.letter_count} "
            f"min_length={session.min_word_length} duration={session.duration}s"
        )
        return session

    def find(self, session_id: Optional[str]) -> Optional[GameSession]:
        if not isinstance(session_id, str) or not session_id:
            return None
        return self._sessions.get(session_id.strip().upper())

    def get(self, session_id: Optional[str]) -> GameSession:
        session = self.find(session_id)
        if session is None:
            raise SessionNotFound()
        return session

    def evict(self, session_id: str) -> bool:
        """Drop a session and cancel its timer. Unknown ids are a no-op."""
        if not isinstance(session_id, str):
            return False
        with self._lock:
            session = self._sessions.pop(session_id.strip().upper(), None)
        if session is None:
            return False
        session.cancel_timer()
        log.info(f"[session-evict] session={session.id} status={session.status}")
        return True

    def sweep(self, now: Optional[float] = None) -> List[str]:
        """Evict ended sessions idle for longer than ``max_age`` seconds."""
        now = self._clock() if now is None else now
        with self._lock:
            stale = [
                sid for sid, s in self._sessions.items()
                if s.status == STATUS_ENDED and s.age(now) > self.max_age
            ]
        evicted = [sid for sid in stale if self.evict(sid)]
        if evicted:
            log.info(f"[sweep] evicted={len(evicted)} remaining={len(self._sessions)}")
        return evicted

    def stats(self) -> Dict[str, int]:
        return {'wordListSize': len(self.dictionary), 'activeGames': len(self._sessions)}
