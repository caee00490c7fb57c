"""Expected, recoverable game outcomes.

Each error carries a stable ``code`` for clients and a human-readable
``message``. Sessions raise them; the transport layer turns them into
``{'success': False, 'error': ..., 'code': ...}`` results.
"""

from typing import Any, Dict, Optional


class GameError(Exception):
    code = 'game_error'
    http_status = 400
    default_message = 'Something went wrong'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {'success': False, 'error': self.message, 'code': self.code}


class InvalidRequest(GameError):
    code = 'invalid_request'
    default_message = 'Invalid request'


class SessionNotFound(GameError):
    code = 'not_found'
    http_status = 404
    default_message = 'Game not found'


class PlayerNotFound(GameError):
    code = 'player_not_found'
    http_status = 404
    default_message = 'You are not a player in this game'


class SessionFull(GameError):
    code = 'session_full'
    http_status = 409
    default_message = 'The game is full'


class WrongState(GameError):
    code = 'wrong_state'
    http_status = 409
    default_message = 'The game is not active'


class SessionEnded(WrongState):
    code = 'session_ended'
    default_message = 'The game has ended'


class NameTaken(GameError):
    code = 'name_taken'
    http_status = 409
    default_message = 'That name is already taken'


class InvalidName(GameError):
    code = 'invalid_name'
    default_message = 'A player name is required'


class NotHost(GameError):
    code = 'not_host'
    http_status = 403
    default_message = 'Only the host can start the game'


class ValidationFailed(GameError):
    """A submitted word failed a legality check; ``reason`` says which one."""

    code = 'validation_failed'

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload['reason'] = self.reason
        return payload


class AlreadyClaimed(GameError):
    code = 'already_claimed'
    http_status = 409
    default_message = 'That word is already taken!'


class AlreadyUsedByYou(GameError):
    code = 'already_used_by_you'
    http_status = 409
    default_message = 'You have already used this word!'
