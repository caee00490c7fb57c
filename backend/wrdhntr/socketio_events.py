"""Socket.IO boundary for the game engine.

Request events answer through the acknowledgement callback with
``{'success': True, ...}`` or ``{'success': False, 'error': ..., 'code': ...}``;
room-wide updates go out as broadcasts to the session's room.
"""

import functools
from typing import Any, Dict, Optional

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from wrdhntr import get_registry, socketio
from wrdhntr.api.games import session_options
from wrdhntr.services.games.errors import GameError, InvalidRequest, SessionNotFound
from wrdhntr.services.games.scheduler import schedule_round_timer
from wrdhntr.services.games.session import (
    MODE_EXCLUSIVE, MODE_FREE_FOR_ALL, GameSession, RoundResults, SubmitResult,
)

NAMESPACE = '/ws'

# Transport id -> the session that socket joined
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(args) -> Dict[str, Any]:
    data = args[0] if args else None
    return data if isinstance(data, dict) else {}


def game_event(handler):
    """Turn expected game errors into ack results and log anything else."""
    @functools.wraps(handler)
    def wrapper(*args):
        try:
            return handler(*args)
        except GameError as exc:
            return exc.to_dict()
        except Exception:
            current_app.logger.exception(f"[socket-error] event={handler.__name__} sid={_get_sid()}")
            return {'success': False, 'error': 'An error occurred', 'code': 'internal_error'}
    return wrapper


def _current_session() -> GameSession:
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        raise SessionNotFound()
    return get_registry().get(ctx['game_code'])


# ---- broadcasts driven by the round timer ----

def announce_timer(session: GameSession, remaining: int) -> None:
    socketio.emit('timer-update', {'remaining': remaining}, to=session.id, namespace=NAMESPACE)


def announce_round_end(session: GameSession, results: RoundResults) -> None:
    socketio.emit('game-ended', results.to_dict(), to=session.id, namespace=NAMESPACE)


# ---- claim broadcasts, one behaviour per mode ----

def _announce_claim_to_room(session: GameSession, payload: Dict[str, Any]) -> None:
    # Exclusive: a claimed word is gone for everyone, so everyone sees it
    emit('word-claimed', payload, to=session.id)


def _announce_claim_privately(session: GameSession, payload: Dict[str, Any]) -> None:
    # Free-for-all: the word stays private, only the scoreboard moves
    emit('word-claimed', payload)
    emit('scores-updated', {'players': payload['players']}, to=session.id, include_self=False)


CLAIM_ANNOUNCERS = {
    MODE_EXCLUSIVE: _announce_claim_to_room,
    MODE_FREE_FOR_ALL: _announce_claim_privately,
}


# ---- handlers ----

def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


@game_event
def handle_create_game(*args):
    data = _payload(args)
    session = get_registry().create(**session_options(data))
    current_app.logger.info(f"[create] session={session.id} mode={session.mode} via=socket")
    return {'success': True, 'gameId': session.id}


@game_event
def handle_join_game(*args):
    data = _payload(args)
    game_id = data.get('gameId')
    player_name = data.get('playerName')
    if not isinstance(game_id, str) or not game_id or not isinstance(player_name, str):
        raise InvalidRequest('gameId and playerName are required')

    sid = _get_sid()
    session = get_registry().get(game_id)
    result = session.join(sid, player_name)

    # A socket plays in one room at a time
    ctx = _sid_to_ctx.get(sid)
    if ctx and ctx.get('game_code') != session.id:
        _leave_session(sid, ctx)
        leave_room(ctx['game_code'])
    join_room(session.id)
    _sid_to_ctx[sid] = {'game_code': session.id}

    snapshot = session.snapshot(sid)
    if not result.repeated:
        emit('player-joined', {
            'player': result.player.to_dict(),
            'players': snapshot['players'],
        }, to=session.id, include_self=False)
        if result.became_host and result.reconnected:
            emit('host-changed', {'newHostId': sid}, to=session.id, include_self=False)
        current_app.logger.info(
            f"[join] session={session.id} name={result.player.name} reconnect={result.reconnected}"
        )
    return {'success': True, 'gameState': snapshot, 'isHost': result.is_host}


@game_event
def handle_start_game(*args):
    sid = _get_sid()
    session = _current_session()
    session.start(sid)

    # Each player gets their own view of the claims
    for player in session.players:
        if player.connected:
            socketio.emit('game-started', session.snapshot(player.id), to=player.id, namespace=NAMESPACE)

    schedule_round_timer(current_app._get_current_object(), session, announce_timer, announce_round_end)
    current_app.logger.info(f"[start] session={session.id} by={sid}")
    return {'success': True}


@game_event
def handle_submit_word(*args):
    data = _payload(args)
    word = data.get('word')
    if not isinstance(word, str):
        raise InvalidRequest('word is required')

    session = _current_session()
    result: SubmitResult = session.submit(_get_sid(), word)
    payload = session.claim_payload(result)
    CLAIM_ANNOUNCERS[session.mode](session, payload)
    return result.to_dict()


@game_event
def handle_get_game_state(*args):
    data = _payload(args)
    session = get_registry().get(data.get('gameId'))
    return {'success': True, 'gameState': session.snapshot(_get_sid())}


def handle_ping(data=None):
    emit('pong', data or {})


def handle_disconnect(reason=None):
    sid = _get_sid()
    ctx = _sid_to_ctx.pop(sid, None)
    if ctx:
        _leave_session(sid, ctx)


def _leave_session(sid: str, ctx: Dict[str, Any]) -> Optional[GameSession]:
    session = get_registry().find(ctx.get('game_code'))
    if session is None:
        return None
    result = session.disconnect(sid)
    if result is None:
        return session

    socketio.emit('player-disconnected', {
        'playerId': sid,
        'playerName': result.player.name,
    }, to=session.id, namespace=NAMESPACE)
    if result.host_changed and result.new_host is not None:
        socketio.emit('host-changed', {'newHostId': result.new_host.id}, to=session.id, namespace=NAMESPACE)
    current_app.logger.info(
        f"[disconnect] session={session.id} name={result.player.name} host={session.host_id}"
    )
    return session


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('create-game', handle_create_game, namespace=NAMESPACE)
    socketio.on_event('join-game', handle_join_game, namespace=NAMESPACE)
    socketio.on_event('start-game', handle_start_game, namespace=NAMESPACE)
    socketio.on_event('submit-word', handle_submit_word, namespace=NAMESPACE)
    socketio.on_event('get-game-state', handle_get_game_state, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
