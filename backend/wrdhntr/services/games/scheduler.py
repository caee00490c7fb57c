import logging
import threading
from typing import Callable, Optional

from wrdhntr import socketio
from .session import GameSession, RoundResults


class RoundScheduler:
    """Countdown for one session's round.

    Ticks every ``interval`` seconds, reporting the remaining time through
    ``on_tick`` and the final results through ``on_end`` once the session
    runs out of time. ``cancel`` may be called any number of times; ticks
    that race a cancellation are dropped by ``GameSession.tick``.
    """

    def __init__(self, session: GameSession,
                 on_tick: Callable[[GameSession, int], None],
                 on_end: Callable[[GameSession, RoundResults], None],
                 interval: float = 1.0,
                 spawn: Optional[Callable] = None,
                 sleep: Optional[Callable[[float], None]] = None,
                 logger=None):
        self.session = session
        self.interval = interval
        self._on_tick = on_tick
        self._on_end = on_end
        self._spawn = spawn or socketio.start_background_task
        self._sleep = sleep or socketio.sleep
        self._logger = logger or logging.getLogger(__name__)
        self._cancelled = threading.Event()
        self._cancel_lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self) -> None:
        self._spawn(self._run)

    def cancel(self) -> bool:
        """Stop ticking. Returns False when already cancelled."""
        with self._cancel_lock:
            if self._cancelled.is_set():
                return False
            self._cancelled.set()
        self._log(f"[timer-cancel] session={self.session.id}")
        return True

    def _run(self) -> None:
        while not self._cancelled.is_set():
            self._sleep(self.interval)
            if self._cancelled.is_set():
                break
            try:
                tick = self.session.tick(self)
            except Exception:
                # try again on the next interval
                self._logger.exception(f"[timer-error] session={self.session.id} step=tick")
                continue
            if tick is None:
                self._log(f"[timer-abort] session={self.session.id} status={self.session.status}")
                break
            self._notify(self._on_tick, tick.remaining)
            if tick.results is not None:
                self._log(f"[timer-fire] session={self.session.id} round ended")
                self._notify(self._on_end, tick.results)
                break

    def _notify(self, callback, value) -> None:
        """Run a broadcast callback; a failing broadcast must not stop the countdown."""
        try:
            callback(self.session, value)
        except Exception:
            name = getattr(callback, '__name__', repr(callback))
            self._logger.exception(f"[timer-error] session={self.session.id} callback={name}")

    def _log(self, message: str) -> None:
        self._logger.info(message)


def schedule_round_timer(app, session: GameSession,
                         on_tick: Callable[[GameSession, int], None],
                         on_end: Callable[[GameSession, RoundResults], None]) -> Optional[RoundScheduler]:
    """Attach and start the countdown for a session that just started.

    - No-ops in TESTING mode unless ENABLE_BACKGROUND_TASKS_IN_TESTS is set
    - The session owns the timer, so ending or evicting it cancels the ticks
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_BACKGROUND_TASKS_IN_TESTS'):
        return None

    interval = float(app.config.get('TIMER_TICK_SEC', 1))
    scheduler = RoundScheduler(session, on_tick, on_end, interval=interval, logger=app.logger)
    session.attach_timer(scheduler)
    app.logger.info(
        f"[timer-set] session={session.id} duration={session.duration}s interval={interval}s"
    )
    scheduler.start()
    return scheduler


def schedule_sweep(app, registry) -> None:
    """Periodically evict ended sessions that have been idle too long."""
    if app.config.get('TESTING') and not app.config.get('ENABLE_BACKGROUND_TASKS_IN_TESTS'):
        return

    interval = float(app.config.get('SWEEP_INTERVAL_SEC', 300))

    def _worker():
        while True:
            socketio.sleep(interval)
            try:
                registry.sweep()
            except Exception:
                app.logger.exception("[sweep] failed")

    app.logger.info(f"[sweep-set] interval={interval}s max_age={registry.max_age}s")
    socketio.start_background_task(_worker)
