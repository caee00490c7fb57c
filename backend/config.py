import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', 'http://localhost:5173').split(',') if o.strip()]
    # Word list: a local file is tried before the URL; both fall back to a tiny built-in list
    WORDLIST_URL = os.environ.get('WORDLIST_URL', 'https://raw.githubusercontent.com/martinlindhe/wordlist_swedish/master/swe_wordlist')
    WORDLIST_PATH = os.environ.get('WORDLIST_PATH')
    WORDLIST_TIMEOUT_SEC = float(os.environ.get('WORDLIST_TIMEOUT_SEC', '30'))
    # Defaults for new games (overrides outside the accepted ranges are ignored)
    DEFAULT_MODE = os.environ.get('DEFAULT_MODE', 'freeforall')
    DEFAULT_LETTER_COUNT = int(os.environ.get('DEFAULT_LETTER_COUNT', '15'))
    DEFAULT_MIN_WORD_LENGTH = int(os.environ.get('DEFAULT_MIN_WORD_LENGTH', '3'))
    DEFAULT_GAME_DURATION_SEC = int(os.environ.get('DEFAULT_GAME_DURATION_SEC', '60'))
    MAX_PLAYERS_PER_ROOM = int(os.environ.get('MAX_PLAYERS_PER_ROOM', '20'))
    # Round countdown tick (seconds)
    TIMER_TICK_SEC = float(os.environ.get('TIMER_TICK_SEC', '1'))
    # Ended games older than this are evicted by the sweep
    SESSION_MAX_AGE_SEC = int(os.environ.get('SESSION_MAX_AGE_SEC', str(30 * 60)))
    SWEEP_INTERVAL_SEC = int(os.environ.get('SWEEP_INTERVAL_SEC', str(5 * 60)))
    # Timers and the sweep stay off under TESTING unless this is set
    ENABLE_BACKGROUND_TASKS_IN_TESTS = False
