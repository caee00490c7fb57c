"""Word list loading and lookup.

The list is fetched once at startup and is read-only afterwards, so a
single ``Dictionary`` is shared by every session without locking.
"""

import logging
from typing import FrozenSet, Iterable, Iterator, Optional

import requests

log = logging.getLogger(__name__)

SWEDISH_WORDLIST_URL = 'https://raw.githubusercontent.com/martinlindhe/wordlist_swedish/master/swe_wordlist'
FALLBACK_WORDS = ('OCH', 'ATT', 'DET', 'SOM', 'HAR', 'MED', 'VAR', 'ETT', 'FÖR', 'PÅ')
MIN_STORED_LENGTH = 2


def normalize_words(lines: Iterable[str]) -> FrozenSet[str]:
    words = (line.strip().upper() for line in lines)
    return frozenset(w for w in words if len(w) >= MIN_STORED_LENGTH)


class Dictionary:
    def __init__(self, words: Iterable[str], source: str = 'memory'):
        self._words = normalize_words(words)
        self.source = source

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return word.strip().upper() in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    @classmethod
    def fallback(cls) -> 'Dictionary':
        return cls(FALLBACK_WORDS, source='fallback')


def load_dictionary(url: Optional[str] = SWEDISH_WORDLIST_URL,
                    path: Optional[str] = None,
                    timeout: float = 30) -> Dictionary:
    """Load the newline-delimited word list.

    A local ``path`` is tried first, then ``url``. Any failure falls back
    to the small built-in list instead of failing startup.
    """
    if path:
        try:
            with open(path, encoding='utf-8') as fh:
                dictionary = Dictionary(fh, source=path)
            log.info(f"[dictionary] loaded={len(dictionary)} source={path}")
            return dictionary
        except OSError as exc:
            log.warning(f"[dictionary] could not read {path}: {exc}")

    if url:
        try:
            log.info(f"[dictionary] fetching {url}")
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            response.encoding = response.encoding or 'utf-8'
            dictionary = Dictionary(response.text.split('\n'), source=url)
            if len(dictionary):
                log.info(f"[dictionary] loaded={len(dictionary)} source={url}")
                return dictionary
            log.warning(f"[dictionary] {url} returned no words")
        except requests.exceptions.RequestException as exc:
            log.error(f"[dictionary] fetch failed for {url}: {exc}")

    dictionary = Dictionary.fallback()
    log.warning(f"[dictionary] using fallback list loaded={len(dictionary)}")
    return dictionary
