import logging

from . import utils
from .classes import Phrase, RoundEntry
from .config import Config
from .database import PhraseStore
from .exceptions import NoActivePhrase, RoundComplete

logger = logging.getLogger("phrasey.game")


class Game:
    """
    Drill engine for a single round of phrases.

    Phrases that haven't been answered correctly yet are kept in `unrecognized`
    and walked round-robin. A correct answer moves the current phrase, together
    with its attempt count, into `recognized`. A wrong answer increments the
    attempt count and moves on to the next phrase, so a missed phrase comes back
    later in the same pass instead of being repeated immediately.
    """
    config: Config
    store: PhraseStore
    _unrecognized: list[RoundEntry]
    _recognized: list[RoundEntry]
    _current_idx: int | None

    def __init__(self, config: Config, store: PhraseStore):
        self.config = config
        self.store = store
        self._unrecognized = []
        self._recognized = []
        self._current_idx = None

    @property
    def unrecognized(self) -> tuple[RoundEntry, ...]:
        return tuple(self._unrecognized)

    @property
    def recognized(self) -> tuple[RoundEntry, ...]:
        return tuple(self._recognized)

    @property
    def current_index(self) -> int | None:
        return self._current_idx

    @property
    def in_progress(self) -> bool:
        return self._current_idx is not None

    def progress(self) -> tuple[int, int]:
        recognized = len(self._recognized)
        return recognized, recognized + len(self._unrecognized)

    def start_round(self):
        limit = self.config.phrases_per_round
        logger.log(utils.TRACE, f"Starting new round, fetching {limit} phrases")
        self._unrecognized = [RoundEntry(phrase=phrase, attempts=0) for phrase in self.store.sample(limit)]
        self._recognized = []
        self._current_idx = 0 if self._unrecognized else None
        logger.debug(f"Round started with {len(self._unrecognized)} phrases")

    def end_round(self):
        # TODO: store attempt counts in the database once it can be written to
        self._unrecognized.clear()
        self._recognized.clear()
        self._current_idx = None
        logger.debug("Round ended, phrases cleared")

    def _current(self) -> tuple[int, Phrase]:
        if self._current_idx is None:
            raise NoActivePhrase("No current phrase index set")
        return self._current_idx, self._unrecognized[self._current_idx].phrase

    def current_original(self) -> str:
        return self._current()[1].original

    def current_translation(self) -> str:
        return self._current()[1].translation

    def check(self, answer: str) -> bool:
        expected = self._current()[1].translation
        result = utils.normalize_answer(answer) == utils.normalize_answer(expected)
        logger.log(utils.TRACE, f"Check: answer: '{answer}', expected: '{expected}', result: {result}")
        return result

    def advance(self, is_correct: bool):
        """
        Moves to the next phrase after an answer.
        Raises RoundComplete once the last unrecognized phrase has been answered correctly.
        """
        index, phrase = self._current()
        if is_correct:
            self._recognized.append(self._unrecognized.pop(index))
            if not self._unrecognized:
                self._current_idx = None
                logger.debug("All phrases recognized")
                raise RoundComplete(f"All {len(self._recognized)} phrases recognized")
            self._current_idx = index % len(self._unrecognized)
        else:
            entry = self._unrecognized[index]
            self._unrecognized[index] = RoundEntry(phrase=entry.phrase, attempts=entry.attempts + 1)
            self._current_idx = (index + 1) % len(self._unrecognized)
        logger.log(utils.TRACE, f"Advanced from '{phrase.original}' (correct: {is_correct}) "
                                f"to index {self._current_idx} of {len(self._unrecognized)}")
