"""
The live candidate set.

``Dictionary`` wraps an immutable ``Corpus`` and narrows the words that are
still possible as feedback comes in. It only ever shrinks, until ``reset``
brings back the whole corpus for a fresh puzzle.
"""

import logging
import threading

import numpy as np

from .corpus import WordView, normalize
from .errors import LengthMismatch
from .feedback import Feedback, as_code, decode_pattern, feedback_codes

logger = logging.getLogger(__name__)


class LetterConstraints:
    """
    Per-letter marks collected from the board.

    ``mark_correct`` pins a letter to a position, ``mark_misplaced`` says the
    letter is in the word but not there, ``mark_incorrect`` says the word has
    no more copies of the letter than the correct and misplaced marks already
    account for (and none at that position).
    """

    def __init__(self):
        self._rules = {}

    def _rule(self, letter):
        letter = letter.lower()
        if letter not in self._rules:
            self._rules[letter] = {"count": 0, "capped": False, "at": set(), "not_at": set()}
        return self._rules[letter]

    def mark_correct(self, letter, pos):
        rule = self._rule(letter)
        rule["count"] += 1
        rule["at"].add(pos)
        return self

    def mark_misplaced(self, letter, pos):
        rule = self._rule(letter)
        rule["count"] += 1
        rule["not_at"].add(pos)
        return self

    def mark_incorrect(self, letter, pos):
        rule = self._rule(letter)
        rule["capped"] = True
        rule["not_at"].add(pos)
        return self

    @classmethod
    def from_feedback(cls, guess, pattern):
        constraints = cls()
        marks = {
            Feedback.EXACT: constraints.mark_correct,
            Feedback.PRESENT: constraints.mark_misplaced,
            Feedback.ABSENT: constraints.mark_incorrect,
        }
        for pos, (letter, symbol) in enumerate(zip(normalize(guess), pattern)):
            marks[Feedback(symbol)](letter, pos)
        return constraints

    @property
    def max_position(self):
        positions = [p for r in self._rules.values() for p in r["at"] | r["not_at"]]
        return max(positions, default=-1)

    def matches(self, word):
        for letter, rule in self._rules.items():
            if any(word[p] != letter for p in rule["at"]):
                return False
            if any(word[p] == letter for p in rule["not_at"]):
                return False
            n = word.count(letter)
            if rule["capped"]:
                if n != rule["count"]:
                    return False
            elif n < rule["count"]:
                return False
        return True


class Dictionary:
    """
    Remaining candidates of one puzzle.

    Mutations (``apply_feedback``, ``apply_constraints``, ``reset``) hold a
    lock so they never interleave with ``remaining_words`` or a ranker
    reading ``snapshot``.

    With ``solutions_only`` the starting set, and what ``reset`` restores,
    is the corpus solutions rather than the whole corpus.
    """

    def __init__(self, corpus, table=None, solutions_only=False):
        self.corpus = corpus
        self.table = table
        if solutions_only and corpus.has_solutions:
            self._full = np.flatnonzero(corpus.solution_mask())
        else:
            self._full = np.arange(len(corpus))
        self._lock = threading.RLock()
        self._live = self._full
        self._history = []

    def __repr__(self):
        return f"<Dictionary {self.remaining_count()}/{len(self._full)} remaining>"

    def __len__(self):
        return self.remaining_count()

    def __contains__(self, word):
        i = self.corpus.index(word)
        if i is None:
            return False
        with self._lock:
            return bool(np.any(self._live == i))

    @property
    def history(self):
        """(guess, pattern) rounds applied since the last reset."""
        with self._lock:
            return list(self._history)

    def snapshot(self):
        """Corpus indices of the live words; the returned array is never mutated."""
        with self._lock:
            return self._live

    def apply_feedback(self, guess, observed):
        """
        Keep only the words that would have shown ``observed`` for ``guess``.

        ``observed`` may be a pattern, its integer code or feedback text.
        Returns the number of words left; zero means nothing in the corpus
        fits all feedback so far, which is for the caller to report.
        """
        corpus = self.corpus
        guess = normalize(guess)
        guess_letters = corpus.encode(guess)
        code = as_code(observed, corpus.word_length)

        with self._lock:
            before = len(self._live)
            row = self.table.row(guess) if self.table is not None else None
            if row is not None:
                codes = row[self._live]
            else:
                codes = feedback_codes(guess_letters, corpus.letters[self._live])
            self._live = self._live[codes == code]
            self._history.append((guess, decode_pattern(code, corpus.word_length)))
            after = len(self._live)

        logger.debug("%s %s: %d -> %d candidates", guess, code, before, after)
        return after

    def apply_constraints(self, constraints):
        """
        Narrow the live set by per-letter marks; returns the number of words left.

        Marks are not a (guess, pattern) round, so ``history`` is unchanged.
        """
        if constraints.max_position >= self.corpus.word_length:
            raise LengthMismatch(self.corpus.word_length, constraints.max_position + 1,
                                 what="constraint position")
        words = self.corpus.words
        with self._lock:
            before = len(self._live)
            keep = [i for i in self._live if constraints.matches(words[i])]
            self._live = np.array(keep, dtype=self._full.dtype)
            after = len(self._live)

        logger.debug("letter marks: %d -> %d candidates", before, after)
        return after

    def remaining_count(self):
        with self._lock:
            return len(self._live)

    def remaining_words(self):
        return WordView(self.corpus.words, self.snapshot())

    def is_empty(self):
        return self.remaining_count() == 0

    def peek(self):
        """First remaining word, or None."""
        return self.get(0)

    def get(self, index):
        live = self.snapshot()
        if not 0 <= index < len(live):
            return None
        return self.corpus.word_at(live[index])

    def reset(self):
        with self._lock:
            self._live = self._full
            self._history = []
        logger.debug("dictionary reset to %d words", len(self._full))
