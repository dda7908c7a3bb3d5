"""
Word lists.

A corpus is assembled once through ``CorpusBuilder`` (or the ``load`` helpers)
and never changes afterwards. Besides the ordered words it keeps a
``uint8`` matrix of letter indices, one row per word, which the matcher and
the ranker use for vectorised feedback computation.
"""

import logging
import string
from collections.abc import Mapping
from pathlib import Path

import numpy as np
import yaml

from .errors import InvalidCharacter, LengthMismatch, MalformedInput

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase

# keys accepted for the two lists when the input is a mapping
WORD_KEYS = ("words", "guesses", "vocab")
SOLUTION_KEYS = ("solutions", "answers")


def normalize(word):
    return word.strip().lower()


class WordView:
    """Lazy, restartable view over a subset of a word tuple."""

    def __init__(self, words, indices=None):
        self._words = words
        self._indices = indices

    def __iter__(self):
        if self._indices is None:
            yield from self._words
        else:
            for i in self._indices:
                yield self._words[i]

    def __len__(self):
        if self._indices is None:
            return len(self._words)
        return len(self._indices)

    def __getitem__(self, i):
        if self._indices is None:
            return self._words[i]
        return self._words[self._indices[i]]

    def __contains__(self, word):
        return any(w == word for w in self)

    def __repr__(self):
        return f"<WordView of {len(self)} words>"


class Corpus:
    """Immutable, non-empty collection of same-length words."""

    def __init__(self, words, solutions=(), alphabet=ALPHABET):
        if not words:
            raise MalformedInput("word list is empty")
        self._words = tuple(words)
        self._index = {w: i for i, w in enumerate(self._words)}
        self._solutions = frozenset(solutions)
        self.alphabet = alphabet
        self._letter_idx = {ch: i for i, ch in enumerate(alphabet)}
        self.word_length = len(self._words[0])

        self._letters = np.array(
            [[self._letter_idx[ch] for ch in w] for w in self._words],
            dtype=np.uint8,
        )
        self._letters.setflags(write=False)

    # -- sized / container / iterable ---------------------------------------

    def __len__(self):
        return len(self._words)

    def __contains__(self, word):
        return isinstance(word, str) and normalize(word) in self._index

    def __iter__(self):
        return iter(self._words)

    def __repr__(self):
        return f"<Corpus {len(self)} words of length {self.word_length}, {len(self._solutions)} solutions>"

    def length(self):
        return len(self)

    def contains(self, word):
        return word in self

    def iterate(self):
        return WordView(self._words)

    # -- lookups -------------------------------------------------------------

    @property
    def words(self):
        return self._words

    @property
    def letters(self):
        """Read-only ``(len(self), word_length)`` matrix of letter indices."""
        return self._letters

    @property
    def solutions(self):
        return self._solutions

    @property
    def has_solutions(self):
        return bool(self._solutions)

    def is_solution(self, word):
        return normalize(word) in self._solutions

    def index(self, word):
        """Position of ``word`` in the corpus, or ``None``."""
        return self._index.get(normalize(word))

    def word_at(self, i):
        return self._words[i]

    def solution_mask(self):
        """Boolean array, True where the word is in the solutions subset."""
        return np.array([w in self._solutions for w in self._words], dtype=bool)

    def encode(self, word):
        """Letter indices of an arbitrary word, checked against this corpus."""
        word = normalize(word)
        if len(word) != self.word_length:
            raise LengthMismatch(self.word_length, len(word))
        try:
            return np.array([self._letter_idx[ch] for ch in word], dtype=np.uint8)
        except KeyError as e:
            raise InvalidCharacter(word, e.args[0]) from None


class CorpusBuilder:
    """Collects words one at a time, then freezes them into a ``Corpus``."""

    def __init__(self, alphabet=ALPHABET):
        self.alphabet = alphabet
        self._allowed = frozenset(alphabet)
        self._words = {}          # dict keeps insertion order and dedups
        self._solutions = {}
        self._length = None

    def _check(self, word):
        if not isinstance(word, str):
            raise MalformedInput(f"expected a string, got {word!r}")
        word = normalize(word)
        if not word:
            raise MalformedInput("word list contains an empty entry")
        for ch in word:
            if ch not in self._allowed:
                raise InvalidCharacter(word, ch)
        if self._length is None:
            self._length = len(word)
        elif len(word) != self._length:
            raise MalformedInput(
                f"{word!r} has length {len(word)}, other words have length {self._length}"
            )
        return word

    def add(self, word):
        self._words[self._check(word)] = None
        return self

    def add_solution(self, word):
        """Add ``word`` to the corpus and mark it as a possible answer."""
        self._solutions[self._check(word)] = None
        return self

    def __len__(self):
        return len(self._words.keys() | self._solutions.keys())

    def build(self):
        words = list(self._words)
        words.extend(w for w in self._solutions if w not in self._words)
        if not words:
            raise MalformedInput("word list is empty")
        corpus = Corpus(words, self._solutions, self.alphabet)
        logger.debug("built %r", corpus)
        return corpus


def _pick(raw, keys):
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def load(raw, alphabet=ALPHABET):
    """
    Build a corpus from a decoded word list.

    ``raw`` is either a flat list of words, or a mapping with the words
    under ``words`` (or ``guesses``/``vocab``) and an optional ``solutions``
    (or ``answers``) list naming the words that can be the actual answer.
    """
    builder = CorpusBuilder(alphabet)
    if isinstance(raw, Mapping):
        words = _pick(raw, WORD_KEYS)
        solutions = _pick(raw, SOLUTION_KEYS)
        if words is None and solutions is None:
            raise MalformedInput(
                f"mapping needs one of {WORD_KEYS + SOLUTION_KEYS}, got {sorted(raw)}"
            )
    elif isinstance(raw, (list, tuple)):
        words, solutions = raw, None
    else:
        raise MalformedInput(f"expected a list or mapping of words, got {type(raw).__name__}")

    for w in words or ():
        builder.add(w)
    for w in solutions or ():
        builder.add_solution(w)
    return builder.build()


def load_file(path, alphabet=ALPHABET):
    """Load a corpus from a JSON, YAML or one-word-per-line text file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.load(f, Loader=yaml.FullLoader)
        except yaml.YAMLError as e:
            raise MalformedInput(f"{path}: {e}") from e

    # a plain word-per-line file parses as one scalar string
    if isinstance(raw, str):
        raw = raw.split()
    if raw is None:
        raise MalformedInput(f"{path}: word list is empty")

    corpus = load(raw, alphabet)
    logger.info("loaded %d words (%d solutions) from %s", len(corpus), len(corpus.solutions), path)
    return corpus
