"""
Guess ranking by expected information.

Each allowed guess splits the live candidates into buckets by the pattern
it would show against them. A guess whose buckets are even carries more
information, which is measured as the Shannon entropy of the bucket sizes.
"""

import logging
import time
from multiprocessing.pool import ThreadPool
from typing import NamedTuple

import numpy as np

from .corpus import normalize
from .errors import MalformedInput, NoCandidatesRemaining
from .feedback import feedback_codes

logger = logging.getLogger(__name__)

# above this many possible patterns, bucket with np.unique instead of a dense bincount
_DENSE_PATTERN_LIMIT = 3 ** 10


class RankedGuess(NamedTuple):
    word: str
    score: float
    is_candidate: bool


def shannon_entropy(freq):
    """Entropy in bits of a vector of bucket sizes (or weights)."""
    freq = np.asarray(freq, dtype=float)
    total = freq.sum()
    if total <= 0 or np.count_nonzero(freq) <= 1:
        return 0.0
    p = freq[freq > 0] / total
    return float(-np.sum(p * np.log2(p)))


def bucket_sizes(codes, n_patterns, weights=None):
    if n_patterns <= _DENSE_PATTERN_LIMIT:
        return np.bincount(codes, weights=weights, minlength=n_patterns)
    _, inverse = np.unique(codes, return_inverse=True)
    return np.bincount(inverse.ravel(), weights=weights)


class GuessRanker:
    """
    Scores allowed guesses against a ``Dictionary``.

    workers              threads used to score guesses; results do not depend on it
    max_guesses          scan at most this many allowed guesses (None scans all)
    tolerance            scores closer than this are ties
    solution_weight      prior weight of live words outside the corpus solutions;
                         1.0 treats every live word alike
    prefer_solutions     among ties, put solution words ahead of other guesses
    candidate_threshold  below this many live words, only live words are scored
    """

    def __init__(self, workers=1, max_guesses=None, tolerance=1e-9,
                 solution_weight=1.0, prefer_solutions=False, candidate_threshold=0):
        if workers < 1:
            raise MalformedInput(f"workers must be at least 1, got {workers}")
        if max_guesses is not None and max_guesses < 1:
            raise MalformedInput(f"max_guesses must be at least 1, got {max_guesses}")
        if not 0.0 <= solution_weight <= 1.0:
            raise MalformedInput(f"solution_weight must be within [0, 1], got {solution_weight}")
        self.workers = workers
        self.max_guesses = max_guesses
        self.tolerance = tolerance
        self.solution_weight = solution_weight
        self.prefer_solutions = prefer_solutions
        self.candidate_threshold = candidate_threshold

    def _guess_pool(self, corpus, live, allowed_guesses):
        if self.candidate_threshold and len(live) < self.candidate_threshold:
            guesses = [corpus.word_at(i) for i in live]
        elif allowed_guesses is None:
            guesses = list(corpus.words)
        else:
            guesses = list(dict.fromkeys(normalize(w) for w in allowed_guesses))
        if self.max_guesses is not None:
            guesses = guesses[:self.max_guesses]
        return guesses

    def _weights(self, corpus, live):
        if self.solution_weight == 1.0 or not corpus.has_solutions:
            return None
        is_solution = corpus.solution_mask()[live]
        return np.where(is_solution, 1.0, self.solution_weight)

    def _score_chunk(self, chunk, guesses, guess_letters, answers, live, table, weights):
        n_patterns = 3 ** answers.shape[1]
        scores = []
        for gi in chunk:
            row = table.row(guesses[gi]) if table is not None else None
            if row is not None:
                codes = row[live]
            else:
                codes = feedback_codes(guess_letters[gi], answers)
            scores.append(shannon_entropy(bucket_sizes(codes, n_patterns, weights)))
        return scores

    def score(self, dictionary, guesses, live=None):
        """Entropy of each guess in ``guesses`` against the live words, in order."""
        corpus = dictionary.corpus
        if live is None:
            live = dictionary.snapshot()
        guess_letters = [corpus.encode(g) for g in guesses]
        answers = corpus.letters[live]
        weights = self._weights(corpus, live)

        args = (guesses, guess_letters, answers, live, dictionary.table, weights)
        indices = np.arange(len(guesses))
        if self.workers == 1 or len(guesses) < 2:
            return self._score_chunk(indices, *args)

        chunks = [c for c in np.array_split(indices, self.workers) if len(c)]
        with ThreadPool(len(chunks)) as pool:
            parts = pool.map(lambda chunk: self._score_chunk(chunk, *args), chunks)
        return [s for part in parts for s in part]

    def _order(self, ranked, corpus):
        def tie_key(r):
            key = (not r.is_candidate,)
            if self.prefer_solutions:
                key += (not corpus.is_solution(r.word),)
            return key + (r.word,)

        ranked = sorted(ranked, key=lambda r: (-r.score, r.word))
        out = []
        i = 0
        while i < len(ranked):
            lead = ranked[i].score
            j = i + 1
            while j < len(ranked) and lead - ranked[j].score <= self.tolerance:
                j += 1
            out.extend(sorted(ranked[i:j], key=tie_key))
            i = j
        return out

    def suggest(self, dictionary, allowed_guesses=None, top_n=5):
        """
        Best ``top_n`` next guesses, highest entropy first.

        ``allowed_guesses`` defaults to the dictionary's corpus. With a single
        word left that word is the only suggestion.
        """
        if top_n < 1:
            raise MalformedInput(f"top_n must be at least 1, got {top_n}")
        corpus = dictionary.corpus
        live = dictionary.snapshot()
        if len(live) == 0:
            raise NoCandidatesRemaining()
        if len(live) == 1:
            return [RankedGuess(corpus.word_at(live[0]), 0.0, True)]

        guesses = self._guess_pool(corpus, live, allowed_guesses)
        if not guesses:
            raise MalformedInput("no allowed guesses to rank")

        start = time.perf_counter()
        scores = self.score(dictionary, guesses, live)
        live_mask = np.zeros(len(corpus), dtype=bool)
        live_mask[live] = True

        ranked = []
        for word, score in zip(guesses, scores):
            i = corpus.index(word)
            ranked.append(RankedGuess(word, score, i is not None and bool(live_mask[i])))

        # a capped pool may hold only guesses that cannot tell the live words
        # apart; every live word splits itself off, so score those instead
        if max(scores) <= self.tolerance:
            scored = set(guesses)
            extra = [corpus.word_at(i) for i in live if corpus.word_at(i) not in scored]
            if extra:
                logger.debug("no informative guess among %d, adding %d live words",
                             len(guesses), len(extra))
                extra_scores = self.score(dictionary, extra, live)
                ranked.extend(RankedGuess(w, s, True) for w, s in zip(extra, extra_scores))

        logger.debug("scored %d guesses against %d candidates in %.3fs",
                     len(guesses), len(live), time.perf_counter() - start)
        return self._order(ranked, corpus)[:top_n]
