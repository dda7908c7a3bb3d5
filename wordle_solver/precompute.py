# precompute.py
"""
Pre-compute the feedback table of a corpus.

pattern_matrix[i, j] is the pattern code shown when guessing corpus word i
while the answer is corpus word j. Building it costs len(corpus)**2 feedback
computations, so it is worth saving next to the word list:

    $ python -m wordle_solver.precompute words.yaml pattern_data.npz
"""

import argparse
import logging

import numpy as np

from .config import setup_logging
from .corpus import load_file
from .errors import MalformedInput
from .feedback import feedback_codes

logger = logging.getLogger(__name__)


def _code_dtype(word_length):
    n_patterns = 3 ** word_length
    if n_patterns <= 256:
        return np.uint8
    if n_patterns <= 65536:
        return np.uint16
    return np.int64


class PatternTable:
    def __init__(self, corpus, matrix):
        n = len(corpus)
        if matrix.shape != (n, n):
            raise MalformedInput(f"pattern matrix has shape {matrix.shape}, expected {(n, n)}")
        self.corpus = corpus
        self.matrix = matrix

    def row(self, word):
        """Codes of ``word`` against every corpus word, or None if it is not in the corpus."""
        i = self.corpus.index(word)
        if i is None:
            return None
        return self.matrix[i]

    def save(self, path):
        np.savez(path,
                 words=np.array(self.corpus.words),
                 pattern_matrix=self.matrix)
        logger.info("saved %d x %d pattern matrix to %s", *self.matrix.shape, path)

    @classmethod
    def load(cls, corpus, path):
        data = np.load(path, allow_pickle=False)
        words = [str(w) for w in data["words"]]
        if words != list(corpus.words):
            raise MalformedInput(f"{path} was built for a different word list")
        return cls(corpus, data["pattern_matrix"])


def build_pattern_table(corpus):
    n = len(corpus)
    logger.info("building pattern matrix for %d words", n)
    letters = corpus.letters
    matrix = np.empty((n, n), dtype=_code_dtype(corpus.word_length))
    for i in range(n):
        matrix[i] = feedback_codes(letters[i], letters)
        if i and i % 1000 == 0:
            logger.debug("  %5d/%d rows done", i, n)
    return PatternTable(corpus, matrix)


def main(argv=None):
    ap = argparse.ArgumentParser(description="pre-compute the feedback table of a word list")
    ap.add_argument("words", help="JSON/YAML/text word list")
    ap.add_argument("output", help="where to write the .npz table")
    args = ap.parse_args(argv)

    setup_logging("INFO")

    corpus = load_file(args.words)
    build_pattern_table(corpus).save(args.output)


if __name__ == "__main__":
    main()
