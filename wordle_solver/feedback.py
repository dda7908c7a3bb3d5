"""
Feedback matching.

A pattern is a tuple of ``Feedback`` values, one per letter. Internally the
engine mostly works on the integer form of a pattern: the symbols read as a
little-endian base-3 number (2 = exact, 1 = present, 0 = absent), so a
5-letter pattern is a code in 0..242.
"""

from collections import Counter
from enum import IntEnum

import numpy as np

from .errors import LengthMismatch, MalformedInput


class Feedback(IntEnum):
    ABSENT = 0
    PRESENT = 1
    EXACT = 2


# symbols accepted by parse_feedback
_SYMBOLS = {
    "G": Feedback.EXACT, "2": Feedback.EXACT,
    "Y": Feedback.PRESENT, "1": Feedback.PRESENT, "-": Feedback.PRESENT,
    "B": Feedback.ABSENT, "0": Feedback.ABSENT, "X": Feedback.ABSENT,
    ".": Feedback.ABSENT, "+": Feedback.ABSENT,
}
_LETTERS = {Feedback.EXACT: "G", Feedback.PRESENT: "Y", Feedback.ABSENT: "B"}


def compute_feedback(guess, answer):
    """
    Pattern shown for ``guess`` when the hidden word is ``answer``.

    Exact matches are marked first and take their letter out of the
    answer's pool; the other positions are then marked present only while
    the pool still holds that letter, so a doubled letter in the guess
    never scores twice against a single one in the answer.
    """
    guess = guess.lower()
    answer = answer.lower()
    if len(guess) != len(answer):
        raise LengthMismatch(len(answer), len(guess), what="guess")

    pat = [Feedback.ABSENT] * len(guess)
    pool = Counter()

    # Mark exact
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            pat[i] = Feedback.EXACT
        else:
            pool[a] += 1

    # Mark misplaced
    for i, g in enumerate(guess):
        if pat[i] == Feedback.ABSENT and pool[g] > 0:
            pat[i] = Feedback.PRESENT
            pool[g] -= 1

    return tuple(pat)


def encode_pattern(pattern):
    """Convert a pattern to its base-3 integer code."""
    code = 0
    base = 1
    for digit in pattern:
        code += int(digit) * base
        base *= 3
    return code


def decode_pattern(code, length):
    if not 0 <= code < 3 ** length:
        raise MalformedInput(f"pattern code {code} out of range for length {length}")
    out = []
    for _ in range(length):
        code, trit = divmod(code, 3)
        out.append(Feedback(trit))
    return tuple(out)


def parse_feedback(text):
    """
    Parse typed feedback into a pattern.

    Accepts colour letters (``GYBBY``), digits (``21001``) and the
    ``X``/``.``/``+`` (absent) and ``-`` (present) shorthands, in any case,
    with spaces ignored.
    """
    text = text.strip().upper().replace(" ", "")
    if not text:
        raise MalformedInput("feedback is empty")
    try:
        return tuple(_SYMBOLS[ch] for ch in text)
    except KeyError as e:
        raise MalformedInput(f"bad feedback symbol {e.args[0]!r} in {text!r}") from None


def format_pattern(pattern):
    return "".join(_LETTERS[Feedback(p)] for p in pattern)


def as_code(observed, length):
    """Integer code of ``observed`` (pattern, code or text) for a word length."""
    if isinstance(observed, (int, np.integer)):
        code = int(observed)
        if not 0 <= code < 3 ** length:
            raise MalformedInput(f"pattern code {code} out of range for length {length}")
        return code
    if isinstance(observed, str):
        observed = parse_feedback(observed)
    observed = tuple(observed)
    if len(observed) != length:
        raise LengthMismatch(length, len(observed), what="feedback pattern")
    try:
        return encode_pattern(Feedback(p) for p in observed)
    except ValueError:
        raise MalformedInput(f"not a feedback pattern: {observed!r}") from None


def is_consistent(candidate, guess, observed):
    """True iff guessing ``guess`` against ``candidate`` shows exactly ``observed``."""
    actual = compute_feedback(guess, candidate)
    try:
        return encode_pattern(actual) == as_code(observed, len(actual))
    except LengthMismatch:
        return False


def feedback_codes(guess, answers):
    """
    Pattern codes of one guess against many answers at once.

    ``guess`` is a vector of letter indices, ``answers`` an ``(n, length)``
    matrix of the same. Returns an int64 array of ``n`` codes, equal to
    ``encode_pattern(compute_feedback(guess, answer))`` row by row.
    """
    guess = np.asarray(guess)
    answers = np.asarray(answers)
    length = guess.shape[0]
    if answers.ndim != 2 or answers.shape[1] != length:
        raise LengthMismatch(length, answers.shape[-1], what="answer")

    powers = 3 ** np.arange(length, dtype=np.int64)
    exact = answers == guess
    codes = exact.astype(np.int64) @ (2 * powers)

    open_ = ~exact
    for i in range(length):
        same = guess == guess[i]
        # occurrences of this letter the answer has left after exact matches
        pool = ((answers == guess[i]) & open_).sum(axis=1)
        # earlier non-exact copies in the guess claim the pool first
        claimed = open_[:, :i][:, same[:i]].sum(axis=1)
        present = open_[:, i] & (pool > claimed)
        codes += present * powers[i]
    return codes
