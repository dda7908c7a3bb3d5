import itertools

import numpy as np
import pytest

from wordle_solver import (
    Feedback,
    LengthMismatch,
    MalformedInput,
    compute_feedback,
    decode_pattern,
    encode_pattern,
    format_pattern,
    is_consistent,
    load,
    parse_feedback,
)
from wordle_solver.feedback import as_code, feedback_codes

from .conftest import DOUBLES, WORDS

E, P, A = Feedback.EXACT, Feedback.PRESENT, Feedback.ABSENT


@pytest.mark.parametrize("guess, answer, expected", [
    ("crane", "crate", (E, E, E, A, E)),
    ("crane", "trace", (P, E, E, A, E)),
    ("trace", "crate", (P, E, E, P, E)),
    # both e's of the guess find an e in the answer
    ("speed", "erase", (P, A, P, P, A)),
    # only one e available: the first copy takes it
    ("speed", "abide", (A, A, P, A, P)),
    # exact matches consume before present is considered
    ("geese", "those", (A, A, A, E, E)),
    ("belle", "level", (A, E, P, P, P)),
    ("lemon", "level", (E, E, A, A, A)),
    ("crate", "crate", (E, E, E, E, E)),
])
def test_compute_feedback(guess, answer, expected):
    assert compute_feedback(guess, answer) == expected


def test_compute_feedback_ignores_case():
    assert compute_feedback("CRANE", "crate") == compute_feedback("crane", "CRATE")


def test_compute_feedback_length_mismatch():
    with pytest.raises(LengthMismatch):
        compute_feedback("crane", "cat")


def test_duplicate_letters_never_double_count():
    for guess, answer in itertools.product(DOUBLES, repeat=2):
        pattern = compute_feedback(guess, answer)
        for letter in set(guess):
            marked = sum(1 for g, p in zip(guess, pattern) if g == letter and p != A)
            assert marked == min(guess.count(letter), answer.count(letter))


def test_self_consistency():
    for guess, answer in itertools.product(WORDS[:20] + DOUBLES, repeat=2):
        assert is_consistent(answer, guess, compute_feedback(guess, answer))


def test_is_consistent_is_exact():
    assert is_consistent("crate", "crane", "GGGBG")
    assert not is_consistent("trace", "crane", "GGGBG")
    assert not is_consistent("crate", "crane", "GGGB")


def test_encode_decode():
    pattern = (E, E, E, A, E)
    assert encode_pattern(pattern) == 2 + 6 + 18 + 162
    assert decode_pattern(188, 5) == pattern
    assert encode_pattern((A,) * 5) == 0
    assert encode_pattern((E,) * 5) == 242
    with pytest.raises(MalformedInput):
        decode_pattern(243, 5)


def test_parse_feedback():
    assert parse_feedback("GYBBY") == (E, P, A, A, P)
    assert parse_feedback("21010") == (E, P, A, P, A)
    assert parse_feedback(" gy bx. ") == (E, P, A, A, A)
    assert parse_feedback("+-") == (A, P)
    with pytest.raises(MalformedInput):
        parse_feedback("GQ")
    with pytest.raises(MalformedInput):
        parse_feedback("  ")


def test_format_pattern():
    assert format_pattern((E, P, A)) == "GYB"
    assert format_pattern(parse_feedback("22100")) == "GGYBB"


def test_as_code_accepts_every_form():
    pattern = (E, E, E, A, E)
    assert as_code(pattern, 5) == 188
    assert as_code("GGGBG", 5) == 188
    assert as_code(188, 5) == 188
    assert as_code([2, 2, 2, 0, 2], 5) == 188
    with pytest.raises(LengthMismatch):
        as_code("GGG", 5)
    with pytest.raises(MalformedInput):
        as_code(500, 5)
    with pytest.raises(MalformedInput):
        as_code([3, 0, 0, 0, 0], 5)


def test_vectorised_codes_match_scalar():
    corpus = load(WORDS + DOUBLES)
    letters = corpus.letters
    for i, guess in enumerate(corpus):
        codes = feedback_codes(letters[i], letters)
        expected = [encode_pattern(compute_feedback(guess, answer)) for answer in corpus]
        assert codes.tolist() == expected


def test_vectorised_codes_empty_answers():
    corpus = load(WORDS)
    codes = feedback_codes(corpus.letters[0], corpus.letters[:0])
    assert codes.shape == (0,)


def test_vectorised_codes_length_mismatch():
    with pytest.raises(LengthMismatch):
        feedback_codes(np.zeros(5, dtype=np.uint8), np.zeros((3, 4), dtype=np.uint8))
