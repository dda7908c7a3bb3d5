import pytest

from wordle_solver import Feedback, Guesser, compute_feedback, load
from wordle_solver.config import load_config

from .conftest import WORDS


@pytest.mark.parametrize("secret", ["cigar", "crate", "mimic", "sissy", "pound"])
def test_play_solves(corpus, quiet_console, secret):
    guesser = Guesser(corpus, console=quiet_console)
    rounds = guesser.play(secret)
    guess, pattern = rounds[-1]
    assert guess == secret
    assert all(p == Feedback.EXACT for p in pattern)
    assert len(rounds) <= 6
    assert guesser.tried == [g for g, _ in rounds]


def test_opener_is_played_first(corpus, quiet_console):
    guesser = Guesser(corpus, config=load_config(opener="SLATE"), console=quiet_console)
    rounds = guesser.play("model")
    assert rounds[0][0] == "slate"
    assert rounds[-1][0] == "model"


def test_get_guess_follows_feedback(corpus, quiet_console):
    guesser = Guesser(corpus, console=quiet_console)
    first = guesser.get_guess()
    second = guesser.get_guess(compute_feedback(first, "heath"))
    assert guesser.dictionary.history[0][0] == first
    assert "heath" in guesser.dictionary
    assert guesser.dictionary.remaining_count() < len(WORDS)
    assert guesser.tried == [first, second]


def test_unsolvable_feedback(small_corpus, quiet_console):
    guesser = Guesser(small_corpus, config=load_config(opener="crane"), console=quiet_console)
    assert guesser.get_guess() == "crane"
    assert guesser.get_guess("BBBBB") is None
    assert "No word" in quiet_console.file.getvalue()


def test_secret_outside_corpus_stops(small_corpus, quiet_console):
    rounds = Guesser(small_corpus, console=quiet_console).play("slate")
    assert rounds
    assert rounds[-1][0] != "slate"


def test_submit_and_suggest(corpus, quiet_console):
    guesser = Guesser(corpus, console=quiet_console)
    left = guesser.submit("CRANE", compute_feedback("crane", "crate"))
    assert left == guesser.dictionary.remaining_count()
    assert guesser.tried == ["crane"]
    suggestions = guesser.suggest()
    assert 1 <= len(suggestions) <= 5


def test_restart_game(corpus, quiet_console):
    guesser = Guesser(corpus, console=quiet_console)
    guesser.play("awake")
    guesser.restart_game()
    assert guesser.tried == []
    assert guesser.dictionary.remaining_count() == len(WORDS)
    assert "Game restarted" in quiet_console.file.getvalue()


def test_manual_mode(corpus, quiet_console, monkeypatch):
    monkeypatch.setattr(quiet_console, "input", lambda prompt="": " Crane ")
    guesser = Guesser(corpus, manual=True, console=quiet_console)
    assert guesser.get_guess() == "crane"
    assert guesser.get_guess("GGGBG") == "crane"
    assert guesser.dictionary.remaining_count() == 1


def test_capped_guess_pool_still_reaches_the_answer(quiet_console):
    corpus = load(["aaaaa", "bbbbb", "ccccc", "ddddd"])
    guesser = Guesser(corpus, config=load_config(max_guesses=1), console=quiet_console)
    rounds = guesser.play("ccccc", max_rounds=8)
    assert [g for g, _ in rounds] == ["aaaaa", "bbbbb", "ccccc"]
