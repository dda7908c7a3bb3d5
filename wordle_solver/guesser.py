import logging

from rich.console import Console

from .config import load_config, ranker_from_config
from .dictionary import Dictionary
from .feedback import Feedback, compute_feedback, format_pattern

logger = logging.getLogger(__name__)


class Guesser:
    """
    One player's game: feeds each round into a ``Dictionary`` and asks the
    ranker for the next guess. ``restart_game`` starts over without
    reloading the corpus.
    """

    def __init__(self, corpus, manual=False, config=None, table=None, console=None):
        self.console = console or Console()
        self._manual = manual
        self.config = config or load_config()
        self.dictionary = Dictionary(corpus, table, solutions_only=self.config["solutions_only"])
        self.ranker = ranker_from_config(self.config)
        self._tried = []

    @property
    def tried(self):
        return list(self._tried)

    def restart_game(self):
        self.dictionary.reset()
        self._tried = []
        self.console.print("[bold green]Game restarted![/bold green]")

    def submit(self, guess, feedback):
        """Record a played guess and its feedback; returns the number of words left."""
        remaining = self.dictionary.apply_feedback(guess, feedback)
        if not self._tried or self._tried[-1] != guess.lower():
            self._tried.append(guess.lower())
        if remaining == 0:
            self.console.print("[bold red]No word in the list fits all the feedback so far.[/bold red]")
        return remaining

    def suggest(self, top_n=None):
        return self.ranker.suggest(self.dictionary, top_n=top_n or self.config["top_n"])

    def get_guess(self, last_feedback=None):
        """
        Next word to play. ``last_feedback`` is the feedback of the previous
        guess returned by this method; None only on the first call.
        Returns None once no candidate is left.
        """
        if self._tried and last_feedback is not None:
            if self.submit(self._tried[-1], last_feedback) == 0:
                return None

        if self._manual:
            guess = self.console.input("[bold magenta]Your guess[/bold magenta]: ").strip().lower()
        elif not self._tried and self.config["opener"]:
            guess = self.config["opener"].lower()
        else:
            guess = self.suggest(1)[0].word

        self._tried.append(guess)
        return guess

    def play(self, secret, max_rounds=None):
        """Play against a known ``secret``; returns the (guess, pattern) rounds."""
        rounds = []
        feedback = None
        while max_rounds is None or len(rounds) < max_rounds:
            guess = self.get_guess(feedback)
            if guess is None:
                break
            feedback = compute_feedback(guess, secret)
            rounds.append((guess, feedback))
            logger.info("%s %s", guess, format_pattern(feedback))
            if all(p == Feedback.EXACT for p in feedback):
                break
        return rounds
