"""
Entropy Wordle solver.

Run either in simulation mode
    $ python -m wordle_solver words.yaml --secret CIGAR

or interactive "enter colours yourself" mode
    $ python -m wordle_solver words.yaml

Feedback is typed as colours (GYBBG) or digits (21002).
"""

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from .config import load_config, setup_logging
from .corpus import load_file
from .errors import SolverError
from .feedback import Feedback, format_pattern, parse_feedback
from .guesser import Guesser
from .precompute import PatternTable

_COLOURS = {Feedback.EXACT: "bold white on green",
            Feedback.PRESENT: "bold black on yellow",
            Feedback.ABSENT: "bold black on white"}


def colourise(word, pattern):
    return "".join(f"[{_COLOURS[Feedback(p)]}] {ch.upper()} [/]" for ch, p in zip(word, pattern))


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="wordle-solver", description=__doc__.strip().splitlines()[0])
    ap.add_argument("words", help="JSON/YAML/text word list")
    ap.add_argument("--secret", metavar="WORD", help="play automatically vs WORD")
    ap.add_argument("--config", metavar="FILE", help="YAML settings file")
    ap.add_argument("--table", metavar="FILE", help="pattern table built by wordle_solver.precompute")
    ap.add_argument("--top", type=int, dest="top_n", help="suggestions to show per turn")
    ap.add_argument("--workers", type=int, help="threads used for ranking")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap.parse_args(argv)


def interactive(guesser, console):
    dictionary = guesser.dictionary
    turn = 1
    while True:
        remaining = dictionary.remaining_count()
        if remaining == 0:
            console.print("[bold red]No solutions satisfy the feedback you entered.[/bold red]")
            return 1
        if remaining == 1:
            console.print(f"\nSolved! The word is [bold]{dictionary.peek().upper()}[/bold].")
            return 0

        suggestions = guesser.suggest()
        console.print(f"\nTurn {turn}: {remaining} candidates left")
        for r in suggestions:
            marker = "*" if r.is_candidate else " "
            console.print(f"  {marker} {r.word.upper()}  {r.score:.3f} bits")

        guess = console.input(f"Guess ({suggestions[0].word.upper()}): ").strip() or suggestions[0].word
        if guess.lower() in ("quit", "exit"):
            return 0
        if guess.lower() == "restart":
            guesser.restart_game()
            turn = 1
            continue

        try:
            pattern = parse_feedback(console.input("Enter feedback (e.g. GYBBG or 21010): "))
            guesser.submit(guess, pattern)
        except SolverError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue
        console.print(colourise(guess, pattern))
        if all(p == Feedback.EXACT for p in pattern):
            console.print(f"\nSolved in {turn} guesses.")
            return 0
        turn += 1


def main(argv=None):
    args = parse_args(argv)
    console = Console()
    try:
        config = load_config(args.config, top_n=args.top_n, workers=args.workers)
        setup_logging("DEBUG" if args.verbose else config["log_level"])

        corpus = load_file(args.words)
        table = PatternTable.load(corpus, args.table) if args.table else None
        console.print(f"Word list loaded  ({len(corpus)} words | {len(corpus.solutions)} solutions)")
        guesser = Guesser(corpus, config=config, table=table, console=console)

        if not args.secret:
            return interactive(guesser, console)

        secret = args.secret.lower()
        if secret not in corpus:
            console.print("[red]Secret word must be in the word list.[/red]")
            return 2
        rounds = guesser.play(secret)
        for turn, (guess, pattern) in enumerate(rounds, 1):
            console.print(f"{turn}. {colourise(guess, pattern)}  {format_pattern(pattern)}")
        solved = bool(rounds) and rounds[-1][0] == secret
        console.print("Solved!" if solved else "Not solved.")
        return 0 if solved else 1
    except (SolverError, OSError) as e:
        console.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
