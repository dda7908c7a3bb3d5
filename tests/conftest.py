import io

import pytest
from rich.console import Console

from wordle_solver import Dictionary, load

WORDS = [
    "cigar", "rebut", "sissy", "humph", "awake", "blush", "focal", "evade",
    "naval", "serve", "heath", "dwarf", "model", "karma", "stink", "grade",
    "quiet", "bench", "abate", "feign", "major", "death", "fresh", "crust",
    "stool", "colon", "abase", "marry", "react", "batty", "pride", "floss",
    "helix", "croak", "staff", "paper", "unfed", "whelp", "trawl", "outdo",
    "adobe", "crazy", "sower", "repay", "digit", "crate", "cluck", "spike",
    "mimic", "pound",
]

# words with repeated letters, for the duplicate handling cases
DOUBLES = ["speed", "erase", "geese", "those", "abide", "llama", "eerie", "level", "belle", "lemon"]


@pytest.fixture
def corpus():
    return load(WORDS)


@pytest.fixture
def dictionary(corpus):
    return Dictionary(corpus)


@pytest.fixture
def small_corpus():
    return load(["CRANE", "TRACE", "CRATE"])


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO())


@pytest.fixture
def words_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text("[" + ", ".join(f'"{w}"' for w in WORDS) + "]")
    return path
