from .corpus import ALPHABET, Corpus, CorpusBuilder, WordView, load, load_file
from .dictionary import Dictionary, LetterConstraints
from .errors import (
    InvalidCharacter,
    LengthMismatch,
    MalformedInput,
    NoCandidatesRemaining,
    SolverError,
)
from .feedback import (
    Feedback,
    compute_feedback,
    decode_pattern,
    encode_pattern,
    format_pattern,
    is_consistent,
    parse_feedback,
)
from .guesser import Guesser
from .precompute import PatternTable, build_pattern_table
from .ranker import GuessRanker, RankedGuess, shannon_entropy

__version__ = "0.1.0"
