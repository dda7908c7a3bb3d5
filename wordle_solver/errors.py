"""Exceptions raised by the solver engine."""


class SolverError(Exception):
    """Base class for every error the engine raises."""


class MalformedInput(SolverError, ValueError):
    """Word list, feedback text or config could not be understood."""


class InvalidCharacter(MalformedInput):
    def __init__(self, word, char):
        self.word = word
        self.char = char
        super().__init__(f"{word!r} contains {char!r}, which is outside the alphabet")


class LengthMismatch(SolverError, ValueError):
    def __init__(self, expected, actual, what="word"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} has length {actual}, expected {expected}")


class NoCandidatesRemaining(SolverError, LookupError):
    """Raised when a suggestion is requested but no candidate is left."""

    def __init__(self, message="no candidate word is consistent with the feedback so far"):
        super().__init__(message)
