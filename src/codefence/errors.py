"""Errors raised inside the engine.  None of them ever escapes ``transform()``."""


class CodefenceError(Exception):
    """Base class for all engine errors."""
    pass


class MalformedInput(CodefenceError):
    """Raised when the input is not text at all."""
    pass


class PatternEngineFailure(CodefenceError):
    """Raised when pattern matching cannot be run safely on the input."""
    pass


class MergeCycle(CodefenceError):
    """Raised when the fragment merge does not reach a fixed point in time.

    ``fragments`` holds the list as it stood before the failing iteration.
    """
    def __init__(self, message, fragments=None):
        super().__init__(message)
        self.fragments = list(fragments or [])
