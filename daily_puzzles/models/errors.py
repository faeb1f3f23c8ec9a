"""
Puzzle Source Errors

Exceptions raised while fetching or validating remote puzzle content.
"""


class PuzzleSourceError(Exception):
    """A puzzle could not be fetched from its remote source."""


class MalformedPuzzleError(PuzzleSourceError):
    """Fetched puzzle data failed shape validation and must not be adopted."""
