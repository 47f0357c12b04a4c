"""Exceptions raised by the post store and service.

Not-found is never an exception here: lookups return None/False and the
routes map that to a 404.
"""


class BoardError(Exception):
    pass


class PostValidationError(BoardError, ValueError):
    """Bad, missing or oversized post field, or bad paging parameters."""


class PostConsistencyError(BoardError, RuntimeError):
    """A write succeeded but the record could not be read back."""
