"""
Table engine exceptions.

Every error is raised synchronously to the caller of the failing operation.
A failed operation leaves the table unchanged.
"""

from typing import Optional


class TableError(Exception):
    """Base class for all table engine errors."""
    pass


class InvalidRoundError(TableError):
    """Unknown round name, round started out of sequence, or street dealt out of order."""
    pass


class NotCurrentActorError(TableError):
    """The seat is unknown or it is not its turn to act."""
    pass


class IneligibleActorError(TableError):
    """The seat has folded or is all-in and cannot act."""
    pass


class UnknownActionError(TableError):
    """The action is not one of the recognised action types."""
    pass


class IllegalActionError(TableError):
    """A recognised action that is not legal in the current state."""
    pass


class IllegalCheckError(IllegalActionError):
    """Check attempted while chips are owed."""
    pass


class IllegalRaiseError(IllegalActionError):
    """Bet or raise below the minimum legal total, or not reopened."""

    def __init__(self, message: str, minimum_total: Optional[int] = None):
        super().__init__(message)
        self.minimum_total = minimum_total


class DeckExhaustedError(TableError):
    """Not enough cards remain in the deck."""
    pass


class ConfigurationError(TableError, ValueError):
    """Invalid table configuration."""
    pass
