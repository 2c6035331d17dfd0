"""
Rejections raised by the scoreboard store.

None of these are faults: each one means a precondition was not met and the
state was left exactly as it was.
"""


class ScoreboardError(Exception):
    """Base class for rejected scoreboard actions."""

    message = "Action rejected."

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class RosterFullError(ScoreboardError):
    """Raised when a player is added to a table that is already full."""

    message = "The table is full."


class NoPlayersError(ScoreboardError):
    """Raised when a game is started without any players."""

    message = "At least one player is needed to start."


class NothingToUndoError(ScoreboardError):
    """Raised when undo is requested with an empty history."""

    message = "Nothing left to undo."


class StateFormatError(ScoreboardError):
    """Raised when a persisted state blob cannot be read back."""

    message = "Saved state is malformed."
