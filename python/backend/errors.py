"""Exception hierarchy for the puzzle engine and its services."""


class PuzzleError(Exception):
    """Base exception for every recoverable puzzle failure."""


class InvalidBoardError(PuzzleError):
    """Raised when a board snapshot is malformed."""


class PlayerNotFoundError(PuzzleError):
    """Raised when a player id is unknown to the store."""


class SessionNotFoundError(PuzzleError):
    """Raised when a session id is unknown to the store."""


class SessionClosedError(PuzzleError):
    """Raised when a completed or abandoned session is modified again."""


class PuzzleNotFoundError(PuzzleError):
    """Raised when a stored puzzle cannot be located."""


class StoreError(PuzzleError):
    """Raised when the backing store cannot be read or written."""
