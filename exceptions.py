class TableTallyError(Exception):
    """Base exception for bet-tracking errors."""

    pass


class InvalidGameStateError(TableTallyError):
    """Raised when game state is internally inconsistent."""

    pass


class InvalidActionError(TableTallyError):
    """Raised when an action cannot be interpreted at all."""

    pass


class PlayerNotFoundError(TableTallyError):
    """Raised when a player id is not seated at the table."""

    pass
