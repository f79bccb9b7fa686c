"""
services/exceptions.py – exception hierarchy for the matching and catalog services.

All service-level errors derive from GameMatchError so controllers can catch
broadly or specifically depending on context.
"""


class GameMatchError(Exception):
    """Base class for all gamematch exceptions."""


class InvalidInput(GameMatchError):
    """Raised when match parameters are missing or malformed."""

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message)


class DataIntegrityError(GameMatchError):
    """
    Raised when a requirement set references a component that does not resolve.

    Attributes
    ----------
    game_id        : Game owning the broken requirement set.
    requirement_id : The requirement set that was skipped.
    """

    def __init__(self, game_id, requirement_id, reason):
        self.game_id = game_id
        self.requirement_id = requirement_id
        self.reason = reason
        super().__init__(
            f"Requirement set {requirement_id} of game {game_id} is unusable: {reason}"
        )


class CatalogError(GameMatchError):
    """Raised by catalog CRUD services; carries the HTTP status to report."""

    def __init__(self, message, status_code=400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
