"""
Draft engine error taxonomy.

Every error carries the HTTP status the API layer answers with, so routes
never need to translate them one by one.
"""
from __future__ import annotations


class DraftError(Exception):
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DraftError):
    """Referenced league/draft/team/player is absent."""
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class EmptyPoolError(DraftError):
    """Auto-draft requested with no available players."""
    status_code = 409


class InvalidOrderError(DraftError):
    """Empty or malformed draft order."""
    status_code = 400


class UpstreamIOError(DraftError):
    """Persistence call failed; not interpreted further."""
    status_code = 502


class DuplicatePickError(DraftError):
    status_code = 409


class OutOfTurnError(DraftError):
    status_code = 409


class UserTurnError(DraftError):
    """Auto-pick asked for while the human team is on the clock."""
    status_code = 409


class DraftCompletedError(DraftError):
    status_code = 409


class ConflictError(DraftError):
    status_code = 409


class InvalidStatusError(DraftError):
    """Status outside setup / in_progress / completed."""
    status_code = 400
