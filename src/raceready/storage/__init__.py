"""Meet storage foundations."""

from .repository import ExtractionAlreadyStoredError, MeetNotFoundError, MeetRepository, MeetRow

__all__ = ["ExtractionAlreadyStoredError", "MeetNotFoundError", "MeetRepository", "MeetRow"]
