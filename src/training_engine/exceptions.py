"""Custom exception hierarchy for the training engine."""

from __future__ import annotations


class TrainingEngineError(Exception):
    """Base exception for all training_engine errors."""


class CatalogUnavailableError(TrainingEngineError):
    """The exercise or archetype catalog could not be read."""


class HistoryUnavailableError(TrainingEngineError):
    """Performance history could not be read for a user/exercise."""


class CompatibilityLookupError(TrainingEngineError):
    """The medical-compatibility table could not be queried."""


class CoachingNotesError(TrainingEngineError):
    """The external coaching-notes generator failed or returned nothing usable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidRequestError(TrainingEngineError):
    """A request payload violated the interface contract (surfaced as HTTP 400)."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message)
        self.details = details


class StaleWorkoutError(TrainingEngineError):
    """An adapt call was made against an out-of-date workout version."""

    def __init__(self, expected_version: int, actual_version: int) -> None:
        super().__init__(
            f"Workout is at version {actual_version}, expected {expected_version}"
        )
        self.expected_version = expected_version
        self.actual_version = actual_version
