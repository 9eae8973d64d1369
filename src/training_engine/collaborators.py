"""Collaborator interfaces the engine depends on, plus in-memory implementations.

The engine never talks to storage directly. Every external read goes through
one of the Protocols below so that callers can plug in their own data
sources; the in-memory versions back the CLI and the test suite.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Protocol, Sequence

from training_engine.catalog.exercises import DEFAULT_EXERCISES
from training_engine.catalog.medical import DEFAULT_COMPATIBILITY
from training_engine.models.exercise import Exercise
from training_engine.models.performance import PerformanceRecord
from training_engine.models.safety import CompatibilityEntry

logger = logging.getLogger(__name__)


class ExerciseCatalog(Protocol):
    def list_exercises(self) -> Sequence[Exercise]:
        """Return every exercise in catalog order.

        Raises:
            CatalogUnavailableError: If the catalog cannot be read.
        """
        ...


class CompatibilityLookup(Protocol):
    def lookup(
        self, exercise_id: str, conditions: Iterable[str]
    ) -> Sequence[CompatibilityEntry]:
        """Return compatibility rows for one exercise and the given conditions.

        Raises:
            CompatibilityLookupError: If the table cannot be queried.
        """
        ...


class PerformanceHistory(Protocol):
    def recent(
        self, user_id: str, exercise_id: str, limit: int
    ) -> Sequence[PerformanceRecord]:
        """Return up to *limit* records, most recent first.

        Raises:
            HistoryUnavailableError: If history cannot be read.
        """
        ...


class CoachingNotesGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        """Return free-text coaching notes for *prompt*.

        Raises:
            CoachingNotesError: On any failure of the external service.
        """
        ...


class GenerationLog(Protocol):
    def record(self, user_id: str, workout_id: str, event: Mapping[str, object]) -> None:
        ...


class InMemoryExerciseCatalog:
    """Exercise catalog backed by a tuple; defaults to the built-in catalog."""

    def __init__(self, exercises: Iterable[Exercise] | None = None) -> None:
        self._exercises = tuple(DEFAULT_EXERCISES if exercises is None else exercises)

    def list_exercises(self) -> Sequence[Exercise]:
        return self._exercises


class InMemoryCompatibilityLookup:
    def __init__(self, entries: Iterable[CompatibilityEntry] | None = None) -> None:
        self._by_exercise: dict[str, list[CompatibilityEntry]] = defaultdict(list)
        for entry in DEFAULT_COMPATIBILITY if entries is None else entries:
            self._by_exercise[entry.exercise_id].append(entry)

    def lookup(
        self, exercise_id: str, conditions: Iterable[str]
    ) -> Sequence[CompatibilityEntry]:
        wanted = set(conditions)
        return [
            entry
            for entry in self._by_exercise.get(exercise_id, ())
            if entry.medical_condition in wanted
        ]


class InMemoryPerformanceHistory:
    """History store keyed by (user id, exercise id).

    Records are kept most recent first, the order the overload calculator
    expects.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], list[PerformanceRecord]] = defaultdict(list)

    def add(self, user_id: str, record: PerformanceRecord) -> None:
        """Log a new session; it becomes the most recent record."""
        self._records[(user_id, record.exercise_id)].insert(0, record)

    def recent(
        self, user_id: str, exercise_id: str, limit: int
    ) -> Sequence[PerformanceRecord]:
        return tuple(self._records.get((user_id, exercise_id), ())[:limit])


class StaticCoachingNotesGenerator:
    """Returns a fixed text; useful offline and in tests."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


class LoggingGenerationLog:
    """Writes generation analytics to the module logger."""

    def record(self, user_id: str, workout_id: str, event: Mapping[str, object]) -> None:
        logger.info("Generated workout %s for %s: %s", workout_id, user_id, dict(event))


class InMemoryGenerationLog:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, object]]] = []

    def record(self, user_id: str, workout_id: str, event: Mapping[str, object]) -> None:
        self.events.append((user_id, workout_id, dict(event)))
