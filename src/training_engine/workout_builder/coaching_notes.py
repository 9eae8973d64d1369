"""Coaching notes — best-effort natural-language annotation of a workout.

The text comes from an external chat-completion service. Generation must
never fail or stall because of it: every call is bounded by a timeout and
falls back to a templated note.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import httpx

from training_engine import settings
from training_engine.collaborators import CoachingNotesGenerator
from training_engine.exceptions import CoachingNotesError
from training_engine.models.archetype import WorkoutArchetype
from training_engine.models.enums import COACH_NOTES_KEY_EXERCISES
from training_engine.models.profile import UserProfile
from training_engine.models.workout import WorkoutBlock

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an empathetic and encouraging personal trainer who provides "
    "brief, motivational coaching notes."
)


def build_prompt(
    archetype: WorkoutArchetype,
    profile: UserProfile,
    blocks: Sequence[WorkoutBlock],
    estimated_duration_min: int,
) -> str:
    instances = [inst for block in blocks for inst in block.exercises]
    key_exercises = ", ".join(
        inst.exercise.name for inst in instances[:COACH_NOTES_KEY_EXERCISES]
    )
    return (
        "Your client's profile (keep them anonymous, address them as \"you\"):\n\n"
        f"Primary Goal: {profile.primary_goal.value.replace('_', ' ')}\n"
        f"Fitness Level: {profile.fitness_level.label}\n"
        f"Readiness Score: {profile.readiness_score:g}/100\n"
        f"Workout Type: {archetype.name}\n"
        f"Key Exercises: {key_exercises}\n"
        f"Estimated Duration: {estimated_duration_min} minutes\n\n"
        "Write a brief, motivational \"Coach's Note\" (2-3 sentences) that "
        "acknowledges their readiness level, explains the workout's purpose and "
        "gives specific guidance for their goal. Keep it warm and actionable."
    )


def default_note(archetype: WorkoutArchetype, profile: UserProfile) -> str:
    """Note used when no generator is configured."""
    return (
        f"Today's {archetype.name} workout is designed specifically for your "
        f"{profile.primary_goal.value} goal. Focus on proper form and listen to "
        "your body throughout the session. You've got this!"
    )


def fallback_note(archetype: WorkoutArchetype) -> str:
    """Note used when the generator fails or times out."""
    return (
        f"Today's {archetype.name} workout is perfectly calibrated for your current "
        "readiness level. Remember to focus on quality over quantity - every rep is "
        "building a stronger, more resilient you. Trust the process and give it "
        "your best effort!"
    )


class HttpCoachingNotesGenerator:
    """Chat-completion client for coaching notes.

    Args:
        api_key: Bearer token; defaults to ``COACH_NOTES_API_KEY``.
        model: Model name; defaults to ``COACH_NOTES_MODEL``.
        url: Endpoint; defaults to ``COACH_NOTES_URL``.
        timeout_s: HTTP timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = settings.COACH_NOTES_API_KEY if api_key is None else api_key
        self.model = model or settings.COACH_NOTES_MODEL
        self.url = url or settings.COACH_NOTES_URL
        self.timeout_s = timeout_s or settings.COACH_NOTES_TIMEOUT_S
        self._transport = transport

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise CoachingNotesError("No API key configured for coaching notes")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
            "max_tokens": 200,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise CoachingNotesError(f"Coaching notes request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise CoachingNotesError(f"Coaching notes request failed: {e}") from e

        if response.status_code != 200:
            raise CoachingNotesError(
                f"Coaching notes service returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CoachingNotesError(f"Unexpected coaching notes response: {e}") from e

        text = str(content).strip()
        if not text:
            raise CoachingNotesError("Coaching notes service returned empty text")
        return text


class CoachingNotesStep:
    """Bounded, never-failing wrapper around a CoachingNotesGenerator."""

    def __init__(
        self,
        generator: CoachingNotesGenerator | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self.generator = generator
        self.timeout_s = timeout_s or settings.COACH_NOTES_TIMEOUT_S

    async def compose_async(
        self,
        archetype: WorkoutArchetype,
        profile: UserProfile,
        blocks: Sequence[WorkoutBlock],
        estimated_duration_min: int,
    ) -> str:
        if self.generator is None:
            return default_note(archetype, profile)

        prompt = build_prompt(archetype, profile, blocks, estimated_duration_min)
        try:
            return await asyncio.wait_for(
                self.generator.generate(prompt), timeout=self.timeout_s
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Coaching notes timed out after %.1fs, using fallback", self.timeout_s
            )
        except Exception as e:
            logger.warning("Coaching notes failed, using fallback: %s", e)
        return fallback_note(archetype)

    def compose(
        self,
        archetype: WorkoutArchetype,
        profile: UserProfile,
        blocks: Sequence[WorkoutBlock],
        estimated_duration_min: int,
    ) -> str:
        """Synchronous entry point used by TrainingEngine.generate.

        Inside a running event loop the request runs on a worker thread with
        its own loop, blocking the caller for at most the timeout. Async
        callers should await ``compose_async`` (TrainingEngine.generate_async)
        instead.
        """
        if self.generator is None:
            return default_note(archetype, profile)
        coro = self.compose_async(archetype, profile, blocks, estimated_duration_min)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        logger.debug("compose() called inside a running event loop, using a worker thread")
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="coach_notes_") as executor:
            return executor.submit(asyncio.run, coro).result()
