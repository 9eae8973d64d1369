"""Tests for coaching notes: the HTTP generator and the never-failing step."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from training_engine.catalog.archetypes import DEFAULT_ARCHETYPES
from training_engine.collaborators import StaticCoachingNotesGenerator
from training_engine.exceptions import CoachingNotesError
from training_engine.models.profile import UserProfile
from training_engine.models.workout import WorkoutBlock
from training_engine.workout_builder.coaching_notes import (
    CoachingNotesStep,
    HttpCoachingNotesGenerator,
    build_prompt,
    fallback_note,
)

HYPERTROPHY = DEFAULT_ARCHETYPES[0]
URL = "https://notes.test/v1/chat/completions"


def _completion(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def _generator(handler) -> HttpCoachingNotesGenerator:
    return HttpCoachingNotesGenerator(
        api_key="test-key", model="test-model", url=URL, transport=httpx.MockTransport(handler)
    )


class _SlowGenerator:
    async def generate(self, prompt: str) -> str:
        await asyncio.sleep(5)
        return "too late"


class _BrokenGenerator:
    async def generate(self, prompt: str) -> str:
        raise CoachingNotesError("service down", status_code=503)


class TestHttpCoachingNotesGenerator:
    def test_success(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("  Great work today!  "))

        text = asyncio.run(_generator(handler).generate("prompt"))
        assert text == "Great work today!"
        assert seen["auth"] == "Bearer test-key"
        assert seen["body"]["model"] == "test-model"
        assert seen["body"]["messages"][1] == {"role": "user", "content": "prompt"}

    def test_error_status(self) -> None:
        gen = _generator(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(CoachingNotesError) as exc_info:
            asyncio.run(gen.generate("prompt"))
        assert exc_info.value.status_code == 500

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(CoachingNotesError, match="timed out"):
            asyncio.run(_generator(handler).generate("prompt"))

    def test_malformed_body(self) -> None:
        gen = _generator(lambda request: httpx.Response(200, json={"choices": []}))
        with pytest.raises(CoachingNotesError):
            asyncio.run(gen.generate("prompt"))

    def test_empty_text(self) -> None:
        gen = _generator(lambda request: httpx.Response(200, json=_completion("   ")))
        with pytest.raises(CoachingNotesError, match="empty"):
            asyncio.run(gen.generate("prompt"))

    def test_missing_key(self) -> None:
        gen = HttpCoachingNotesGenerator(api_key="", url=URL)
        with pytest.raises(CoachingNotesError, match="API key"):
            asyncio.run(gen.generate("prompt"))


class TestCoachingNotesStep:
    def test_default_note_without_generator(self, beginner_profile: UserProfile) -> None:
        note = CoachingNotesStep().compose(HYPERTROPHY, beginner_profile, (), 30)
        assert note.startswith("Today's Hypertrophy Builder workout")
        assert "build_muscle goal" in note

    def test_generated_note(self, beginner_profile: UserProfile) -> None:
        generator = StaticCoachingNotesGenerator("Push hard, rest well.")
        note = CoachingNotesStep(generator).compose(HYPERTROPHY, beginner_profile, (), 30)
        assert note == "Push hard, rest well."
        assert "Readiness Score: 75/100" in generator.prompts[0]

    def test_timeout_falls_back(self, beginner_profile: UserProfile) -> None:
        step = CoachingNotesStep(_SlowGenerator(), timeout_s=0.05)
        note = step.compose(HYPERTROPHY, beginner_profile, (), 30)
        assert note == fallback_note(HYPERTROPHY)

    def test_failure_falls_back(self, beginner_profile: UserProfile) -> None:
        step = CoachingNotesStep(_BrokenGenerator())
        assert step.compose(HYPERTROPHY, beginner_profile, (), 30) == fallback_note(HYPERTROPHY)

    def test_http_failure_falls_back(self, beginner_profile: UserProfile) -> None:
        step = CoachingNotesStep(_generator(lambda request: httpx.Response(429)))
        assert step.compose(HYPERTROPHY, beginner_profile, (), 30) == fallback_note(HYPERTROPHY)

    def test_inside_running_loop(self, beginner_profile: UserProfile) -> None:
        step = CoachingNotesStep(StaticCoachingNotesGenerator("hello"))

        async def run() -> tuple[str, str]:
            sync_note = step.compose(HYPERTROPHY, beginner_profile, (), 30)
            async_note = await step.compose_async(HYPERTROPHY, beginner_profile, (), 30)
            return sync_note, async_note

        sync_note, async_note = asyncio.run(run())
        assert sync_note == "hello"
        assert async_note == "hello"

    def test_timeout_inside_running_loop(self, beginner_profile: UserProfile) -> None:
        step = CoachingNotesStep(_SlowGenerator(), timeout_s=0.05)

        async def run() -> str:
            return step.compose(HYPERTROPHY, beginner_profile, (), 30)

        assert asyncio.run(run()) == fallback_note(HYPERTROPHY)


def test_prompt_lists_first_three_exercises(make_instance, beginner_profile: UserProfile) -> None:
    block = WorkoutBlock(
        "b",
        1,
        tuple(make_instance(i) for i in ("push_ups", "squat", "plank", "lunges")),
    )
    prompt = build_prompt(HYPERTROPHY, beginner_profile, [block], 30)
    assert "Key Exercises: Push-ups, Bodyweight Squats, Plank Hold\n" in prompt
    assert "Primary Goal: build muscle" in prompt
    assert "Estimated Duration: 30 minutes" in prompt
