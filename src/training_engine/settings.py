"""Environment-variable-based settings for the external collaborators."""

from __future__ import annotations

import os

COACH_NOTES_API_KEY: str = os.environ.get("COACH_NOTES_API_KEY", "")
COACH_NOTES_MODEL: str = os.environ.get("COACH_NOTES_MODEL", "gpt-4o-mini")
COACH_NOTES_URL: str = os.environ.get(
    "COACH_NOTES_URL", "https://api.openai.com/v1/chat/completions"
)
COACH_NOTES_TIMEOUT_S: float = float(os.environ.get("COACH_NOTES_TIMEOUT_S", "8"))
ENGINE_DEFAULT_SEED: int | None = (
    int(os.environ["ENGINE_DEFAULT_SEED"]) if os.environ.get("ENGINE_DEFAULT_SEED") else None
)
