"""Command-line entry point.

Usage:
    python -m training_engine request.json     # read the request from a file
    echo '{"action": "generate"}' | python -m training_engine
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from training_engine import settings
from training_engine.api import handle_request
from training_engine.engine import TrainingEngine
from training_engine.serialization.json_codec import to_json_string
from training_engine.workout_builder.coaching_notes import HttpCoachingNotesGenerator

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Adaptive training plan engine")
    parser.add_argument(
        "request", nargs="?", help="Path to a JSON request (default: read stdin)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log at DEBUG level"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.request:
            with open(args.request) as f:
                payload = json.load(f)
        else:
            payload = json.load(sys.stdin)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read request: %s", e)
        return 2

    generator = HttpCoachingNotesGenerator() if settings.COACH_NOTES_API_KEY else None
    status, body = handle_request(payload, TrainingEngine(notes_generator=generator))
    print(to_json_string(body))
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
