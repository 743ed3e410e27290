"""Load a release event payload."""

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from .exceptions import InvalidReleaseEventError
from .models import ReleaseEvent

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_release_event(payload: object) -> ReleaseEvent:
    """Parse a decoded release event payload."""
    if not isinstance(payload, dict) or not isinstance(payload.get("release"), dict):
        raise InvalidReleaseEventError("Event payload does not contain a release")
    try:
        return ReleaseEvent.from_payload(payload)
    except (KeyError, ValidationError) as exc:
        raise InvalidReleaseEventError(f"Malformed release event payload: {exc}") from exc


def load_release_event(event_path: Path) -> ReleaseEvent:
    """Load a release event from a JSON file, such as the one GitHub Actions writes to GITHUB_EVENT_PATH."""
    try:
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError as exc:
        raise InvalidReleaseEventError(f"Event payload not found: {event_path}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidReleaseEventError(f"Event payload is not valid JSON: {exc}") from exc

    event = parse_release_event(payload)
    logger.debug("Loaded release event", action=event.action, tag_name=event.release.tag_name, event_path=str(event_path))
    return event
