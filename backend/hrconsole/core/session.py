"""Persisted console session (token + user profile) kept between restarts."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from hrconsole.models.auth import ConsoleSession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> ConsoleSession | None:
        if not self.path.exists():
            return None
        try:
            return ConsoleSession.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, session: ConsoleSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(session.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
