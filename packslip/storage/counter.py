"""Slip numbering.

Slip numbers keep increasing across runs, so the counter lives in a small
JSON file. The store is handed to whoever issues numbers; tests use the
in-memory variant.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

COUNTER_KEY = "slip_count"


class SlipCounterStore(ABC):
    @abstractmethod
    def current(self) -> int:
        """Last issued slip number, 0 when none has been issued."""
        ...

    @abstractmethod
    def next_number(self) -> int:
        """Increment the counter and return the new slip number."""
        ...


class InMemoryCounterStore(SlipCounterStore):
    def __init__(self, start: int = 0) -> None:
        self._count = start

    def current(self) -> int:
        return self._count

    def next_number(self) -> int:
        self._count += 1
        return self._count


class JsonFileCounterStore(SlipCounterStore):
    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def current(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError):
            logger.exception("Unreadable slip counter at %s, starting over", self.path)
            return 0

        value = data.get(COUNTER_KEY) if isinstance(data, dict) else None
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            logger.warning("Invalid slip counter value %r in %s, starting over", value, self.path)
            return 0

    def next_number(self) -> int:
        next_count = self.current() + 1
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({COUNTER_KEY: next_count}), encoding="utf-8")
        except OSError:
            logger.exception("Failed to persist slip counter at %s", self.path)
            return 1
        logger.debug("Issued slip number %d", next_count)
        return next_count
