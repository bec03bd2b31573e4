from __future__ import annotations

import json
import logging
from pathlib import Path

log = logging.getLogger(__name__)


class HighscoreStore:
    """Key-value highscore persistence backed by a small JSON file."""

    def __init__(self, path: str | Path, key: str = "galaxy_wars_highscore") -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("ignoring unreadable highscore file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> int:
        raw = self._read().get(self.key, 0)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            log.warning("ignoring corrupt highscore value %r", raw)
            return 0
        return max(0, value)

    def save(self, value: int) -> None:
        data = self._read()
        data[self.key] = int(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def submit(self, score: int) -> bool:
        """Store ``score`` only if it beats the stored value."""
        if score <= self.load():
            return False
        self.save(score)
        return True

    def reset(self) -> None:
        self.save(0)
