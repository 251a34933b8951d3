"""High-score table kept in a JSON file."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

RANKING_FILE = "ranking.json"
MAX_ENTRIES = 10
DATE_FORMAT = "%Y-%m-%d %H:%M"


@dataclass
class RankItem:
    """One entry of the high-score table."""

    player_name: str
    score: int
    date: str


def _as_str(value):
    return value if isinstance(value, str) else ""


def _as_int(value):
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _sorted(items):
    return sorted(items, key=lambda item: -item.score)


class Ranking:
    """The high-score table stored at ``path``, best score first."""

    def __init__(self, path=RANKING_FILE):
        self.path = Path(path)

    def load(self):
        """Read the table; a missing or unreadable file gives an empty one."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            return []
        try:
            data = json.loads(text)
        except ValueError:
            return []
        if not isinstance(data, list):
            return []
        items = []
        for entry in data:
            obj = entry if isinstance(entry, dict) else {}
            items.append(
                RankItem(
                    player_name=_as_str(obj.get("name")),
                    score=_as_int(obj.get("score")),
                    date=_as_str(obj.get("date")),
                )
            )
        return _sorted(items)

    def save(self, items):
        """Write ``items`` to the file in the given order."""
        data = [
            {"name": item.player_name, "score": item.score, "date": item.date}
            for item in items
        ]
        self.path.write_text(
            json.dumps(data, indent=4, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def add_score(self, player_name, score, now=None):
        """Add a result, keep the best ten and return the saved table."""
        if score <= 0:
            raise ValueError(f"score must be positive, got {score}")
        if not player_name:
            raise ValueError("player name must not be empty")
        when = now if now is not None else datetime.now()
        items = self.load()
        items.append(RankItem(player_name, score, when.strftime(DATE_FORMAT)))
        items = _sorted(items)[:MAX_ENTRIES]
        self.save(items)
        return items

    def clear(self):
        """Empty the table."""
        self.save([])