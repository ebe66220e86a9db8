import json
import logging
from pathlib import Path
from typing import Iterable, Protocol

from domain.models import Recipe


logger = logging.getLogger(__name__)


BOOKMARKS_ENTRY = "bookmarks"


class BookmarkStorage(Protocol):
    """A single named durable entry."""

    def read(self) -> str | None:
        ...

    def write(self, text: str) -> None:
        ...


class JsonFileBookmarkStorage:
    def __init__(self, directory: Path, *, name: str = BOOKMARKS_ENTRY) -> None:
        self.path = directory / f"{name}.json"

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(self.path)


class InMemoryBookmarkStorage:
    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.writes = 0

    def read(self) -> str | None:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1


class BookmarkRepository:
    """Reads and fully rewrites the bookmark collection."""

    def __init__(self, storage: BookmarkStorage) -> None:
        self.storage = storage

    def load(self) -> list[Recipe]:
        text = self.storage.read()
        if not text:
            return []
        try:
            entries = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable bookmark entry.")
            return []
        if not isinstance(entries, list):
            logger.warning("Ignoring bookmark entry that is not a list.")
            return []
        try:
            return [Recipe.from_dict(e) for e in entries]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed bookmark entry: %r", e)
            return []

    def save(self, recipes: Iterable[Recipe]) -> None:
        recipes = list(recipes)
        self.storage.write(json.dumps([r.to_dict() for r in recipes]))
        logger.debug("Persisted %d bookmarks.", len(recipes))
