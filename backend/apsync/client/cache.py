"""
AP Exam Sync: Client Cache and Local Mirror
============================================

What:  The client's in-memory copy of server data (`AppData`) and the
       on-disk mirror that survives restarts (`LocalMirror`).
How:   The mirror is a key/value store of JSON files, one per key, in the
       client cache directory. Two keys are used:

           apExamAppData  → the AppData snapshot
           currentUser    → the last logged-in user

       The cache holds plain dicts rather than server models so that fields
       the client does not know about survive a round trip.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os
from pydantic import Field

from apsync.models.document import CamelModel

logger = logging.getLogger(__name__)

APP_DATA_KEY = "apExamAppData"
CURRENT_USER_KEY = "currentUser"


def _default_analytics() -> Dict[str, Any]:
    return {"sessions": []}


class AppData(CamelModel):
    """
    Client-side cache of the GET /api/data payload.

    Serialized with camelCase keys (`communityNotes`) to match the server.
    """
    courses: List[Dict[str, Any]] = Field(default_factory=list)
    community_notes: List[Dict[str, Any]] = Field(default_factory=list)
    users: List[Dict[str, Any]] = Field(default_factory=list)
    analytics: Dict[str, Any] = Field(default_factory=_default_analytics)

    def find_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        return next((n for n in self.community_notes if n.get("id") == note_id), None)

    def replace_note(self, note: Dict[str, Any]) -> bool:
        """Swap in `note` for the cached note with the same id; False if absent."""
        for i, cached in enumerate(self.community_notes):
            if cached.get("id") == note.get("id"):
                self.community_notes[i] = note
                return True
        return False

    def replace_course(self, course: Dict[str, Any]) -> bool:
        """Swap in `course` for the cached course with the same id; False if absent."""
        for i, cached in enumerate(self.courses):
            if cached.get("id") == course.get("id"):
                self.courses[i] = course
                return True
        return False


class LocalMirror:
    """
    JSON files keyed by name under one directory.

    Attributes:
        directory: Where `<key>.json` files are kept (created on first write)
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def get_item(self, key: str) -> Optional[Any]:
        """
        Read the value stored under `key`.

        Returns None when nothing is stored. A file that is not valid JSON is
        logged and treated as empty.
        """
        path = self._path(key)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt mirror entry %s: %s", path, str(e))
            return None

    async def set_item(self, key: str, value: Any) -> None:
        """Store `value` (anything JSON-serializable) under `key`."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(value, ensure_ascii=False))
        await aiofiles.os.replace(tmp_path, path)

    async def remove_item(self, key: str) -> None:
        path = self._path(key)
        if await aiofiles.os.path.exists(path):
            await aiofiles.os.remove(path)
