"""
AP Exam Sync: Sync Client
==========================

What:  Async helpers that call the sync server and keep a local cache of
       its data in step with each successful response.
How:   One httpx.AsyncClient per SyncClient. Every helper issues a single
       request; on a 2xx response it updates `app_data` and writes it to the
       LocalMirror. Non-2xx responses raise RemoteError.
Who:   Used by front-end tooling and scripts that work against the server.

Usage:
    async with SyncClient() as client:
        await client.load_remote_data()
        user = await client.login_remote("a@b.com", "x")
        await client.create_remote_note("c1", "Limits", "...", user["id"])

Offline behaviour:
    Only `load_remote_data()` recovers from failures: it falls back to the
    last mirrored snapshot. Every other helper lets the error propagate.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from apsync.client.cache import APP_DATA_KEY, CURRENT_USER_KEY, AppData, LocalMirror
from apsync.client.config import ClientSettings
from apsync.exceptions import RemoteError

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    """URL-encode a single path segment (slashes included)."""
    return quote(str(value), safe="")


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) fields so they are omitted from the JSON body."""
    return {key: value for key, value in payload.items() if value is not None}


def _error_from_response(response: httpx.Response, fallback: str) -> RemoteError:
    """
    Build a RemoteError from a non-2xx response.

    Message precedence: the body's `error` field, then `fallback` when the
    body is JSON without one, then "unknown" when the body is not JSON.
    """
    try:
        body = response.json()
    except ValueError:
        message = "unknown"
    else:
        error = body.get("error") if isinstance(body, dict) else None
        message = error or fallback

    return RemoteError(
        message,
        status_code=response.status_code,
        context={"url": str(response.request.url), "method": response.request.method},
    )


class SyncClient:
    """
    Client for the sync server with a mirrored local cache.

    Attributes:
        base_url:      Server root, e.g. http://localhost:3000
        app_data:      Cached courses, community notes, users and analytics
        current_user:  Last user returned by `login_remote()`, or None
        mirror:        LocalMirror persisting app_data and current_user
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        mirror: Optional[LocalMirror] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or ClientSettings()
        self.base_url = (base_url or settings.server_url).rstrip("/")
        self.mirror = mirror or LocalMirror(settings.cache_dir)
        self.app_data = AppData()
        self.current_user: Optional[Dict[str, Any]] = None
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
        )

    async def __aenter__(self) -> "SyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        json: Optional[Any] = None,
    ) -> Any:
        response = await self._http.request(method, path, json=json)
        if not response.is_success:
            error = _error_from_response(response, fallback)
            logger.warning(
                "%s %s failed with %d: %s", method, path, response.status_code, error.message
            )
            raise error
        return response.json()

    async def _save_app_data(self) -> None:
        await self.mirror.set_item(APP_DATA_KEY, self.app_data.model_dump(by_alias=True))

    # ── Data ──────────────────────────────────────────────────────────────

    async def load_remote_data(self) -> AppData:
        """
        Replace the cache with the server's full data set.

        On any failure the error is logged and the last mirrored snapshot
        (if any) is restored instead.
        """
        try:
            response = await self._http.get("/api/data")
            if not response.is_success:
                raise RemoteError("Failed to fetch data", status_code=response.status_code)
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError("Data payload is not a JSON object")
            self.app_data = AppData(
                courses=data.get("courses") or [],
                community_notes=data.get("communityNotes") or [],
                users=data.get("users") or [],
                analytics=data.get("analytics") or {"sessions": []},
            )
            await self._save_app_data()
        except (httpx.HTTPError, RemoteError, ValueError) as e:
            logger.error("load_remote_data error: %s", str(e))
            saved = await self.mirror.get_item(APP_DATA_KEY)
            if saved:
                self.app_data = AppData.model_validate(saved)
        return self.app_data

    # ── Community Notes ───────────────────────────────────────────────────

    async def create_remote_note(
        self, course_id: str, title: str, content: str, author_id: str
    ) -> Dict[str, Any]:
        payload = _compact(
            {"courseId": course_id, "title": title, "content": content, "authorId": author_id}
        )
        note = await self._request("POST", "/api/notes", "Failed to create note", json=payload)
        self.app_data.community_notes.append(note)
        await self._save_app_data()
        return note

    async def edit_remote_note(
        self,
        note_id: str,
        content: Optional[str] = None,
        title: Optional[str] = None,
        author_id: Optional[str] = None,
        force_dev: bool = False,
    ) -> Dict[str, Any]:
        payload = _compact(
            {"content": content, "title": title, "authorId": author_id, "forceDev": force_dev}
        )
        note = await self._request(
            "PUT", f"/api/notes/{_segment(note_id)}", "Failed to edit note", json=payload
        )
        self.app_data.replace_note(note)
        await self._save_app_data()
        return note

    async def delete_remote_note(
        self,
        note_id: str,
        author_id: Optional[str] = None,
        force_dev: bool = False,
    ) -> bool:
        payload = _compact({"authorId": author_id, "forceDev": force_dev})
        await self._request(
            "DELETE", f"/api/notes/{_segment(note_id)}", "Failed to delete note", json=payload
        )
        self.app_data.community_notes = [
            n for n in self.app_data.community_notes if n.get("id") != note_id
        ]
        await self._save_app_data()
        return True

    async def rate_remote_note(self, note_id: str, user_id: str, rating: float) -> Dict[str, Any]:
        """
        Submit a rating and mirror it onto the cached note.

        Returns:
            The server summary: {"averageRating": ..., "ratingsCount": ...}
        """
        summary = await self._request(
            "POST",
            f"/api/notes/{_segment(note_id)}/rate",
            "Failed to rate note",
            json={"userId": user_id, "rating": rating},
        )

        note = self.app_data.find_note(note_id)
        if note is not None:
            note["averageRating"] = summary.get("averageRating")
            ratings = note.setdefault("ratings", [])
            existing = next((r for r in ratings if r.get("userId") == user_id), None)
            if existing is not None:
                existing["rating"] = rating
            else:
                ratings.append({"userId": user_id, "rating": rating})

        await self._save_app_data()
        return summary

    # ── Courses ───────────────────────────────────────────────────────────

    async def create_remote_course(
        self,
        title: str,
        description: str,
        icon: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = _compact(
            {"title": title, "icon": icon, "description": description, "notes": notes}
        )
        course = await self._request("POST", "/api/courses", "Failed to create course", json=payload)
        self.app_data.courses.append(course)
        await self._save_app_data()
        return course

    async def edit_remote_course(self, course_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        course = await self._request(
            "PUT", f"/api/courses/{_segment(course_id)}", "Failed to edit course", json=updates
        )
        self.app_data.replace_course(course)
        await self._save_app_data()
        return course

    # ── Demo Auth ─────────────────────────────────────────────────────────

    async def signup_remote(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """Create an account; the cache is not touched."""
        return await self._request(
            "POST",
            "/api/auth/signup",
            "Signup failed",
            json={"name": name, "email": email, "password": password},
        )

    async def login_remote(self, email: str, password: str) -> Dict[str, Any]:
        user = await self._request(
            "POST",
            "/api/auth/login",
            "Login failed",
            json={"email": email, "password": password},
        )
        self.current_user = user
        await self.mirror.set_item(CURRENT_USER_KEY, user)
        return user
