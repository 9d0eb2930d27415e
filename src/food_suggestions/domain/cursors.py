"""Opaque keyset pagination cursors.

Cursors are compact JSON objects wrapped in URL-safe base64 without padding.
Every payload carries a ``v`` version field so new tie-break fields can be
added without breaking tokens already handed to clients.
"""

import base64
import binascii
import json
import math
from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from food_suggestions.domain.errors import InvalidCursorError

CURSOR_VERSION = 1


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _dump(payload: dict[str, object]) -> str:
    body = json.dumps({"v": CURSOR_VERSION, **payload}, separators=(",", ":"))
    return _b64encode(body.encode("utf-8"))


def _load(token: str) -> dict[str, object]:
    if not isinstance(token, str) or not token:
        raise InvalidCursorError("Missing cursor")
    try:
        body = _b64decode(token)
    except (binascii.Error, ValueError) as exc:
        raise InvalidCursorError("Invalid cursor encoding") from exc
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise InvalidCursorError("Invalid cursor payload") from exc
    if not isinstance(payload, dict):
        raise InvalidCursorError("Invalid cursor payload")
    if payload.get("v") != CURSOR_VERSION:
        raise InvalidCursorError("Unsupported cursor version")
    return payload


def _parse_food_id(value: object) -> UUID:
    if not isinstance(value, str):
        raise InvalidCursorError("Cursor is missing a food id")
    try:
        return UUID(value)
    except ValueError as exc:
        raise InvalidCursorError("Cursor food id is malformed") from exc


@dataclass(frozen=True)
class PageCursor:
    """Position after the last ranked food returned: ``(score, food_id)``."""

    score: float
    food_id: UUID

    def encode(self) -> str:
        """Encode the cursor as an opaque string."""
        return _dump({"s": self.score, "id": str(self.food_id)})

    @classmethod
    def decode(cls, token: str) -> "PageCursor":
        """Decode a cursor string, raising ``InvalidCursorError`` on bad input."""
        payload = _load(token)
        score = payload.get("s")
        if isinstance(score, bool) or not isinstance(score, int | float):
            raise InvalidCursorError("Cursor is missing a score")
        try:
            value = float(score)
        except OverflowError as exc:
            raise InvalidCursorError("Cursor score is out of range") from exc
        if not math.isfinite(value):
            raise InvalidCursorError("Cursor score is not finite")
        return cls(score=value, food_id=_parse_food_id(payload.get("id")))


@dataclass(frozen=True)
class RecentCursor:
    """Position after the last recent food returned."""

    last_date: date
    last_time: time | None
    last_food_id: UUID

    def encode(self) -> str:
        """Encode the cursor as an opaque string."""
        return _dump(
            {
                "d": self.last_date.isoformat(),
                "t": self.last_time.isoformat() if self.last_time else None,
                "id": str(self.last_food_id),
            }
        )

    @classmethod
    def decode(cls, token: str) -> "RecentCursor":
        """Decode a cursor string, raising ``InvalidCursorError`` on bad input."""
        payload = _load(token)
        raw_date = payload.get("d")
        raw_time = payload.get("t")
        if not isinstance(raw_date, str):
            raise InvalidCursorError("Cursor is missing a date")
        if raw_time is not None and not isinstance(raw_time, str):
            raise InvalidCursorError("Cursor time is malformed")
        try:
            last_date = date.fromisoformat(raw_date)
            last_time = time.fromisoformat(raw_time) if raw_time else None
        except ValueError as exc:
            raise InvalidCursorError("Cursor date or time is malformed") from exc
        return cls(
            last_date=last_date,
            last_time=last_time,
            last_food_id=_parse_food_id(payload.get("id")),
        )
