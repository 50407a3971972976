from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from staffdesk.storage import Storage

Clock = Callable[[], datetime]


def storage_now() -> datetime:
    """Naive UTC timestamp, the form both storage adapters round-trip."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def clean_optional(value: Any) -> Optional[str]:
    cleaned = clean_text(value)
    return cleaned or None


class Repository:
    def __init__(self, storage: Storage, clock: Clock = storage_now) -> None:
        self.storage = storage
        self._clock = clock
