"""Timestamp helpers for sidecar records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from dateutil.parser import isoparse

from ..config import EPOCH_SENTINEL

Clock = Callable[[], datetime]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render *moment* the way the sidecar stores it: ``2024-05-01T10:00:00.000Z``."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso(clock: Optional[Clock] = None) -> str:
    return format_timestamp((clock or utc_now)())


def parse_timestamp(text: Optional[str]) -> datetime:
    """Parse an ISO-8601 string, treating naive values as UTC.

    Unparseable or empty input maps to the epoch so sorting never fails.
    """

    if not text:
        text = EPOCH_SENTINEL
    try:
        parsed = isoparse(text)
    except (ValueError, TypeError, OverflowError):
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = ["Clock", "EPOCH", "format_timestamp", "now_iso", "parse_timestamp", "utc_now"]
