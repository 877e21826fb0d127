"""Human-readable durations and version information."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional, Union

VERSION = "v0.0.0-unknown"


def user_agent(version: Optional[str] = None) -> str:
    """Return the HTTP client identifier for ``version`` (default: this build)."""
    return "Watchtower/" + (VERSION if version is None else version)


def _unit(count: int, word: str) -> str:
    return f"1 {word}" if count == 1 else f"{count} {word}s"


def format_duration(seconds: Union[float, timedelta]) -> str:
    """Describe a duration in hours, minutes and seconds, e.g. ``1 hour, 5 minutes``.

    Fractions of a second are dropped; a zero duration reads ``0 seconds``.
    """
    total = seconds.total_seconds() if isinstance(seconds, timedelta) else float(seconds)
    hours = int(total / 3600)
    minutes = int(math.fmod(total / 60, 60))
    secs = int(math.fmod(total, 60))

    parts = []
    if hours:
        parts.append(_unit(hours, "hour"))
    if minutes:
        parts.append(_unit(minutes, "minute"))
    if secs or not parts:
        parts.append(_unit(secs, "second"))
    return ", ".join(parts)