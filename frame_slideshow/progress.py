"""Helpers for reporting rasterization progress."""

from __future__ import annotations


def _format_duration(seconds: float) -> str:
    """Return a compact human-readable duration string."""
    total_seconds = int(round(seconds))
    if total_seconds <= 0:
        return "<1s"
    minutes, seconds_remaining = divmod(total_seconds, 60)
    if minutes:
        return f"{minutes}m{seconds_remaining:02d}s"
    return f"{seconds_remaining}s"


def eta_string(elapsed: float, completed: int, total: int) -> str:
    """Describe the remaining work given elapsed time and progress counters."""
    if completed <= 0 or total <= 0 or completed > total:
        return "ETA estimating"
    if completed == total:
        return f"done in {_format_duration(elapsed)}"
    if elapsed <= 0.0:
        return "ETA estimating"

    remaining = (elapsed / completed) * (total - completed)
    return f"{total - completed} left, ETA {_format_duration(remaining)}"
