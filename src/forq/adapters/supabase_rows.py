"""Helpers for decoding Supabase rows."""

from datetime import datetime


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating a trailing Z."""
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def require_datetime(raw: object) -> datetime:
    """Parse a non-null timestamp column."""
    parsed = parse_datetime(raw)
    if parsed is None:
        raise ValueError(f"Expected a timestamp, got {raw!r}")
    return parsed


def optional_float(raw: object) -> float | None:
    """Parse a nullable numeric column (Postgres numerics arrive as strings)."""
    if raw is None or raw == "":
        return None
    return float(raw)


def optional_str(raw: object) -> str | None:
    if raw is None:
        return None
    return str(raw)
