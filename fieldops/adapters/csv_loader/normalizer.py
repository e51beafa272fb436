"""Normalize raw CSV headers and cells (BOM, camelCase headers, lists, timestamps)."""

from __future__ import annotations

import re
from datetime import datetime, timezone


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Inserts an underscore at camelCase boundaries (slaDue -> sla_due)
    - Replaces runs of spaces / dashes with a single underscore
    - Lowercases and strips anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_list(raw: str | None) -> list[str]:
    """Parse list cells like 'HVAC; Electrical|Plumbing' keeping case and order.

    Commas are not separators: free-text values (e.g. certifications) may contain them.
    """
    if not raw:
        return []
    parts = re.split(r"[;|]", raw)
    return [p.strip() for p in parts if p.strip()]


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}


def parse_datetime(raw: str | None) -> datetime | None:
    """Parse ISO-8601 timestamps; naive values are taken as UTC."""
    if not raw or not raw.strip():
        return None
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
