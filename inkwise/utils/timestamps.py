"""Timestamp helpers for exports and metadata."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

# Full date-time with a mandatory UTC designator or offset
_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})$"
)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2025-01-18T09:30:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date-time string, returning None when it is not one."""
    if not isinstance(value, str) or not _ISO_DATETIME.match(value):
        return None
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    # fromisoformat only accepts 3 or 6 fractional digits on older interpreters
    if "." in normalized:
        head, _, tail = normalized.partition(".")
        digits = re.match(r"\d+", tail).group(0)
        normalized = f"{head}.{digits[:6].ljust(6, '0')}{tail[len(digits):]}"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def is_iso_timestamp(value: Any) -> bool:
    return parse_iso_timestamp(value) is not None


def file_stamp(moment: Optional[datetime] = None) -> str:
    """Filename-safe local timestamp: YYYY-MM-DD_HHMMSS."""
    moment = moment or datetime.now()
    return moment.strftime("%Y-%m-%d_%H%M%S")
