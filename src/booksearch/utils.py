"""Utility functions for booksearch.

Shared helpers used by the engine, the Elasticsearch adapter and the API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Union

from .constants import PUBLISH_DATE_FORMAT
from .exceptions import InvalidFieldError

# ===========================================================================
# Dates
# ===========================================================================


def parse_publish_date(value: str) -> datetime:
    """Parse a `YYYY-MM-DD HH:MM:SS` string into a UTC-aware datetime.

    Raises:
        InvalidFieldError: If the string does not match the expected format
    """
    try:
        parsed = datetime.strptime(value.strip(), PUBLISH_DATE_FORMAT)
    except (AttributeError, ValueError) as exc:
        raise InvalidFieldError(
            "Invalid publish date",
            field="publish_date",
            value=value,
            expected=PUBLISH_DATE_FORMAT,
        ) from exc
    return parsed.replace(tzinfo=timezone.utc)


def parse_stored_date(value: str) -> int:
    """Read a publish date stored as text back into epoch milliseconds.

    Accepts digit strings, the request format and ISO-8601 (with or without
    a trailing `Z`).
    """
    text = value.strip()
    if text.lstrip("-").isdigit():
        return int(text)
    try:
        return to_epoch_millis(parse_publish_date(text))
    except InvalidFieldError:
        pass
    try:
        return to_epoch_millis(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError as exc:
        raise InvalidFieldError("Invalid stored publish date", field="publish_date", value=value) from exc


def to_epoch_millis(value: Union[datetime, int, str, None]) -> int | None:
    """Normalize a publish date into epoch milliseconds.

    - datetime: naive values are taken as UTC
    - int: assumed to already be epoch milliseconds
    - str: parsed with `parse_publish_date`
    - None: returned unchanged
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFieldError("Invalid publish date", field="publish_date", value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = parse_publish_date(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    raise InvalidFieldError("Invalid publish date", field="publish_date", value=value)


# ===========================================================================
# Payload helpers
# ===========================================================================


def prune_none(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None (absent fields are never sent as null)."""
    return {k: v for k, v in data.items() if v is not None}


def split_hosts(hosts: str | List[str]) -> List[str]:
    """Split the comma separated ES_HOSTS setting into a host list."""
    if isinstance(hosts, list):
        return [h.strip() for h in hosts if h and h.strip()]
    return [h.strip() for h in (hosts or "").split(",") if h.strip()]


def extract_total(hits: Mapping[str, Any]) -> int:
    """Read the total hit count from a search response `hits` section.

    Elasticsearch 7+ returns `{"value": n, "relation": "eq"}`; older
    clusters return a bare integer.
    """
    total = hits.get("total", 0)
    if isinstance(total, Mapping):
        return int(total.get("value", 0))
    return int(total or 0)
