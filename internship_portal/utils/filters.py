"""Timezone helpers and display formatting."""
from datetime import datetime, date, timezone

import pytz

from .constants import DEFAULT_TZ


def local_tz():
    return pytz.timezone(DEFAULT_TZ)


def now_local() -> datetime:
    """Current time as an aware datetime in the portal timezone."""
    return datetime.now(timezone.utc).astimezone(local_tz())


def today_local() -> date:
    return now_local().date()


def fmt_local(value) -> str:
    """
    Format a date/datetime (or ISO string) in portal local time.
    Supports:
      - date objects and 'YYYY-MM-DD' -> 'DD/MM/YYYY'
      - datetimes, naive (assumed UTC) or aware
      - ISO strings with 'T', 'Z' or '+00:00' offsets
    On parse error, returns the original value as text.
    """
    if value is None:
        return ""

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    else:
        s = str(value).strip()
        if not s:
            return ""
        s_norm = s.replace("T", " ")
        if s_norm.endswith("Z"):
            s_norm = s_norm[:-1] + "+00:00"
        if ":" not in s_norm:
            try:
                return datetime.strptime(s_norm, "%Y-%m-%d").strftime("%d/%m/%Y")
            except ValueError:
                return s
        try:
            dt = datetime.fromisoformat(s_norm)
        except ValueError:
            return s

    # If naive datetime, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(local_tz()).strftime("%d/%m/%Y %H:%M")
