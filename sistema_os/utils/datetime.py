"""Clock and calendar helpers shared by reminders and persistence."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Callable, Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sistema_os.config import get_settings

_FALLBACK_TIMEZONE: Final[str] = "America/Sao_Paulo"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)
_SECONDS_PER_DAY: Final[float] = 86400.0
BR_DATE_FORMAT: Final[str] = "%d/%m/%Y"

Clock = Callable[[], datetime]

_configured_timezone: str | None = None


def configure_app_timezone(name: str | None) -> None:
    """Use ``name`` as the process timezone instead of the environment's ``APP_TIMEZONE``.

    ``None`` goes back to reading the environment.
    """

    global _configured_timezone
    _configured_timezone = name
    get_app_timezone.cache_clear()


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone deadlines are counted in.

    The value set through :func:`configure_app_timezone` wins over
    ``APP_TIMEZONE``. IANA names and fixed offsets such as ``UTC-03:00`` are
    accepted; anything else resolves to ``America/Sao_Paulo``.
    """

    name = (_configured_timezone or get_settings().app_timezone or "").strip()
    return _parse_timezone(name) if name else ZoneInfo(_FALLBACK_TIMEZONE)


def now_in_app_timezone() -> datetime:
    """Default :data:`Clock` of the application."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert to the app timezone; naive values are read as local time."""

    if value is None:
        return None
    app_tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=app_tz)
    return value.astimezone(app_tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Local wall-clock time without ``tzinfo``, the form stored in the database.

    SQLite ``DATETIME`` columns drop offsets, so rows keep local time and
    :func:`ensure_app_timezone` restores the zone on the way back.
    """

    if value is None:
        return None
    return ensure_app_timezone(value).replace(tzinfo=None)


def local_date(value: datetime) -> date:
    """Calendar day of ``value`` in the app timezone."""

    return ensure_app_timezone(value).date()


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``target``, partial days rounded up.

    ``target`` 36 hours ahead gives 2; a past ``target`` gives zero or less.
    """

    remaining = ensure_app_timezone(target) - ensure_app_timezone(now)
    return math.ceil(remaining.total_seconds() / _SECONDS_PER_DAY)


def format_br_date(value: datetime) -> str:
    return ensure_app_timezone(value).strftime(BR_DATE_FORMAT)


def _parse_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    match = _UTC_OFFSET.match(name)
    if match is None:
        return ZoneInfo(_FALLBACK_TIMEZONE)
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)
