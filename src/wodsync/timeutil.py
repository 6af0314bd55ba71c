"""Target date resolution in the WOD site's time zone.

The job can run on a machine in any zone, but the site prints dates as they
are in Dubai, and the Notion Date property must not depend on where cron runs.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from wodsync.errors import ConfigurationError
from wodsync.models import TargetDate


def ddmmyyyy_from_iso(iso: str) -> str:
    """Convert '2026-02-01' to '01/02/2026'."""
    year, month, day = iso.split("-")
    return f"{day}/{month}/{year}"


def target_from_date(day: date) -> TargetDate:
    return TargetDate(iso=day.isoformat(), ddmmyyyy=day.strftime("%d/%m/%Y"))


def target_from_iso(iso: str) -> TargetDate:
    """Build a TargetDate from an explicit YYYY-MM-DD override.

    Raises:
        ConfigurationError: If iso is not a valid calendar date.
    """
    try:
        day = date.fromisoformat(iso.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid target date {iso!r}, expected YYYY-MM-DD") from e
    return target_from_date(day)


def resolve_today(tz_name: str, now: datetime | None = None) -> TargetDate:
    """Resolve today's calendar date as observed in tz_name.

    Args:
        tz_name: IANA zone name, e.g. "Asia/Dubai".
        now: Aware instant to resolve instead of the current time.

    Raises:
        ConfigurationError: If tz_name is not a known zone.
    """
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown time zone {tz_name!r}") from e

    local = (now or datetime.now(zone)).astimezone(zone)
    return target_from_date(local.date())
