"""
Date handling and the sequential per-day fetch loop used by the range tools.
"""
import asyncio
import datetime
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from whoop_mcp import extract
from whoop_mcp.models import DailyRecord

MAX_RANGE_DAYS = 90


@dataclass(frozen=True)
class FetchPolicy:
    """Pause between consecutive day fetches."""

    delay_s: float = 0.1

    @classmethod
    def from_millis(cls, delay_ms: int) -> "FetchPolicy":
        return cls(delay_s=max(delay_ms, 0) / 1000.0)


def _today() -> datetime.date:
    return datetime.datetime.now().date()


def parse_date(value: Optional[str]) -> Optional[datetime.date]:
    """Parse YYYY-MM-DD, or the keywords today / yesterday. Empty input gives None."""
    if not value:
        return None
    clean = value.strip().lower()
    if clean in ("today", "now"):
        return _today()
    if clean == "yesterday":
        return _today() - datetime.timedelta(days=1)
    try:
        return datetime.datetime.strptime(clean, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from None


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Single-date tools pass None through so the backend picks today."""
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else None


def resolve_range(days: int, end_date: Optional[str] = None) -> Tuple[datetime.date, datetime.date]:
    """Window of ``days`` days ending on ``end_date`` (yesterday by default)."""
    if days < 1 or days > MAX_RANGE_DAYS:
        raise ValueError(f"days must be between 1 and {MAX_RANGE_DAYS}, got {days}")
    end = parse_date(end_date) or (_today() - datetime.timedelta(days=1))
    start = end - datetime.timedelta(days=days - 1)
    return start, end


def daterange(start: datetime.date, end: datetime.date) -> List[str]:
    """Inclusive list of YYYY-MM-DD strings in ascending order."""
    return [(start + datetime.timedelta(days=i)).isoformat() for i in range((end - start).days + 1)]


def home_record_fetcher(client, include_vitals: bool = False) -> Callable[[str], DailyRecord]:
    """
    Build the per-day fetch used by the range tools.

    The home payload is required. With ``include_vitals`` the recovery deep dive
    is fetched too for HRV and resting heart rate; if that call fails the day
    keeps its home metrics and the vitals stay empty.
    """

    def fetch_day(date: str) -> DailyRecord:
        home = client.get_home_data(date)
        vitals = None
        if include_vitals:
            try:
                vitals = extract.recovery_vitals(client.get_recovery_deep_dive(date))
            except Exception as e:
                logger.debug(f"No recovery deep dive for {date}: {e}")
        return extract.daily_record(date, home, vitals)

    return fetch_day


async def collect_daily_records(
    fetch_day: Callable[[str], DailyRecord],
    dates: Sequence[str],
    policy: FetchPolicy,
) -> List[DailyRecord]:
    """
    Fetch one record per date, in order.

    ``fetch_day`` is blocking and runs in a worker thread. A failing day is
    logged and recorded with every metric missing; the loop carries on.
    """
    records = []
    for index, date in enumerate(dates):
        if index and policy.delay_s > 0:
            await asyncio.sleep(policy.delay_s)
        try:
            record = await asyncio.to_thread(fetch_day, date)
        except Exception as e:
            logger.warning(f"No WHOOP data for {date}: {e}")
            record = DailyRecord.empty(date)
        records.append(record)
    return records
