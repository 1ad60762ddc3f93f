"""
Window statistics over lists of DailyRecord.

Every aggregate only looks at records where the metric is present, so days
without data never pull an average toward zero.
"""
import datetime
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from whoop_mcp.models import DailyRecord, DayValue, RecoveryDistribution, WeekdayPattern, WindowStats

Getter = Callable[[DailyRecord], Optional[float]]

# Sunday first, the order weekday buckets are reported in
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

GREEN_RECOVERY_CUTOFF = 67
YELLOW_RECOVERY_CUTOFF = 34


def recovery(record: DailyRecord) -> Optional[float]:
    return record.recovery_score


def strain(record: DailyRecord) -> Optional[float]:
    return record.strain


def sleep(record: DailyRecord) -> Optional[float]:
    return record.sleep_hours


def calories(record: DailyRecord) -> Optional[float]:
    return record.calories


def hrv(record: DailyRecord) -> Optional[float]:
    return record.hrv


def resting_hr(record: DailyRecord) -> Optional[float]:
    return record.resting_heart_rate


def round_half_up(value: float, digits: int = 0):
    """Round with ties going up, returning an int when digits is 0."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5)
    if digits == 0:
        return int(rounded)
    return rounded / factor


def values(records: Sequence[DailyRecord], getter: Getter) -> List[float]:
    return [v for v in (getter(r) for r in records) if v is not None]


def mean(records: Sequence[DailyRecord], getter: Getter) -> Optional[float]:
    present = values(records, getter)
    if not present:
        return None
    return sum(present) / len(present)


def rounded_mean(records: Sequence[DailyRecord], getter: Getter, digits: int = 0):
    avg = mean(records, getter)
    return None if avg is None else round_half_up(avg, digits)


def total(records: Sequence[DailyRecord], getter: Getter, digits: int = 0):
    present = values(records, getter)
    if not present:
        return None
    return round_half_up(sum(present), digits)


def count_at_least(records: Sequence[DailyRecord], cutoff: float) -> int:
    return sum(1 for v in values(records, recovery) if v >= cutoff)


def aggregate(records: Sequence[DailyRecord], threshold: float = 70) -> WindowStats:
    """Averages for a window; recovery/HRV/RHR as integers, strain/sleep to one decimal."""
    return WindowStats(
        avg_recovery=rounded_mean(records, recovery),
        avg_strain=rounded_mean(records, strain, 1),
        avg_sleep=rounded_mean(records, sleep, 1),
        avg_hrv=rounded_mean(records, hrv),
        avg_rhr=rounded_mean(records, resting_hr),
        days_above_threshold=count_at_least(records, threshold),
    )


def best_day(records: Sequence[DailyRecord], getter: Getter) -> Optional[DayValue]:
    """Record with the highest value; the earliest one wins a tie."""
    best = None
    for record in records:
        value = getter(record)
        if value is not None and (best is None or value > best.value):
            best = DayValue(record.date, value)
    return best


def worst_day(records: Sequence[DailyRecord], getter: Getter) -> Optional[DayValue]:
    worst = None
    for record in records:
        value = getter(record)
        if value is not None and (worst is None or value < worst.value):
            worst = DayValue(record.date, value)
    return worst


def recovery_distribution(
    records: Sequence[DailyRecord],
    green_cutoff: float = GREEN_RECOVERY_CUTOFF,
    yellow_cutoff: float = YELLOW_RECOVERY_CUTOFF,
) -> RecoveryDistribution:
    scores = values(records, recovery)
    return RecoveryDistribution(
        green=sum(1 for s in scores if s >= green_cutoff),
        yellow=sum(1 for s in scores if yellow_cutoff <= s < green_cutoff),
        red=sum(1 for s in scores if s < yellow_cutoff),
    )


def weekday_name(date_str: str) -> str:
    day = datetime.datetime.strptime(date_str, "%Y-%m-%d").date()
    return WEEKDAYS[(day.weekday() + 1) % 7]


def weekday_pattern(records: Sequence[DailyRecord]) -> WeekdayPattern:
    """Average recovery per weekday, with the best and worst weekday."""
    buckets: Dict[str, List[float]] = {day: [] for day in WEEKDAYS}
    for record in records:
        if record.recovery_score is not None:
            buckets[weekday_name(record.date)].append(record.recovery_score)

    avg_by_day: Dict[str, int] = {}
    best: Optional[Tuple[str, int]] = None
    worst: Optional[Tuple[str, int]] = None
    for day in WEEKDAYS:
        scores = buckets[day]
        if not scores:
            continue
        avg = round_half_up(sum(scores) / len(scores))
        avg_by_day[day] = avg
        if best is None or avg > best[1]:
            best = (day, avg)
        if worst is None or avg < worst[1]:
            worst = (day, avg)

    return WeekdayPattern(
        best_day=best[0] if best else None,
        worst_day=worst[0] if worst else None,
        avg_by_day=avg_by_day,
    )


def split_halves(records: Sequence[DailyRecord]) -> Tuple[Sequence[DailyRecord], Sequence[DailyRecord]]:
    """First and second half; an odd middle day goes to the second half."""
    midpoint = len(records) // 2
    return records[:midpoint], records[midpoint:]
