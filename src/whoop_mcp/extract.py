"""
Field extraction from validated WHOOP widget payloads.

Nothing here raises on missing data: absent widgets come back as None or an
empty list.
"""
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

from whoop_mcp.models import DailyRecord
from whoop_mcp.widgets import (
    ActivityItem,
    CoachVowItem,
    ContributorsTile,
    ContributorsTileItem,
    DeepDive,
    HomeData,
    ItemsCardItem,
    KeyStatisticItem,
    ScoreGauge,
    ScoreGaugeItem,
    Section,
)

HRV_METRIC_ID = "CONTRIBUTORS_TILE_HRV"
RHR_METRIC_ID = "CONTRIBUTORS_TILE_RHR"
OVERVIEW_PILLAR = "OVERVIEW"
MS_PER_HOUR = 1000 * 60 * 60

ItemT = TypeVar("ItemT")

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def iter_items(sections: Iterable[Section], item_type: Type[ItemT]) -> Iterator[ItemT]:
    """Yield every item of the given variant, in section order."""
    for section in sections:
        for item in section.items:
            if isinstance(item, item_type):
                yield item


def first_item(sections: Iterable[Section], item_type: Type[ItemT]) -> Optional[ItemT]:
    return next(iter_items(sections, item_type), None)


def score_gauge(deep_dive: DeepDive) -> Optional[ScoreGauge]:
    item = first_item(deep_dive.sections, ScoreGaugeItem)
    return item.content if item else None


def contributors_tile(deep_dive: DeepDive) -> Optional[ContributorsTile]:
    item = first_item(deep_dive.sections, ContributorsTileItem)
    return item.content if item else None


def contributors(tile: Optional[ContributorsTile]) -> List[Dict[str, Optional[str]]]:
    if tile is None:
        return []
    return [
        {
            "id": metric.id,
            "title": metric.title,
            "value": metric.status,
            "baseline": metric.status_subtitle,
            "status": metric.status_type,
            "icon": metric.icon,
        }
        for metric in tile.metrics
    ]


def coach_insight(tile: Optional[ContributorsTile]) -> Optional[str]:
    if tile is None or tile.footer is None:
        return None
    for item in tile.footer.items:
        if isinstance(item, CoachVowItem):
            return item.content.vow or None
    return None


def deep_dive_activities(deep_dive: DeepDive) -> List[Dict[str, Optional[str]]]:
    return [
        {
            "title": item.content.title,
            "strainScore": item.content.score_display,
            "startTime": item.content.start_time_text,
            "endTime": item.content.end_time_text,
            "type": item.content.type,
            "status": item.content.status,
        }
        for item in iter_items(deep_dive.sections, ActivityItem)
    ]


def parse_leading_number(text: Optional[str]) -> Optional[float]:
    """Number at the start of a display string ("52 ms" -> 52.0); zero counts as missing."""
    if not text:
        return None
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value or None


def contributor_value(tile: Optional[ContributorsTile], metric_id: str) -> Optional[float]:
    if tile is None:
        return None
    value = None
    for metric in tile.metrics:
        if metric.id == metric_id:
            value = parse_leading_number(metric.status)
    return value


def recovery_vitals(deep_dive: DeepDive) -> Dict[str, Optional[float]]:
    """HRV and resting heart rate from a recovery deep dive."""
    tile = contributors_tile(deep_dive)
    return {
        "hrv": contributor_value(tile, HRV_METRIC_ID),
        "resting_heart_rate": contributor_value(tile, RHR_METRIC_ID),
    }


def sleep_hours(ms_of_sleep: Optional[float]) -> Optional[float]:
    if not ms_of_sleep:
        return None
    return ms_of_sleep / MS_PER_HOUR


def daily_record(date: str, home: HomeData, vitals: Optional[Dict[str, Optional[float]]] = None) -> DailyRecord:
    """Build a DailyRecord from the home payload, plus optional recovery vitals."""
    vitals = vitals or {}
    live = home.metadata.whoop_live_metadata
    if live is None:
        return DailyRecord(date=date, **vitals)
    return DailyRecord(
        date=date,
        recovery_score=live.recovery_score,
        strain=live.day_strain,
        sleep_hours=sleep_hours(live.ms_of_sleep),
        calories=live.calories,
        **vitals,
    )


def overview_sections(home: HomeData) -> List[Section]:
    for pillar in home.pillars:
        if pillar.type == OVERVIEW_PILLAR:
            return pillar.sections
    return []


def overview_activities(home: HomeData) -> List[Dict[str, Optional[str]]]:
    activities = []
    for card in iter_items(overview_sections(home), ItemsCardItem):
        for entry in card.content.items:
            if isinstance(entry, ActivityItem):
                activities.append(
                    {
                        "title": entry.content.title,
                        "type": entry.content.type,
                        "scoreDisplay": entry.content.score_display,
                        "startTime": entry.content.start_time_text,
                        "endTime": entry.content.end_time_text,
                        "status": entry.content.status,
                    }
                )
    return activities


def key_statistics(home: HomeData) -> List[Dict[str, Optional[str]]]:
    return [
        {
            "title": item.content.title,
            "currentValue": item.content.current_value_display,
            "thirtyDayAverage": item.content.thirty_day_value_display,
            "state": item.content.state,
        }
        for item in iter_items(overview_sections(home), KeyStatisticItem)
    ]


def gauges(home: HomeData) -> List[Dict[str, Any]]:
    return [
        {
            "title": gauge.title,
            "scoreDisplay": gauge.score_display,
            "scoreSuffix": gauge.score_display_suffix,
            "fillPercentage": gauge.gauge_fill_percentage,
            "progressStyle": gauge.progress_fill_style,
        }
        for gauge in home.header.content.gauges
    ]
