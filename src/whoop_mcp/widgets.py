"""
Typed models for the WHOOP "sections -> items -> content" widget payloads.

The backend tags every item with a ``type`` string. Known tags validate into
their own item model; anything else becomes an ``UnknownItem`` so new widget
types never break validation. Every field is optional because the backend
omits fields freely.
"""
from typing import Annotated, Any, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Discriminator, Field, Tag, field_validator

SCORE_GAUGE = "SCORE_GAUGE"
CONTRIBUTORS_TILE = "CONTRIBUTORS_TILE"
ACTIVITY = "ACTIVITY"
ITEMS_CARD = "ITEMS_CARD"
KEY_STATISTIC = "KEY_STATISTIC"
WHOOP_COACH_VOW = "WHOOP_COACH_VOW"
UNKNOWN = "UNKNOWN"

KNOWN_ITEM_TYPES = frozenset(
    {SCORE_GAUGE, CONTRIBUTORS_TILE, ACTIVITY, ITEMS_CARD, KEY_STATISTIC, WHOOP_COACH_VOW}
)


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


def _empty_list(value: Any) -> Any:
    return [] if value is None else value


def _empty_object(value: Any) -> Any:
    return {} if value is None else value


T = TypeVar("T")

# The backend sends null where it means "nothing here"
Items = Annotated[List[T], BeforeValidator(_empty_list)]
Object = Annotated[T, BeforeValidator(_empty_object)]
Number = Union[int, float]


# Item contents


class ScoreGauge(_Model):
    score_display: Optional[str] = None
    score_display_suffix: Optional[str] = None
    gauge_fill_percentage: Optional[float] = None
    progress_fill_style: Optional[str] = None
    score_target: Optional[float] = None
    lower_optimal_percentage: Optional[float] = None
    higher_optimal_percentage: Optional[float] = None
    title: Optional[str] = None


class ContributorMetric(_Model):
    id: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    status_subtitle: Optional[str] = None
    status_type: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("status", "status_subtitle", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # Some tiles send bare numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class CoachVow(_Model):
    vow: Optional[str] = None


class Activity(_Model):
    title: Optional[str] = None
    type: Optional[str] = None
    score_display: Optional[str] = None
    start_time_text: Optional[str] = None
    end_time_text: Optional[str] = None
    status: Optional[str] = None


class KeyStatistic(_Model):
    title: Optional[str] = None
    current_value_display: Optional[str] = None
    thirty_day_value_display: Optional[str] = None
    state: Optional[str] = None


class Footer(_Model):
    items: Items["WidgetItem"] = Field(default_factory=list)


class ContributorsTile(_Model):
    metrics: Items[ContributorMetric] = Field(default_factory=list)
    footer: Optional[Footer] = None


class ItemsCard(_Model):
    items: Items["WidgetItem"] = Field(default_factory=list)


# Tagged items


class ScoreGaugeItem(_Model):
    type: Literal["SCORE_GAUGE"] = SCORE_GAUGE
    content: Object[ScoreGauge] = Field(default_factory=ScoreGauge)


class ContributorsTileItem(_Model):
    type: Literal["CONTRIBUTORS_TILE"] = CONTRIBUTORS_TILE
    content: Object[ContributorsTile] = Field(default_factory=ContributorsTile)


class ActivityItem(_Model):
    type: Literal["ACTIVITY"] = ACTIVITY
    content: Object[Activity] = Field(default_factory=Activity)


class ItemsCardItem(_Model):
    type: Literal["ITEMS_CARD"] = ITEMS_CARD
    content: Object[ItemsCard] = Field(default_factory=ItemsCard)


class KeyStatisticItem(_Model):
    type: Literal["KEY_STATISTIC"] = KEY_STATISTIC
    content: Object[KeyStatistic] = Field(default_factory=KeyStatistic)


class CoachVowItem(_Model):
    type: Literal["WHOOP_COACH_VOW"] = WHOOP_COACH_VOW
    content: Object[CoachVow] = Field(default_factory=CoachVow)


class UnknownItem(_Model):
    type: Optional[str] = None
    content: Any = None


def _item_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    return tag if tag in KNOWN_ITEM_TYPES else UNKNOWN


WidgetItem = Annotated[
    Union[
        Annotated[ScoreGaugeItem, Tag(SCORE_GAUGE)],
        Annotated[ContributorsTileItem, Tag(CONTRIBUTORS_TILE)],
        Annotated[ActivityItem, Tag(ACTIVITY)],
        Annotated[ItemsCardItem, Tag(ITEMS_CARD)],
        Annotated[KeyStatisticItem, Tag(KEY_STATISTIC)],
        Annotated[CoachVowItem, Tag(WHOOP_COACH_VOW)],
        Annotated[UnknownItem, Tag(UNKNOWN)],
    ],
    Discriminator(_item_tag),
]


class Section(_Model):
    items: Items[WidgetItem] = Field(default_factory=list)


for _model in (Footer, ItemsCard, ContributorsTile, ContributorsTileItem, ItemsCardItem, Section):
    _model.model_rebuild()


# Deep dive payloads (recovery / strain / sleep)


class DeepDiveHeader(_Model):
    title: Optional[str] = None


class DeepDive(_Model):
    header: Object[DeepDiveHeader] = Field(default_factory=DeepDiveHeader)
    sections: Items[Section] = Field(default_factory=list)


# Home payload


class CycleMetadata(_Model):
    cycle_id: Optional[int] = None
    cycle_day: Optional[str] = None
    cycle_date_display: Optional[str] = None
    sleep_state: Optional[str] = None


class LiveMetadata(_Model):
    recovery_score: Optional[Number] = None
    day_strain: Optional[Number] = None
    ms_of_sleep: Optional[Number] = None
    calories: Optional[Number] = None


class JournalMetadata(_Model):
    journal_completed: Optional[bool] = None
    has_recovery: Optional[bool] = None
    journal_enabled: Optional[bool] = None


class HomeMetadata(_Model):
    cycle_metadata: Optional[CycleMetadata] = None
    whoop_live_metadata: Optional[LiveMetadata] = None
    journal_metadata: Optional[JournalMetadata] = None


class HeaderContent(_Model):
    gauges: Items[ScoreGauge] = Field(default_factory=list)


class HomeHeader(_Model):
    content: Object[HeaderContent] = Field(default_factory=HeaderContent)


class Pillar(_Model):
    type: Optional[str] = None
    sections: Items[Section] = Field(default_factory=list)


class HomeData(_Model):
    metadata: Object[HomeMetadata] = Field(default_factory=HomeMetadata)
    header: Object[HomeHeader] = Field(default_factory=HomeHeader)
    pillars: Items[Pillar] = Field(default_factory=list)
