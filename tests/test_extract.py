"""
Tests for widget validation and field extraction.
"""
import pytest

from tests.fakes import TEST_DATE, home_payload
from whoop_mcp import extract
from whoop_mcp.widgets import (
    ActivityItem,
    CoachVowItem,
    ContributorsTileItem,
    DeepDive,
    HomeData,
    ItemsCardItem,
    ScoreGaugeItem,
    UnknownItem,
)


class TestWidgetValidation:
    def test_items_validate_into_their_variant(self, recovery_deep_dive):
        deep_dive = DeepDive.model_validate(recovery_deep_dive)

        kinds = [type(item) for section in deep_dive.sections for item in section.items]
        assert kinds == [UnknownItem, ScoreGaugeItem, ContributorsTileItem]

    def test_unknown_types_are_kept_not_rejected(self, home_data):
        home = HomeData.model_validate(home_data)
        overview = extract.overview_sections(home)

        card = overview[0].items[0]
        assert isinstance(card, ItemsCardItem)
        assert isinstance(card.content.items[1], UnknownItem)
        assert card.content.items[1].type == "ADD_ACTIVITY_BUTTON"
        assert isinstance(overview[1].items[2], UnknownItem)

    def test_nulls_and_missing_levels_are_tolerated(self):
        deep_dive = DeepDive.model_validate(
            {
                "header": None,
                "sections": [
                    {"items": None},
                    {},
                    {"items": [{"type": "SCORE_GAUGE", "content": None}, {"content": {"x": 1}}]},
                ],
            }
        )

        assert deep_dive.header.title is None
        gauge = extract.score_gauge(deep_dive)
        assert gauge is not None
        assert gauge.score_display is None
        assert isinstance(deep_dive.sections[2].items[1], UnknownItem)

    def test_empty_payloads_validate(self):
        assert DeepDive.model_validate({}).sections == []
        home = HomeData.model_validate({"metadata": None, "pillars": None})
        assert home.metadata.whoop_live_metadata is None
        assert home.pillars == []

    def test_numeric_contributor_status_becomes_text(self, recovery_deep_dive):
        tile = extract.contributors_tile(DeepDive.model_validate(recovery_deep_dive))
        assert tile.metrics[2].status == "15.2"

    def test_footer_items_are_typed(self, recovery_deep_dive):
        tile = extract.contributors_tile(DeepDive.model_validate(recovery_deep_dive))
        assert isinstance(tile.footer.items[0], UnknownItem)
        assert isinstance(tile.footer.items[1], CoachVowItem)


class TestDeepDiveExtraction:
    def test_first_score_gauge_across_sections(self, recovery_deep_dive):
        gauge = extract.score_gauge(DeepDive.model_validate(recovery_deep_dive))
        assert gauge.score_display == "72"
        assert gauge.gauge_fill_percentage == pytest.approx(0.72)
        assert gauge.progress_fill_style == "RECOVERY_GREEN"

    def test_missing_widgets_come_back_empty(self):
        deep_dive = DeepDive.model_validate({"sections": [{"items": [{"type": "HEADER_TEXT"}]}]})
        tile = extract.contributors_tile(deep_dive)

        assert extract.score_gauge(deep_dive) is None
        assert tile is None
        assert extract.contributors(tile) == []
        assert extract.coach_insight(tile) is None
        assert extract.deep_dive_activities(deep_dive) == []
        assert extract.recovery_vitals(deep_dive) == {"hrv": None, "resting_heart_rate": None}

    def test_contributors_map_status_fields(self, recovery_deep_dive):
        tile = extract.contributors_tile(DeepDive.model_validate(recovery_deep_dive))
        first = extract.contributors(tile)[0]

        assert first == {
            "id": "CONTRIBUTORS_TILE_HRV",
            "title": "Heart Rate Variability",
            "value": "64 ms",
            "baseline": "58 ms",
            "status": "HIGHER_POSITIVE",
            "icon": "hrv",
        }

    def test_coach_insight_from_footer(self, recovery_deep_dive, strain_deep_dive):
        recovery_tile = extract.contributors_tile(DeepDive.model_validate(recovery_deep_dive))
        strain_tile = extract.contributors_tile(DeepDive.model_validate(strain_deep_dive))

        assert extract.coach_insight(recovery_tile).startswith("Your HRV is above baseline")
        assert extract.coach_insight(strain_tile) is None

    def test_recovery_vitals(self, recovery_deep_dive):
        vitals = extract.recovery_vitals(DeepDive.model_validate(recovery_deep_dive))
        assert vitals == {"hrv": 64.0, "resting_heart_rate": 52.0}

    def test_strain_activities(self, strain_deep_dive):
        activities = extract.deep_dive_activities(DeepDive.model_validate(strain_deep_dive))
        assert [a["title"] for a in activities] == ["RUNNING", "WALKING"]
        assert activities[0]["strainScore"] == "9.8"


class TestLeadingNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("64 ms", 64.0),
            ("52", 52.0),
            ("15.2 rpm", 15.2),
            (" 7.5", 7.5),
            ("-3 bpm", -3.0),
        ],
    )
    def test_parses_leading_number(self, text, expected):
        assert extract.parse_leading_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [None, "", "N/A", "ms 64", "0", "0.0 ms"])
    def test_missing_or_zero_is_none(self, text):
        assert extract.parse_leading_number(text) is None


class TestHomeExtraction:
    def test_daily_record_from_live_metrics(self, home_data):
        record = extract.daily_record(TEST_DATE, HomeData.model_validate(home_data))

        assert record.date == TEST_DATE
        assert record.recovery_score == 72
        assert record.strain == pytest.approx(11.46)
        assert record.sleep_hours == pytest.approx(7.4)
        assert record.calories == 2314
        assert record.hrv is None

    def test_daily_record_without_live_metadata_is_empty(self):
        record = extract.daily_record(TEST_DATE, HomeData.model_validate({"metadata": {}}))
        assert not record.has_data()

    def test_zero_sleep_counts_as_missing(self):
        home = HomeData.model_validate(home_payload(recovery=50, sleep_hours=0))
        assert extract.daily_record(TEST_DATE, home).sleep_hours is None

    def test_daily_record_with_vitals(self):
        home = HomeData.model_validate(home_payload(recovery=50))
        record = extract.daily_record(TEST_DATE, home, {"hrv": 61.0, "resting_heart_rate": 55.0})
        assert record.hrv == 61.0
        assert record.resting_heart_rate == 55.0

    def test_overview_activities_only_from_items_cards(self, home_data):
        activities = extract.overview_activities(HomeData.model_validate(home_data))

        assert [a["title"] for a in activities] == ["SLEEP", "RUNNING"]
        assert activities[1] == {
            "title": "RUNNING",
            "type": "RUNNING",
            "scoreDisplay": "9.8",
            "startTime": "7:15 AM",
            "endTime": "8:01 AM",
            "status": "COMPLETE",
        }

    def test_key_statistics(self, home_data):
        stats = extract.key_statistics(HomeData.model_validate(home_data))
        assert [s["title"] for s in stats] == ["HRV", "RESTING HEART RATE"]
        assert stats[1]["thirtyDayAverage"] is None

    def test_no_overview_pillar(self):
        home = HomeData.model_validate({"pillars": [{"type": "SLEEP", "sections": []}]})
        assert extract.overview_activities(home) == []
        assert extract.key_statistics(home) == []

    def test_iter_items_keeps_section_order(self, strain_deep_dive):
        deep_dive = DeepDive.model_validate(strain_deep_dive)
        items = list(extract.iter_items(deep_dive.sections, ActivityItem))
        assert len(items) == 2
        assert extract.first_item(deep_dive.sections, ActivityItem) is items[0]
