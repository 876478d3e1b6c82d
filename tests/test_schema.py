"""
Test module for snapshot records and exports.
"""

import dataclasses

import pytest

from sentinel_watch.regions import AGGREGATE_REGION
from sentinel_watch.schema import (
    AlertAssessment,
    HistoryPoint,
    HistorySeries,
    Observation,
    ReportWeek,
    SurveillanceSnapshot,
)


class TestSurveillanceSnapshot:
    """Test cases for SurveillanceSnapshot."""

    @pytest.fixture
    def snapshot(self):
        """Small hand-built snapshot."""
        return SurveillanceSnapshot(
            observations=(
                Observation("Influenza", AGGREGATE_REGION, 12.0),
                Observation("Influenza", "北海道", 3.0),
                Observation("Influenza", "東京都", 20.0),
                Observation("Influenza", "大阪府", 20.0),
                Observation("COVID-19", "東京都", 4.0),
            ),
            history=(
                HistorySeries(
                    "Influenza",
                    "東京都",
                    (HistoryPoint(51, 1.0), HistoryPoint(1, 2.0)),
                ),
            ),
            alerts=(AlertAssessment("Influenza", "alert", "全国的に警報レベルです。"),),
            report_week=ReportWeek(2025, 1),
        )

    def test_frozen(self, snapshot):
        """Test snapshot records are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.observations[0].value = 1.0

    def test_national_value(self, snapshot):
        """Test national lookup and absence."""
        assert snapshot.national_value("Influenza") == 12.0
        assert snapshot.national_value("COVID-19") is None

    def test_top_regions(self, snapshot):
        """Test ranking excludes the aggregate and keeps tie order."""
        top = snapshot.top_regions("Influenza", limit=2)
        assert [obs.region for obs in top] == ["東京都", "大阪府"]

    def test_top_regions_default_limit(self, snapshot):
        """Test fewer regions than the limit."""
        assert len(snapshot.top_regions("Influenza")) == 3

    def test_history_order_preserved(self, snapshot):
        """Test points stay in discovery order."""
        assert snapshot.find_history("Influenza", "東京都").weeks == [51, 1]

    def test_to_dict(self, snapshot):
        """Test the JSON-ready document."""
        data = snapshot.to_dict()

        assert data["report_week"] == {"year": 2025, "week": 1}
        assert data["data"][0] == {
            "disease": "Influenza",
            "region": AGGREGATE_REGION,
            "value": 12.0,
        }
        assert data["history"][0]["history"] == [
            {"week": 51, "value": 1.0},
            {"week": 1, "value": 2.0},
        ]
        assert data["alerts"][0]["level"] == "alert"

    def test_frames(self, snapshot):
        """Test pandas exports."""
        observations = snapshot.observations_frame()
        history = snapshot.history_frame()
        alerts = snapshot.alerts_frame()

        assert list(observations.columns) == ["disease", "region", "value"]
        assert len(observations) == 5
        assert list(history["week"]) == [51, 1]
        assert list(alerts["level"]) == ["alert"]

    def test_empty_frames(self):
        """Test frames of an empty snapshot keep their columns."""
        snapshot = SurveillanceSnapshot()

        assert list(snapshot.history_frame().columns) == ["disease", "region", "week", "value"]
        assert snapshot.observations_frame().empty
        assert snapshot.alerts_frame().empty
        assert snapshot.to_dict()["report_week"] is None
