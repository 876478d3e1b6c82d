"""
Test module for current-period value extraction.
"""

import pytest

from sentinel_watch.current_extract import (
    extract_current_values,
    extract_fixed_column_values,
)
from sentinel_watch.regions import AGGREGATE_REGION
from sentinel_watch.schema import Observation


def _by_region(observations):
    return {obs.region: obs.value for obs in observations}


class TestExtractCurrentValues:
    """Test cases for the Teiten table."""

    def test_influenza_values(self, teiten_rows):
        """Test values are read from the located column."""
        observations = extract_current_values(teiten_rows, "Influenza")

        assert _by_region(observations) == {
            AGGREGATE_REGION: 8.12,
            "北海道": 6.5,
            "東京都": 15.2,
        }
        assert all(obs.disease == "Influenza" for obs in observations)

    def test_unparsable_value_is_zero(self, teiten_rows):
        """Test that "-" in a value cell becomes zero."""
        observations = extract_current_values(teiten_rows, "COVID-19")
        assert _by_region(observations)["東京都"] == 0.0

    def test_unknown_labels_dropped(self, teiten_rows):
        """Test that unrecognized region labels produce nothing."""
        regions = [obs.region for obs in extract_current_values(teiten_rows, "Influenza")]
        assert "不明" not in regions

    def test_row_order_preserved(self, teiten_rows):
        """Test observations follow row order."""
        regions = [obs.region for obs in extract_current_values(teiten_rows, "Influenza")]
        assert regions == [AGGREGATE_REGION, "北海道", "東京都"]

    def test_missing_column_yields_empty(self, teiten_rows):
        """Test a structural miss degrades to an empty list."""
        assert extract_current_values(teiten_rows, "ARI") == []

    def test_short_table_yields_empty(self, teiten_rows):
        """Test a table without data rows."""
        assert extract_current_values(teiten_rows[:4], "Influenza") == []

    def test_short_rows_skipped(self, teiten_rows):
        """Test rows too short for the value column are skipped."""
        rows = teiten_rows + [["宮城県", "1"]]
        regions = [obs.region for obs in extract_current_values(rows, "COVID-19")]
        assert "宮城県" not in regions

    def test_no_early_stop_on_blank_label(self, teiten_rows):
        """Test scanning continues past rows with blank labels."""
        rows = teiten_rows[:5] + [["", "", "", "", ""]] + teiten_rows[5:]
        regions = [obs.region for obs in extract_current_values(rows, "Influenza")]
        assert "東京都" in regions

    def test_negative_values_pass_through(self, teiten_rows):
        """Test negative raw values are not clamped."""
        rows = teiten_rows + [["大阪府", "0", "-1.5", "0", "0"]]
        assert _by_region(extract_current_values(rows, "Influenza"))["大阪府"] == -1.5


class TestExtractFixedColumnValues:
    """Test cases for the ARI table."""

    def test_ari_values(self, ari_rows):
        """Test the fixed value column is used."""
        observations = extract_fixed_column_values(ari_rows)

        assert observations[0] == Observation("ARI", AGGREGATE_REGION, 85.4)
        assert _by_region(observations) == {
            AGGREGATE_REGION: 85.4,
            "北海道": 70.1,
            "沖縄県": 0.0,
        }

    def test_short_row_skipped(self, ari_rows):
        """Test a row ending before the value column."""
        rows = ari_rows + [["東京都", "100"]]
        assert "東京都" not in _by_region(extract_fixed_column_values(rows))

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("総数", AGGREGATE_REGION),
            (" 総 数 ", AGGREGATE_REGION),
            ("全国", AGGREGATE_REGION),
            (" 全国 ", AGGREGATE_REGION),
            (" 東京都 ", "東京都"),
        ],
    )
    def test_label_normalization(self, ari_rows, label, expected):
        """Test label trimming and whitespace-insensitive aggregate matching."""
        rows = ari_rows[:4] + [[label, "1", "2.0"]]
        assert extract_fixed_column_values(rows) == [Observation("ARI", expected, 2.0)]

    @pytest.mark.parametrize("label", ["全国県", "東京", "Tokyo", ""])
    def test_unrecognized_labels(self, ari_rows, label):
        """Test labels that are neither a prefecture nor the aggregate."""
        rows = ari_rows[:4] + [[label, "1", "2.0"]]
        assert extract_fixed_column_values(rows) == []

    def test_empty_grid(self):
        """Test an empty table."""
        assert extract_fixed_column_values([]) == []
