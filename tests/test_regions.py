"""
Test module for region reference data.
"""

from sentinel_watch.regions import (
    AGGREGATE_REGION,
    PREFECTURES,
    is_aggregate_label,
    resolve_region,
)


class TestRegions:
    """Test cases for region matching."""

    def test_prefecture_count(self):
        """Test the closed set of 47 prefectures."""
        assert len(PREFECTURES) == 47
        assert len(set(PREFECTURES)) == 47

    def test_aggregate_labels(self):
        """Test whitespace-insensitive aggregate detection."""
        assert is_aggregate_label("総数")
        assert is_aggregate_label("総　数")
        assert is_aggregate_label(" 全国 ")
        assert not is_aggregate_label("全国県")
        assert not is_aggregate_label("")

    def test_resolve_region(self):
        """Test region resolution."""
        assert resolve_region("北海道") == "北海道"
        assert resolve_region(" 沖縄県\t") == "沖縄県"
        assert resolve_region("総数") == AGGREGATE_REGION
        assert resolve_region("東京") is None
        assert resolve_region(None) is None
