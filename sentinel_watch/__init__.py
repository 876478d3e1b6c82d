"""
Sentinel surveillance extraction pipeline.

Converts the weekly sentinel-site CSV exports (current per-disease table,
acute respiratory infection table and year-to-date history table) into
typed observations, weekly history series and national alert levels.
"""

from sentinel_watch.alerts import classify_alerts, classify_value, get_threshold_profile
from sentinel_watch.csv_tokenizer import parse_delimited_text
from sentinel_watch.pipeline import extract_report_week, process_snapshot
from sentinel_watch.schema import (
    AlertAssessment,
    HistoryPoint,
    HistorySeries,
    Observation,
    ReportWeek,
    SurveillanceSnapshot,
)

__all__ = [
    "AlertAssessment",
    "HistoryPoint",
    "HistorySeries",
    "Observation",
    "ReportWeek",
    "SurveillanceSnapshot",
    "classify_alerts",
    "classify_value",
    "extract_report_week",
    "get_threshold_profile",
    "parse_delimited_text",
    "process_snapshot",
]
