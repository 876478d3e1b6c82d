"""
End-to-end processing of one export batch.

Usage:
    from sentinel_watch.pipeline import process_snapshot

    snapshot = process_snapshot(teiten_text, ari_text, tougai_text)
    snapshot.national_value("Influenza")
"""

import logging
import re
from typing import Mapping, Optional

from sentinel_watch.alerts import ThresholdTable, classify_alerts
from sentinel_watch.config import Config
from sentinel_watch.csv_tokenizer import Grid, parse_delimited_text
from sentinel_watch.current_extract import (
    extract_current_values,
    extract_fixed_column_values,
)
from sentinel_watch.diseases import ARI, COVID_19, INFLUENZA
from sentinel_watch.history_extract import extract_history
from sentinel_watch.schema import ReportWeek, SurveillanceSnapshot

logger = logging.getLogger(__name__)

_REPORT_WEEK_PATTERN = re.compile(r"(\d{4})年(\d{1,2})週", re.ASCII)


def extract_report_week(text: Optional[str]) -> Optional[ReportWeek]:
    """
    Find the reporting week in an export's title block.

    Args:
        text: Raw export text, e.g. containing "2025年12週"

    Returns:
        ReportWeek for the first match, or None
    """
    match = _REPORT_WEEK_PATTERN.search(text or "")
    if not match:
        return None
    return ReportWeek(year=int(match.group(1)), week=int(match.group(2)))


def build_snapshot(
    current_grid: Grid,
    ari_grid: Grid,
    history_grid: Grid,
    thresholds: Optional[ThresholdTable] = None,
    report_week: Optional[ReportWeek] = None,
) -> SurveillanceSnapshot:
    """
    Turn three tokenized tables into a SurveillanceSnapshot.

    Args:
        current_grid: Teiten table (Influenza and COVID-19 current values)
        ari_grid: ARI table
        history_grid: Tougai table
        thresholds: Alert threshold table; defaults to the bulletin profile
        report_week: Reporting week to attach to the snapshot

    Returns:
        Immutable snapshot of observations, history and alerts
    """
    observations = (
        extract_current_values(current_grid, INFLUENZA)
        + extract_current_values(current_grid, COVID_19)
        + extract_fixed_column_values(ari_grid, ARI)
    )
    history = extract_history(history_grid)
    alerts = classify_alerts(observations, thresholds)

    logger.info(
        f"Snapshot built: {len(observations)} observations, "
        f"{len(history)} history series, {len(alerts)} alerts"
    )

    return SurveillanceSnapshot(
        observations=tuple(observations),
        history=tuple(history),
        alerts=tuple(alerts),
        report_week=report_week,
    )


def process_snapshot(
    current_text: str,
    ari_text: str,
    history_text: str,
    thresholds: Optional[ThresholdTable] = None,
    delimiter: str = ",",
) -> SurveillanceSnapshot:
    """
    Main function to process one batch of raw export texts.

    The caller must supply all three texts; a batch with a missing source
    is rejected at the fetch boundary, never partially processed here.

    Args:
        current_text: Raw Teiten export
        ari_text: Raw ARI export
        history_text: Raw Tougai export
        thresholds: Alert threshold table; defaults to the bulletin profile
        delimiter: Field delimiter of the exports

    Returns:
        SurveillanceSnapshot
    """
    return build_snapshot(
        parse_delimited_text(current_text, delimiter),
        parse_delimited_text(ari_text, delimiter),
        parse_delimited_text(history_text, delimiter),
        thresholds=thresholds,
        report_week=extract_report_week(current_text),
    )


def process_sources(
    texts: Mapping[str, str],
    thresholds: Optional[ThresholdTable] = None,
    delimiter: str = ",",
) -> SurveillanceSnapshot:
    """
    Process texts keyed by source type ("Teiten", "ARI", "Tougai").

    Raises:
        KeyError: If any of the three source types is missing
    """
    missing = [key for key in Config.SOURCE_TYPES if key not in texts]
    if missing:
        raise KeyError(f"Missing source texts: {', '.join(missing)}")

    return process_snapshot(
        texts[Config.SOURCE_CURRENT],
        texts[Config.SOURCE_ARI],
        texts[Config.SOURCE_HISTORY],
        thresholds=thresholds,
        delimiter=delimiter,
    )
