"""
Weekly history extraction from the Tougai table.

The Tougai export stacks one block per disease with no fixed offsets:

    row S     <disease keyword> ...
    row S+1   week header ("1週", "2週", ... possibly merged over two columns)
    row S+2   metric header ("報告", "定当", ...)
    row S+3+  region rows until a blank label or the next disease block

Only the block start row is discovered from content; the three relative
offsets are assumed from the export layout.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from sentinel_watch.csv_tokenizer import Grid, cell_at, parse_numeric_cell
from sentinel_watch.diseases import (
    DISEASE_ORDER,
    DISEASES,
    PER_SENTINEL_MARKER,
    WEEK_MARKER,
)
from sentinel_watch.regions import AGGREGATE_REGION, is_aggregate_label
from sentinel_watch.schema import HistoryPoint, HistorySeries

logger = logging.getLogger(__name__)

SECTION_SCAN_WIDTH = 5

_WEEK_PATTERN = re.compile(r"(\d{1,2})" + re.escape(WEEK_MARKER), re.ASCII)


@dataclass(frozen=True)
class WeekColumn:
    week: int
    column: int


def _all_section_keywords(diseases: Iterable[str]) -> List[str]:
    keywords = []
    for disease in diseases:
        keywords.extend(DISEASES[disease].section_keywords)
    return keywords


def locate_sections(
    grid: Grid, diseases: Sequence[str] = DISEASE_ORDER
) -> Dict[str, int]:
    """
    Find the start row of each disease's section.

    The first SECTION_SCAN_WIDTH cells of every row are joined with a space
    and searched for the disease's section keywords. The last matching row
    wins, so a keyword repeated in a title block above the table does not
    shadow the real section start.

    Args:
        grid: Tokenized Tougai table
        diseases: Disease identifiers to look for

    Returns:
        Mapping of disease identifier to start row; diseases without any
        keyword match are absent
    """
    starts: Dict[str, int] = {}

    for index, row in enumerate(grid):
        row_text = " ".join(row[:SECTION_SCAN_WIDTH])
        for disease in diseases:
            keywords = DISEASES[disease].section_keywords
            if keywords and any(keyword in row_text for keyword in keywords):
                starts[disease] = index

    logger.debug(f"History section starts: {starts}")
    return starts


def parse_week_number(text: str) -> Optional[int]:
    """Return the week number in a header cell like "12週", or None."""
    match = _WEEK_PATTERN.search(text or "")
    return int(match.group(1)) if match else None


def resolve_week_columns(
    week_row: Sequence[str], metric_row: Sequence[str]
) -> List[WeekColumn]:
    """
    Pair each week header with its per-sentinel column.

    The per-sentinel column is the same column when the metric row marks it,
    otherwise the one to its right (merged week cells span the count and the
    per-sentinel columns). Weeks with neither are dropped. Discovery order is
    kept.
    """
    week_columns = []

    for index, text in enumerate(week_row):
        week = parse_week_number(text)
        if week is None:
            continue

        if PER_SENTINEL_MARKER in cell_at(metric_row, index):
            week_columns.append(WeekColumn(week=week, column=index))
        elif PER_SENTINEL_MARKER in cell_at(metric_row, index + 1):
            week_columns.append(WeekColumn(week=week, column=index + 1))

    return week_columns


def extract_section_history(
    grid: Grid,
    start_row: int,
    disease: str,
    stop_keywords: Optional[Sequence[str]] = None,
) -> List[HistorySeries]:
    """
    Extract one HistorySeries per region row of a section.

    Args:
        grid: Tokenized Tougai table
        start_row: Section start row as found by locate_sections
        disease: Disease identifier the section belongs to
        stop_keywords: Labels containing any of these end the section;
            defaults to every disease's section keywords

    Returns:
        List of HistorySeries in row order
    """
    if stop_keywords is None:
        stop_keywords = _all_section_keywords(DISEASE_ORDER)

    week_row_index = start_row + 1
    metric_row_index = start_row + 2
    if len(grid) <= metric_row_index:
        logger.warning(f"{disease} section at row {start_row} has no header rows")
        return []

    week_columns = resolve_week_columns(grid[week_row_index], grid[metric_row_index])
    logger.debug(f"{disease} week columns: {week_columns}")

    results = []
    for row in grid[start_row + 3:]:
        label = cell_at(row, 0).strip()
        if not label:
            break
        if any(keyword in label for keyword in stop_keywords):
            break

        points = tuple(
            HistoryPoint(week=wc.week, value=parse_numeric_cell(cell_at(row, wc.column)))
            for wc in week_columns
        )
        region = AGGREGATE_REGION if is_aggregate_label(label) else label
        results.append(HistorySeries(disease=disease, region=region, points=points))

    return results


def extract_history(grid: Grid) -> List[HistorySeries]:
    """
    Extract history series for every disease found in the Tougai table.

    Args:
        grid: Tokenized Tougai table

    Returns:
        Flat list of HistorySeries, grouped by disease in canonical order
    """
    if not grid:
        logger.warning("Tougai table is empty")
        return []

    starts = locate_sections(grid)
    stop_keywords = _all_section_keywords(DISEASE_ORDER)

    history = []
    for disease in DISEASE_ORDER:
        if disease not in starts:
            if DISEASES[disease].section_keywords:
                logger.warning(f"No history section found for {disease}")
            continue
        history.extend(
            extract_section_history(grid, starts[disease], disease, stop_keywords)
        )

    logger.info(f"Extracted {len(history)} history series")
    return history
