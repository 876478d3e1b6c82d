"""
Locate a disease's per-sentinel column inside a two-row header block.

The Teiten export repeats a (count, per-sentinel) column pair per disease.
The disease name sits in a merged cell on one row and the metric labels on
the row below, so the per-sentinel column is found in two steps: anchor on
the disease name, then search rightward on the metric row.
"""

import logging
from typing import Iterable, Sequence

from sentinel_watch.csv_tokenizer import Grid, cell_at
from sentinel_watch.diseases import PER_SENTINEL_MARKER, get_profile

logger = logging.getLogger(__name__)

NOT_FOUND = -1

# Row offsets of the Teiten header block.
DISEASE_HEADER_ROW = 2
METRIC_HEADER_ROW = 3


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def find_marker_column(
    metric_row: Sequence[str], start: int, marker: str = PER_SENTINEL_MARKER
) -> int:
    """Return the first column at or right of ``start`` containing ``marker``."""
    for index in range(start, len(metric_row)):
        if marker in cell_at(metric_row, index):
            return index
    return NOT_FOUND


def locate_disease_column(
    grid: Grid,
    disease: str,
    header_row: int = DISEASE_HEADER_ROW,
    metric_row: int = METRIC_HEADER_ROW,
) -> int:
    """
    Find the per-sentinel column for a disease.

    Only the first (leftmost) header cell matching a synonym is used as the
    anchor; if no metric column follows it the result is NOT_FOUND even when
    a later header cell would also match.

    Args:
        grid: Tokenized Teiten table
        disease: Disease identifier
        header_row: Index of the disease-name row
        metric_row: Index of the sub-metric row

    Returns:
        Column index, or NOT_FOUND
    """
    if len(grid) <= max(header_row, metric_row):
        return NOT_FOUND

    synonyms = get_profile(disease).header_synonyms
    disease_row = grid[header_row]
    sub_row = grid[metric_row]

    # Column 0 holds region labels.
    for index in range(1, len(disease_row)):
        if _contains_any(cell_at(disease_row, index), synonyms):
            return find_marker_column(sub_row, index)

    return NOT_FOUND
