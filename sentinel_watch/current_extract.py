"""
Current-period value extraction from the Teiten and ARI tables.

Both tables share the same body layout: region labels in column 0 and data
rows from index 4. Teiten holds several diseases side by side and needs the
column locator; ARI has a single metric in a fixed column.
"""

import logging
from typing import List

from sentinel_watch.column_locator import NOT_FOUND, locate_disease_column
from sentinel_watch.csv_tokenizer import Grid, parse_numeric_cell
from sentinel_watch.diseases import ARI
from sentinel_watch.regions import resolve_region
from sentinel_watch.schema import Observation

logger = logging.getLogger(__name__)

DATA_START_ROW = 4
ARI_VALUE_COLUMN = 2


def _extract_column(grid: Grid, disease: str, value_column: int) -> List[Observation]:
    observations = []

    for row in grid[DATA_START_ROW:]:
        if len(row) <= value_column:
            continue

        region = resolve_region(row[0] if row else "")
        if region is None:
            continue

        observations.append(
            Observation(
                disease=disease,
                region=region,
                value=parse_numeric_cell(row[value_column]),
            )
        )

    return observations


def extract_current_values(grid: Grid, disease: str) -> List[Observation]:
    """
    Extract per-region values for one disease from the Teiten table.

    Args:
        grid: Tokenized Teiten table
        disease: Disease identifier

    Returns:
        One Observation per recognized region row; empty when the table is
        too short or the disease column cannot be located
    """
    if len(grid) <= DATA_START_ROW:
        logger.warning(f"Teiten table too short ({len(grid)} rows) for {disease}")
        return []

    column = locate_disease_column(grid, disease)
    if column == NOT_FOUND:
        logger.warning(f"{disease} column not found")
        return []

    logger.debug(f"{disease} per-sentinel column: {column}")
    observations = _extract_column(grid, disease, column)
    logger.info(f"Extracted {len(observations)} current values for {disease}")
    return observations


def extract_fixed_column_values(
    grid: Grid, disease: str = ARI, value_column: int = ARI_VALUE_COLUMN
) -> List[Observation]:
    """Extract per-region values from a single-metric table with a fixed value column."""
    if len(grid) <= DATA_START_ROW:
        logger.warning(f"{disease} table too short ({len(grid)} rows)")
        return []

    observations = _extract_column(grid, disease, value_column)
    logger.info(f"Extracted {len(observations)} current values for {disease}")
    return observations
