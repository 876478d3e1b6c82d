"""
Typed records produced by the extraction pipeline.

All records are immutable; the pipeline returns a fresh SurveillanceSnapshot
for every export batch instead of caching the last result.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

from sentinel_watch.regions import AGGREGATE_REGION

LEVEL_NORMAL = "normal"
LEVEL_WARNING = "warning"
LEVEL_ALERT = "alert"

ALERT_LEVELS = (LEVEL_NORMAL, LEVEL_WARNING, LEVEL_ALERT)


@dataclass(frozen=True)
class Observation:
    """Current-period per-sentinel value for one disease in one region."""

    disease: str
    region: str
    value: float

    @property
    def is_national(self) -> bool:
        return self.region == AGGREGATE_REGION

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class HistoryPoint:
    week: int
    value: float


@dataclass(frozen=True)
class HistorySeries:
    """Weekly values for one disease/region, in header discovery order."""

    disease: str
    region: str
    points: Tuple[HistoryPoint, ...] = ()

    @property
    def weeks(self) -> List[int]:
        return [point.week for point in self.points]

    @property
    def values(self) -> List[float]:
        return [point.value for point in self.points]

    def to_dict(self) -> Dict:
        return {
            "disease": self.disease,
            "region": self.region,
            "history": [asdict(point) for point in self.points],
        }


@dataclass(frozen=True)
class AlertAssessment:
    disease: str
    level: str
    message: str

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class ReportWeek:
    """Epidemiological week an export refers to."""

    year: int
    week: int

    @property
    def label(self) -> str:
        return f"{self.year}年 第{self.week}週"

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class SurveillanceSnapshot:
    """
    Aggregate result of one export batch.

    This is the only hand-off to rendering code: a flat list of current
    observations, a flat list of history series and at most one alert
    assessment per disease.
    """

    observations: Tuple[Observation, ...] = ()
    history: Tuple[HistorySeries, ...] = ()
    alerts: Tuple[AlertAssessment, ...] = ()
    report_week: Optional[ReportWeek] = field(default=None)

    def national_value(self, disease: str) -> Optional[float]:
        """Return the national aggregate value for a disease, if present."""
        for observation in self.observations:
            if observation.disease == disease and observation.is_national:
                return observation.value
        return None

    def find_history(self, disease: str, region: str) -> Optional[HistorySeries]:
        for series in self.history:
            if series.disease == disease and series.region == region:
                return series
        return None

    def find_alert(self, disease: str) -> Optional[AlertAssessment]:
        for alert in self.alerts:
            if alert.disease == disease:
                return alert
        return None

    def top_regions(self, disease: str, limit: int = 10) -> List[Observation]:
        """
        Rank named regions by current value, highest first.

        The national aggregate is excluded. Ties keep input order.

        Args:
            disease: Disease identifier
            limit: Maximum number of regions to return

        Returns:
            List of Observations, at most ``limit`` long
        """
        regional = [
            obs
            for obs in self.observations
            if obs.disease == disease and not obs.is_national
        ]
        regional.sort(key=lambda obs: obs.value, reverse=True)
        return regional[:limit]

    def to_dict(self) -> Dict:
        return {
            "report_week": self.report_week.to_dict() if self.report_week else None,
            "data": [obs.to_dict() for obs in self.observations],
            "history": [series.to_dict() for series in self.history],
            "alerts": [alert.to_dict() for alert in self.alerts],
        }

    def observations_frame(self) -> pd.DataFrame:
        columns = ["disease", "region", "value"]
        if not self.observations:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([obs.to_dict() for obs in self.observations], columns=columns)

    def history_frame(self) -> pd.DataFrame:
        """Long-form history: one row per (disease, region, week)."""
        columns = ["disease", "region", "week", "value"]
        rows = [
            {
                "disease": series.disease,
                "region": series.region,
                "week": point.week,
                "value": point.value,
            }
            for series in self.history
            for point in series.points
        ]
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns)

    def alerts_frame(self) -> pd.DataFrame:
        columns = ["disease", "level", "message"]
        if not self.alerts:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([alert.to_dict() for alert in self.alerts], columns=columns)
