"""
National alert classification.

Threshold tables are configuration: two profiles are shipped because the
summary cards and the weekly trend chart of the dashboard use different
cut points. Each tier is inclusive at its lower bound.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from sentinel_watch.diseases import ARI, COVID_19, DISEASE_ORDER, INFLUENZA
from sentinel_watch.schema import (
    ALERT_LEVELS,
    LEVEL_ALERT,
    LEVEL_NORMAL,
    LEVEL_WARNING,
    AlertAssessment,
    HistorySeries,
    Observation,
)

logger = logging.getLogger(__name__)

DEFAULT_NORMAL_MESSAGE = "全国的に平常レベルです。"


@dataclass(frozen=True)
class ThresholdTier:
    lower_bound: float
    level: str
    message: str

    def __post_init__(self):
        if self.level not in ALERT_LEVELS:
            raise ValueError(f"Unknown alert level: {self.level}")


ThresholdTable = Mapping[str, Sequence[ThresholdTier]]


BULLETIN_THRESHOLDS: Dict[str, Tuple[ThresholdTier, ...]] = {
    INFLUENZA: (
        ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),
        ThresholdTier(1.0, LEVEL_WARNING, "全国的に流行入りしています。"),
        ThresholdTier(10.0, LEVEL_ALERT, "全国的に警報レベルです。"),
    ),
    COVID_19: (
        ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),
        ThresholdTier(5.0, LEVEL_WARNING, "注意が必要です。"),
        ThresholdTier(10.0, LEVEL_ALERT, "高い感染レベルです。"),
    ),
    ARI: (
        ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),
        ThresholdTier(80.0, LEVEL_WARNING, "注意が必要です。"),
        ThresholdTier(120.0, LEVEL_ALERT, "流行レベルです。"),
    ),
}

CHART_THRESHOLDS: Dict[str, Tuple[ThresholdTier, ...]] = {
    INFLUENZA: (
        ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),
        ThresholdTier(10.0, LEVEL_WARNING, "注意報レベルです。"),
        ThresholdTier(30.0, LEVEL_ALERT, "警報レベルです。"),
    ),
    COVID_19: (
        ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),
        ThresholdTier(10.0, LEVEL_WARNING, "注意報レベルです。"),
        ThresholdTier(15.0, LEVEL_ALERT, "警報レベルです。"),
    ),
    ARI: (ThresholdTier(0.0, LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE),),
}

THRESHOLD_PROFILES: Dict[str, Dict[str, Tuple[ThresholdTier, ...]]] = {
    "bulletin": BULLETIN_THRESHOLDS,
    "chart": CHART_THRESHOLDS,
}


def get_threshold_profile(name: str) -> Dict[str, Tuple[ThresholdTier, ...]]:
    """
    Look up a named threshold profile.

    Raises:
        ValueError: If the profile name is unknown
    """
    try:
        return THRESHOLD_PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(THRESHOLD_PROFILES))
        raise ValueError(f"Unknown threshold profile: {name} (expected one of {known})") from None


def classify_value(value: float, tiers: Iterable[ThresholdTier]) -> Tuple[str, str]:
    """
    Classify a value against ordered tiers.

    The tier with the highest lower bound not exceeding ``value`` wins; tier
    order in the input does not matter.

    Returns:
        Tuple of (level, message)
    """
    for tier in sorted(tiers, key=lambda t: t.lower_bound, reverse=True):
        if value >= tier.lower_bound:
            return tier.level, tier.message
    return LEVEL_NORMAL, DEFAULT_NORMAL_MESSAGE


def _national_observation(
    observations: Iterable[Observation], disease: str
) -> Optional[Observation]:
    for observation in observations:
        if observation.disease == disease and observation.is_national:
            return observation
    return None


def classify_alerts(
    observations: Sequence[Observation],
    thresholds: Optional[ThresholdTable] = None,
    diseases: Sequence[str] = DISEASE_ORDER,
) -> List[AlertAssessment]:
    """
    Produce one alert assessment per disease with a national value.

    Diseases without a national aggregate observation are skipped rather
    than defaulted to normal.

    Args:
        observations: Current-period observations for all diseases
        thresholds: Disease to tier mapping; defaults to the bulletin profile
        diseases: Diseases to assess, in output order

    Returns:
        List of AlertAssessment
    """
    table = thresholds if thresholds is not None else BULLETIN_THRESHOLDS
    assessments = []

    for disease in diseases:
        national = _national_observation(observations, disease)
        if national is None:
            logger.debug(f"No national value for {disease}; skipping alert")
            continue

        level, message = classify_value(national.value, table.get(disease, ()))
        assessments.append(AlertAssessment(disease=disease, level=level, message=message))
        logger.info(f"{disease}: national value {national.value} -> {level}")

    return assessments


def classify_history(
    series: HistorySeries, tiers: Iterable[ThresholdTier]
) -> List[Tuple[int, float, str]]:
    """Label every point of a history series with its level, keeping point order."""
    tiers = list(tiers)
    return [
        (point.week, point.value, classify_value(point.value, tiers)[0])
        for point in series.points
    ]
