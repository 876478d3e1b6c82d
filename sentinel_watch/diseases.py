"""
Disease profiles used for header matching.

Synonyms, marker tokens and section keywords live here as data so the
extractors never carry literal disease names.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

INFLUENZA = "Influenza"
COVID_19 = "COVID-19"
ARI = "ARI"

# Sub-header token for the "per fixed point" (per sentinel site) metric.
PER_SENTINEL_MARKER = "定当"

# Week header token, e.g. "12週".
WEEK_MARKER = "週"


@dataclass(frozen=True)
class DiseaseProfile:
    """Matching vocabulary for one disease."""

    key: str
    display_name: str
    header_synonyms: Tuple[str, ...]
    section_keywords: Tuple[str, ...] = ()


DISEASES: Dict[str, DiseaseProfile] = {
    INFLUENZA: DiseaseProfile(
        key=INFLUENZA,
        display_name="インフルエンザ",
        header_synonyms=(INFLUENZA, "インフルエンザ"),
        section_keywords=("インフルエンザ",),
    ),
    COVID_19: DiseaseProfile(
        key=COVID_19,
        display_name="COVID-19",
        header_synonyms=(COVID_19, "新型コロナウイルス感染症"),
        section_keywords=(COVID_19, "新型コロナ"),
    ),
    # The historical export carries no ARI section.
    ARI: DiseaseProfile(
        key=ARI,
        display_name="急性呼吸器感染症",
        header_synonyms=(ARI, "急性呼吸器感染症"),
    ),
}

DISEASE_ORDER = (INFLUENZA, COVID_19, ARI)


def get_profile(disease: str) -> DiseaseProfile:
    """Look up a disease profile, raising KeyError for unknown identifiers."""
    try:
        return DISEASES[disease]
    except KeyError:
        raise KeyError(f"Unknown disease identifier: {disease}") from None


def display_name(disease: str) -> str:
    profile = DISEASES.get(disease)
    return profile.display_name if profile else disease
