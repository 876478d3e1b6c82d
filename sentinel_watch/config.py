"""
Configuration settings for the sentinel surveillance pipeline.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from sentinel_watch.alerts import THRESHOLD_PROFILES

load_dotenv()


class Config:
    """Configuration class for the project."""

    # Export endpoint; each source is requested as ?type=<source>
    SENTINEL_API_URL = os.getenv("SENTINEL_API_URL", "")

    # Source type keys understood by the export endpoint
    SOURCE_CURRENT = "Teiten"  # current week, multi-disease
    SOURCE_ARI = "ARI"  # current week, acute respiratory infection only
    SOURCE_HISTORY = "Tougai"  # year-to-date weekly history
    SOURCE_TYPES = (SOURCE_CURRENT, SOURCE_ARI, SOURCE_HISTORY)

    # Fetch Configuration
    FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))
    FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "3"))
    FETCH_ENCODING = os.getenv("FETCH_ENCODING", "utf-8")

    # Parsing Configuration
    CSV_DELIMITER = os.getenv("CSV_DELIMITER", ",")

    # Alert Configuration
    ALERT_THRESHOLD_PROFILE = os.getenv("ALERT_THRESHOLD_PROFILE", "bulletin")
    TOP_REGIONS_LIMIT = int(os.getenv("TOP_REGIONS_LIMIT", "10"))

    # Paths
    PROJECT_ROOT = Path(__file__).parent.parent
    OUTPUTS_DIR = Path(os.getenv("OUTPUTS_DIR", str(PROJECT_ROOT / "outputs")))
    LOGS_DIR = Path(os.getenv("LOGS_DIR", str(PROJECT_ROOT / "logs")))

    @classmethod
    def create_directories(cls):
        """Create necessary directories."""
        for directory in [cls.OUTPUTS_DIR, cls.LOGS_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate_config(cls) -> Dict[str, Any]:
        """
        Validate configuration settings.

        Returns:
            Dictionary with validation results
        """
        issues = []

        if not cls.SENTINEL_API_URL:
            issues.append("SENTINEL_API_URL not set")
        elif not cls.SENTINEL_API_URL.startswith(("http://", "https://")):
            issues.append(f"Invalid SENTINEL_API_URL: {cls.SENTINEL_API_URL}")

        if cls.ALERT_THRESHOLD_PROFILE not in THRESHOLD_PROFILES:
            issues.append(f"Invalid ALERT_THRESHOLD_PROFILE: {cls.ALERT_THRESHOLD_PROFILE}")

        if cls.FETCH_TIMEOUT <= 0:
            issues.append(f"Invalid FETCH_TIMEOUT: {cls.FETCH_TIMEOUT}")

        if cls.FETCH_RETRIES < 0:
            issues.append(f"Invalid FETCH_RETRIES: {cls.FETCH_RETRIES}")

        if len(cls.CSV_DELIMITER) != 1:
            issues.append(f"Invalid CSV_DELIMITER: {cls.CSV_DELIMITER!r}")

        return {"valid": len(issues) == 0, "issues": issues}

    @classmethod
    def get_source_url(cls, source_type: str) -> str:
        """
        Build the export URL for one source type.

        Args:
            source_type: One of SOURCE_TYPES

        Returns:
            Full request URL
        """
        if source_type not in cls.SOURCE_TYPES:
            raise ValueError(f"Unknown source type: {source_type}")
        return f"{cls.SENTINEL_API_URL}?type={source_type}"
