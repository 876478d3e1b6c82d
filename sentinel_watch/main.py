#!/usr/bin/env python3
"""
Main entry point for the sentinel surveillance pipeline.

This module provides a command-line interface for fetching the weekly
exports, processing local copies of them, and checking configuration.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from sentinel_watch.alerts import get_threshold_profile
from sentinel_watch.config import Config
from sentinel_watch.diseases import DISEASE_ORDER, display_name
from sentinel_watch.fetch import SourceFetchError, fetch_all_sources
from sentinel_watch.pipeline import process_snapshot, process_sources
from sentinel_watch.schema import SurveillanceSnapshot


def setup_logging(level: str = "INFO"):
    """Set up logging configuration."""
    Config.create_directories()
    log_level = getattr(logging, level.upper())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(Config.LOGS_DIR / "sentinel_watch.log"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def save_snapshot(snapshot: SurveillanceSnapshot, output_dir: Path) -> None:
    """
    Write a snapshot as CSV tables plus one JSON document.

    Args:
        snapshot: Processed snapshot
        output_dir: Directory for output files
    """
    logger = logging.getLogger(__name__)
    output_dir.mkdir(parents=True, exist_ok=True)

    snapshot.observations_frame().to_csv(output_dir / "observations.csv", index=False)
    snapshot.history_frame().to_csv(output_dir / "history.csv", index=False)
    snapshot.alerts_frame().to_csv(output_dir / "alerts.csv", index=False)

    with open(output_dir / "snapshot.json", "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, ensure_ascii=False, indent=2)

    logger.info(f"Snapshot saved to {output_dir}")


def load_thresholds():
    """Resolve the configured threshold profile, exiting on an unknown name."""
    logger = logging.getLogger(__name__)
    try:
        return get_threshold_profile(Config.ALERT_THRESHOLD_PROFILE)
    except ValueError as e:
        logger.error(f"Invalid ALERT_THRESHOLD_PROFILE: {e}")
        sys.exit(1)


def write_results(snapshot: SurveillanceSnapshot, output_dir: Optional[str]) -> None:
    """Save the snapshot and print its summary, exiting if the output cannot be written."""
    logger = logging.getLogger(__name__)
    target = Path(output_dir) if output_dir else Config.OUTPUTS_DIR
    try:
        save_snapshot(snapshot, target)
    except OSError as e:
        logger.error(f"Could not write output to {target}: {e}")
        sys.exit(1)

    print_summary(snapshot)


def print_summary(snapshot: SurveillanceSnapshot, limit: Optional[int] = None) -> None:
    """Print national values, alert levels and the top regions per disease."""
    limit = Config.TOP_REGIONS_LIMIT if limit is None else limit
    week = snapshot.report_week.label if snapshot.report_week else "不明"
    print(f"\nReport week: {week}")

    for disease in DISEASE_ORDER:
        value = snapshot.national_value(disease)
        alert = snapshot.find_alert(disease)
        value_text = f"{value:.2f}" if value is not None else "-"
        status = f"{alert.level} ({alert.message})" if alert else "データなし"
        print(f"  {display_name(disease)}: {value_text} 定点当たり - {status}")

        for rank, obs in enumerate(snapshot.top_regions(disease, limit=limit), start=1):
            print(f"    {rank}. {obs.region} {obs.value:.2f}")


def fetch_and_process(output_dir: Optional[str] = None) -> None:
    """
    Fetch all three exports, process them and save the snapshot.

    Args:
        output_dir: Optional directory for output files
    """
    logger = logging.getLogger(__name__)

    if not Config.SENTINEL_API_URL:
        logger.error("SENTINEL_API_URL not configured")
        sys.exit(1)

    thresholds = load_thresholds()

    try:
        texts = fetch_all_sources()
    except SourceFetchError as e:
        logger.error(f"データの取得に失敗しました。詳細: {e}")
        sys.exit(1)

    snapshot = process_sources(texts, thresholds=thresholds, delimiter=Config.CSV_DELIMITER)

    write_results(snapshot, output_dir)


def parse_local_files(
    current_path: str,
    ari_path: str,
    history_path: str,
    output_dir: Optional[str] = None,
    encoding: str = "utf-8",
) -> None:
    """
    Process local copies of the three exports.

    Args:
        current_path: Path to the Teiten CSV
        ari_path: Path to the ARI CSV
        history_path: Path to the Tougai CSV
        output_dir: Optional directory for output files
        encoding: Text encoding of the files
    """
    logger = logging.getLogger(__name__)

    try:
        texts = [
            Path(path).read_text(encoding=encoding)
            for path in (current_path, ari_path, history_path)
        ]
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read input files: {e}")
        sys.exit(1)

    thresholds = load_thresholds()
    snapshot = process_snapshot(
        *texts, thresholds=thresholds, delimiter=Config.CSV_DELIMITER
    )

    write_results(snapshot, output_dir)


def validate_config() -> None:
    """Validate project configuration."""
    validation = Config.validate_config()

    if validation["valid"]:
        print("✓ Configuration is valid")
    else:
        print("✗ Configuration issues found:")
        for issue in validation["issues"]:
            print(f"  - {issue}")
        sys.exit(1)


def main(argv=None):
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Sentinel Watch - weekly sentinel surveillance extraction pipeline"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Fetch and process the latest exports")
    fetch_parser.add_argument("--output-dir", help="Output directory")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Process local export files")
    parse_parser.add_argument("current_path", help="Path to the Teiten CSV")
    parse_parser.add_argument("ari_path", help="Path to the ARI CSV")
    parse_parser.add_argument("history_path", help="Path to the Tougai CSV")
    parse_parser.add_argument("--output-dir", help="Output directory")
    parse_parser.add_argument("--encoding", default="utf-8", help="Input file encoding")

    # Config command
    subparsers.add_parser("validate-config", help="Validate configuration")

    args = parser.parse_args(argv)

    # Set up logging
    setup_logging(args.log_level)

    if args.command == "fetch":
        fetch_and_process(args.output_dir)
    elif args.command == "parse":
        parse_local_files(
            args.current_path,
            args.ari_path,
            args.history_path,
            args.output_dir,
            args.encoding,
        )
    elif args.command == "validate-config":
        validate_config()
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
