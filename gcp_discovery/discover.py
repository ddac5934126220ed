#!/usr/bin/env python3
"""
GCP Cloud Discovery command line.

Discovers Cloud SQL and Cloud Monitoring resources and saves the normalized
resource records for code and state generation.
"""

import argparse
from datetime import datetime

from shared.constants import DEFAULT_WORKERS, SUPPORTED_OUTPUT_FORMATS
from shared.exceptions import DiscoveryError
from shared.logging_utils import setup_logging
from shared.output_utils import print_discovery_summary, save_discovery_results

from .collectors import DEFAULT_FAMILIES
from .config import GCPConfig
from .gcp_discovery import GCPDiscovery


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GCP resource discovery for infrastructure-as-code import"
    )
    add_arguments(parser)
    return parser


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        default=None,
        help="GCP project ID (default: GOOGLE_CLOUD_PROJECT or gcloud config)",
    )
    parser.add_argument(
        "--families",
        default=",".join(DEFAULT_FAMILIES),
        help=f"Comma-separated resource families (default: {','.join(DEFAULT_FAMILIES)})",
    )
    parser.add_argument(
        "--ignore-key",
        dest="ignore_keys",
        action="append",
        default=None,
        help="Attribute key to strip from every resource (repeatable)",
    )
    parser.add_argument(
        "--format",
        choices=SUPPORTED_OUTPUT_FORMATS,
        default="txt",
        help="Output format (default: txt)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of parallel collectors (default: {DEFAULT_WORKERS})",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Output directory (default: output)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )


def main(args=None):
    """Main discovery function."""
    if args is None:
        args = build_parser().parse_args()

    setup_logging(level=args.log_level)

    print("GCP Resource Discovery")
    print("=" * 55)
    print(f"Output format: {args.format.upper()}")
    print(f"Parallel collectors: {args.workers}")
    print()

    try:
        config = GCPConfig(
            project_id=args.project,
            families=[f for f in args.families.split(",") if f.strip()],
            ignore_keys=args.ignore_keys,
            max_workers=args.workers,
            show_progress=not args.no_progress,
            output_directory=args.output_dir,
            output_format=args.format,
        )
        discovery = GCPDiscovery(config)
        scanned_projects = discovery.get_scanned_project_ids()

        print(f"Starting GCP Discovery in {discovery.project_id}...")
        result = discovery.discover()
        print(f"Found {len(result.records)} resources")

        print_discovery_summary(result, "gcp", {"projects": scanned_projects})

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        saved_files = save_discovery_results(
            result,
            config.output_directory,
            config.output_format,
            timestamp,
            "gcp",
            extra_info={"projects": scanned_projects},
        )
        print("Results saved to:")
        for file_type, filepath in saved_files.items():
            print(f"  {file_type}: {filepath}")

        print("\nDiscovery completed successfully!")
        return 0

    except (DiscoveryError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
