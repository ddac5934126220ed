#!/usr/bin/env python3
"""
Main entry point for cloud resource discovery.
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))


def _print_kv(key: str, value: str) -> None:
    print(f"  {key}: {value}")


def _check_gcp_auth() -> int:
    print("GCP Authentication Check")
    print("=" * 28)

    # Optional: gcloud makes application-default login easy.
    try:
        proc = subprocess.run(["gcloud", "--version"], capture_output=True, text=True)
        if proc.returncode == 0:
            _print_kv("gcloud", "installed")
        else:
            _print_kv("gcloud", "installed (version check failed)")
    except FileNotFoundError:
        _print_kv("gcloud", "not found (optional, but recommended)")

    if os.getenv("GOOGLE_CLOUD_PROJECT"):
        _print_kv("GOOGLE_CLOUD_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT") or "")
    if os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
        _print_kv("GOOGLE_APPLICATION_CREDENTIALS", "set")

    try:
        from google.auth.transport.requests import Request

        from gcp_discovery.config import get_gcp_credential

        credentials, project = get_gcp_credential()
        if project:
            _print_kv("Project", project)

        # Force refresh to validate the credential can obtain an access token.
        refresh = getattr(credentials, "refresh", None)
        if callable(refresh):
            refresh(Request())
        print("OK: GCP credentials are working.")
        if not project and not os.getenv("GOOGLE_CLOUD_PROJECT"):
            print("NOTE: No project detected. Set GOOGLE_CLOUD_PROJECT or run:")
            print("  gcloud config set project <your-project-id>")
        return 0

    except Exception as e:
        print(f"ERROR: GCP auth check failed: {e}")
        print("Next steps (simple login):")
        print("  1) Run: gcloud auth application-default login")
        print("  2) Run: gcloud config set project <your-project-id>")
        print("Alternative (service account):")
        print("  - Set GOOGLE_APPLICATION_CREDENTIALS=/path/to/key.json")
        return 1


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Cloud resource discovery for infrastructure-as-code import"
    )
    subparsers = parser.add_subparsers(dest="provider", required=True)

    gcp_parser = subparsers.add_parser("gcp", help="Discover GCP resources")
    gcp_parser.add_argument(
        "--check-auth",
        action="store_true",
        help="Validate cloud credentials and print setup guidance, then exit",
    )

    from gcp_discovery.discover import add_arguments

    add_arguments(gcp_parser)
    args = parser.parse_args()

    if args.check_auth:
        return _check_gcp_auth()

    try:
        if args.provider == "gcp":
            from gcp_discovery.discover import main as gcp_main

            return gcp_main(args)
        print(f"Unsupported provider: {args.provider}")
        return 1
    except ImportError as e:
        print(f"Error importing {args.provider} module: {e}")
        print("Please ensure you have installed the required dependencies:")
        print("  pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
