"""
Shared output utilities for saving discovery results.
"""

import json
import os
from typing import Any, Dict, Optional

import pandas as pd

from .base_discovery import DiscoveryResult
from .constants import FILE_PATTERNS

RECORD_COLUMNS = [
    "durable_id",
    "display_name",
    "kind",
    "provider",
    "parent_id",
    "attributes",
    "allow_empty_fields",
    "additional_fields",
]


def save_discovery_results(
    result: DiscoveryResult,
    output_dir: str,
    output_format: str,
    timestamp: str,
    provider: str,
    extra_info: Optional[Dict[str, Any]] = None,
) -> Dict[str, str]:
    """
    Save discovery results in the specified format.

    Args:
        result: Discovery result to save
        output_dir: Output directory
        output_format: Output format (json, csv, txt)
        timestamp: Timestamp for filename
        provider: Cloud provider (gcp)
        extra_info: Additional scope/context to include

    Returns:
        Dictionary mapping file types to file paths
    """
    extra_info = extra_info or {}
    os.makedirs(output_dir, exist_ok=True)

    filename = FILE_PATTERNS["discovered_resources"].format(
        provider=provider, timestamp=timestamp, format=output_format
    )
    filepath = os.path.join(output_dir, filename)
    rows = [record.to_dict() for record in result.records]

    if output_format == "json":
        payload = {
            "scope": result.scope,
            "discovered_at": result.discovered_at,
            "ignore_keys": sorted(result.ignore_keys),
            "skipped": list(result.skipped),
            "resources": rows,
            **extra_info,
        }
        with open(filepath, "w") as f:
            json.dump(payload, f, indent=2, default=str)
    elif output_format == "csv":
        if not rows:
            df = pd.DataFrame(columns=pd.Index(RECORD_COLUMNS))
        else:
            df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
            for column in ("attributes", "additional_fields"):
                df[column] = df[column].apply(lambda v: json.dumps(v, sort_keys=True))
            df["allow_empty_fields"] = df["allow_empty_fields"].apply(";".join)
        df.to_csv(filepath, index=False)
    else:  # txt
        with open(filepath, "w") as f:
            if not rows:
                f.write(f"No {provider.upper()} resources found in {result.scope}.\n")
                return {"discovered_resources": filepath}

            f.write(f"{provider.upper()} Resource Discovery Results\n")
            f.write("=" * 50 + "\n\n")
            f.write(f"Scope: {result.scope}\n")
            f.write(f"Discovered: {result.discovered_at}\n\n")

            for i, row in enumerate(rows, 1):
                f.write(f"Resource {i}:\n")
                f.write(f"  ID: {row['durable_id']}\n")
                f.write(f"  Name: {row['display_name']}\n")
                f.write(f"  Kind: {row['kind']}\n")
                f.write(f"  Provider: {row['provider']}\n")
                if row["attributes"]:
                    f.write(f"  Attributes: {row['attributes']}\n")
                if row["additional_fields"]:
                    f.write(f"  Additional Fields: {row['additional_fields']}\n")
                f.write("\n")

            if result.skipped:
                f.write("Skipped:\n")
                for message in result.skipped:
                    f.write(f"  {message}\n")

    return {"discovered_resources": filepath}


def print_discovery_summary(
    result: DiscoveryResult,
    provider: str,
    extra_info: Optional[Dict[str, Any]] = None,
) -> None:
    """Print a per-kind summary of a discovery run."""
    extra_info = extra_info or {}

    print(f"\n{provider.upper()} DISCOVERY SUMMARY")
    print("=" * 40)
    print(f"Scope: {result.scope}")
    for key, value in extra_info.items():
        print(f"{key.replace('_', ' ').title()}: {value}")
    print(f"Total resources: {len(result.records)}")

    for kind, records in sorted(result.by_kind().items()):
        print(f"  {kind}: {len(records)}")

    if result.skipped:
        print(f"Skipped items: {len(result.skipped)}")
        for message in result.skipped:
            print(f"  {message}")
