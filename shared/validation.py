"""
Validation utilities for discovery configuration.
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from .constants import (
    ERROR_MESSAGES,
    MAX_WORKERS,
    SUPPORTED_OUTPUT_FORMATS,
)


def validate_output_format(output_format: str) -> str:
    """
    Validate output format.

    Args:
        output_format: Output format to validate

    Returns:
        Normalized output format (lowercase)

    Raises:
        ValueError: If output format is not supported
    """
    if not output_format:
        raise ValueError("Output format cannot be empty")

    normalized_format = output_format.lower()
    if normalized_format not in SUPPORTED_OUTPUT_FORMATS:
        raise ValueError(
            ERROR_MESSAGES["invalid_output_format"].format(
                format=output_format, supported=SUPPORTED_OUTPUT_FORMATS
            )
        )

    return normalized_format


def validate_workers(workers: int) -> int:
    """
    Validate number of workers.

    Args:
        workers: Number of workers to validate

    Returns:
        Validated number of workers

    Raises:
        ValueError: If workers is invalid
    """
    if not isinstance(workers, int) or isinstance(workers, bool):
        raise ValueError("Workers must be an integer")

    if workers < 1:
        raise ValueError("Workers must be at least 1")

    if workers > MAX_WORKERS:
        raise ValueError(f"Workers cannot exceed {MAX_WORKERS}")

    return workers


def validate_scope(scope: Optional[str]) -> str:
    """
    Validate the discovery scope (project ID).

    Raises:
        ValueError: If scope is missing or blank
    """
    if not scope or not isinstance(scope, str) or not scope.strip():
        raise ValueError(ERROR_MESSAGES["missing_scope"])
    return scope.strip()


def validate_families(
    families: Iterable[str], supported: Iterable[str]
) -> Tuple[str, ...]:
    """
    Validate requested resource families against the supported ones.

    Duplicates are dropped while keeping the first occurrence, so the
    requested order is preserved.

    Raises:
        ValueError: If a family is unknown or none was requested
    """
    supported = list(supported)
    requested = tuple(dict.fromkeys(f.strip().lower() for f in families if f.strip()))
    if not requested:
        raise ValueError("At least one resource family is required")

    for family in requested:
        if family not in supported:
            raise ValueError(
                ERROR_MESSAGES["unknown_family"].format(
                    family=family, supported=supported
                )
            )
    return requested


def validate_ignore_keys(ignore_keys: Optional[Iterable[str]]) -> FrozenSet[str]:
    """
    Validate ignore keys.

    Raises:
        ValueError: If a key is not a non-empty string
    """
    if ignore_keys is None:
        return frozenset()
    if isinstance(ignore_keys, str):
        raise ValueError("Ignore keys must be a collection of strings, not a string")

    keys = frozenset(ignore_keys)
    for key in keys:
        if not isinstance(key, str) or not key:
            raise ValueError(f"Invalid ignore key: {key!r}")
    return keys
