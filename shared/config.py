from dataclasses import dataclass
from typing import FrozenSet, Tuple

from .constants import (
    DEFAULT_IGNORE_KEYS,
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_WORKERS,
)
from .validation import validate_ignore_keys, validate_output_format, validate_workers


@dataclass
class BaseConfig:
    """Base configuration for cloud discovery."""
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    output_format: str = DEFAULT_OUTPUT_FORMAT  # json, csv, txt

    def __post_init__(self):
        if not self.output_directory:
            raise ValueError("Output directory is required")
        self.output_format = validate_output_format(self.output_format)


@dataclass
class DiscoveryConfig:
    """
    Everything a discovery run needs, passed explicitly to the engine.

    Attributes:
        scope: Account/project boundary to discover in
        provider: Provider tag stamped on every record
        families: Resource families to collect, in dependency order
        ignore_keys: Attribute keys stripped from every record after collection
        max_workers: 1 runs collectors sequentially, more runs them in parallel
        show_progress: Display a progress bar across collectors
    """
    scope: str
    provider: str
    families: Tuple[str, ...] = ()
    ignore_keys: FrozenSet[str] = DEFAULT_IGNORE_KEYS
    max_workers: int = DEFAULT_WORKERS
    show_progress: bool = False

    def __post_init__(self):
        self.families = tuple(self.families)
        self.ignore_keys = validate_ignore_keys(self.ignore_keys)
        self.max_workers = validate_workers(self.max_workers)
