"""
GCP Configuration for Cloud Discovery
"""

import os
import subprocess
from typing import Iterable, Optional

from google.auth import default
from google.auth.exceptions import DefaultCredentialsError

from shared.config import BaseConfig, DiscoveryConfig
from shared.constants import (
    DEFAULT_IGNORE_KEYS,
    DEFAULT_WORKERS,
    ERROR_MESSAGES,
    GOOGLE_PROVIDER,
)
from shared.exceptions import ConfigurationError, CredentialsError
from shared.validation import validate_families, validate_scope

from .collectors import COLLECTOR_FAMILIES, DEFAULT_FAMILIES

# Scopes needed for Cloud SQL Admin and Cloud Monitoring read access
GCP_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class GCPConfig(BaseConfig):
    """GCP-specific configuration."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        families: Optional[Iterable[str]] = None,
        ignore_keys: Optional[Iterable[str]] = None,
        max_workers: int = DEFAULT_WORKERS,
        show_progress: bool = False,
        output_directory: str = "output",
        output_format: str = "txt",
    ):
        super().__init__(output_directory=output_directory, output_format=output_format)
        self.project_id = project_id or self._get_default_project_id()
        self.families = tuple(families) if families else DEFAULT_FAMILIES
        self.ignore_keys = (
            frozenset(ignore_keys) if ignore_keys is not None else DEFAULT_IGNORE_KEYS
        )
        self.max_workers = max_workers
        self.show_progress = show_progress

    def _get_default_project_id(self) -> Optional[str]:
        """Get default project ID from environment or gcloud CLI."""
        # Try environment variable first
        project_id = os.getenv("GOOGLE_CLOUD_PROJECT")
        if project_id:
            return project_id

        # Try gcloud CLI
        try:
            result = subprocess.run(
                ["gcloud", "config", "get-value", "project"],
                capture_output=True,
                text=True,
                check=True,
            )
            project_id = result.stdout.strip()
            if project_id and project_id != "(unset)":
                return project_id
        except (subprocess.CalledProcessError, FileNotFoundError):
            pass

        return None

    def to_discovery_config(self, project_id: Optional[str] = None) -> DiscoveryConfig:
        """
        Build the engine configuration from this GCP configuration.

        Args:
            project_id: Project to scan when this configuration names none

        Raises:
            ConfigurationError: If the project, families or worker count are invalid
        """
        try:
            return DiscoveryConfig(
                scope=validate_scope(self.project_id or project_id),
                provider=GOOGLE_PROVIDER,
                families=validate_families(self.families, COLLECTOR_FAMILIES),
                ignore_keys=self.ignore_keys,
                max_workers=self.max_workers,
                show_progress=self.show_progress,
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e


def get_gcp_credential():
    """Get GCP credentials using default authentication."""
    try:
        credentials, project = default(scopes=GCP_SCOPES)
        return credentials, project
    except DefaultCredentialsError as e:
        raise CredentialsError(
            ERROR_MESSAGES["credentials_not_found"].format(error=e)
        ) from e

