#!/usr/bin/env python3
"""
GCP Cloud Discovery.

Discovers Cloud SQL and Cloud Monitoring resources in a project and
normalizes them into resource records for code and state generation.
"""

import logging
from typing import Any, Dict, List, Optional

from shared.base_discovery import DiscoveryEngine
from shared.collector import Collector
from shared.kind_policy import PolicyTable

from .collectors import build_collectors
from .config import GCPConfig, get_gcp_credential
from .listing_client import GCPListingClient
from .policies import GCP_KIND_POLICIES

logger = logging.getLogger(__name__)


class GCPDiscovery(DiscoveryEngine):
    """GCP Cloud Discovery implementation."""

    def __init__(
        self,
        config: GCPConfig,
        policies: PolicyTable = GCP_KIND_POLICIES,
        shared_clients: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize GCP discovery.

        Args:
            config: GCP configuration
            policies: Per-kind policy table
            shared_clients: Pre-built API clients handed to the listing client
        """
        # Credentials are resolved once per engine
        credentials, project = get_gcp_credential()

        super().__init__(config.to_discovery_config(project), policies)

        # Store original GCP config for GCP-specific functionality
        self.gcp_config = config
        self.credentials = credentials
        self.project_id = self.config.scope
        self._shared_clients = shared_clients

    def _create_listing_client(self) -> GCPListingClient:
        return GCPListingClient(self.credentials, shared_clients=self._shared_clients)

    def build_collectors(self) -> List[Collector]:
        return build_collectors(self.config.families, self.policies)

    def get_scanned_project_ids(self) -> list:
        """Return the GCP Project ID(s) scanned."""
        return [self.project_id] if self.project_id else []
