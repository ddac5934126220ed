"""
GCP Cloud Discovery Module.
"""

from .collectors import (
    CloudSQLCollector,
    NotificationChannelCollector,
    UptimeCheckCollector,
    build_collectors,
)
from .config import GCPConfig, get_gcp_credential
from .gcp_discovery import GCPDiscovery
from .listing_client import GCPListingClient
from .policies import GCP_KIND_POLICIES

__all__ = [
    "CloudSQLCollector",
    "GCP_KIND_POLICIES",
    "GCPConfig",
    "GCPDiscovery",
    "GCPListingClient",
    "NotificationChannelCollector",
    "UptimeCheckCollector",
    "build_collectors",
    "get_gcp_credential",
]

__version__ = "1.0.0"
