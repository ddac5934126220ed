"""
Provider-agnostic resource discovery and normalization.
"""

from .base_discovery import DiscoveryEngine, DiscoveryResult, strip_ignore_keys
from .collector import (
    Collector,
    CollectorResult,
    HierarchicalCollector,
    PaginatedCollector,
)
from .config import BaseConfig, DiscoveryConfig
from .exceptions import (
    ConfigurationError,
    CredentialsError,
    DiscoveryAbortedError,
    DiscoveryError,
)
from .kind_policy import IdentifierRule, KindPolicy, PolicyTable
from .listing import ListingClient, ListPage
from .pagination import EXHAUSTED, Exhausted, Item, PageError
from .resource_record import ResourceRecord

__all__ = [
    "BaseConfig",
    "Collector",
    "CollectorResult",
    "ConfigurationError",
    "CredentialsError",
    "DiscoveryAbortedError",
    "DiscoveryConfig",
    "DiscoveryEngine",
    "DiscoveryError",
    "DiscoveryResult",
    "EXHAUSTED",
    "Exhausted",
    "HierarchicalCollector",
    "IdentifierRule",
    "Item",
    "KindPolicy",
    "ListingClient",
    "ListPage",
    "PageError",
    "PaginatedCollector",
    "PolicyTable",
    "ResourceRecord",
    "strip_ignore_keys",
]

__version__ = "1.0.0"
