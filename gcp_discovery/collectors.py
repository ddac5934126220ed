"""
GCP resource families.

Cloud SQL instances and their databases are the primary family and are
collected fail-fast. Monitoring notification channels and uptime checks are
supplementary and tolerate page errors.
"""

from typing import Dict, Iterable, List, Type

from shared.collector import Collector, HierarchicalCollector, PaginatedCollector
from shared.constants import GOOGLE_PROVIDER
from shared.kind_policy import PolicyTable

from .policies import (
    GCP_KIND_POLICIES,
    NOTIFICATION_CHANNEL,
    SQL_DATABASE,
    SQL_INSTANCE,
    UPTIME_CHECK,
)


class CloudSQLCollector(HierarchicalCollector):
    """Cloud SQL instances, each followed by its databases."""

    family = "cloudsql"

    def __init__(self, policies: PolicyTable = GCP_KIND_POLICIES):
        super().__init__(
            self.family, SQL_INSTANCE, (SQL_DATABASE,), policies, GOOGLE_PROVIDER
        )


class NotificationChannelCollector(PaginatedCollector):
    family = "notification_channels"

    def __init__(self, policies: PolicyTable = GCP_KIND_POLICIES):
        super().__init__(self.family, NOTIFICATION_CHANNEL, policies, GOOGLE_PROVIDER)


class UptimeCheckCollector(PaginatedCollector):
    family = "uptime_checks"

    def __init__(self, policies: PolicyTable = GCP_KIND_POLICIES):
        super().__init__(self.family, UPTIME_CHECK, policies, GOOGLE_PROVIDER)


# Registration order is the default dependency order
COLLECTOR_FAMILIES: Dict[str, Type[Collector]] = {
    CloudSQLCollector.family: CloudSQLCollector,
    NotificationChannelCollector.family: NotificationChannelCollector,
    UptimeCheckCollector.family: UptimeCheckCollector,
}

DEFAULT_FAMILIES = tuple(COLLECTOR_FAMILIES)


def build_collectors(
    families: Iterable[str], policies: PolicyTable = GCP_KIND_POLICIES
) -> List[Collector]:
    """
    Instantiate collectors for ``families`` in the order given.

    Raises:
        KeyError: If a family is not registered
    """
    collectors = []
    for family in families:
        if family not in COLLECTOR_FAMILIES:
            raise KeyError(f"Unknown resource family: {family}")
        collectors.append(COLLECTOR_FAMILIES[family](policies))
    return collectors
