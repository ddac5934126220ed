"""
GCP implementation of the listing client.

Cloud SQL is listed through the ``sqladmin`` v1beta4 REST API and Cloud
Monitoring through the ``monitoring_v3`` gRPC clients.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Sequence

from google.api_core.exceptions import GoogleAPIError

from shared.listing import ListingClient, ListPage
from shared.pagination import PageResult, iterate_tagged

from .policies import NOTIFICATION_CHANNEL, SQL_DATABASE, SQL_INSTANCE, UPTIME_CHECK

logger = logging.getLogger(__name__)

# Errors reported per page on the gRPC monitoring listings; anything else
# propagates. GAPIC pagers stop after the first failed page, so a PageError
# ends that listing with the pages already read.
PAGE_ERRORS = (GoogleAPIError,)


class GCPListingClient(ListingClient):
    """Lists Cloud SQL and Cloud Monitoring resources for a project."""

    def __init__(self, credentials: Any, shared_clients: Optional[Dict[str, Any]] = None):
        """
        Initialize the listing client.

        Args:
            credentials: Google credentials resolved by the caller
            shared_clients: Pre-built API clients keyed by ``sqladmin``,
                ``notification_channels`` and ``uptime_checks``
        """
        self.credentials = credentials
        self._clients: Dict[str, Any] = dict(shared_clients or {})

    @property
    def sqladmin(self):
        if "sqladmin" not in self._clients:
            from googleapiclient import discovery

            self._clients["sqladmin"] = discovery.build(
                "sqladmin",
                "v1beta4",
                credentials=self.credentials,
                cache_discovery=False,
            )
        return self._clients["sqladmin"]

    @property
    def notification_channels(self):
        if "notification_channels" not in self._clients:
            from google.cloud import monitoring_v3

            self._clients["notification_channels"] = (
                monitoring_v3.NotificationChannelServiceClient(
                    credentials=self.credentials
                )
            )
        return self._clients["notification_channels"]

    @property
    def uptime_checks(self):
        if "uptime_checks" not in self._clients:
            from google.cloud import monitoring_v3

            self._clients["uptime_checks"] = monitoring_v3.UptimeCheckServiceClient(
                credentials=self.credentials
            )
        return self._clients["uptime_checks"]

    def list(self, kind: str, scope: str, cursor: Optional[str] = None) -> ListPage:
        if kind != SQL_INSTANCE:
            raise ValueError(f"Top-level listing is not supported for {kind}")

        params = {"project": scope}
        if cursor:
            params["pageToken"] = cursor

        response = self.sqladmin.instances().list(**params).execute()
        return ListPage(
            items=response.get("items", []),
            next_cursor=response.get("nextPageToken"),
        )

    def list_children(self, kind: str, parent_id: str, scope: str) -> Sequence[Any]:
        if kind != SQL_DATABASE:
            raise ValueError(f"Child listing is not supported for {kind}")

        response = (
            self.sqladmin.databases().list(project=scope, instance=parent_id).execute()
        )
        return response.get("items", [])

    def list_paginated(self, kind: str, scope: str) -> Iterator[PageResult]:
        project = f"projects/{scope}"

        if kind == NOTIFICATION_CHANNEL:
            return iterate_tagged(
                lambda: self.notification_channels.list_notification_channels(
                    name=project
                ),
                errors=PAGE_ERRORS,
            )
        if kind == UPTIME_CHECK:
            return iterate_tagged(
                lambda: self.uptime_checks.list_uptime_check_configs(parent=project),
                errors=PAGE_ERRORS,
            )
        raise ValueError(f"Paginated listing is not supported for {kind}")

    def close(self) -> None:
        sqladmin = self._clients.get("sqladmin")
        if sqladmin is not None and callable(getattr(sqladmin, "close", None)):
            sqladmin.close()

        for name in ("notification_channels", "uptime_checks"):
            transport = getattr(self._clients.get(name), "transport", None)
            if transport is not None and callable(getattr(transport, "close", None)):
                transport.close()

        logger.debug("Closed GCP listing clients")
