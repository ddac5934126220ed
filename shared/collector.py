"""
Collectors turn listing results for one resource family into records.

Two algorithms are provided and intentionally kept apart:

* :class:`HierarchicalCollector` walks a primary parent kind and its child
  kinds. Any listing failure aborts the collector; no partial list is
  returned.
* :class:`PaginatedCollector` walks a flat, secondary kind. Page errors are
  logged and skipped and the collector still succeeds.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .kind_policy import IdentifierRule, PolicyTable
from .listing import ListingClient
from .pagination import Exhausted, Item, PageError
from .resource_record import ResourceRecord


@dataclass
class CollectorResult:
    """Records produced by one collector plus the page errors it skipped."""

    family: str
    records: List[ResourceRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def get_item_name(item: Any) -> str:
    """
    Extract the local name of a listed item.

    Supports API objects exposing ``name`` and plain dictionaries.

    Raises:
        ValueError: If the item has no usable name
    """
    if isinstance(item, dict):
        name = item.get("name")
    else:
        name = getattr(item, "name", None)

    if not name or not isinstance(name, str):
        raise ValueError(f"Listed item has no name: {item!r}")
    return name


class Collector(ABC):
    """Base class for one resource-family collector."""

    def __init__(self, family: str, policies: PolicyTable, provider: str):
        self.family = family
        self.policies = policies
        self.provider = provider
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def kinds(self) -> Sequence[str]:
        """Resource kinds produced by this collector, parents first."""

    @abstractmethod
    def collect(self, client: ListingClient, scope: str) -> CollectorResult:
        """Discover every record of this family within ``scope``."""

    def _new_record(
        self, kind: str, item: Any, parent_id: Optional[str] = None
    ) -> ResourceRecord:
        policy = self.policies[kind]
        durable_id, display_name = policy.compose_identifiers(
            get_item_name(item), parent_id
        )
        return ResourceRecord(
            durable_id=durable_id,
            display_name=display_name,
            kind=kind,
            provider=self.provider,
            attributes=policy.build_attributes(durable_id),
            allow_empty_fields=policy.allow_empty_fields,
            additional_fields=policy.additional_fields,
            parent_id=(
                parent_id
                if policy.identifier_rule is IdentifierRule.PARENT_SCOPED
                else None
            ),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(family={self.family!r})"


class HierarchicalCollector(Collector):
    """Fail-fast collector for a parent kind and the kinds nested under it."""

    def __init__(
        self,
        family: str,
        parent_kind: str,
        child_kinds: Sequence[str],
        policies: PolicyTable,
        provider: str,
    ):
        super().__init__(family, policies, provider)
        self.parent_kind = parent_kind
        self.child_kinds = tuple(child_kinds)

        # Fail on a bad policy table before any remote call is made
        for kind in self.kinds:
            self.policies[kind]

    @property
    def kinds(self) -> Sequence[str]:
        return (self.parent_kind,) + self.child_kinds

    def collect(self, client: ListingClient, scope: str) -> CollectorResult:
        records: List[ResourceRecord] = []
        cursor = None

        while True:
            page = client.list(self.parent_kind, scope, cursor)
            for item in page.items:
                parent = self._new_record(self.parent_kind, item)
                records.append(parent)
                records.extend(self._collect_children(client, parent, scope))

            cursor = page.next_cursor
            if not cursor:
                break

        self.logger.info(
            "Discovered %d %s resources in %s", len(records), self.family, scope
        )
        return CollectorResult(family=self.family, records=records)

    def _collect_children(
        self, client: ListingClient, parent: ResourceRecord, scope: str
    ) -> List[ResourceRecord]:
        children = []
        for kind in self.child_kinds:
            for item in client.list_children(kind, parent.durable_id, scope):
                children.append(self._new_record(kind, item, parent.durable_id))
        return children


class PaginatedCollector(Collector):
    """Fail-soft collector for a flat, supplementary kind."""

    def __init__(self, family: str, kind: str, policies: PolicyTable, provider: str):
        super().__init__(family, policies, provider)
        self.kind = kind
        self.policies[kind]

    @property
    def kinds(self) -> Sequence[str]:
        return (self.kind,)

    def collect(self, client: ListingClient, scope: str) -> CollectorResult:
        result = CollectorResult(family=self.family)

        for outcome in client.list_paginated(self.kind, scope):
            if isinstance(outcome, Exhausted):
                break

            if isinstance(outcome, PageError):
                self._skip(result, scope, outcome.error)
                continue

            if isinstance(outcome, Item):
                try:
                    record = self._new_record(self.kind, outcome.value)
                except ValueError as e:
                    self._skip(result, scope, e)
                    continue
                result.records.append(record)

        self.logger.info(
            "Discovered %d %s resources in %s (%d skipped)",
            len(result.records),
            self.kind,
            scope,
            len(result.skipped),
        )
        return result

    def _skip(self, result: CollectorResult, scope: str, error: BaseException) -> None:
        message = f"{self.kind} in {scope}: {error}"
        self.logger.error("Error with %s: %s", self.family, message)
        result.skipped.append(message)
