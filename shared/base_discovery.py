import logging
from abc import ABC, abstractmethod
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from tqdm import tqdm

from .collector import Collector, CollectorResult
from .config import DiscoveryConfig
from .exceptions import DiscoveryAbortedError
from .kind_policy import PolicyTable
from .listing import ListingClient
from .logging_utils import DiscoveryLogger
from .resource_record import ResourceRecord
from .validation import validate_scope


@dataclass(frozen=True)
class DiscoveryResult:
    """Aggregate output of one discovery run, owned by the caller."""

    scope: str
    records: Tuple[ResourceRecord, ...]
    ignore_keys: FrozenSet[str]
    skipped: Tuple[str, ...] = ()
    discovered_at: str = ""

    def durable_ids(self) -> Set[str]:
        return {record.durable_id for record in self.records}

    def by_kind(self) -> Dict[str, List[ResourceRecord]]:
        grouped: Dict[str, List[ResourceRecord]] = {}
        for record in self.records:
            grouped.setdefault(record.kind, []).append(record)
        return grouped

    def duplicate_ids(self) -> List[Tuple[str, str]]:
        """``(kind, durable_id)`` pairs that occur more than once."""
        counts = Counter((record.kind, record.durable_id) for record in self.records)
        return [key for key, count in counts.items() if count > 1]


def strip_ignore_keys(
    records: Iterable[ResourceRecord], ignore_keys: Iterable[str]
) -> List[ResourceRecord]:
    """Remove ``ignore_keys`` from every record's attributes."""
    ignore_keys = frozenset(ignore_keys)
    if not ignore_keys:
        return list(records)
    return [record.without_attributes(ignore_keys) for record in records]


class DiscoveryEngine(ABC):
    """
    Runs the configured collectors and merges their records.

    Subclasses provide the listing client and the collectors for their
    provider. A collector failure aborts the whole run with
    :class:`DiscoveryAbortedError`; nothing partial is returned.
    """

    def __init__(self, config: DiscoveryConfig, policies: PolicyTable):
        """
        Initialize the discovery engine.

        Args:
            config: Discovery configuration
            policies: Per-kind policy table shared by every collector
        """
        self.config = config
        self.policies = policies
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def _create_listing_client(self) -> ListingClient:
        """Resolve connection context and build the listing client."""

    @abstractmethod
    def build_collectors(self) -> List[Collector]:
        """Collectors for the configured families, in dependency order."""

    def discover(self, scope: Optional[str] = None) -> DiscoveryResult:
        """
        Discover every configured resource family within ``scope``.

        Args:
            scope: Project/account to discover in (defaults to the configured scope)

        Returns:
            Discovery result with ignore keys already stripped

        Raises:
            DiscoveryAbortedError: If any collector fails fatally
        """
        scope = validate_scope(scope or self.config.scope)
        collectors = self.build_collectors()
        client = self._create_listing_client()

        try:
            with DiscoveryLogger(self.logger, f"discovery in {scope}") as dlog:
                if self.config.max_workers > 1 and len(collectors) > 1:
                    results = self._run_parallel(collectors, client, scope)
                else:
                    results = self._run_sequential(collectors, client, scope)

                for collector, result in zip(collectors, results):
                    dlog.log_discovery_result(
                        collector.family, len(result.records), scope
                    )
        finally:
            client.close()

        records: List[ResourceRecord] = []
        skipped: List[str] = []
        for result in results:
            records.extend(result.records)
            skipped.extend(result.skipped)

        discovery = DiscoveryResult(
            scope=scope,
            records=tuple(strip_ignore_keys(records, self.config.ignore_keys)),
            ignore_keys=self.config.ignore_keys,
            skipped=tuple(skipped),
            discovered_at=datetime.now().isoformat(),
        )

        duplicates = discovery.duplicate_ids()
        if duplicates:
            self.logger.warning(
                "Discovered %d duplicate resource IDs: %s", len(duplicates), duplicates
            )

        self.logger.info(
            "Discovery complete. Found %d resources", len(discovery.records)
        )
        return discovery

    def _run_collector(
        self, collector: Collector, client: ListingClient, scope: str
    ) -> CollectorResult:
        try:
            return collector.collect(client, scope)
        except Exception as e:
            self.logger.error("Error discovering %s in %s: %s", collector.family, scope, e)
            raise DiscoveryAbortedError(collector.family, e) from e

    def _run_sequential(
        self, collectors: List[Collector], client: ListingClient, scope: str
    ) -> List[CollectorResult]:
        results = []
        for collector in tqdm(
            collectors, desc="Collectors", disable=not self.config.show_progress
        ):
            results.append(self._run_collector(collector, client, scope))
        return results

    def _run_parallel(
        self, collectors: List[Collector], client: ListingClient, scope: str
    ) -> List[CollectorResult]:
        results: List[Optional[CollectorResult]] = [None] * len(collectors)
        workers = min(self.config.max_workers, len(collectors))

        executor = ThreadPoolExecutor(max_workers=workers)
        future_to_index = {
            executor.submit(self._run_collector, collector, client, scope): index
            for index, collector in enumerate(collectors)
        }

        try:
            with tqdm(
                total=len(collectors),
                desc="Collectors",
                disable=not self.config.show_progress,
            ) as pbar:
                for future in as_completed(future_to_index):
                    # Merge in configured order, not completion order
                    results[future_to_index[future]] = future.result()
                    pbar.update(1)
        except DiscoveryAbortedError:
            for future in future_to_index:
                future.cancel()
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        return results
