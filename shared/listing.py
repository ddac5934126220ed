"""
Listing client interface consumed by collectors.

Transport and authentication live behind this interface; collectors only see
pages of items.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence

from .pagination import PageResult


@dataclass
class ListPage:
    """One page of a cursor-paginated listing."""

    items: List[Any] = field(default_factory=list)
    next_cursor: Optional[str] = None


class ListingClient(ABC):
    """Opaque capability for listing cloud resources."""

    @abstractmethod
    def list(self, kind: str, scope: str, cursor: Optional[str] = None) -> ListPage:
        """
        List one page of top-level resources of ``kind`` within ``scope``.

        Raises whatever the transport raises; callers treat it as fatal.
        """

    @abstractmethod
    def list_children(self, kind: str, parent_id: str, scope: str) -> Sequence[Any]:
        """List child resources of ``kind`` owned by ``parent_id``."""

    @abstractmethod
    def list_paginated(self, kind: str, scope: str) -> Iterator[PageResult]:
        """Iterate resources of ``kind`` as tagged ``Item | PageError | Exhausted`` results."""

    def close(self) -> None:
        """Release transport resources. Default is a no-op."""
