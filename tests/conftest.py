"""Shared fixtures: an in-memory listing client and a small policy table."""

import pytest

from shared.kind_policy import IdentifierRule, KindPolicy, PolicyTable
from shared.listing import ListingClient, ListPage
from shared.pagination import iterate_tagged

INSTANCE = "database_instance"
DATABASE = "database"
CHANNEL = "notification_channel"


class FakeListingClient(ListingClient):
    """
    Serves canned listings.

    ``pages`` maps kind to a list of pages (each a list of items).
    ``children`` maps (kind, parent_id) to items.
    ``paginated`` maps kind to a list of items or exceptions; exceptions are
    raised by the underlying iterator at that position.
    ``failures`` maps an operation key to an exception raised on call.
    """

    def __init__(self, pages=None, children=None, paginated=None, failures=None):
        self.pages = pages or {}
        self.children = children or {}
        self.paginated = paginated or {}
        self.failures = failures or {}
        self.calls = []
        self.closed = False

    def list(self, kind, scope, cursor=None):
        self.calls.append(("list", kind, scope, cursor))
        error = self.failures.get(("list", kind, cursor))
        if error:
            raise error

        pages = self.pages.get(kind, [[]])
        index = int(cursor) if cursor else 0
        next_cursor = str(index + 1) if index + 1 < len(pages) else None
        return ListPage(items=list(pages[index]), next_cursor=next_cursor)

    def list_children(self, kind, parent_id, scope):
        self.calls.append(("list_children", kind, parent_id, scope))
        error = self.failures.get(("list_children", kind, parent_id))
        if error:
            raise error
        return list(self.children.get((kind, parent_id), []))

    def list_paginated(self, kind, scope):
        self.calls.append(("list_paginated", kind, scope))
        entries = self.paginated.get(kind, [])
        error = self.failures.get(("list_paginated", kind))
        if error:
            raise error
        # A generator stops after raising, so step through entries explicitly
        return iterate_tagged(lambda: _StepIterator(entries))

    def close(self):
        self.closed = True


class _StepIterator:
    """Iterator that raises listed exceptions in place but keeps going."""

    def __init__(self, entries):
        self._entries = list(entries)
        self._index = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._index >= len(self._entries):
            raise StopIteration
        entry = self._entries[self._index]
        self._index += 1
        if isinstance(entry, Exception):
            raise entry
        return entry


@pytest.fixture
def policies():
    return PolicyTable(
        [
            KindPolicy(kind=INSTANCE),
            KindPolicy(kind=DATABASE, identifier_rule=IdentifierRule.PARENT_SCOPED),
            KindPolicy(
                kind=CHANNEL,
                allow_empty_fields=("labels",),
                additional_fields={"force_delete": "false"},
                identity_attributes=("name",),
            ),
        ]
    )


@pytest.fixture
def make_client():
    return FakeListingClient
