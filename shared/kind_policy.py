"""
Per-resource-kind field handling policy.

A policy answers three questions for a kind: which fields may legitimately be
empty, which extra fields are merged into every record, and how durable IDs
and display names are composed. Policy tables are built once at import time
and are read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .constants import DISPLAY_NAME_DELIMITER, DURABLE_ID_DELIMITER, ERROR_MESSAGES


class IdentifierRule(Enum):
    """How a record's identifiers are derived from the listed item."""

    FLAT = "flat"
    PARENT_SCOPED = "parent_scoped"


@dataclass(frozen=True)
class KindPolicy:
    kind: str
    allow_empty_fields: Tuple[str, ...] = ()
    additional_fields: Mapping[str, str] = field(default_factory=dict)
    identifier_rule: IdentifierRule = IdentifierRule.FLAT
    # Attribute keys that receive the record's durable ID
    identity_attributes: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "additional_fields", MappingProxyType(dict(self.additional_fields))
        )
        object.__setattr__(self, "allow_empty_fields", tuple(self.allow_empty_fields))
        object.__setattr__(self, "identity_attributes", tuple(self.identity_attributes))

    def __hash__(self):
        return hash((self.kind, self.identifier_rule))

    def compose_identifiers(
        self, local_name: str, parent_id: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Build ``(durable_id, display_name)`` for an item of this kind.

        Args:
            local_name: Name of the item as returned by the listing API
            parent_id: Durable ID of the owning parent (parent-scoped kinds only)

        Returns:
            Tuple of durable ID and display name

        Raises:
            ValueError: If a parent-scoped kind is composed without a parent
        """
        if self.identifier_rule is IdentifierRule.FLAT:
            return local_name, local_name

        if not parent_id:
            raise ValueError(
                f"Resource kind {self.kind} is parent-scoped but no parent ID was given"
            )
        return (
            f"{parent_id}{DURABLE_ID_DELIMITER}{local_name}",
            f"{parent_id}{DISPLAY_NAME_DELIMITER}{local_name}",
        )

    def build_attributes(self, durable_id: str) -> Dict[str, str]:
        return {key: durable_id for key in self.identity_attributes}


class PolicyTable(Mapping):
    """Read-only lookup of :class:`KindPolicy` by resource kind."""

    def __init__(self, policies: Iterable[KindPolicy]):
        table = {}
        for policy in policies:
            if policy.kind in table:
                raise ValueError(f"Duplicate policy for resource kind {policy.kind}")
            table[policy.kind] = policy
        self._policies = MappingProxyType(table)

    def __getitem__(self, kind: str) -> KindPolicy:
        try:
            return self._policies[kind]
        except KeyError:
            raise KeyError(ERROR_MESSAGES["unknown_kind"].format(kind=kind)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._policies)

    def __len__(self) -> int:
        return len(self._policies)

    def __repr__(self) -> str:
        return f"PolicyTable({sorted(self._policies)})"
