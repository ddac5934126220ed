"""
Canonical, provider-agnostic description of one discovered cloud object.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .constants import DURABLE_ID_DELIMITER


def _freeze_mapping(values: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


def _ordered_unique(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values or ()))


@dataclass(frozen=True)
class ResourceRecord:
    """
    One discovered resource, ready to hand to the code/state emitter.

    Records are immutable once built. ``attributes`` and
    ``additional_fields`` are exposed as read-only mappings, and the
    ignore-key post-pass builds replacement records instead of editing
    existing ones.
    """

    durable_id: str
    display_name: str
    kind: str
    provider: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    allow_empty_fields: Tuple[str, ...] = ()
    additional_fields: Mapping[str, str] = field(default_factory=dict)
    # Durable ID of the owning parent, set only for parent-scoped kinds
    parent_id: Optional[str] = None

    def __post_init__(self):
        if not self.durable_id:
            raise ValueError("durable_id cannot be empty")
        if self.parent_id is not None and not self.durable_id.startswith(
            f"{self.parent_id}{DURABLE_ID_DELIMITER}"
        ):
            raise ValueError(
                f"durable_id {self.durable_id} is not scoped to parent {self.parent_id}"
            )
        if not self.kind:
            raise ValueError(f"kind is required for resource {self.durable_id}")
        if not self.provider:
            raise ValueError(f"provider is required for resource {self.durable_id}")

        object.__setattr__(self, "attributes", _freeze_mapping(self.attributes))
        object.__setattr__(
            self, "additional_fields", _freeze_mapping(self.additional_fields)
        )
        object.__setattr__(
            self, "allow_empty_fields", _ordered_unique(self.allow_empty_fields)
        )

    def __hash__(self):
        return hash((self.provider, self.kind, self.durable_id))

    def without_attributes(self, keys: Iterable[str]) -> "ResourceRecord":
        """Return a replacement record with ``keys`` removed from attributes."""
        keys = set(keys)
        if not keys.intersection(self.attributes):
            return self
        kept = {k: v for k, v in self.attributes.items() if k not in keys}
        return replace(self, attributes=kept)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "durable_id": self.durable_id,
            "display_name": self.display_name,
            "kind": self.kind,
            "provider": self.provider,
            "attributes": dict(self.attributes),
            "allow_empty_fields": list(self.allow_empty_fields),
            "additional_fields": dict(self.additional_fields),
            "parent_id": self.parent_id,
        }
