"""Filter source models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace

from nutcracker.constants import DEFAULT_SOURCE_NAME, DEFAULT_SOURCE_URL


def _new_source_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class FilterSource:
    name: str
    url: str
    enabled: bool = True
    id: str = field(default_factory=_new_source_id)

    def with_enabled(self, enabled: bool) -> "FilterSource":
        return replace(self, enabled=enabled)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "FilterSource":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            url=str(payload["url"]),
            enabled=bool(payload.get("enabled", True)),
        )


def default_source() -> FilterSource:
    return FilterSource(name=DEFAULT_SOURCE_NAME, url=DEFAULT_SOURCE_URL)
