"""On-disk store for filter sources, cached lists and custom rules."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlsplit

from jsonschema import Draft202012Validator

from nutcracker.constants import (
    ALLOWED_URL_SCHEMES,
    APP_NAME,
    CACHE_DIRNAME,
    CUSTOM_RULES_FILENAME,
    METADATA_FILENAME,
    SOURCES_FILENAME,
)
from nutcracker.errors import (
    InvalidConfigSchemaError,
    InvalidJsonFormatError,
    InvalidSourceError,
    SourceExistsError,
    SourceNotFoundError,
)
from nutcracker.sources.models import FilterSource
from nutcracker.utils import (
    format_timestamp,
    parse_timestamp,
    read_json_safe,
    write_json,
    write_text_atomic,
)

SOURCES_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "name", "url"],
        "properties": {
            "id": {"type": "string", "pattern": "^[A-Za-z0-9_-]+$"},
            "name": {"type": "string", "minLength": 1},
            "url": {"type": "string", "minLength": 1},
            "enabled": {"type": "boolean"},
        },
    },
}

_SOURCES_VALIDATOR = Draft202012Validator(SOURCES_SCHEMA)


def _schema_error_message(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class FilterListRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / APP_NAME)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def sources_path(self) -> Path:
        return self.root / SOURCES_FILENAME

    @property
    def custom_rules_path(self) -> Path:
        return self.root / CUSTOM_RULES_FILENAME

    @property
    def metadata_path(self) -> Path:
        return self.root / METADATA_FILENAME

    @property
    def cache_dir(self) -> Path:
        return self.root / CACHE_DIRNAME

    def cache_path(self, source: FilterSource) -> Path:
        return self.cache_dir / f"{source.id}.txt"

    def load_sources(self) -> list[FilterSource]:
        payload, error = read_json_safe(self.sources_path)
        if error is not None:
            raise InvalidJsonFormatError(self.sources_path, error)
        if payload is None:
            return []
        schema_error = next(iter(_SOURCES_VALIDATOR.iter_errors(payload)), None)
        if schema_error is not None:
            raise InvalidConfigSchemaError(
                self.sources_path, _schema_error_message(schema_error)
            )
        return [FilterSource.from_dict(item) for item in payload]

    def save_sources(self, sources: list[FilterSource]) -> None:
        write_json(self.sources_path, [source.as_dict() for source in sources])

    def get_source(self, key: str) -> FilterSource:
        for source in self.load_sources():
            if source.id == key or source.name == key:
                return source
        raise SourceNotFoundError(key)

    def add_source(self, name: str, url: str) -> FilterSource:
        normalized_name = name.strip()
        normalized_url = url.strip()
        if not normalized_name:
            raise InvalidSourceError("Filter source name cannot be empty")
        try:
            parts = urlsplit(normalized_url)
            host = parts.hostname
        except ValueError as exc:
            raise InvalidSourceError(
                f"Filter source URL is malformed: {normalized_url} ({exc})"
            ) from exc
        if parts.scheme.lower() not in ALLOWED_URL_SCHEMES:
            raise InvalidSourceError(
                f"Filter source URL must be http or https: {normalized_url}"
            )
        if not host:
            raise InvalidSourceError(f"Filter source URL has no host: {normalized_url}")

        sources = self.load_sources()
        if any(item.name == normalized_name for item in sources):
            raise SourceExistsError(normalized_name)

        source = FilterSource(name=normalized_name, url=normalized_url)
        sources.append(source)
        self.save_sources(sources)
        return source

    def remove_source(self, key: str) -> FilterSource:
        removed = self.get_source(key)
        kept = [item for item in self.load_sources() if item.id != removed.id]
        self.cache_path(removed).unlink(missing_ok=True)
        self.save_sources(kept)
        return removed

    def set_enabled(self, key: str, enabled: bool) -> FilterSource:
        target = self.get_source(key)
        updated = target.with_enabled(enabled)
        self.save_sources(
            [updated if item.id == target.id else item for item in self.load_sources()]
        )
        return updated

    def read_cache(self, source: FilterSource) -> str | None:
        path = self.cache_path(source)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write_cache(self, source: FilterSource, text: str) -> None:
        write_text_atomic(self.cache_path(source), text)

    def load_custom_rules(self) -> str:
        if not self.custom_rules_path.exists():
            return ""
        return self.custom_rules_path.read_text(encoding="utf-8")

    def save_custom_rules(self, text: str) -> None:
        write_text_atomic(self.custom_rules_path, text)

    def load_last_updated(self) -> datetime | None:
        payload, error = read_json_safe(self.metadata_path)
        if error is not None or not isinstance(payload, dict):
            return None
        return parse_timestamp(payload.get("last_updated"))

    def save_last_updated(self, value: datetime) -> None:
        write_json(self.metadata_path, {"last_updated": format_timestamp(value)})
