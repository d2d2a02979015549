import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from nutcracker.cleaner import CleanReport, clean_url, inspect_url
from nutcracker.constants import REFRESH_INTERVAL_SECONDS
from nutcracker.errors import FilterFetchError
from nutcracker.filters.models import Rule
from nutcracker.filters.parser import parse_filter_list
from nutcracker.sources.fetcher import fetch_filter_list
from nutcracker.sources.models import FilterSource, default_source
from nutcracker.sources.repository import FilterListRepository
from nutcracker.utils import utc_now

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


@dataclass
class RefreshResult:
    refreshed: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures


class FilterListService:
    """Keeps the active rule snapshot in sync with the source store."""

    def __init__(
        self,
        repository: FilterListRepository,
        fetcher: Fetcher = fetch_filter_list,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.repository = repository
        self._fetcher = fetcher
        self._clock = clock
        self._rules: tuple[Rule, ...] = ()

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def ensure_default_source(self) -> None:
        if self.repository.load_sources():
            return
        self.repository.save_sources([default_source()])

    def reload(self) -> tuple[Rule, ...]:
        rules: list[Rule] = []
        for source in self.repository.load_sources():
            if not source.enabled:
                continue
            cached = self.repository.read_cache(source)
            if cached is None:
                logger.debug("No cached list for %s", source.name)
                continue
            rules.extend(parse_filter_list(cached))

        custom = self.repository.load_custom_rules()
        if custom.strip():
            rules.extend(parse_filter_list(custom))

        self._rules = tuple(rules)
        logger.info("Loaded %d rules", len(self._rules))
        return self._rules

    def is_stale(self) -> bool:
        last_updated = self.repository.load_last_updated()
        if last_updated is None:
            return True
        age = self._clock() - last_updated
        return age >= timedelta(seconds=REFRESH_INTERVAL_SECONDS)

    def refresh(self, force: bool = False) -> RefreshResult:
        if not force and not self.is_stale():
            return RefreshResult(skipped=True)

        result = RefreshResult()
        for source in self.repository.load_sources():
            if not source.enabled:
                continue
            try:
                self._fetch_source(source)
            except FilterFetchError as exc:
                logger.error("Failed to fetch %s: %s", source.name, exc.detail)
                result.failures.append(f"{source.name}: {exc.detail}")
            else:
                result.refreshed.append(source.name)

        self.repository.save_last_updated(self._clock())
        self.reload()
        logger.info(
            "Refreshed %d sources, %d failed",
            len(result.refreshed),
            len(result.failures),
        )
        return result

    def load_or_fetch(self) -> RefreshResult:
        self.ensure_default_source()
        self.reload()
        return self.refresh(force=False)

    def add_source(self, name: str, url: str, fetch: bool = True) -> FilterSource:
        source = self.repository.add_source(name, url)
        if fetch:
            self._fetch_source(source)
            self.reload()
        return source

    def remove_source(self, key: str) -> FilterSource:
        source = self.repository.remove_source(key)
        self.reload()
        return source

    def set_enabled(self, key: str, enabled: bool) -> FilterSource:
        source = self.repository.set_enabled(key, enabled)
        self.reload()
        return source

    def apply_custom_rules(self, text: str) -> None:
        self.repository.save_custom_rules(text)
        self.reload()

    def clean(self, url: str) -> str | None:
        return clean_url(url.strip(), self._rules)

    def inspect(self, url: str) -> CleanReport:
        return inspect_url(url.strip(), self._rules)

    def _fetch_source(self, source: FilterSource) -> None:
        text = self._fetcher(source.url)
        self.repository.write_cache(source, text)
