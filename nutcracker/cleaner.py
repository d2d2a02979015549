"""Strip query parameters from URLs using a snapshot of compiled rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable
from urllib.parse import SplitResult, unquote, urlsplit, urlunsplit

from nutcracker.constants import ALLOWED_URL_SCHEMES
from nutcracker.filters.domains import domain_applies
from nutcracker.filters.models import Rule, matcher_matches


class CleanStatus(str, Enum):
    INVALID_URL = "invalid_url"
    NO_PARAMS = "no_params"
    UNCHANGED = "unchanged"
    CLEANED = "cleaned"


@dataclass(frozen=True)
class QueryParam:
    name: str
    value: str | None
    raw: str


@dataclass(frozen=True)
class CleanReport:
    url: str
    status: CleanStatus
    host: str = ""
    cleaned_url: str | None = None
    removed: tuple[QueryParam, ...] = ()
    retained: tuple[QueryParam, ...] = ()
    params: tuple[QueryParam, ...] = ()

    @property
    def changed(self) -> bool:
        return self.status == CleanStatus.CLEANED


def split_query(query: str) -> list[QueryParam]:
    if not query:
        return []
    params: list[QueryParam] = []
    for segment in query.split("&"):
        name, sep, value = segment.partition("=")
        params.append(
            QueryParam(
                name=unquote(name),
                value=unquote(value) if sep else None,
                raw=segment,
            )
        )
    return params


def _split_http_url(url: str) -> tuple[SplitResult, str] | None:
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return None
    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES or not host:
        return None
    return parts, host.lower()


def inspect_url(url: str, rules: Iterable[Rule]) -> CleanReport:
    """Run the rewrite and report why the URL did or did not change."""
    split = _split_http_url(url)
    if split is None:
        return CleanReport(url=url, status=CleanStatus.INVALID_URL)
    parts, host = split

    params = split_query(parts.query)
    if not params:
        return CleanReport(url=url, status=CleanStatus.NO_PARAMS, host=host)

    exceptions: list[Rule] = []
    removals: list[Rule] = []
    for rule in rules:
        if not domain_applies(rule, host):
            continue
        if rule.is_exception:
            exceptions.append(rule)
        else:
            removals.append(rule)

    removed: list[QueryParam] = []
    retained: list[QueryParam] = []
    for param in params:
        should_remove = any(
            matcher_matches(rule.matcher, param.name, param.value) for rule in removals
        )
        is_excepted = should_remove and any(
            matcher_matches(rule.matcher, param.name, param.value)
            for rule in exceptions
        )
        if should_remove and not is_excepted:
            removed.append(param)
        else:
            retained.append(param)

    if not removed:
        return CleanReport(
            url=url,
            status=CleanStatus.UNCHANGED,
            host=host,
            retained=tuple(retained),
            params=tuple(params),
        )

    query = "&".join(param.raw for param in retained)
    return CleanReport(
        url=url,
        status=CleanStatus.CLEANED,
        host=host,
        cleaned_url=urlunsplit(parts._replace(query=query)),
        removed=tuple(removed),
        retained=tuple(retained),
        params=tuple(params),
    )


def clean_url(url: str, rules: Iterable[Rule]) -> str | None:
    """Return the cleaned URL, or None when nothing was removed.

    None covers both unusable URLs and URLs with nothing to strip.
    """
    return inspect_url(url, rules).cleaned_url
