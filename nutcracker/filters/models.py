"""Rule and parameter matcher models."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ExactMatcher:
    """Match a query parameter by name, ignoring case."""

    name: str


@dataclass(frozen=True)
class RegexMatcher:
    """Match a query parameter by searching ``name=value`` with a regex."""

    pattern: re.Pattern[str]
    case_insensitive: bool = False


Matcher = Union[ExactMatcher, RegexMatcher]


@dataclass(frozen=True)
class Rule:
    is_exception: bool
    domains: tuple[str, ...]
    matcher: Matcher


def matcher_matches(matcher: Matcher, name: str, value: str | None) -> bool:
    if isinstance(matcher, ExactMatcher):
        return name.lower() == matcher.name.lower()
    if isinstance(matcher, RegexMatcher):
        probe = name if value is None else f"{name}={value}"
        return matcher.pattern.search(probe) is not None
    raise TypeError(f"Unsupported matcher: {matcher!r}")


def describe_matcher(matcher: Matcher) -> str:
    if isinstance(matcher, ExactMatcher):
        return matcher.name
    suffix = "i" if matcher.case_insensitive else ""
    return f"/{matcher.pattern.pattern}/{suffix}"


def rule_as_dict(rule: Rule) -> dict:
    kind = "exact" if isinstance(rule.matcher, ExactMatcher) else "regex"
    return {
        "exception": rule.is_exception,
        "domains": list(rule.domains),
        "matcher": kind,
        "param": describe_matcher(rule.matcher),
    }
