"""Compile ``removeparam`` rules out of ad-filter list text."""

from __future__ import annotations

import re

from nutcracker.constants import (
    COMMENT_PREFIX,
    COSMETIC_MARKERS,
    DOMAIN_OPTION_PREFIX,
    EXCEPTION_PREFIX,
    REMOVEPARAM_OPTION,
)
from nutcracker.filters.models import ExactMatcher, Matcher, RegexMatcher, Rule

_REMOVEPARAM_PREFIX = f"{REMOVEPARAM_OPTION}="
_DOMAIN_TERMINATORS = frozenset("^/$")


def parse_filter_list(text: str) -> tuple[Rule, ...]:
    """Parse filter list text into an ordered tuple of rules.

    Lines that are not ``removeparam`` network rules, or that cannot be
    compiled, are skipped without raising.
    """
    rules: list[Rule] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        if any(marker in line for marker in COSMETIC_MARKERS):
            continue
        if REMOVEPARAM_OPTION not in line:
            continue
        rule = parse_line(line)
        if rule is not None:
            rules.append(rule)
    return tuple(rules)


def parse_line(line: str) -> Rule | None:
    is_exception = line.startswith(EXCEPTION_PREFIX)
    working = line[len(EXCEPTION_PREFIX) :] if is_exception else line

    separator = find_options_separator(working)
    if separator is None:
        return None

    pattern = working[:separator]
    options = split_options(working[separator + 1 :])

    value = _first_removeparam_value(options)
    if value is None:
        return None

    matcher = compile_matcher(value)
    if matcher is None:
        return None

    return Rule(
        is_exception=is_exception,
        domains=extract_domains(pattern, options),
        matcher=matcher,
    )


def find_options_separator(text: str) -> int | None:
    """Return the index of the ``$`` that starts the options.

    A ``/`` toggles regex mode, so anchors like ``/^foo$/`` are skipped.
    """
    in_regex = False
    for index, char in enumerate(text):
        if char == "/":
            in_regex = not in_regex
        if char == "$" and not in_regex:
            return index
    return None


def split_options(options: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []
    in_regex = False

    for char in options:
        if char == "/":
            in_regex = not in_regex
            current.append(char)
        elif char == "," and not in_regex:
            tokens.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    tokens.append("".join(current).strip())

    return [token for token in tokens if token]


def _first_removeparam_value(options: list[str]) -> str | None:
    for option in options:
        # A bare removeparam strips every parameter; never honored.
        if option == REMOVEPARAM_OPTION:
            continue
        if option.startswith(_REMOVEPARAM_PREFIX):
            value = option[len(_REMOVEPARAM_PREFIX) :]
            if value:
                return value
    return None


def extract_domains(pattern: str, options: list[str]) -> tuple[str, ...]:
    domains: list[str] = []

    if pattern.startswith("||"):
        token_chars: list[str] = []
        for char in pattern[2:]:
            if char in _DOMAIN_TERMINATORS:
                break
            token_chars.append(char)
        token = "".join(token_chars)
        if token:
            domains.append(token[:-2] if token.endswith(".*") else token)

    for option in options:
        if not option.startswith(DOMAIN_OPTION_PREFIX):
            continue
        for entry in option[len(DOMAIN_OPTION_PREFIX) :].split("|"):
            entry = entry.strip()
            # Negated entries are dropped, not subtracted.
            if entry and not entry.startswith("~"):
                domains.append(entry)

    return tuple(domains)


def compile_matcher(value: str) -> Matcher | None:
    if not value.startswith("/"):
        return ExactMatcher(name=value)

    body = value[1:]
    case_insensitive = False
    if body.endswith("/i"):
        body = body[:-2]
        case_insensitive = True
    elif body.endswith("/"):
        body = body[:-1]

    flags = re.IGNORECASE if case_insensitive else 0
    try:
        pattern = re.compile(body, flags)
    except re.error:
        return None
    return RegexMatcher(pattern=pattern, case_insensitive=case_insensitive)
