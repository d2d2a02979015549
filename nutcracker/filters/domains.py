"""Host matching for rule domain scopes."""

from __future__ import annotations

from nutcracker.filters.models import Rule


def domain_token_matches(token: str, host: str) -> bool:
    """Check one scope token against an already lower-cased host.

    Tokens containing a dot match the host itself and its subdomains.
    Dotless tokens come from ``||label.*`` patterns and match that label
    followed by any TLD, at any subdomain depth.
    """
    d = token.lower()
    if host == d:
        return True
    if "." in d:
        return host.endswith(f".{d}")
    return host.startswith(f"{d}.") or f".{d}." in host


def domain_applies(rule: Rule, host: str) -> bool:
    if not rule.domains:
        return True
    lowered = host.lower()
    return any(domain_token_matches(token, lowered) for token in rule.domains)
