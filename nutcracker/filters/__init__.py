from nutcracker.filters.domains import domain_applies
from nutcracker.filters.models import (
    ExactMatcher,
    Matcher,
    RegexMatcher,
    Rule,
    matcher_matches,
)
from nutcracker.filters.parser import parse_filter_list

__all__ = [
    "ExactMatcher",
    "Matcher",
    "RegexMatcher",
    "Rule",
    "domain_applies",
    "matcher_matches",
    "parse_filter_list",
]
