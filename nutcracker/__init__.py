from nutcracker.cleaner import CleanReport, CleanStatus, clean_url, inspect_url
from nutcracker.filters import Rule, domain_applies, parse_filter_list

__all__ = [
    "CleanReport",
    "CleanStatus",
    "Rule",
    "clean_url",
    "domain_applies",
    "inspect_url",
    "parse_filter_list",
]
