from nutcracker.sources.fetcher import fetch_filter_list
from nutcracker.sources.models import FilterSource, default_source
from nutcracker.sources.repository import FilterListRepository

__all__ = [
    "FilterListRepository",
    "FilterSource",
    "default_source",
    "fetch_filter_list",
]
