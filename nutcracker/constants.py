from typing import Final


APP_NAME: Final[str] = "nutcracker"
USER_AGENT: Final[str] = "nutcracker"

SOURCES_FILENAME: Final[str] = "sources.json"
CUSTOM_RULES_FILENAME: Final[str] = "custom_rules.txt"
METADATA_FILENAME: Final[str] = "metadata.json"
CACHE_DIRNAME: Final[str] = "cache"

DEFAULT_SOURCE_NAME: Final[str] = "LegitimateURLShortener"
DEFAULT_SOURCE_URL: Final[str] = (
    "https://raw.githubusercontent.com/DandelionSprout/adfilt/master/"
    "LegitimateURLShortener.txt"
)

REFRESH_INTERVAL_SECONDS: Final[int] = 86400
FETCH_TIMEOUT_SECONDS: Final[int] = 30

ALLOWED_URL_SCHEMES: Final[tuple[str, ...]] = ("http", "https")

COMMENT_PREFIX: Final[str] = "!"
EXCEPTION_PREFIX: Final[str] = "@@"
COSMETIC_MARKERS: Final[tuple[str, ...]] = ("##", "#@#", "##+js")
REMOVEPARAM_OPTION: Final[str] = "removeparam"
DOMAIN_OPTION_PREFIX: Final[str] = "domain="
