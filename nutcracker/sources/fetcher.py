import logging
from http.client import HTTPException
from urllib.error import URLError
from urllib.parse import urlsplit
from urllib.request import Request, urlopen

from nutcracker.constants import ALLOWED_URL_SCHEMES, FETCH_TIMEOUT_SECONDS, USER_AGENT
from nutcracker.errors import FilterFetchError

logger = logging.getLogger(__name__)


def fetch_filter_list(url: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    """Download a filter list and return it as text."""
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError as exc:
        raise FilterFetchError(url, str(exc)) from exc
    if scheme not in ALLOWED_URL_SCHEMES:
        raise FilterFetchError(url, "unsupported URL scheme")

    logger.debug("Fetching filter list %s", url)
    try:
        request = Request(url, headers={"User-Agent": USER_AGENT})
        with urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            payload = response.read()
    except (URLError, OSError, HTTPException, ValueError) as exc:
        raise FilterFetchError(url, str(exc)) from exc
    if not 200 <= status < 300:
        raise FilterFetchError(url, f"HTTP {status}")

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FilterFetchError(url, "response is not valid UTF-8") from exc

    logger.debug("Fetched %d bytes from %s", len(payload), url)
    return text
