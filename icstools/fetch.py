# Fetches a remote calendar and parses it. Every request fetches afresh: there's no caching and
# no coalescing of concurrent requests for the same URL.

import logging

import requests

from icstools.errors import FetchFailed, IcsToolsError, RemoteNonSuccessStatus
from icstools.parse import parse_calendar

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def fetch_remote_ics(url: str, timeout=DEFAULT_TIMEOUT) -> str:
    """
    Fetches the text of the calendar at the given URL, failing on transport errors and
    non-successful status codes.
    """

    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchFailed(f"Fetching remote URL {url} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        raise RemoteNonSuccessStatus(url, response.status_code)

    return response.text


def fetch_calendar(url: str, timeout=DEFAULT_TIMEOUT):
    """
    Fetches and parses the calendar at the given URL.
    """

    text = fetch_remote_ics(url, timeout)
    logger.debug("Got %d bytes of remote ICS from %s", len(text), url)
    try:
        return parse_calendar(text)
    except IcsToolsError as e:
        raise e.with_context(f"Parsing the calendar from remote URL {url}")
