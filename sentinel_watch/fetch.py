"""
Retrieval of the raw export texts.

The three sources are fetched in parallel and handed to the pipeline only
when all of them arrived. A failure on any source aborts the whole batch.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Dict, Iterable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from sentinel_watch.config import Config

logger = logging.getLogger(__name__)


class SourceFetchError(RuntimeError):
    """Raised when one export source cannot be retrieved."""

    def __init__(self, source_type: str, message: str):
        super().__init__(f"Failed to fetch {source_type}: {message}")
        self.source_type = source_type


def create_fetch_session(retries: Optional[int] = None) -> requests.Session:
    """
    Create a requests session for the export endpoint.

    Args:
        retries: Total retry count; defaults to Config.FETCH_RETRIES

    Returns:
        Configured requests.Session with retry strategy
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": "sentinel-watch/0.1 (+requests)",
            "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.8",
        }
    )

    retry_strategy = Retry(
        total=Config.FETCH_RETRIES if retries is None else retries,
        status_forcelist=[429, 500, 502, 503, 504],
        backoff_factor=2,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


def fetch_source(
    session: requests.Session, source_type: str, timeout: Optional[float] = None
) -> str:
    """
    Download one export as text.

    Args:
        session: HTTP session
        source_type: One of Config.SOURCE_TYPES
        timeout: Request timeout in seconds; defaults to Config.FETCH_TIMEOUT

    Returns:
        Decoded export text

    Raises:
        SourceFetchError: On any HTTP or connection failure
    """
    url = Config.get_source_url(source_type)
    logger.info(f"Fetching {source_type} from {url}")

    try:
        response = session.get(url, timeout=timeout or Config.FETCH_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Fetch error for type {source_type}: {e}")
        raise SourceFetchError(source_type, str(e)) from e

    response.encoding = Config.FETCH_ENCODING
    text = response.text
    logger.info(f"Fetched {source_type}: {len(text)} characters")
    return text


def fetch_all_sources(
    session: Optional[requests.Session] = None,
    source_types: Iterable[str] = Config.SOURCE_TYPES,
) -> Dict[str, str]:
    """
    Fetch every source concurrently; all or nothing.

    Args:
        session: HTTP session; a new one is created when omitted
        source_types: Source type keys to fetch

    Returns:
        Mapping of source type to raw text

    Raises:
        SourceFetchError: As soon as any source fails; queued fetches are
            cancelled and in-flight ones are abandoned, not awaited
    """
    source_types = list(source_types)
    owns_session = session is None
    session = session or create_fetch_session()
    executor = ThreadPoolExecutor(max_workers=len(source_types) or 1)

    try:
        futures = {
            executor.submit(fetch_source, session, source_type): source_type
            for source_type in source_types
        }
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)

        for future in done:
            error = future.exception()
            if error is not None:
                logger.error(f"Aborting batch: {futures[future]} failed")
                raise error

        return {futures[future]: future.result() for future in futures}
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
        if owns_session:
            session.close()
