"""HTTP session setup and the single request for the root page."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .config import LoaderConfig

logger = logging.getLogger("page_loader")


def mount_adapters(session: requests.Session, pool_size: int) -> None:
    """Mount retry-free adapters keeping up to ``pool_size`` connections per host."""
    adapter = HTTPAdapter(
        pool_connections=pool_size,
        pool_maxsize=pool_size,
        max_retries=0,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)


def build_session(config: LoaderConfig) -> requests.Session:
    """Create a session sized for concurrent asset downloads, without retries."""
    session = requests.Session()
    session.headers["User-Agent"] = config.user_agent
    mount_adapters(session, config.pool_size)
    return session


def ensure_success(response: requests.Response) -> None:
    """Raise :class:`requests.HTTPError` for anything but a 2xx status."""
    response.raise_for_status()
    if not 200 <= response.status_code < 300:
        raise requests.HTTPError(
            f"{response.status_code} Unexpected status for url: {response.url}",
            response=response,
        )


def fetch_page(session: requests.Session, url: str, timeout: Optional[float]) -> str:
    """Download ``url`` and return its body as text."""
    logger.debug("Requesting page %s", url)
    response = session.get(url, timeout=timeout)
    ensure_success(response)
    content_type = response.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        response.encoding = response.apparent_encoding
    logger.debug("Page loaded, status: %d", response.status_code)
    return response.text
