"""Configuration objects and constants for the page loader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = "page-loader/0.1 (+https://pypi.org/project/page-loader/)"
# Used by the command line; library calls wait indefinitely unless told otherwise.
DEFAULT_TIMEOUT = 15.0
DEFAULT_POOL_SIZE = 32


@dataclass
class LoaderConfig:
    """Settings that control how the page and its assets are requested.

    ``pool_size`` is a floor: a session built by the loader is widened to the
    number of asset downloads when those would exceed it.
    """

    timeout: Optional[float] = None
    max_workers: Optional[int] = None
    user_agent: str = DEFAULT_USER_AGENT
    pool_size: int = DEFAULT_POOL_SIZE
