"""Concurrent downloading of same-origin assets."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import requests

from .config import LoaderConfig
from .errors import error_context
from .fetcher import ensure_success
from .models import DownloadTask

logger = logging.getLogger("page_loader")

ProgressCallback = Callable[[DownloadTask, int, int], None]


def _unique_tasks(tasks: Sequence[DownloadTask]) -> List[DownloadTask]:
    """Drop repeated tasks, warning when different URLs share a destination."""
    by_destination: Dict[Path, DownloadTask] = {}
    unique: List[DownloadTask] = []
    for task in tasks:
        seen = by_destination.get(task.destination)
        if seen is None:
            by_destination[task.destination] = task
            unique.append(task)
        elif seen.source_url != task.source_url:
            # Known limitation: whichever download finishes last wins.
            logger.warning(
                "%s and %s are both saved as %s",
                seen.source_url,
                task.source_url,
                task.destination,
            )
            unique.append(task)
    return unique


def download_asset(
    session: requests.Session, task: DownloadTask, timeout: Optional[float]
) -> Path:
    """Fetch one asset in binary mode and write it to its destination."""
    logger.debug("Downloading asset: %s", task.source_url)
    with error_context(task.source_url):
        response = session.get(task.source_url, timeout=timeout)
        ensure_success(response)
    data = response.content
    logger.debug("Asset downloaded, size: %d bytes", len(data))
    with error_context(str(task.destination)):
        task.destination.write_bytes(data)
    logger.debug("Asset saved to: %s", task.destination)
    return task.destination


def download_assets(
    session: requests.Session,
    tasks: Sequence[DownloadTask],
    assets_dir: Path,
    config: LoaderConfig,
    on_progress: Optional[ProgressCallback] = None,
) -> List[Path]:
    """Download every task concurrently into ``assets_dir``.

    The first failing download is re-raised once it is observed. Tasks that
    have not started yet are cancelled; tasks already running are left to
    finish, so their files may remain on disk. ``on_progress`` runs in the
    calling thread as each download completes.
    """
    if not tasks:
        return []
    logger.debug("Creating assets directory: %s", assets_dir)
    with error_context(str(assets_dir)):
        assets_dir.mkdir(exist_ok=True)

    pending = _unique_tasks(tasks)
    max_workers = config.max_workers or len(pending)
    saved: List[Path] = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        future_map = {
            pool.submit(download_asset, session, task, config.timeout): task
            for task in pending
        }
        try:
            for future in as_completed(future_map):
                saved.append(future.result())
                if on_progress is not None:
                    on_progress(future_map[future], len(saved), len(pending))
        except BaseException:
            for future in future_map:
                future.cancel()
            raise
    logger.debug("All assets downloaded")
    return saved
