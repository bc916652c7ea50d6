"""High-level orchestration for saving a page together with its local assets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from .assets import ProgressCallback, download_assets
from .config import LoaderConfig
from .content import localize_resources, parse_document, render_document
from .errors import error_context
from .fetcher import build_session, fetch_page, mount_adapters
from .models import PageSnapshot, SourceRequest
from .paths import assets_dir_name, page_file_name

logger = logging.getLogger("page_loader")


def plan_snapshot(request: SourceRequest) -> PageSnapshot:
    """Work out where the page and its assets directory will be written."""
    return PageSnapshot(
        page_path=request.output_dir / page_file_name(request.url),
        assets_dir=request.output_dir / assets_dir_name(request.url),
    )


def load_page(
    url: str,
    output_dir: Union[str, Path],
    config: Optional[LoaderConfig] = None,
    session: Optional[requests.Session] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> Path:
    """Save ``url`` and its same-origin assets under ``output_dir``.

    Returns the absolute path of the written page. Failures are raised as
    :class:`page_loader.errors.PageLoaderError` subclasses; nothing is
    retried or cleaned up, and the page file is only written once every asset
    has been saved. ``on_progress`` is called after each asset download
    with the task, the number finished so far and the total.
    """
    config = config or LoaderConfig()
    request = SourceRequest(url, Path(output_dir))
    snapshot = plan_snapshot(request)
    logger.debug("Loading page: %s", request.url)
    logger.debug("Output directory: %s", request.output_dir)
    logger.debug("Output file: %s", snapshot.page_path)

    owns_session = session is None
    if session is None:
        session = build_session(config)
    try:
        with error_context(request.url):
            markup = fetch_page(session, request.url, config.timeout)

        document = parse_document(markup)
        snapshot.tasks = localize_resources(document, request.url, snapshot.assets_dir)

        if snapshot.tasks:
            workers = config.max_workers or len(snapshot.tasks)
            if owns_session and workers > config.pool_size:
                mount_adapters(session, workers)
            download_assets(
                session, snapshot.tasks, snapshot.assets_dir, config, on_progress
            )
    finally:
        if owns_session:
            session.close()

    with error_context(str(snapshot.page_path)):
        snapshot.page_path.write_text(render_document(document), encoding="utf-8")
    logger.info("Page saved to: %s", snapshot.page_path)
    return snapshot.page_path
