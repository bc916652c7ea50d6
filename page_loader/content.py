"""HTML parsing and rewriting of same-origin resource references."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .models import AssetReference, DownloadTask
from .paths import asset_file_name, assets_dir_name

logger = logging.getLogger("page_loader")

# Order is significant: it fixes the order of the download tasks.
RESOURCE_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("img", "src"),
    ("link", "href"),
    ("script", "src"),
)


def parse_document(markup: str) -> BeautifulSoup:
    """Parse markup into a tree that serializes like a browser would."""
    return BeautifulSoup(markup, "html5lib")


def render_document(document: BeautifulSoup) -> str:
    return document.decode()


def find_references(
    document: BeautifulSoup, page_url: str
) -> Iterator[Tuple[Tag, AssetReference]]:
    """Yield every matched element with a non-empty reference attribute."""
    for tag_name, attribute in RESOURCE_ATTRIBUTES:
        for element in document.find_all(tag_name, attrs={attribute: True}):
            value = element.get(attribute)
            if not value:
                continue
            yield element, AssetReference(
                tag=tag_name,
                attribute=attribute,
                original_value=value,
                resolved_url=urljoin(page_url, value),
            )


def localize_resources(
    document: BeautifulSoup, page_url: str, assets_dir: Path
) -> List[DownloadTask]:
    """Point same-origin references into the assets directory.

    The document is modified in place. Returns one download task per
    rewritten attribute; external references are left as they are.
    """
    dir_name = assets_dir_name(page_url)
    tasks: List[DownloadTask] = []
    for element, reference in find_references(document, page_url):
        if not reference.is_same_origin(page_url):
            logger.debug("Skipping external resource: %s", reference.resolved_url)
            continue
        file_name = asset_file_name(page_url, reference.original_value)
        local_value = f"{dir_name}/{file_name}"
        logger.debug("Found local resource: %s -> %s", reference.original_value, local_value)
        element[reference.attribute] = local_value
        tasks.append(DownloadTask(reference.resolved_url, assets_dir / file_name))
    logger.debug("Found %d local resources", len(tasks))
    return tasks
