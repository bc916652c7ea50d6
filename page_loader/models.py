"""Data models used throughout the page loader pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
from urllib.parse import urlparse


@dataclass(frozen=True)
class SourceRequest:
    """A validated request to snapshot one page into a directory."""

    url: str
    output_dir: Path

    def __post_init__(self) -> None:
        parsed = urlparse(self.url)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError(f"Invalid URL (expected an absolute URL): {self.url!r}")
        object.__setattr__(self, "output_dir", Path(self.output_dir).absolute())


@dataclass
class AssetReference:
    """Resource reference discovered on a matched element."""

    tag: str
    attribute: str
    original_value: str
    resolved_url: str

    def is_same_origin(self, page_url: str) -> bool:
        return urlparse(self.resolved_url).hostname == urlparse(page_url).hostname


@dataclass(frozen=True)
class DownloadTask:
    """Same-origin resource queued for download to a local path."""

    source_url: str
    destination: Path


@dataclass
class PageSnapshot:
    """Files produced for one saved page."""

    page_path: Path
    assets_dir: Path
    tasks: List[DownloadTask] = field(default_factory=list)
