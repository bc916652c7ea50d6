"""Deterministic local file names derived from URLs."""

from __future__ import annotations

import posixpath
from urllib.parse import ParseResult, quote, urljoin, urlparse

from .utils import format_name

PAGE_SUFFIX = ".html"
ASSETS_DIR_SUFFIX = "_files"

# Characters a browser leaves as-is in a URL path; everything else is %-encoded.
PATH_SAFE_CHARS = "!$%&'()*+,-./:;=@[\\]^_|~"


def _ascii_host(hostname: str) -> str:
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return hostname


def _encoded_path(parsed: ParseResult) -> str:
    return quote(parsed.path, safe=PATH_SAFE_CHARS)


def url_stem(url: str) -> str:
    """Return ``host + path`` for a URL, dropping scheme, port, query and fragment.

    The host is punycoded and the path percent-encoded, so ``/курсы`` and
    ``/статьи`` yield different stems.
    """
    parsed = urlparse(url)
    return f"{_ascii_host(parsed.hostname or '')}{_encoded_path(parsed)}"


def page_file_name(url: str) -> str:
    return format_name(url_stem(url)) + PAGE_SUFFIX


def assets_dir_name(url: str) -> str:
    return format_name(url_stem(url)) + ASSETS_DIR_SUFFIX


def asset_file_name(base_url: str, reference: str) -> str:
    """Name the local copy of ``reference`` as resolved against ``base_url``.

    A resolved path with an extension keeps it (``/a/b.png`` -> ``host-a-b.png``);
    anything else is assumed to be a document and gets ``.html``.
    """
    asset_url = urljoin(base_url, reference)
    stem = url_stem(asset_url)
    extension = posixpath.splitext(_encoded_path(urlparse(asset_url)))[1]
    if extension:
        return format_name(stem[: -len(extension)]) + extension
    return format_name(stem) + PAGE_SUFFIX
