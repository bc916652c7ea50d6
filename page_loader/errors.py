"""Error taxonomy shared by every stage of the page loader.

Network, HTTP and filesystem failures are raised as one of the
:class:`PageLoaderError` subclasses below. Anything that does not fit the
taxonomy propagates unchanged.
"""

from __future__ import annotations

import errno
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Union

import requests

logger = logging.getLogger("page_loader")

PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM}


class PageLoaderError(Exception):
    """Base class for failures reported by :func:`page_loader.loader.load_page`."""

    def __init__(self, message: str, code: Union[int, str, None] = None) -> None:
        super().__init__(message)
        self.code = code


class HttpStatusError(PageLoaderError):
    """The server answered with a non-2xx status."""

    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Request failed with status code {status}: {url}", code=status)
        self.status = status
        self.url = url


class NetworkError(PageLoaderError):
    """A request was sent but no response came back."""

    def __init__(self, url: str, cause: str) -> None:
        super().__init__(f"Network error: {cause} ({url})", code="ENETWORK")
        self.url = url


class FilesystemError(PageLoaderError):
    """The output location is missing or not writable."""

    def __init__(self, code: str, path: str) -> None:
        if code == "ENOENT":
            message = f"ENOENT: no such file or directory '{path}'"
        else:
            message = f"{code}: permission denied '{path}'"
        super().__init__(message, code=code)
        self.path = path


def normalize_error(exc: BaseException, context: str) -> Optional[PageLoaderError]:
    """Map ``exc`` onto the taxonomy, or return ``None`` when it does not fit.

    ``context`` is the URL or path being worked on and is used when the
    exception itself does not say.
    """
    if isinstance(exc, requests.RequestException):
        response = exc.response
        if response is not None:
            return HttpStatusError(response.status_code, response.url or context)
        request_url = exc.request.url if exc.request is not None else None
        return NetworkError(request_url or context, str(exc))
    if isinstance(exc, OSError):
        path = exc.filename or context
        if exc.errno == errno.ENOENT:
            return FilesystemError("ENOENT", str(path))
        if exc.errno in PERMISSION_ERRNOS:
            return FilesystemError(errno.errorcode[exc.errno], str(path))
    return None


@contextmanager
def error_context(context: str) -> Iterator[None]:
    """Re-raise failures inside the block as :class:`PageLoaderError`."""
    try:
        yield
    except PageLoaderError:
        raise
    except Exception as exc:
        logger.debug("Error occurred (%s): %s", context, exc)
        normalized = normalize_error(exc, context)
        if normalized is None:
            raise
        logger.debug("%s: %s", type(normalized).__name__, normalized)
        raise normalized from exc
