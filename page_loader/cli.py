"""Command-line entry point for the page loader."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from tqdm import tqdm

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, LoaderConfig
from .errors import PageLoaderError
from .loader import load_page
from .models import DownloadTask

logger = logging.getLogger("page_loader.cli")


class DownloadProgress:
    """Progress bar over asset downloads, listing each URL as it finishes."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.progress_bar: Optional[tqdm] = None

    def __call__(self, task: DownloadTask, done: int, total: int) -> None:
        if not self.enabled:
            return
        if self.progress_bar is None:
            self.progress_bar = tqdm(
                total=total,
                desc="Downloading assets",
                unit="files",
                file=sys.stderr,
            )
        self.progress_bar.write(f"\u2714 {task.source_url}", file=sys.stderr)
        self.progress_bar.update(1)
        if done == total:
            self.close()

    def close(self) -> None:
        if self.progress_bar is not None:
            self.progress_bar.close()
            self.progress_bar = None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="page-loader",
        description="Download a web page and its same-origin assets for offline viewing.",
    )
    parser.add_argument("url", help="Absolute URL of the page to save")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        type=Path,
        help="Directory where the page and its assets should be written (default: current directory)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds (0 waits indefinitely)",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Maximum number of simultaneous asset downloads (default: all at once)",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent with every request",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show the asset download progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = LoaderConfig(
        timeout=args.timeout or None,
        max_workers=args.max_workers,
        user_agent=args.user_agent,
    )
    output_dir = args.output if args.output is not None else Path.cwd()
    progress = DownloadProgress(enabled=not (args.no_progress or args.verbose))
    try:
        page_path = load_page(args.url, output_dir, config, on_progress=progress)
    except (PageLoaderError, ValueError) as exc:
        logger.debug("Failed to save %s", args.url, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        progress.close()

    print(page_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
