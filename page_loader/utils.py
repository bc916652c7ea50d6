"""Utility helpers for string normalization and path handling."""

from __future__ import annotations

import re

NAME_PATTERN = re.compile(r"[^a-zA-Z0-9]+")


def format_name(value: str) -> str:
    """Turn any string into a filesystem-safe name of ASCII letters, digits and dashes."""
    return NAME_PATTERN.sub("-", value).strip("-")
