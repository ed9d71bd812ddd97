"""
Application version, read once from the VERSION file at the repository root.
Served by GET /api/meta/version.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

FALLBACK_VERSION = "0.0.0"

# major.minor.patch with an optional -prerelease suffix
SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$")

VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


@lru_cache
def get_version() -> str:
    """First non-empty line of VERSION, or FALLBACK_VERSION when missing or unreadable."""
    try:
        lines = [line.strip() for line in VERSION_FILE.read_text(encoding="utf-8").splitlines()]
    except OSError:
        return FALLBACK_VERSION
    return next((line for line in lines if line), FALLBACK_VERSION)


def is_semver(value: str) -> bool:
    return bool(value and SEMVER_PATTERN.match(value.strip()))
