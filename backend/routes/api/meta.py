"""GET /api/meta/version: application name and version."""

from __future__ import annotations

from fastapi import APIRouter

from core.config import get_settings
from version import get_version, is_semver

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/version", summary="Application version")
def meta_version() -> dict:
    version = get_version()
    return {"name": get_settings().app_name, "version": version, "semver": is_semver(version)}
