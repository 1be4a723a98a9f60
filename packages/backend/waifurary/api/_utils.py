from __future__ import annotations

from fastapi import HTTPException, Request

from ..core.config import AppPaths, ConfigError
from ..services.aggregator import MetadataAggregator
from ..services.folders import FolderEnumerator
from ..services.sidecar_store import SidecarStore

_FORBIDDEN = ("/", "\\", "\x00")


def validate_segment(value: str, *, kind: str) -> str:
    if not value or value in (".", "..") or any(c in value for c in _FORBIDDEN):
        raise HTTPException(status_code=400, detail=f"Invalid {kind} name")
    return value


def get_paths(request: Request) -> AppPaths:
    paths = getattr(request.app.state, "paths", None)
    if paths is not None:
        return paths
    # resolved per call so a missing home directory fails only this request
    try:
        return AppPaths.resolve()
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))


def get_folders(request: Request) -> FolderEnumerator:
    return FolderEnumerator(get_paths(request).images_root)


def get_store(request: Request) -> SidecarStore:
    return SidecarStore(get_paths(request).metadata_root)


def get_aggregator(request: Request) -> MetadataAggregator:
    return MetadataAggregator(get_paths(request).metadata_root)
