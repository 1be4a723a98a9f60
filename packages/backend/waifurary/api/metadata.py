from fastapi import APIRouter, Depends, HTTPException

from ..models.metadata import BulkMetadataIn, ImageMetadata, MetadataGroups, MetadataIn
from ..services.aggregator import MetadataAggregator
from ..services.sidecar_store import MetadataStoreError, SidecarStore
from ._utils import get_aggregator, get_store, validate_segment

router = APIRouter()


@router.get("/groups", response_model=MetadataGroups)
def get_metadata_groups(aggregator: MetadataAggregator = Depends(get_aggregator)):
    return aggregator.metadata_groups()


@router.post("/{folder}/bulk")
def save_bulk_metadata(
    folder: str, body: BulkMetadataIn, store: SidecarStore = Depends(get_store)
):
    validate_segment(folder, kind="folder")
    for image in body.images:
        validate_segment(image, kind="image")
    try:
        saved = store.save_many(folder, body.images, body.source, body.author, body.tags)
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"ok": True, "saved": saved}


@router.put("/{folder}/{image}")
def save_image_metadata(
    folder: str, image: str, body: MetadataIn, store: SidecarStore = Depends(get_store)
):
    validate_segment(folder, kind="folder")
    validate_segment(image, kind="image")
    try:
        store.save(folder, image, body.source, body.author, body.tags)
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"ok": True}


@router.get("/{folder}/{image}", response_model=ImageMetadata | None)
def load_image_metadata(
    folder: str, image: str, store: SidecarStore = Depends(get_store)
):
    validate_segment(folder, kind="folder")
    validate_segment(image, kind="image")
    try:
        return store.load(folder, image)
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
