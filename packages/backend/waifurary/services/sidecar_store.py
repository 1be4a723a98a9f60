from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from ..models.metadata import ImageMetadata

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".json"


class MetadataStoreError(Exception):
    """Raised when a sidecar cannot be written, or read back at all."""


class SidecarStore:
    """One pretty-printed JSON document per image under the metadata root."""

    def __init__(self, metadata_root: Path):
        self.metadata_root = Path(metadata_root)

    def path_for(self, folder: str, image: str) -> Path:
        return self.metadata_root / folder / f"{image}{SIDECAR_SUFFIX}"

    def save(
        self, folder: str, image: str, source: str, author: str, tags: list[str]
    ) -> None:
        metadata_dir = self.metadata_root / folder
        try:
            metadata_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MetadataStoreError(
                f"Failed to create metadata directory: {e}"
            ) from e

        metadata = ImageMetadata(source=source, author=author, tags=list(tags))
        try:
            payload = json.dumps(
                metadata.model_dump(), indent=2, ensure_ascii=False
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            # lone surrogates fail here, before the old sidecar is touched
            raise MetadataStoreError(f"Failed to serialize metadata: {e}") from e

        path = self.path_for(folder, image)
        try:
            path.write_bytes(payload)
        except OSError as e:
            raise MetadataStoreError(f"Failed to write metadata: {e}") from e
        logger.info("Saved metadata for %s/%s", folder, image)

    def save_many(
        self,
        folder: str,
        images: Iterable[str],
        source: str,
        author: str,
        tags: list[str],
    ) -> int:
        """Write the same record for every image; stops at the first failure."""
        saved = 0
        for image in images:
            self.save(folder, image, source, author, tags)
            saved += 1
        return saved

    def load(self, folder: str, image: str) -> ImageMetadata | None:
        path = self.path_for(folder, image)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataStoreError(f"Failed to read metadata: {e}") from e

        try:
            return ImageMetadata.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Failed to parse metadata for %s/%s: %s. Using defaults.",
                folder,
                image,
                e,
            )
            return ImageMetadata.empty()
