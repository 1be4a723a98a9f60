"""Reverse indexes over every sidecar under the metadata root.

Nothing here is cached: each call walks the tree again and builds fresh
structures. A sidecar that cannot be read or parsed is skipped and never
stops the rest of the scan.
"""
from __future__ import annotations

import logging
import os
from collections import Counter, defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from ..models.metadata import ImageMetadata, ImageReference, MetadataGroups, TagWithCount
from .sidecar_store import SIDECAR_SUFFIX

logger = logging.getLogger(__name__)


@dataclass
class SidecarScan:
    """Outcome of reading one sidecar: ``metadata`` on success, ``error`` on skip."""

    reference: ImageReference
    path: Path
    metadata: ImageMetadata | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.metadata is not None


def read_sidecar(path: Path, reference: ImageReference) -> SidecarScan:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return SidecarScan(reference, path, error=f"unreadable: {e}")
    try:
        metadata = ImageMetadata.model_validate_json(raw)
    except ValidationError as e:
        return SidecarScan(reference, path, error=f"malformed: {e.error_count()} error(s)")
    return SidecarScan(reference, path, metadata=metadata)


def lossy_name(name: str) -> str:
    """Replace undecodable bytes in a directory entry name with U+FFFD."""
    return os.fsencode(name).decode("utf-8", "replace")


def _scandir(path: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            return list(it)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", path, e)
        return []


class MetadataAggregator:
    def __init__(self, metadata_root: Path):
        self.metadata_root = Path(metadata_root)

    def iter_sidecars(self) -> Iterator[SidecarScan]:
        """Yield a scan result for every ``*.json`` entry, skips included."""
        if not self.metadata_root.exists():
            return
        for folder_entry in _scandir(self.metadata_root):
            try:
                if not folder_entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            folder = lossy_name(folder_entry.name)
            for file_entry in _scandir(Path(folder_entry.path)):
                name = lossy_name(file_entry.name)
                if not name.endswith(SIDECAR_SUFFIX):
                    continue
                image = name[: -len(SIDECAR_SUFFIX)]
                ref = ImageReference(folder=folder, image=image)
                yield read_sidecar(Path(file_entry.path), ref)

    def iter_records(self) -> Iterator[tuple[ImageReference, ImageMetadata]]:
        for scan in self.iter_sidecars():
            if not scan.ok:
                logger.debug("Skipping sidecar %s (%s)", scan.path, scan.error)
                continue
            yield scan.reference, scan.metadata

    def metadata_groups(self) -> MetadataGroups:
        sources: dict[str, list[ImageReference]] = defaultdict(list)
        authors: dict[str, list[ImageReference]] = defaultdict(list)
        tags: dict[str, list[ImageReference]] = defaultdict(list)
        for ref, metadata in self.iter_records():
            if metadata.source:
                sources[metadata.source].append(ref)
            if metadata.author:
                authors[metadata.author].append(ref)
            # duplicate tags push the same reference again
            for tag in metadata.tags:
                tags[tag].append(ref)
        return MetadataGroups(sources=dict(sources), authors=dict(authors), tags=dict(tags))

    def all_tags(self) -> list[str]:
        seen: set[str] = set()
        for _, metadata in self.iter_records():
            seen.update(metadata.tags)
        return sorted(seen)

    def tags_with_count(self) -> list[TagWithCount]:
        counts: Counter[str] = Counter()
        for _, metadata in self.iter_records():
            counts.update(metadata.tags)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [TagWithCount(tag=tag, count=count) for tag, count in ranked]
