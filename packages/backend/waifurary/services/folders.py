from __future__ import annotations

import logging
import os
from pathlib import Path

from ..models.folder import FolderInfo

logger = logging.getLogger(__name__)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp", ".svg"}
BYTES_PER_MB = 1024 * 1024


def is_image(name: str) -> bool:
    return name.lower().endswith(tuple(IMAGE_EXTS))


def is_utf8_name(name: str) -> bool:
    """False for names that only decoded through surrogate escapes."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def folder_size(path: Path) -> int:
    """Total size in bytes of every regular file below ``path``.

    Walks with an explicit stack. Symlinked directories are not descended
    into; symlinked files count with their target's size. Entries that
    cannot be read count as 0.
    """
    total = 0
    pending = [Path(path)]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(Path(entry.path))
                elif entry.is_file():
                    total += entry.stat().st_size
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
    return total


class FolderEnumerator:
    def __init__(self, images_root: Path):
        self.images_root = Path(images_root)

    def image_path(self, folder: str, image: str) -> Path:
        return self.images_root / folder / image

    def list_folders(self) -> list[FolderInfo]:
        if not self.images_root.exists():
            return []
        folders: list[FolderInfo] = []
        try:
            with os.scandir(self.images_root) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Cannot read images root %s: %s", self.images_root, e)
            return []
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            if not is_utf8_name(entry.name):
                logger.debug("Skipping folder with undecodable name %r", entry.name)
                continue
            size_bytes = folder_size(Path(entry.path))
            folders.append(FolderInfo(name=entry.name, size_mb=size_bytes / BYTES_PER_MB))
        folders.sort(key=lambda f: f.name)
        return folders

    def list_images(self, folder: str) -> list[str]:
        folder_path = self.images_root / folder
        if not folder_path.exists():
            return []
        images: list[str] = []
        try:
            with os.scandir(folder_path) as it:
                for entry in it:
                    try:
                        if (
                            is_utf8_name(entry.name)
                            and entry.is_file()
                            and is_image(entry.name)
                        ):
                            images.append(entry.name)
                    except OSError:
                        continue
        except OSError as e:
            logger.debug("Cannot read folder %s: %s", folder_path, e)
            return []
        images.sort()
        return images
