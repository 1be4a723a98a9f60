from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
import mimetypes

from ..models.folder import FolderInfo
from ..services.folders import FolderEnumerator
from ._utils import get_folders, validate_segment

router = APIRouter()


@router.get("", response_model=list[FolderInfo])
def get_image_folders(folders: FolderEnumerator = Depends(get_folders)):
    return folders.list_folders()


@router.get("/{folder}/images", response_model=list[str])
def get_images_in_folder(folder: str, folders: FolderEnumerator = Depends(get_folders)):
    validate_segment(folder, kind="folder")
    return folders.list_images(folder)


@router.get("/{folder}/images/{image}/path", response_model=str)
def get_image_path(
    folder: str, image: str, folders: FolderEnumerator = Depends(get_folders)
):
    validate_segment(folder, kind="folder")
    validate_segment(image, kind="image")
    return str(folders.image_path(folder, image))


@router.get("/{folder}/images/{image}/file")
def get_image_file(
    folder: str, image: str, folders: FolderEnumerator = Depends(get_folders)
):
    validate_segment(folder, kind="folder")
    validate_segment(image, kind="image")
    path = folders.image_path(folder, image)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Image not found")
    media_type, _ = mimetypes.guess_type(path.name)
    return FileResponse(path, media_type=media_type)
