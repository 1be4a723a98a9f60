from __future__ import annotations
from pydantic import BaseModel


class FolderInfo(BaseModel):
    name: str
    size_mb: float
