from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, List


class ImageMetadata(BaseModel):
    source: str
    author: str
    tags: List[str]

    @classmethod
    def empty(cls) -> "ImageMetadata":
        return cls(source="", author="", tags=[])


class ImageReference(BaseModel):
    folder: str
    image: str


class MetadataGroups(BaseModel):
    sources: Dict[str, List[ImageReference]] = Field(default_factory=dict)
    authors: Dict[str, List[ImageReference]] = Field(default_factory=dict)
    tags: Dict[str, List[ImageReference]] = Field(default_factory=dict)


class TagWithCount(BaseModel):
    tag: str
    count: int


class MetadataIn(BaseModel):
    source: str
    author: str
    tags: List[str]


class BulkMetadataIn(MetadataIn):
    images: List[str]
