from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class AlbumName(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class AlbumImageResponse(BaseModel):
    id: str
    path: str

    class Config:
        from_attributes = True


class AlbumResponse(BaseModel):
    id: str
    name: str
    created_at: datetime
    images: List[AlbumImageResponse] = []

    class Config:
        from_attributes = True


class AllImagesResponse(BaseModel):
    images: List[str]


class DeleteSelectedRequest(BaseModel):
    album_id: str = Field(..., min_length=1)
    selected_images: List[str]


class DeleteSelectedResponse(BaseModel):
    message: str
    deleted: int
