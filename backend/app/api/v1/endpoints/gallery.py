"""
Gallery API

Reads are public; upload and delete need an admin.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from typing import List, Optional

from app.api.dependencies import get_gallery_service
from app.models.user import User
from app.modules.auth.dependencies import get_current_admin
from app.schemas.gallery import (
    AlbumName,
    AlbumResponse,
    AllImagesResponse,
    DeleteSelectedRequest,
    DeleteSelectedResponse,
)
from app.schemas.auth import MessageResponse
from app.services.gallery_service import GalleryService
from app.services.profile_photo_service import UploadedAsset

router = APIRouter()


@router.get("/album-names", response_model=List[AlbumName])
async def get_album_names(
    admin: User = Depends(get_current_admin),
    gallery: GalleryService = Depends(get_gallery_service)
):
    return await gallery.list_albums()


@router.get("/albums", response_model=List[AlbumResponse])
async def get_albums(gallery: GalleryService = Depends(get_gallery_service)):
    return await gallery.list_albums()


@router.get("/album/{album_id}", response_model=AlbumResponse)
async def get_album(album_id: str, gallery: GalleryService = Depends(get_gallery_service)):
    return await gallery.get_album(album_id)


@router.get("/all-images", response_model=AllImagesResponse)
async def get_all_images(gallery: GalleryService = Depends(get_gallery_service)):
    return {"images": await gallery.list_all_images()}


@router.post("/upload", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def upload_images(
    album_name: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    admin: User = Depends(get_current_admin),
    gallery: GalleryService = Depends(get_gallery_service)
):
    files = [
        UploadedAsset(filename=image.filename, content_type=image.content_type, data=await image.read())
        for image in images or []
    ]
    return await gallery.upload_images(album_name, files)


@router.delete("/delete-selected", response_model=DeleteSelectedResponse)
async def delete_selected_images(
    body: DeleteSelectedRequest,
    admin: User = Depends(get_current_admin),
    gallery: GalleryService = Depends(get_gallery_service)
):
    deleted = await gallery.delete_selected(body.album_id, body.selected_images)
    return {"message": "Selected images deleted successfully", "deleted": deleted}


@router.delete("/album/{album_id}", response_model=MessageResponse)
async def delete_album(
    album_id: str,
    admin: User = Depends(get_current_admin),
    gallery: GalleryService = Depends(get_gallery_service)
):
    await gallery.delete_album(album_id)
    return {"message": "Album deleted successfully"}
