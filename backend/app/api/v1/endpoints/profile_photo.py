"""
Profile photo endpoints

Upload and remove act on the authenticated user; any authenticated caller can
read another user's reference or stored JPEG.
"""
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse
from typing import Optional

from app.api.dependencies import get_asset_store, get_profile_photo_service
from app.core.exceptions import ResourceNotFoundError
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.profile import (
    ProfilePhotoDeleteResponse,
    ProfilePhotoReferenceResponse,
    ProfilePhotoUploadResponse,
)
from app.services.asset_store import AssetStore
from app.services.profile_photo_service import ProfilePhotoService, UploadedAsset

router = APIRouter()


@router.post("/me/profile-photo", response_model=ProfilePhotoUploadResponse)
async def upload_profile_photo(
    photo: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    photos: ProfilePhotoService = Depends(get_profile_photo_service)
):
    asset = None
    if photo is not None:
        asset = UploadedAsset(
            filename=photo.filename,
            content_type=photo.content_type,
            data=await photo.read(),
        )

    path = await photos.upload(current_user.id, asset)
    return {"photo_path": path}


@router.delete("/me/profile-photo", response_model=ProfilePhotoDeleteResponse)
async def delete_profile_photo(
    current_user: User = Depends(get_current_user),
    photos: ProfilePhotoService = Depends(get_profile_photo_service)
):
    await photos.remove(current_user.id)
    return {"profile_photo": None}


@router.get("/{user_id}/profile-photo", response_model=ProfilePhotoReferenceResponse)
async def get_profile_photo(
    user_id: str,
    current_user: User = Depends(get_current_user),
    photos: ProfilePhotoService = Depends(get_profile_photo_service)
):
    path = await photos.get_reference(user_id)
    if path is None:
        return {"profile_photo": None, "message": "User does not have a profile photo set"}
    return {"profile_photo": path}


@router.get("/{user_id}/profile-photo/file")
async def get_profile_photo_file(
    user_id: str,
    current_user: User = Depends(get_current_user),
    photos: ProfilePhotoService = Depends(get_profile_photo_service),
    store: AssetStore = Depends(get_asset_store)
):
    """Serve the stored JPEG through an authenticated route"""
    path = await photos.get_reference(user_id)
    if path is None or not await store.exists(path):
        raise ResourceNotFoundError("Photo", user_id)

    return FileResponse(store.resolve(path), media_type="image/jpeg")
