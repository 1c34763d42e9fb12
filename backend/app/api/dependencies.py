"""
Service providers for the API layer.

Endpoints get their services through these so tests can swap the asset store
root with app.dependency_overrides[get_asset_store].
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.repositories.user_repository import UserRepository
from app.services.asset_store import AssetStore
from app.services.gallery_service import GalleryService
from app.services.profile_photo_service import ProfilePhotoService


def get_asset_store() -> AssetStore:
    return AssetStore(settings.STORAGE_ROOT_DIR)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_profile_photo_service(
    users: UserRepository = Depends(get_user_repository),
    store: AssetStore = Depends(get_asset_store),
) -> ProfilePhotoService:
    return ProfilePhotoService(
        users,
        store,
        directory=settings.PROFILE_PHOTO_DIR,
        size=settings.PROFILE_PHOTO_SIZE,
        quality=settings.PROFILE_PHOTO_QUALITY,
    )


def get_gallery_service(
    db: AsyncSession = Depends(get_db),
    store: AssetStore = Depends(get_asset_store),
) -> GalleryService:
    return GalleryService(db, store, directory=settings.GALLERY_DIR)
