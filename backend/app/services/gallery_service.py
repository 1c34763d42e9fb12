"""
Gallery albums and their images.

Image files live in the asset store under <gallery dir>/<album id>/ and the
album_images rows hold their relative paths. File deletes are best-effort:
a row is removed even when its file is already gone.
"""

from typing import Callable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlbumNotFoundError, StorageIOError, ValidationError
from app.core.logging_config import logger
from app.core.types import generate_uuid
from app.models.gallery import Album, AlbumImage
from app.services.asset_store import AssetStore, build_gallery_image_path
from app.services.profile_photo_service import UploadedAsset, current_time_millis
from app.services.upload_validator import validate_image_upload


class GalleryService:

    def __init__(
        self,
        db: AsyncSession,
        store: AssetStore,
        directory: str = "uploads/gallery",
        clock: Callable[[], int] = current_time_millis,
    ):
        self.db = db
        self.store = store
        self.directory = directory
        self.clock = clock

    async def list_albums(self) -> List[Album]:
        result = await self.db.execute(select(Album).order_by(Album.created_at))
        return list(result.scalars().all())

    async def get_album(self, album_id: str) -> Album:
        result = await self.db.execute(select(Album).where(Album.id == str(album_id)))
        album = result.scalar_one_or_none()
        if not album:
            raise AlbumNotFoundError(album_id)
        return album

    async def find_album_by_name(self, name: str) -> Optional[Album]:
        result = await self.db.execute(select(Album).where(Album.name == name))
        return result.scalar_one_or_none()

    async def list_all_images(self) -> List[str]:
        result = await self.db.execute(
            select(AlbumImage.path).order_by(AlbumImage.created_at)
        )
        return list(result.scalars().all())

    async def upload_images(self, album_name: Optional[str], files: List[UploadedAsset]) -> Album:
        """
        Add images to the named album, creating it on first use.

        Every file is validated before anything is written.
        """
        album_name = (album_name or "").strip()
        if not album_name:
            raise ValidationError("Album name is required", field="album_name")
        if not files:
            raise ValidationError("No images uploaded", field="images")

        for asset in files:
            validate_image_upload(asset.filename, asset.content_type)

        album = await self.find_album_by_name(album_name)
        if album is None:
            album = Album(id=generate_uuid(), name=album_name, images=[])
            self.db.add(album)
            logger.info(f"[Gallery] Created album '{album_name}'")

        written = set()
        for asset in files:
            path = await self._free_image_path(album.id, asset.filename, written)
            await self.store.write(path, asset.data)
            written.add(path)
            album.images.append(AlbumImage(path=path))

        await self.db.commit()
        return await self.get_album(album.id)

    async def _free_image_path(self, album_id: str, filename: str, taken: Set[str]) -> str:
        timestamp = self.clock()
        sequence = 0
        while True:
            path = build_gallery_image_path(
                album_id, timestamp, filename, directory=self.directory, sequence=sequence
            )
            if path not in taken and not await self.store.exists(path):
                return path
            sequence += 1

    async def _discard_file(self, path: str) -> None:
        try:
            await self.store.delete(path)
        except StorageIOError as e:
            logger.log_storage_event("delete", path, success=False, reason=e.message)

    async def delete_selected(self, album_id: str, selected_images: List[str]) -> int:
        """Remove the listed image paths from an album, returns how many were removed"""
        album = await self.get_album(album_id)
        selected = set(selected_images)

        removed = [image for image in album.images if image.path in selected]
        for image in removed:
            await self._discard_file(image.path)
            album.images.remove(image)

        await self.db.commit()
        return len(removed)

    async def delete_album(self, album_id: str) -> None:
        album = await self.get_album(album_id)

        for image in list(album.images):
            await self._discard_file(image.path)

        album_dir = f"{self.directory}/{album.id}"
        try:
            if await self.store.directory_exists(album_dir):
                await self.store.remove_directory(album_dir)
        except StorageIOError as e:
            logger.log_storage_event("rmdir", album_dir, success=False, reason=e.message)

        await self.db.delete(album)
        await self.db.commit()
        logger.info(f"[Gallery] Deleted album '{album.name}'")
