"""
Profile Photo Lifecycle

Validate -> resolve user -> name the asset -> best-effort delete of the
superseded photo -> transcode and write -> record the new reference.

Filesystem state and the user row are not updated atomically. Upload tolerates
a failed delete of the previous photo (the orphan is logged and left behind);
remove does not, and leaves the reference untouched when the delete fails.
Concurrent uploads for the same user are not serialized: the last save wins
and the other upload's file is orphaned.
"""

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from app.core.exceptions import (
    NoFileProvidedError,
    NoPhotoToDeleteError,
    StorageIOError,
    UserNotFoundError,
)
from app.core.logging_config import logger
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.asset_store import AssetStore, build_profile_photo_path
from app.services.image_transcoder import (
    DEFAULT_QUALITY,
    DEFAULT_SIZE,
    transcode_profile_photo,
)
from app.services.upload_validator import validate_image_upload


@dataclass(frozen=True)
class UploadedAsset:
    """An uploaded file as received from the transport layer"""
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


def current_time_millis() -> int:
    return int(time.time() * 1000)


Transcoder = Callable[[bytes, int, int], Awaitable[bytes]]


class ProfilePhotoService:
    """
    Owns the profile_photo field of User rows and the files it points at.

    Args:
        users: user record store
        store: asset store the photo paths are relative to
        directory: directory (relative to the store root) for photos
        size: edge of the square output box
        quality: JPEG quality 0-100
        clock: returns the current epoch time in milliseconds
        transcoder: async (data, size, quality) -> JPEG bytes
    """

    def __init__(
        self,
        users: UserRepository,
        store: AssetStore,
        directory: str = "uploads/profilephotos",
        size: int = DEFAULT_SIZE,
        quality: int = DEFAULT_QUALITY,
        clock: Callable[[], int] = current_time_millis,
        transcoder: Transcoder = transcode_profile_photo,
    ):
        self.users = users
        self.store = store
        self.directory = directory
        self.size = size
        self.quality = quality
        self.clock = clock
        self.transcoder = transcoder

    async def _get_user(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def upload(self, user_id: str, asset: Optional[UploadedAsset]) -> str:
        """
        Store a new profile photo for the user and return its path.

        Raises:
            NoFileProvidedError, UnsupportedFileTypeError: before any I/O
            UserNotFoundError: unknown user
            TranscodeError: image could not be decoded or encoded
            StorageIOError: the new file could not be written
        """
        if asset is None:
            raise NoFileProvidedError()
        validate_image_upload(asset.filename, asset.content_type)

        user = await self._get_user(user_id)

        new_path = build_profile_photo_path(
            str(user.id), self.clock(), asset.filename, directory=self.directory
        )

        previous_path = user.profile_photo
        if previous_path:
            try:
                await self.store.delete(previous_path)
            except StorageIOError as e:
                logger.log_storage_event(
                    "delete", previous_path, success=False, reason=e.message,
                    superseded_by=new_path,
                )

        jpeg = await self.transcoder(asset.data, self.size, self.quality)
        await self.store.write(new_path, jpeg)

        user.profile_photo = new_path
        await self.users.save(user)

        logger.info(
            f"Profile photo updated for user {user.id}",
            extra={"event_type": "profile_photo_upload", "photo_path": new_path},
        )
        return new_path

    async def remove(self, user_id: str) -> None:
        """
        Delete the user's current photo and clear the reference.

        A failed file delete propagates and the reference is kept.
        """
        user = await self._get_user(user_id)

        if not user.profile_photo:
            raise NoPhotoToDeleteError(user_id)

        await self.store.delete(user.profile_photo)

        user.profile_photo = None
        await self.users.save(user)

    async def get_reference(self, user_id: str) -> Optional[str]:
        """Current photo path, or None when the user has no photo"""
        user = await self._get_user(user_id)
        return user.profile_photo
