"""
Asset Store - binary assets on local disk

All paths handed in and out are relative to a fixed storage root, e.g.
"uploads/profilephotos/<user>-<ts>-<name>". The root is passed in explicitly so
tests can point it at a temporary directory.
"""

import os
import re
from pathlib import Path, PurePosixPath
from typing import Union

import aiofiles
import aiofiles.os

from app.core.exceptions import StorageIOError, AssetNotFoundError
from app.core.logging_config import logger

_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_filename(original_name: str) -> str:
    """
    Strip directory components and collapse each whitespace run to "_".

    Case and extension are preserved: "my photo.JPG" -> "my_photo.JPG".
    """
    # Clients on Windows may send backslash separated names
    base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    base = _WHITESPACE_RUN.sub("_", base)
    if base in ("", ".", ".."):
        return "upload"
    return base


def build_profile_photo_path(
    user_id: str,
    timestamp_ms: int,
    original_name: str,
    directory: str = "uploads/profilephotos",
) -> str:
    """Relative storage path for a user's profile photo"""
    filename = f"{user_id}-{timestamp_ms}-{sanitize_filename(original_name)}"
    return str(PurePosixPath(directory) / filename)


def build_gallery_image_path(album_id: str, timestamp_ms: int, original_name: str,
                             directory: str = "uploads/gallery", sequence: int = 0) -> str:
    """`sequence` disambiguates same-named files written in the same millisecond"""
    stamp = f"{timestamp_ms}-{sequence}" if sequence else str(timestamp_ms)
    filename = f"{stamp}-{sanitize_filename(original_name)}"
    return str(PurePosixPath(directory) / str(album_id) / filename)


class AssetStore:
    """
    File-system store rooted at a single directory.

    write() overwrites, delete() distinguishes a missing file
    (AssetNotFoundError) from any other I/O failure (StorageIOError).
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def resolve(self, relative_path: str) -> Path:
        """Absolute path for a stored asset, refusing anything outside the root"""
        if not relative_path or os.path.isabs(relative_path):
            raise StorageIOError("Invalid asset path", path=relative_path)

        full_path = (self.root / relative_path).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise StorageIOError("Path traversal detected", path=relative_path)
        return full_path

    async def exists(self, relative_path: str) -> bool:
        return await aiofiles.os.path.isfile(self.resolve(relative_path))

    async def directory_exists(self, relative_path: str) -> bool:
        return await aiofiles.os.path.isdir(self.resolve(relative_path))

    async def write(self, relative_path: str, data: bytes) -> None:
        full_path = self.resolve(relative_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.log_storage_event("write", relative_path, success=False, reason=str(e))
            raise StorageIOError(f"Failed to write asset: {e}", path=relative_path) from e

        logger.log_storage_event("write", relative_path, size_bytes=len(data))

    async def read(self, relative_path: str) -> bytes:
        full_path = self.resolve(relative_path)
        try:
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise AssetNotFoundError(relative_path) from e
        except OSError as e:
            raise StorageIOError(f"Failed to read asset: {e}", path=relative_path) from e

    async def delete(self, relative_path: str) -> None:
        full_path = self.resolve(relative_path)
        try:
            await aiofiles.os.remove(full_path)
        except FileNotFoundError as e:
            raise AssetNotFoundError(relative_path) from e
        except OSError as e:
            raise StorageIOError(f"Failed to delete asset: {e}", path=relative_path) from e

        logger.log_storage_event("delete", relative_path)

    async def remove_directory(self, relative_path: str) -> None:
        """Remove an empty directory under the root"""
        full_path = self.resolve(relative_path)
        try:
            await aiofiles.os.rmdir(full_path)
        except FileNotFoundError as e:
            raise AssetNotFoundError(relative_path) from e
        except OSError as e:
            raise StorageIOError(f"Failed to remove directory: {e}", path=relative_path) from e
