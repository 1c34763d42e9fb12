"""
Profile photo transcoding with Pillow.

Cover fit into a square box, center crop, never enlarged: a source smaller than
the box in either dimension keeps that dimension, so small inputs produce small
outputs rather than padded ones. Output is always baseline JPEG with 4:4:4
chroma.
"""

import asyncio
import io
from functools import partial

from PIL import Image, ImageOps, UnidentifiedImageError

from app.core.exceptions import TranscodeError

DEFAULT_SIZE = 350
DEFAULT_QUALITY = 50


def _transcode(data: bytes, size: int, quality: int) -> bytes:
    try:
        with Image.open(io.BytesIO(data)) as source:
            box = (min(source.width, size), min(source.height, size))
            fitted = ImageOps.fit(source, box, method=Image.Resampling.LANCZOS)

            if fitted.mode != "RGB":
                fitted = fitted.convert("RGB")

            output = io.BytesIO()
            # subsampling=0 keeps full chroma resolution
            fitted.save(output, format="JPEG", quality=quality, subsampling=0)
            return output.getvalue()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise TranscodeError(f"Image could not be processed: {e}") from e


async def transcode_profile_photo(data: bytes, size: int = DEFAULT_SIZE,
                                  quality: int = DEFAULT_QUALITY) -> bytes:
    """Transcode in the default executor so the event loop keeps serving requests"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_transcode, data, size, quality))
