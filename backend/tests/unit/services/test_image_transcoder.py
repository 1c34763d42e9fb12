"""
Unit Tests for profile photo transcoding
"""
import io

import pytest
from PIL import Image, JpegImagePlugin

from app.core.exceptions import TranscodeError
from app.services.image_transcoder import transcode_profile_photo


def open_jpeg(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    assert image.format == "JPEG"
    return image


class TestTranscodeSize:

    async def test_large_square_scaled_to_box(self, image_factory):
        output = await transcode_profile_photo(image_factory(1000, 1000))

        assert open_jpeg(output).size == (350, 350)

    async def test_landscape_is_cover_cropped(self, image_factory):
        output = await transcode_profile_photo(image_factory(1600, 900))

        assert open_jpeg(output).size == (350, 350)

    async def test_portrait_is_cover_cropped(self, image_factory):
        output = await transcode_profile_photo(image_factory(400, 1200, fmt="JPEG"))

        assert open_jpeg(output).size == (350, 350)

    async def test_small_source_not_enlarged_or_padded(self, image_factory):
        output = await transcode_profile_photo(image_factory(120, 80))

        assert open_jpeg(output).size == (120, 80)

    async def test_one_small_dimension_bounded_by_source(self, image_factory):
        output = await transcode_profile_photo(image_factory(1000, 200))

        assert open_jpeg(output).size == (350, 200)

    async def test_custom_box_size(self, image_factory):
        output = await transcode_profile_photo(image_factory(500, 500), size=100)

        assert open_jpeg(output).size == (100, 100)


class TestTranscodeEncoding:

    async def test_png_with_alpha_becomes_rgb_jpeg(self, image_factory):
        output = await transcode_profile_photo(image_factory(500, 500, mode="RGBA"))

        assert open_jpeg(output).mode == "RGB"

    async def test_palette_image_converted(self, image_factory):
        output = await transcode_profile_photo(image_factory(400, 400, mode="P", color=3))

        assert open_jpeg(output).mode == "RGB"

    async def test_full_chroma_resolution(self, image_factory):
        output = await transcode_profile_photo(image_factory(500, 500))

        # 0 is 4:4:4, 2 would be the 4:2:0 default
        assert JpegImagePlugin.get_sampling(open_jpeg(output)) == 0

    async def test_center_is_kept(self):
        """Cover fit crops the edges, the center color survives"""
        source = Image.new("RGB", (900, 300), (0, 0, 255))
        source.paste((255, 0, 0), (300, 0, 600, 300))
        buffer = io.BytesIO()
        source.save(buffer, format="PNG")

        output = await transcode_profile_photo(buffer.getvalue())

        image = open_jpeg(output)
        r, g, b = image.getpixel((150, 150))
        assert r > 200 and b < 60


class TestTranscodeFailures:

    async def test_garbage_bytes(self):
        with pytest.raises(TranscodeError) as exc_info:
            await transcode_profile_photo(b"definitely not an image")

        assert exc_info.value.status_code == 500

    async def test_truncated_image(self, image_factory):
        data = image_factory(600, 600, fmt="JPEG")

        with pytest.raises(TranscodeError):
            await transcode_profile_photo(data[: len(data) // 3])

    async def test_empty_input(self):
        with pytest.raises(TranscodeError):
            await transcode_profile_photo(b"")
