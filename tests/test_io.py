"""Tests for image I/O functionality."""

import os

import numpy as np
import pytest
from PIL import Image

from hot_dead_pixel.io.image_loader import SUPPORTED_READ_EXTENSIONS, decode
from hot_dead_pixel.io.image_saver import READ_ONLY_FORMATS, encode, resolve_format
from hot_dead_pixel.processing.pixel_buffer import PixelBuffer
from hot_dead_pixel.utils.errors import DecodeError, EncodeError, FileIOError


class TestDecode:
    """Tests for image loading."""

    def test_nonexistent_file(self):
        with pytest.raises(DecodeError) as excinfo:
            decode("/nonexistent/path/to/image.png")
        assert excinfo.value.file_path == "/nonexistent/path/to/image.png"

    def test_invalid_path(self):
        with pytest.raises(DecodeError):
            decode("")
        with pytest.raises(DecodeError):
            decode(None)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(DecodeError) as excinfo:
            decode(str(path))
        assert excinfo.value.original_error is not None

    def test_grayscale_converted_to_rgb(self, tmp_path):
        path = str(tmp_path / "gray.png")
        Image.fromarray(np.full((6, 8), 77, dtype=np.uint8), "L").save(path)
        buffer = decode(path)
        assert (buffer.width, buffer.height) == (8, 6)
        assert buffer.get(3, 2) == (77, 77, 77)

    def test_supported_extensions_defined(self):
        assert ".png" in SUPPORTED_READ_EXTENSIONS
        assert ".tga" in SUPPORTED_READ_EXTENSIONS
        assert ".gif" in SUPPORTED_READ_EXTENSIONS


class TestEncode:
    """Tests for image saving."""

    @pytest.mark.parametrize("ext", [".png", ".bmp", ".tga"])
    def test_lossless_round_trip(self, tmp_path, textured_buffer, ext):
        path = str(tmp_path / f"image{ext}")
        encode(path, textured_buffer)
        assert os.path.exists(path)
        assert decode(path) == textured_buffer

    def test_jpeg_written(self, tmp_path, textured_buffer):
        path = str(tmp_path / "image.jpg")
        encode(path, textured_buffer, quality=80)
        loaded = decode(path)
        assert (loaded.width, loaded.height) == (textured_buffer.width, textured_buffer.height)

    @pytest.mark.parametrize("ext, name", [(".gif", "GIF"), (".psd", "PSD"), (".pic", "PIC"), (".pnm", "PNM")])
    def test_read_only_formats_fail_fast(self, tmp_path, grey_buffer, ext, name):
        path = tmp_path / f"image{ext}"
        with pytest.raises(EncodeError) as excinfo:
            encode(str(path), grey_buffer)
        assert excinfo.value.format_name == name
        assert not path.exists()

    def test_unknown_extension(self, tmp_path, grey_buffer):
        with pytest.raises(EncodeError):
            encode(str(tmp_path / "image.xyz"), grey_buffer)

    def test_explicit_format_overrides_extension(self, tmp_path, grey_buffer):
        path = str(tmp_path / "image.out")
        encode(path, grey_buffer, format_name="png")
        with Image.open(path) as img:
            assert img.format == "PNG"

    def test_resolve_format(self):
        assert resolve_format("a.JPG") == "JPEG"
        assert resolve_format("a.png", "jpg") == "JPEG"
        assert resolve_format("a.tga") == "TGA"
        with pytest.raises(EncodeError):
            resolve_format("a.png", "gif")
        assert set(READ_ONLY_FORMATS.values()) == {"GIF", "PSD", "PIC", "PNM"}

    def test_creates_directory(self, tmp_path, grey_buffer):
        nested = tmp_path / "subdir" / "nested" / "image.png"
        encode(str(nested), grey_buffer)
        assert nested.exists()

    def test_write_failure(self, tmp_path, grey_buffer):
        # A directory already occupies the target path
        target = tmp_path / "taken.png"
        target.mkdir()
        with pytest.raises(EncodeError) as excinfo:
            encode(str(target), grey_buffer)
        assert isinstance(excinfo.value, FileIOError)

    def test_invalid_path(self, grey_buffer):
        with pytest.raises(EncodeError):
            encode("", grey_buffer)
