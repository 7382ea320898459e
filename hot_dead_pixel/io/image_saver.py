# Export functionality using Pillow
import os

from PIL import Image

from ..config import settings
from ..utils.errors import EncodeError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Writable formats, keyed by extension -> Pillow format name
WRITE_FORMATS = {
    '.png': 'PNG',
    '.bmp': 'BMP',
    '.tga': 'TGA',
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
}

# Formats that can be decoded but not written. Requests for these fail fast.
READ_ONLY_FORMATS = {
    '.gif': 'GIF',
    '.psd': 'PSD',
    '.pic': 'PIC',
    '.pnm': 'PNM',
    '.ppm': 'PNM',
    '.pgm': 'PNM',
    '.pbm': 'PNM',
}

_FORMAT_ALIASES = {'JPG': 'JPEG'}


def resolve_format(file_path, format_name=None):
    """Returns the Pillow format name to write file_path with.

    Args:
        file_path (str): Target path; its extension is used when format_name is None.
        format_name (str): Explicit format such as 'png' or 'JPEG'.

    Raises:
        EncodeError: If the format is read-only or unknown.
    """
    if format_name:
        name = format_name.upper().lstrip('.')
        name = _FORMAT_ALIASES.get(name, name)
        if name in WRITE_FORMATS.values():
            return name
        if name in READ_ONLY_FORMATS.values():
            raise EncodeError(f"Writing {name} images is not supported.", file_path=file_path, format_name=name)
        raise EncodeError(f"Unknown output format '{format_name}'.", file_path=file_path, format_name=format_name)

    ext = os.path.splitext(file_path)[1].lower()
    if ext in WRITE_FORMATS:
        return WRITE_FORMATS[ext]
    if ext in READ_ONLY_FORMATS:
        name = READ_ONLY_FORMATS[ext]
        raise EncodeError(f"Writing {name} images is not supported.", file_path=file_path, format_name=name)
    raise EncodeError(f"Cannot determine output format from extension '{ext}'.", file_path=file_path)


def encode(file_path, buffer, format_name=None, quality=None, png_compression=None):
    """Saves the pixel buffer to the specified file path using Pillow.

    Args:
        file_path (str): The full path where the image should be saved.
        buffer (PixelBuffer): The pixels to write.
        format_name (str): Optional explicit format; otherwise taken from the extension.
        quality (int): JPEG quality (1-100). Defaults to settings.IO_DEFAULTS.
        png_compression (int): PNG compression level (0-9). Defaults to settings.IO_DEFAULTS.

    Raises:
        EncodeError: On unsupported target format or write failure.
    """
    if not isinstance(file_path, str) or not file_path:
        raise EncodeError("Invalid file path provided for saving.", file_path=file_path)

    pil_format = resolve_format(file_path, format_name)

    if quality is None:
        quality = settings.IO_DEFAULTS["jpeg_quality"]
    if png_compression is None:
        png_compression = settings.IO_DEFAULTS["png_compression"]

    save_kwargs = {}
    if pil_format == 'JPEG':
        save_kwargs['quality'] = max(1, min(100, quality)) # Clamp quality 1-100 for Pillow JPEG
    elif pil_format == 'PNG':
        save_kwargs['compress_level'] = max(0, min(9, png_compression)) # Clamp 0-9

    # Create the output directory if it doesn't exist
    output_dir = os.path.dirname(file_path)
    try:
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)
            logger.info("Created output directory: %s", output_dir)

        img = Image.fromarray(buffer.as_array(), 'RGB')
        try:
            img.save(file_path, format=pil_format, **save_kwargs)
        finally:
            img.close()
    except (OSError, ValueError) as e:
        # Disk full, permissions, encoder refusing the data
        raise EncodeError(
            f"Error saving image '{file_path}': {e}",
            file_path=file_path, format_name=pil_format, original_error=e,
        ) from e

    logger.info("Saved image to '%s' (%s)", file_path, pil_format)
