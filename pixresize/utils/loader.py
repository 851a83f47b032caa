"""Image loading and saving utilities using Pillow, with NumPy arrays.

All processing in this project occurs on NumPy arrays wrapped in
:class:`~pixresize.types.PixelBuffer`. These helpers only convert between
encoded files and RGBA buffers, and decide which container a result is
written in.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, EncodeError, UnsupportedInput
from ..types import PixelBuffer

Source = Union[str, Path, bytes]

SUPPORTED_FORMATS = ("PNG", "GIF", "BMP", "WEBP", "JPEG")
DEFAULT_FORMAT = "PNG"

# Containers that cannot carry the result losslessly are re-encoded.
_FORMAT_OVERRIDES = {"GIF": "PNG"}
_EXTENSIONS = {
    "PNG": ".png",
    "GIF": ".gif",
    "BMP": ".bmp",
    "WEBP": ".webp",
    "JPEG": ".jpg",
}


def load_image(source: Source) -> tuple[PixelBuffer, str]:
    """Decode an image into an RGBA buffer.

    Only the first frame of animated sources is read.

    Parameters
    ----------
    source : str | Path | bytes
        Path to an image file, or its raw bytes.

    Returns
    -------
    tuple[PixelBuffer, str]
        The pixels and the Pillow format name of the source (e.g. ``"PNG"``).

    Raises
    ------
    UnsupportedInput
        If the data is not a supported raster format (or the file is missing).
    DecodeError
        If the container is recognised but the pixels cannot be extracted.
    """
    if isinstance(source, (bytes, bytearray)):
        fp = io.BytesIO(source)
        label = "<bytes>"
    else:
        p = Path(source)
        if not p.is_file():
            raise UnsupportedInput(f"Could not load: {p} (file not found)")
        fp = p
        label = str(p)

    try:
        im = Image.open(fp)
    except UnidentifiedImageError as e:
        raise UnsupportedInput(f"Could not load: {label} (not a recognised image)") from e
    except (Image.DecompressionBombError, OSError) as e:
        raise UnsupportedInput(f"Could not load: {label} ({e})") from e

    with im:
        fmt = (im.format or "").upper()
        if fmt not in SUPPORTED_FORMATS:
            raise UnsupportedInput(f"Could not load: {label} (unsupported format {fmt or 'unknown'})")
        try:
            im.seek(0)
            buf = PixelBuffer.from_image(im)
        except (OSError, EOFError, ValueError, SyntaxError) as e:
            raise DecodeError(f"Could not read pixels of {label}: {e}") from e
    return buf, fmt


def output_format(source_format: Optional[str]) -> str:
    """Container to write a result in, given the source container."""
    if not source_format:
        return DEFAULT_FORMAT
    fmt = source_format.upper()
    if fmt not in SUPPORTED_FORMATS:
        return DEFAULT_FORMAT
    return _FORMAT_OVERRIDES.get(fmt, fmt)


def encode_image(buf: PixelBuffer, fmt: str = DEFAULT_FORMAT) -> bytes:
    """Encode a buffer to bytes in ``fmt``.

    Lossy-capable containers are written at their most faithful settings:
    WebP losslessly (keeping RGB under transparent pixels) and JPEG at
    quality 100. JPEG has no alpha channel, so it is flattened to RGB.

    Raises
    ------
    EncodeError
        If Pillow cannot write the buffer in this container.
    """
    fmt = fmt.upper()
    im = buf.to_image()
    params: dict = {}
    if fmt == "JPEG":
        im = im.convert("RGB")
        params["quality"] = 100
    elif fmt == "WEBP":
        params["lossless"] = True
        params["exact"] = True
    out = io.BytesIO()
    try:
        im.save(out, format=fmt, **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {buf.width}x{buf.height} image as {fmt}: {e}") from e
    return out.getvalue()


def save_image(buf: PixelBuffer, path: Union[str, Path], fmt: Optional[str] = None) -> None:
    """Save a buffer to ``path``.

    Parameters
    ----------
    buf : PixelBuffer
        Pixels to write.
    path : str | Path
        Output file path.
    fmt : str | None
        Container; inferred from the extension when omitted.
    """
    p = Path(path)
    if fmt is None:
        ext = p.suffix.lower()
        fmt = next((f for f, e in _EXTENSIONS.items() if e == ext), None)
        if fmt is None and ext in (".jpeg", ".jpe"):
            fmt = "JPEG"
        fmt = fmt or DEFAULT_FORMAT
    data = encode_image(buf, fmt)
    p.write_bytes(data)


def build_output_filename(original: str, width: int, height: int) -> str:
    """Derive ``{base}_{width}x{height}{ext}`` from the original file name.

    The extension is split at the last dot; names without one get ``.png``.
    The original extension is kept even when the container changes, so a
    GIF source yields a ``.gif`` name holding PNG data.
    """
    name = Path(original).name if original else original
    dot = name.rfind(".")
    base = name[:dot] if dot != -1 else name
    ext = name[dot:] if dot != -1 else ".png"
    return f"{base}_{width}x{height}{ext}"


__all__ = [
    "SUPPORTED_FORMATS",
    "DEFAULT_FORMAT",
    "load_image",
    "output_format",
    "encode_image",
    "save_image",
    "build_output_filename",
]
