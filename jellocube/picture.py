"""In-memory pictures and reading/writing of binary PPM (P6) files."""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass, field
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

_TOKEN_LIMIT = 19
_INT_PREFIX = re.compile(rb"\s*([+-]?\d+)")


class PpmError(Exception):
    """Raised when a PPM file cannot be read or written."""


class FileFormat(enum.Enum):
    """Picture file formats recognised by name; only PPM is supported."""

    TIFF = "tiff"
    PPM = "ppm"
    JPEG = "jpeg"
    UNKNOWN = "unknown"


@dataclass
class Picture:
    """A raster image stored row-major, ``bpp`` bytes per pixel."""

    width: int
    height: int
    bpp: int = 3
    pixels: bytearray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0 or self.bpp <= 0:
            raise ValueError("picture dimensions must be non-negative")
        size = self.width * self.height * self.bpp
        if self.pixels is None:
            self.pixels = bytearray(size)
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"pixel buffer holds {len(self.pixels)} bytes, expected {size}"
                )

    def _offset(self, x: int, y: int, channel: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= channel < self.bpp):
            raise IndexError(f"pixel ({x}, {y}, {channel}) out of range")
        return (y * self.width + x) * self.bpp + channel

    def pixel(self, x: int, y: int, channel: int) -> int:
        """Return channel ``channel`` of pixel (x, y)."""
        return self.pixels[self._offset(x, y, channel)]

    def set_pixel(self, x: int, y: int, channel: int, value: int) -> None:
        """Set channel ``channel`` of pixel (x, y) to ``value``."""
        self.pixels[self._offset(x, y, channel)] = value


def file_format_from_name(path: PathLike) -> FileFormat:
    """Guess a picture format from the file name's suffix."""
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot < 0:
        return FileFormat.UNKNOWN
    suffix = name[dot:]
    if suffix == ".jpg":
        return FileFormat.JPEG
    if suffix in (".tiff", ".tif"):
        return FileFormat.TIFF
    if suffix == ".ppm":
        return FileFormat.PPM
    return FileFormat.UNKNOWN


class _TokenReader:
    """Reads whitespace-separated header tokens, skipping '#' comments."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def _getc(self) -> int | None:
        if self.pos >= len(self.data):
            return None
        c = self.data[self.pos]
        self.pos += 1
        return c

    def token(self) -> bytes:
        while True:
            c = self._getc()
            while c is not None and chr(c).isspace():
                c = self._getc()
            if c != ord("#"):
                break
            while c is not None and c != ord("\n"):
                c = self._getc()
            if c is None:
                break
        if c is None:
            return b""
        out = bytearray()
        while True:
            out.append(c)
            c = self._getc()
            if c is None or chr(c).isspace() or c == ord("#") or len(out) >= _TOKEN_LIMIT:
                break
        if c == ord("#"):
            self.pos -= 1
        return bytes(out)

    def integer(self) -> int | None:
        match = _INT_PREFIX.match(self.token())
        return int(match.group(1)) if match else None


def _load(path: PathLike) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise PpmError(f"can't read PPM file {os.fspath(path)}") from exc


def _read_header(path: PathLike, data: bytes) -> tuple[_TokenReader, int, int]:
    reader = _TokenReader(data)
    name = os.fspath(path)
    if reader.token() != b"P6":
        raise PpmError(f"{name} is not a valid binary PPM file, bad magic#")
    width = reader.integer()
    height = None if width is None else reader.integer()
    if width is None or height is None:
        raise PpmError(f"{name} is not a valid PPM file: bad size")
    return reader, width, height


def read_ppm_size(path: PathLike) -> tuple[int, int]:
    """Return (width, height) of a binary PPM file."""
    _, width, height = _read_header(path, _load(path))
    return width, height


def read_ppm(path: PathLike) -> Picture:
    """Read a binary PPM file with 8-bit components into a Picture."""
    name = os.fspath(path)
    reader, width, height = _read_header(path, _load(path))
    maxval = reader.integer()
    if maxval is None:
        raise PpmError(f"{name} is not a valid PPM file: bad size")
    if maxval != 255:
        raise PpmError(f"{name} does not have 8-bit components: pvmax={maxval}")
    if width < 0 or height < 0:
        raise PpmError(f"{name} is not a valid PPM file: bad size")
    size = width * height * 3
    body = reader.data[reader.pos:reader.pos + size]
    if len(body) != size:
        raise PpmError(f"premature EOF on file {name}")
    return Picture(width, height, 3, bytearray(body))


def write_ppm(path: PathLike, picture: Picture) -> None:
    """Write a 3-byte-per-pixel Picture as a raw binary PPM file."""
    if picture.bpp != 3:
        raise PpmError(f"ppm_write: can't write {picture.bpp} byte per pixel Pic")
    header = f"P6 {picture.width} {picture.height} 255\n".encode("ascii")
    try:
        with open(path, "wb") as handle:
            handle.write(header)
            handle.write(bytes(picture.pixels))
    except OSError as exc:
        raise PpmError(f"ppm_write: error writing {os.fspath(path)}") from exc