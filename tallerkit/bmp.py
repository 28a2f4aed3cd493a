"""Reading, writing and converting uncompressed BMP images.

Supported info headers are the 40-byte ``BITMAPINFOHEADER`` and the 124-byte
``BITMAPV5HEADER``; the 56-byte ``BITMAPV3INFOHEADER`` can be read but not copied.
Rows are never padded, so widths must be multiples of 4 when a header is built.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace
from enum import IntEnum
from os import PathLike
from typing import Union

StrPath = Union[str, "PathLike[str]"]

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
V3_INFO_HEADER_SIZE = 56
V5_HEADER_SIZE = 124

READABLE_HEADER_SIZES = frozenset({INFO_HEADER_SIZE, V5_HEADER_SIZE, V3_INFO_HEADER_SIZE})
COPYABLE_HEADER_SIZES = frozenset({INFO_HEADER_SIZE, V5_HEADER_SIZE})

PELS_PER_METER = 2952  # 75 dpi
LCS_SRGB = 0x73524742
LCS_GM_GRAPHICS = 0x00000002
RED_MASK = 0x00FF0000
GREEN_MASK = 0x0000FF00
BLUE_MASK = 0x000000FF
ALPHA_MASK = 0xFF000000

_FILE_HEADER = struct.Struct("<2sIHHI")
_INFO_HEADER = struct.Struct("<IIIHHIIIIII")
_U32_MAX = 0xFFFFFFFF


class BitmapError(Exception):
    """Raised when a bitmap cannot be built, read, copied or written."""


class Compression(IntEnum):
    RGB = 0x0000
    RLE8 = 0x0001
    RLE4 = 0x0002
    BITFIELDS = 0x0003
    JPEG = 0x0004
    PNG = 0x0005
    CMYK = 0x000B
    CMYKRLE8 = 0x000C
    CMYKRLE4 = 0x000D


@dataclass
class FileHeader:
    """The 14-byte file header: total file size and offset of the pixel data."""

    size: int
    offset: int
    reserved1: int = 0
    reserved2: int = 0
    signature: bytes = b"BM"

    def to_bytes(self) -> bytes:
        return _FILE_HEADER.pack(
            self.signature, self.size, self.reserved1, self.reserved2, self.offset
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> FileHeader:
        if len(raw) < FILE_HEADER_SIZE:
            raise BitmapError("Error al leer el archivo.")
        signature, size, reserved1, reserved2, offset = _FILE_HEADER.unpack_from(raw)
        return cls(size, offset, reserved1, reserved2, signature)


@dataclass
class InfoHeader:
    """The fields shared by every info header; later header versions keep their tail in ``extra``."""

    size: int
    width: int
    height: int
    planes: int = 1
    bit_count: int = 32
    compression: int = Compression.RGB
    size_image: int = 0
    x_pels_per_meter: int = PELS_PER_METER
    y_pels_per_meter: int = PELS_PER_METER
    colors_used: int = 0
    colors_important: int = 0
    extra: bytes = b""

    def to_bytes(self) -> bytes:
        return (
            _INFO_HEADER.pack(
                self.size,
                self.width,
                self.height,
                self.planes,
                self.bit_count,
                int(self.compression),
                self.size_image,
                self.x_pels_per_meter,
                self.y_pels_per_meter,
                self.colors_used,
                self.colors_important,
            )
            + self.extra
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> InfoHeader:
        if len(raw) < INFO_HEADER_SIZE:
            raise BitmapError("Error al leer el archivo.")
        fields = _INFO_HEADER.unpack_from(raw)
        return cls(*fields, extra=bytes(raw[INFO_HEADER_SIZE:]))


def _check_dimensions(width: int, height: int) -> None:
    if not (0 <= width <= _U32_MAX and 0 <= height <= _U32_MAX):
        raise BitmapError(f"invalid dimensions {width}x{height}")
    if width % 4 != 0:
        raise BitmapError("width must be a multiple of 4: row padding is not supported")


def info_header(width: int, height: int) -> InfoHeader:
    """Build a 40-byte 32-bit uncompressed info header for a ``width`` x ``height`` image."""
    _check_dimensions(width, height)
    return InfoHeader(
        size=INFO_HEADER_SIZE,
        width=width,
        height=height,
        bit_count=32,
        compression=Compression.RGB,
        size_image=width * height * 4,
    )


def v5_header(width: int, height: int) -> InfoHeader:
    """Build a 124-byte 32-bit BGRA v5 header using bit-field masks and sRGB."""
    _check_dimensions(width, height)
    extra = (
        struct.pack("<5I", RED_MASK, GREEN_MASK, BLUE_MASK, ALPHA_MASK, LCS_SRGB)
        + bytes(36)  # colour-space endpoints
        + struct.pack("<7I", 0, 0, 0, LCS_GM_GRAPHICS, 0, 0, 0)
    )
    return InfoHeader(
        size=V5_HEADER_SIZE,
        width=width,
        height=height,
        bit_count=32,
        compression=Compression.BITFIELDS,
        size_image=width * height * 4,
        extra=extra,
    )


@dataclass
class Bitmap:
    """A BMP image: file header, info header and raw pixel bytes (bottom row first)."""

    file_header: FileHeader
    info_header: InfoHeader
    data: bytearray = field(default_factory=bytearray)

    @property
    def width(self) -> int:
        return self.info_header.width

    @property
    def height(self) -> int:
        return self.info_header.height

    @property
    def bit_count(self) -> int:
        return self.info_header.bit_count

    @property
    def compression(self) -> int:
        return self.info_header.compression

    def bytes_per_row(self) -> int:
        """Return the row size in bytes, rounded up to a multiple of 4."""
        return ((self.width * self.bit_count + 31) >> 5) << 2

    def copy(self, copy_data: bool = True) -> Bitmap:
        """Return an independent copy; pixel data is copied only if ``copy_data``, else zeroed."""
        header_size = self.file_header.offset - FILE_HEADER_SIZE
        if header_size not in COPYABLE_HEADER_SIZES:
            raise BitmapError(f"cannot copy a bitmap with a {header_size}-byte info header")
        size_image = self.info_header.size_image
        if copy_data:
            if len(self.data) < size_image:
                raise BitmapError("pixel data is shorter than the header declares")
            data = bytearray(self.data[:size_image])
        else:
            data = bytearray(size_image)
        return Bitmap(replace(self.file_header), replace(self.info_header), data)

    def to_bytes(self) -> bytes:
        """Serialise the whole file: file header, info header and pixel data."""
        info = self.info_header.to_bytes()
        header_size = self.file_header.offset - FILE_HEADER_SIZE
        if len(info) != header_size:
            raise BitmapError("info header does not match the file header offset")
        data_size = self.file_header.size - self.file_header.offset
        if data_size <= 0 or len(self.data) < data_size:
            raise BitmapError("pixel data does not match the file header size")
        return self.file_header.to_bytes() + info + bytes(self.data[:data_size])

    def save(self, path: StrPath) -> None:
        """Write the bitmap to ``path``."""
        payload = self.to_bytes()
        try:
            with open(path, "wb") as out:
                out.write(payload)
        except OSError as exc:
            raise BitmapError(f"cannot write {path}: {exc}") from exc

    def _pixel_count(self, bytes_per_pixel: int) -> int:
        count = self.height * self.width
        if len(self.data) < count * bytes_per_pixel:
            raise BitmapError("pixel data is shorter than the image dimensions")
        return count

    def _set_format(self, bit_count: int, data: bytearray) -> None:
        self.data = data
        self.info_header.bit_count = bit_count
        self.info_header.size_image = len(data)
        self.file_header.size = len(data) + self.info_header.size + FILE_HEADER_SIZE

    def convert_24_to_32(self) -> None:
        """Turn BGR pixels into BGRA pixels with an opaque alpha."""
        n = self._pixel_count(3)
        src = self.data
        out = bytearray(n * 4)
        out[0::4] = src[0 : 3 * n : 3]
        out[1::4] = src[1 : 3 * n : 3]
        out[2::4] = src[2 : 3 * n : 3]
        out[3::4] = b"\xff" * n
        self._set_format(32, out)

    def convert_32_to_8(self) -> None:
        """Turn BGRA pixels into one byte each: the largest of blue, green and red."""
        n = self._pixel_count(4)
        src = self.data
        out = bytearray(
            map(max, src[0 : 4 * n : 4], src[1 : 4 * n : 4], src[2 : 4 * n : 4])
        )
        self._set_format(8, out)

    def convert_8_to_32(self) -> None:
        """Turn one-byte grey pixels into opaque BGRA pixels."""
        n = self._pixel_count(1)
        grey = self.data[:n]
        out = bytearray(n * 4)
        out[0::4] = grey
        out[1::4] = grey
        out[2::4] = grey
        out[3::4] = b"\xff" * n
        self._set_format(32, out)


def create_bitmap(header: InfoHeader, init_data: bool = True) -> Bitmap:
    """Build a bitmap around ``header`` with ``size_image`` bytes of pixel data.

    The pixel data always starts zero-filled; ``init_data`` is accepted so
    callers may state that they rely on it.
    """
    offset = header.size + FILE_HEADER_SIZE
    file_header = FileHeader(size=header.size_image + offset, offset=offset)
    return Bitmap(file_header, header, bytearray(header.size_image))


def new_bitmap(width: int, height: int) -> Bitmap:
    """Return a black 32-bit ``width`` x ``height`` bitmap with a 40-byte info header."""
    return create_bitmap(info_header(width, height), True)


def parse_bitmap(data: bytes) -> Bitmap:
    """Build a bitmap from the bytes of a BMP file."""
    file_header = FileHeader.from_bytes(data)
    header_size = file_header.offset - FILE_HEADER_SIZE
    if header_size not in READABLE_HEADER_SIZES:
        raise BitmapError("Formato de archivo no soportado.")
    header_end = FILE_HEADER_SIZE + header_size
    if len(data) < header_end:
        raise BitmapError("Error al leer el archivo.")
    info = InfoHeader.from_bytes(data[FILE_HEADER_SIZE:header_end])
    image_size = file_header.size - header_size - FILE_HEADER_SIZE
    pixels = data[header_end : header_end + image_size]
    if image_size <= 0 or len(pixels) < image_size:
        raise BitmapError("Error al leer el archivo.")
    return Bitmap(file_header, info, bytearray(pixels))


def read_bitmap(path: StrPath) -> Bitmap:
    """Read the BMP file at ``path``."""
    try:
        with open(path, "rb") as src:
            raw = src.read()
    except OSError as exc:
        raise BitmapError(f"Error al abrir el archivo: {exc}") from exc
    return parse_bitmap(raw)