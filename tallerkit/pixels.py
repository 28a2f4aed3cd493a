"""Pixel-buffer helpers: saturation, 32-bit border copying and painting, vertical flips."""

from __future__ import annotations

from itertools import chain

_U32_MAX = 0xFFFFFFFF


def saturate(value: int) -> int:
    """Clamp ``value`` to the byte range 0..255."""
    if value > 255:
        return 255
    if value < 0:
        return 0
    return value


def _stride(row_size: int) -> int:
    """Row length in 32-bit pixels for a row of ``row_size`` bytes."""
    return (row_size + 3) // 4


def _require(buffer: bytes | bytearray, width: int, height: int, stride: int, name: str) -> None:
    if width <= 0 or height <= 0:
        return
    needed = ((height - 1) * stride + width) * 4
    if len(buffer) < needed:
        raise ValueError(f"{name} buffer holds {len(buffer)} bytes, {needed} needed")


def _span(row: int, start: int, end: int, width: int, stride: int) -> slice | None:
    """Byte slice covering pixels ``start``..``end - 1`` of ``row``, clipped to the image."""
    start = max(start, 0)
    end = min(end, width)
    if end <= start:
        return None
    offset = row * stride * 4
    return slice(offset + 4 * start, offset + 4 * end)


def copy_borders_32(
    src: bytes | bytearray,
    dst: bytearray,
    width: int,
    height: int,
    row_size: int,
    size: int,
) -> None:
    """Copy the border pixels of a 32-bit image from ``src`` into ``dst``.

    The left ``size`` columns and the right ``size + 1`` columns are copied on
    every row; the top ``size`` rows and the bottom ``size + 1`` rows are copied
    between those columns.
    """
    stride = _stride(row_size)
    _require(src, width, height, stride, "source")
    _require(dst, width, height, stride, "destination")

    def copy(row: int, start: int, end: int) -> None:
        span = _span(row, start, end, width, stride)
        if span is not None:
            dst[span] = src[span]

    for row in range(height):
        copy(row, 0, size)
        copy(row, width - 1 - size, width)
    for row in chain(range(min(size, height)), range(max(height - 1 - size, 0), height)):
        copy(row, size, width - size)


def paint_borders_32(
    dst: bytearray,
    width: int,
    height: int,
    row_size: int,
    size: int,
    rgba: int,
) -> None:
    """Paint a ``size``-pixel frame of colour ``rgba`` (stored little-endian) around a 32-bit image."""
    if not 0 <= rgba <= _U32_MAX:
        raise ValueError(f"not a 32-bit colour: {rgba!r}")
    stride = _stride(row_size)
    _require(dst, width, height, stride, "destination")
    pixel = rgba.to_bytes(4, "little")

    def fill(row: int, start: int, end: int) -> None:
        span = _span(row, start, end, width, stride)
        if span is not None:
            dst[span] = pixel * ((span.stop - span.start) // 4)

    for row in range(height):
        fill(row, 0, size)
        fill(row, width - size, width)
    for row in chain(range(min(size, height)), range(max(height - size, 0), height)):
        fill(row, size, width - size)


def vertical_flip(data: bytes | bytearray, height: int, row_size: int) -> bytearray:
    """Return a new buffer holding the ``height`` rows of ``data`` in reverse order."""
    if height < 0 or row_size < 0:
        raise ValueError("height and row size must not be negative")
    if len(data) < height * row_size:
        raise ValueError(f"buffer holds {len(data)} bytes, {height * row_size} needed")
    rows = [data[row * row_size : (row + 1) * row_size] for row in range(height)]
    return bytearray(b"".join(reversed(rows)))