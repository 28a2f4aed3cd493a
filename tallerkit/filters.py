"""The image filters that can be run on a source image."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tallerkit.images import Config, Images
from tallerkit.pixels import paint_borders_32

Kernel = Callable[[bytes, bytearray, int, int, int, int], None]

WHITE = b"\xff\xff\xff\xff"
BORDER_COLOUR = 0xFF000000
BORDER_SIZE = 2


def _require(buffer: bytes | bytearray, width: int, height: int, row_size: int, name: str) -> None:
    if width <= 0 or height <= 0:
        return
    needed = (height - 1) * row_size + width * 4
    if len(buffer) < needed:
        raise ValueError(f"{name} buffer holds {len(buffer)} bytes, {needed} needed")


def paint(
    src: bytes | bytearray,
    dst: bytearray,
    width: int,
    height: int,
    src_row_size: int,
    dst_row_size: int,
) -> None:
    """Paint the image white inside a 2-pixel black frame."""
    stride = (dst_row_size + 3) // 4 * 4
    _require(dst, width, height, stride, "destination")
    inner = width - 2 * BORDER_SIZE
    if inner > 0:
        for row in range(BORDER_SIZE, height - BORDER_SIZE):
            start = row * stride + BORDER_SIZE * 4
            dst[start : start + inner * 4] = WHITE * inner
    paint_borders_32(dst, width, height, src_row_size, BORDER_SIZE, BORDER_COLOUR)


def temperature(
    src: bytes | bytearray,
    dst: bytearray,
    width: int,
    height: int,
    src_row_size: int,
    dst_row_size: int,
) -> None:
    """Copy every BGRA pixel of the source into the destination."""
    _require(src, width, height, src_row_size, "source")
    _require(dst, width, height, dst_row_size, "destination")
    if width <= 0:
        return
    for row in range(height):
        s = row * src_row_size
        d = row * dst_row_size
        dst[d : d + width * 4] = src[s : s + width * 4]


@dataclass(frozen=True)
class Filter:
    """A named filter and the kernel that computes it."""

    name: str
    kernel: Kernel

    @property
    def usage(self) -> str:
        return (
            f"       * {self.name}\n"
            "           Parámetros     : \n"
            "                         no tiene\n"
            "           Ejemplo de uso : \n"
            f"                         {self.name} -i c facil.bmp\n"
        )

    def apply(self, config: Config, images: Images) -> None:
        """Run the kernel from the source buffer into the destination buffer."""
        src = images.src
        self.kernel(src.data, images.dst.data, src.width, src.height, src.row_size, images.dst.row_size)


FILTERS: tuple[Filter, ...] = (
    Filter("Pintar", paint),
    Filter("temperature", temperature),
)


def find_filter(name: str) -> Filter:
    """Return the filter called ``name``."""
    for candidate in FILTERS:
        if candidate.name == name:
            return candidate
    raise ValueError("Filtro desconocido")