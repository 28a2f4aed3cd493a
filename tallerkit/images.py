"""Run configuration and the source/destination images a filter works on."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from tallerkit.bmp import Bitmap, BitmapError, Compression, new_bitmap, read_bitmap
from tallerkit.pixels import vertical_flip


class Implementation(IntEnum):
    """Which implementation of a filter was requested."""

    C = 0
    ASM = 1

    @property
    def label(self) -> str:
        return "C" if self is Implementation.C else "ASM"

    @classmethod
    def parse(cls, name: str) -> Implementation:
        """Map the command-line names ``c`` and ``asm`` to an implementation."""
        if name == "c":
            return cls.C
        if name == "asm":
            return cls.ASM
        raise ValueError(f"unknown implementation: {name!r}")


@dataclass
class Config:
    """Everything a filter run needs to know."""

    filter_name: str = ""
    implementation: Implementation = Implementation.C
    input_path: str | None = None
    input_path_2: str | None = None
    output_file: str = ""
    output_dir: str = "."
    output_suffix: str = ""
    bits_src: int = 32
    bits_dst: int = 32
    is_video: bool = False
    verbose: bool = False
    frames: bool = False
    name_only: bool = False
    iterations: int = 1
    dst_width: int = 0
    dst_height: int = 0
    extra: Any = None


@dataclass
class Buffer:
    """A view of an image's pixels: dimensions, bytes per row and the bytes."""

    width: int
    height: int
    row_size: int
    data: bytearray

    @classmethod
    def from_bitmap(cls, image: Bitmap) -> Buffer:
        return cls(image.width, image.height, image.bytes_per_row(), image.data)


@dataclass
class Images:
    """The opened source image(s) and the destination image, with their buffers."""

    source_image: Bitmap
    destination_image: Bitmap
    source_image_2: Bitmap | None = None
    src: Buffer = field(init=False)
    dst: Buffer = field(init=False)
    src_2: Buffer | None = field(init=False)

    def __post_init__(self) -> None:
        self.src = Buffer.from_bitmap(self.source_image)
        self.dst = Buffer.from_bitmap(self.destination_image)
        self.src_2 = (
            Buffer.from_bitmap(self.source_image_2) if self.source_image_2 is not None else None
        )

    @staticmethod
    def _flip(buffer: Buffer, image: Bitmap) -> None:
        buffer.data = vertical_flip(buffer.data, buffer.height, buffer.row_size)
        image.data = buffer.data

    def flip_source(self) -> None:
        """Turn the source pixels upside down, in the buffer and the image alike."""
        self._flip(self.src, self.source_image)

    def flip_destination(self) -> None:
        """Turn the destination pixels upside down, in the buffer and the image alike."""
        self._flip(self.dst, self.destination_image)

    def save(self, config: Config) -> None:
        """Write the destination image to ``config.output_file``, widening 8-bit output to 32 bits."""
        if config.bits_dst == 8:
            self.destination_image.convert_8_to_32()
        self.destination_image.save(config.output_file)


def _load(path: str | None, which: str) -> Bitmap:
    if path is None:
        raise BitmapError(f"Error abriendo la imagen {which}")
    try:
        image = read_bitmap(path)
    except BitmapError as exc:
        raise BitmapError(f"Error abriendo la imagen {which}") from exc
    if image.compression != Compression.RGB:
        raise BitmapError(f"Error: La imagen {which} esta comprimida")
    if image.bit_count == 24:
        image.convert_24_to_32()
    return image


def open_images(config: Config) -> Images:
    """Read the input image(s) named by ``config`` and prepare a destination image."""
    source = _load(config.input_path, "fuente")
    if config.bits_src == 8:
        source.convert_32_to_8()
    if config.dst_width > 0:
        destination = new_bitmap(config.dst_width, config.dst_height)
    else:
        destination = source.copy(True)
    source_2 = _load(config.input_path_2, "fuente 2") if config.input_path_2 is not None else None
    return Images(source, destination, source_2)