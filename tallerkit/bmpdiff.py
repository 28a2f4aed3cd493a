"""Pixel-by-pixel comparison of two BMP images, channel by channel."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from tallerkit.bmp import Bitmap, BitmapError, read_bitmap

PROGRAM = "bmpdiff"

_FLAGS = {
    "-h": "help",
    "--help": "help",
    "-v": "verbose",
    "--verbose": "verbose",
    "-a": "value",
    "--value": "value",
    "-i": "image",
    "--image": "image",
    "-s": "summary",
    "--summary": "summary",
}
_OFFSETS = {"B": 0, "G": 1, "R": 2, "A": 3}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class DiffOptions:
    """What to compare and how to report it."""

    file1: str
    file2: str
    epsilon: int = 0
    value: bool = False
    verbose: bool = False
    image: bool = False
    help: bool = False
    summary: bool = False


@dataclass
class DiffResult:
    """Histogram of channel differences, per-channel difference images and verbose lines."""

    summary: list[int]
    images: dict[str, Bitmap]
    epsilon: int
    lines: list[str] = field(default_factory=list)

    @property
    def has_difference(self) -> bool:
        """Whether any channel differs by more than the tolerance."""
        return any(self.summary[self.epsilon + 1 :])


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_options(argv: Sequence[str]) -> DiffOptions:
    """Read flags and the three positionals ``FILE_2 FILE_1 EPSILON`` (program name excluded)."""
    args = list(argv)
    flags: dict[str, bool] = {}
    optionals = 0
    for arg in args:
        name = _FLAGS.get(arg)
        if name is not None:
            flags[name] = True
            optionals += 1
    if len(args) - optionals != 3:
        raise ValueError("ERROR reading parameters")
    return DiffOptions(
        file1=args[-2],
        file2=args[-3],
        epsilon=_atoi(args[-1]) & 0xFF,
        **flags,
    )


def help_text(program: str) -> str:
    """Return the usage message."""
    return (
        f"Uso: {program} <opciones> <archivo_1> <archivo_2> <epsilon>\n"
        "Ejemplo de uso:\n"
        f"    {program} -i -a lena_a.bmp lena_b.bmp 5\n"
        "\n"
        "    Verifica pixel a pixel que la diferencia entre lena_a.bmp y  \n"
        "    lena_b.bmp no supere el valor 5. Con -i genera una imágen por canal \n"
        "    a partir de las diferencias. Coloca un pixel blanco donde    \n"
        "    haya diferencias y uno negro donde no. Si se usa -a entonces \n"
        "    indica en gris el valor de la diferencia, donde negro es sin \n"
        "    diferencias y blanco es diferencia en 1.\n"
        "\n"
        "    -h, --help       Imprime esta ayuda\n"
        "    -a, --value      En vez de marcar en blanco sobre negro las diferencias,\n"
        "                     lo hace en escala de grises\n"
        "    -v, --verbose    Ejecuta en verbose mostrando las diferencias\n"
        "    -s, --summary    Muestra un resumen de diferencias\n"
        "    -i, --image      Genera una imagen de diferencias por cada canal\n"
        "                     en el directorio destino\n"
    )


def compare_channel(a: int, b: int, options: DiffOptions) -> int:
    """Return the difference-image byte for channel values ``a`` and ``b``."""
    diff = abs(a - b)
    if options.value:
        return (256 - diff) & 0xFF
    return 255 if diff > options.epsilon else 0


def compare(first: Bitmap, second: Bitmap, options: DiffOptions) -> DiffResult:
    """Compare two 24- or 32-bit images of the same shape channel by channel."""
    if first.info_header.size != second.info_header.size:
        raise BitmapError("ERROR: tipo de archivo diferente")
    width, height, bit_count = first.width, first.height, first.bit_count
    if (width, height, bit_count) != (second.width, second.height, second.bit_count):
        raise BitmapError("ERROR: tamaño de archivo diferente")
    if width % 4 != 0:
        raise BitmapError("ERROR: padding no soportado")
    if bit_count not in (24, 32):
        raise BitmapError(f"ERROR: ({bit_count}) bitcount distinto de 24 o 32")

    bpp = bit_count // 8
    needed = width * height * bpp
    if len(first.data) < needed or len(second.data) < needed:
        raise BitmapError("pixel data is shorter than the image dimensions")
    channels = ("R", "G", "B", "A") if bpp == 4 else ("R", "G", "B")
    images = {channel: first.copy(False) for channel in channels}
    if any(len(image.data) < needed for image in images.values()):
        raise BitmapError("pixel data is shorter than the image dimensions")

    summary = [0] * 256
    lines: list[str] = []
    data1, data2 = first.data, second.data
    for row in range(height):
        for col in range(width):
            pos = (row * width + col) * bpp
            for channel in channels:
                a = data1[pos + _OFFSETS[channel]]
                b = data2[pos + _OFFSETS[channel]]
                diff = abs(a - b)
                summary[diff] += 1
                if options.verbose and diff > options.epsilon:
                    lines.append(f"{row}\t{col}\t{channel}\t=\t{diff}")
                out = compare_channel(a, b, options)
                target = images[channel].data
                target[pos : pos + 3] = bytes((out, out, out))
                if bpp == 4:
                    target[pos + 3] = 255
    return DiffResult(summary, images, options.epsilon, lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the comparison command; return 0 when no channel differs beyond epsilon."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stdout.write(help_text(PROGRAM))
        return 0
    try:
        options = parse_options(args)
    except ValueError:
        print("ERROR reading parameters")
        return 1
    if not (options.file1.endswith(".bmp") and options.file2.endswith(".bmp")):
        print("ERROR: nombre del archivo")
        return -1
    try:
        first = read_bitmap(options.file1)
        second = read_bitmap(options.file2)
    except BitmapError:
        print("ERROR: no se puede abrir el archivo")
        return -1
    try:
        result = compare(first, second, options)
    except BitmapError as exc:
        print(exc)
        return -1

    for line in result.lines:
        print(line)
    if options.summary:
        for difference, count in enumerate(result.summary[1:], start=1):
            if count:
                print(f"{difference}\t{count}")
    if options.image:
        stem = options.file1[:-4]
        for channel, image in result.images.items():
            try:
                image.save(f"{stem}diff{channel}.bmp")
            except BitmapError as exc:
                print(exc, file=sys.stderr)
    return -1 if result.has_difference else 0