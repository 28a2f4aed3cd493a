"""Command line that runs one of the image filters over a BMP file."""

from __future__ import annotations

import getopt
import math
import os
import re
import sys
import time
from collections.abc import Sequence

from tallerkit.bmp import BitmapError
from tallerkit.filters import FILTERS, Filter, find_filter
from tallerkit.images import Config, Implementation, open_images

PROGRAM = "simd"
OUTPUT_FILE_LIMIT = 254

SHORT_OPTIONS = "hi:vt:fo:wn"
LONG_OPTIONS = [
    "help",
    "implementacion=",
    "verbose",
    "video",
    "tiempo=",
    "frames",
    "nombre",
    "output=",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageExit(Exception):
    """Raised when the program should print ``message`` and stop with ``code``."""

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def help_text(program: str) -> str:
    """Return the usage message, listing every available filter."""
    pad_37 = " " * 37
    pad_35 = " " * 35
    pad_26 = " " * 26
    pad_19 = " " * 19
    parts = [
        f"Uso: {program} opciones filtro nombre_archivo_entrada parametros_filtro\n",
        "    Los filtros que se pueden aplicar son \n",
        *(f.usage for f in FILTERS),
        "\n",
        "    -h, --help: \n",
        "                Imprime esta ayuda\n",
        "\n",
        "    -i, --implementacion NOMBRE_MODO\n",
        f"{pad_37}Implementación sobre la que se ejecutará el filtro\n",
        f"{pad_37}seleccionado. Los implementaciones disponibles\n",
        f"{pad_37}son: c, asm\n",
        "\n",
        "    -t, --tiempo CANT_ITERACIONES\n",
        f"{pad_35}Mide el tiempo que tarda en ejecutar el filtro sobre la\n",
        f"{pad_35}imagen de entrada una cantidad de veces igual a\n",
        f"{pad_35}CANT_ITERACIONES\n",
        "\n",
        "    -o, --output CARPETA\n",
        f"{pad_26}Carpeta de salida. Por defecto es la misma que la de entrada\n",
        "    -n, --nombre\n",
        f"{pad_26}No aplica el filtro, solo muestra el nombre del archivo de salida\n",
        "    -v, --verbose\n",
        f"{pad_19}Imprime información adicional\n",
        "\n",
    ]
    return "".join(parts)


def parse_options(argv: Sequence[str]) -> Config:
    """Build a run configuration from the command-line arguments (program name excluded).

    Raises UsageExit, with exit code 0, whenever the usage should be shown
    instead, and when the input file does not exist.
    """
    args = list(argv)
    usage = UsageExit(help_text(PROGRAM))
    if not args:
        raise usage
    try:
        options, rest = getopt.gnu_getopt(args, SHORT_OPTIONS, LONG_OPTIONS)
    except getopt.GetoptError:
        raise usage from None

    config = Config()
    implementation_name: str | None = None
    for option, value in options:
        if option in ("-h", "--help"):
            raise usage
        if option in ("-i", "--implementacion"):
            implementation_name = value
        elif option in ("-t", "--tiempo"):
            config.iterations = _atoi(value)
        elif option in ("-v", "--verbose"):
            config.verbose = True
        elif option in ("-f", "--frames"):
            config.frames = True
        elif option in ("-n", "--nombre"):
            config.name_only = True
        elif option in ("-o", "--output"):
            config.output_dir = value
        elif option in ("-w", "--video"):
            config.is_video = True

    if not rest:
        raise usage
    config.filter_name = rest[0]

    if implementation_name not in ("c", "asm"):
        raise usage
    config.implementation = Implementation.parse(implementation_name)

    if len(rest) < 2:
        raise usage
    config.input_path = rest[1]
    if not os.access(config.input_path, os.F_OK):
        raise UsageExit(f"Error al intentar abrir el archivo: {config.input_path}.\n")
    return config


def output_path(config: Config) -> str:
    """Return the output file name: ``DIR/INPUT.FILTER.IMPL[SUFFIX].bmp``."""
    name = (
        f"{config.output_dir}/{os.path.basename(config.input_path or '')}."
        f"{config.filter_name}.{config.implementation.label}{config.output_suffix}.bmp"
    )
    return name[:OUTPUT_FILE_LIMIT]


def timing_report(start: int, end: int, iterations: int) -> str:
    """Describe a timed run between counter readings ``start`` and ``end``."""
    ticks = end - start
    if iterations:
        per_call = ticks / iterations
    else:
        per_call = math.inf if ticks else math.nan
    return (
        "Tiempo de ejecución:\n"
        f"  Comienzo                          : {start}\n"
        f"  Fin                               : {end}\n"
        f"  # iteraciones                     : {iterations}\n"
        f"  # de ciclos insumidos totales     : {ticks}\n"
        f"  # de ciclos insumidos por llamada : {per_call:.3f}\n"
    )


def run_filter(config: Config, filter: Filter) -> str:
    """Apply ``filter`` to the input image, save the result and return the timing report."""
    if not config.output_file:
        config.output_file = output_path(config)
    images = open_images(config)
    images.flip_source()
    images.flip_destination()
    start = time.perf_counter_ns()
    for _ in range(config.iterations):
        filter.apply(config, images)
    end = time.perf_counter_ns()
    images.flip_destination()
    images.save(config)
    return timing_report(start, end, config.iterations)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the filter command; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_options(args)
    except UsageExit as stop:
        sys.stdout.write(stop.message)
        return stop.code

    if not config.name_only:
        print("Procesando...")
        print(f"  Filtro             : {config.filter_name}")
        print(f"  Implementación     : {config.implementation.label}")
        print(f"  Archivo de entrada : {config.input_path}")

    config.output_file = output_path(config)
    if config.name_only:
        print(os.path.basename(config.output_file))
        return 0

    try:
        chosen = find_filter(config.filter_name)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        report = run_filter(config, chosen)
    except BitmapError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.write(report)
    return 0