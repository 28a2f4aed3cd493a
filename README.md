# tallerkit

Tools for uncompressed BMP images, plus a few small helpers:

- `tallerkit.bmp` — read, create, copy, convert between 8, 24 and 32 bits per
  pixel, and save bitmaps (`read_bitmap`, `parse_bitmap`, `new_bitmap`,
  `create_bitmap`, `info_header`, `v5_header`, `Bitmap`). Errors raise
  `BitmapError`.
- `tallerkit.pixels` — `saturate`, `copy_borders_32`, `paint_borders_32` and
  `vertical_flip` for raw pixel buffers.
- `tallerkit.images` — the run configuration (`Config`, `Implementation`) and
  `open_images`, which loads the input image and prepares a destination image.
- `tallerkit.filters` — the `Pintar` and `temperature` filters (`paint`,
  `temperature`, `find_filter`, `Filter`).
- `tallerkit.cli` — the `tallerkit-filter` command.
- `tallerkit.bmpdiff` — the `tallerkit-bmpdiff` command and the `compare`
  function behind it.
- `tallerkit.text` — `string_length`, `count_spaces`, `classify_chars` and
  `classify_all` (split a string into its lowercase vowels and everything
  else).
- `tallerkit.checkpoints` — wrapping unsigned 32-bit sums (`add_u32`,
  `sub_u32`, `alternate_sum_4`, `alternate_sum_8`), float products
  (`product_2_f`, `product_9_f`), `ArrayNode` lists with `total_length`, and
  string routines (`str_cmp`, `str_len`, `str_print`).

## Installation

```
pip install .
```

## Applying a filter

```
tallerkit-filter -i c Pintar picture.bmp
```

This writes `./picture.bmp.Pintar.C.bmp` and prints a timing report.
`Pintar` paints the image white inside a 2-pixel black frame; `temperature`
copies the source pixels unchanged. Options:

- `-i, --implementacion c|asm` — required; `asm` only changes the label in the
  output name (`.ASM.`), both run the same filter code.
- `-t, --tiempo N` — apply the filter N times; the report uses a nanosecond
  counter.
- `-o, --output DIR` — the output directory (default: `.`).
- `-n, --nombre` — only print the name of the output file.
- `-v, --verbose`, `-f, --frames`, `-w, --video` — accepted and recorded in
  the configuration.
- `-h, --help` — show the help text.

Run without arguments, with a bad option, or without a filter name,
implementation or input file, the command prints the help and exits with
status 0.

## Comparing two bitmaps

```
tallerkit-bmpdiff -s first.bmp second.bmp 5
```

Compares two 24- or 32-bit images of the same size (width a multiple of 4)
channel by channel and exits with a non-zero status if any channel differs by
more than the last argument (the epsilon). Both names must end in `.bmp`.
Options:

- `-s, --summary` — print how many channel values differ by each amount.
- `-v, --verbose` — print every difference above the epsilon as
  `row col channel = diff`.
- `-i, --image` — write `diffR`, `diffG`, `diffB` (and `diffA` for 32-bit)
  images named after the second file given, white where a channel differs and
  black where it does not.
- `-a, --value` — write `256 - diff` (mod 256) grey levels instead.

## Library use

```python
from tallerkit.bmp import new_bitmap, read_bitmap
from tallerkit.text import classify_chars
from tallerkit.checkpoints import str_cmp

image = new_bitmap(4, 4)
image.save("blank.bmp")
assert read_bitmap("blank.bmp").bytes_per_row() == 16

assert classify_chars("exactasuubbaa") == ("eaauuaa", "xctsbb")
assert str_cmp("Feros", "Omega 4") == 1
```

## Limitations

- Only 40-, 56- and 124-byte info headers are read, and only 40- and 124-byte
  ones can be copied; new images need a width that is a multiple of 4, since
  rows are never padded.
- Compressed images are rejected by the filter command.
- There is no video or frame-by-frame processing; the related options do
  nothing beyond being recorded.

## Running the tests

```
pip install .[test]
pytest
```