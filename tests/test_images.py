import pytest

from tallerkit.bmp import BitmapError, Compression, InfoHeader, create_bitmap, new_bitmap, read_bitmap
from tallerkit.images import Buffer, Config, Images, Implementation, open_images


@pytest.fixture
def source_path(tmp_path):
    image = new_bitmap(4, 2)
    image.data[:] = bytes(range(32))
    path = tmp_path / "in.bmp"
    image.save(path)
    return str(path)


def test_implementation_parse_and_label():
    assert Implementation.parse("c") is Implementation.C
    assert Implementation.parse("asm") is Implementation.ASM
    assert Implementation.C.label == "C"
    assert Implementation.ASM.label == "ASM"


def test_implementation_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Implementation.parse("rust")


def test_open_images_builds_buffers(source_path):
    images = open_images(Config(input_path=source_path))
    assert (images.src.width, images.src.height, images.src.row_size) == (4, 2, 16)
    assert images.src.data == bytearray(range(32))
    assert images.dst.data == images.src.data
    assert images.dst.data is not images.src.data
    assert images.src_2 is None


def test_open_images_converts_24_bit_input(tmp_path):
    header = InfoHeader(size=40, width=4, height=2, bit_count=24, size_image=24)
    image = create_bitmap(header)
    image.data[:] = bytes(range(24))
    path = tmp_path / "rgb.bmp"
    image.save(path)
    images = open_images(Config(input_path=str(path)))
    assert images.source_image.bit_count == 32
    assert images.src.data[0:4] == bytes([0, 1, 2, 255])
    assert images.src.row_size == 16


def test_open_images_reduces_source_to_8_bits(source_path):
    images = open_images(Config(input_path=source_path, bits_src=8))
    assert images.source_image.bit_count == 8
    assert len(images.src.data) == 8
    assert images.src.data[0] == max(0, 1, 2)


def test_open_images_with_destination_size(source_path):
    images = open_images(Config(input_path=source_path, dst_width=8, dst_height=3))
    assert (images.dst.width, images.dst.height) == (8, 3)
    assert images.dst.data == bytearray(8 * 3 * 4)


def test_open_images_second_source(source_path):
    images = open_images(Config(input_path=source_path, input_path_2=source_path))
    assert images.src_2 is not None
    assert images.src_2.data == images.src.data


def test_open_images_missing_file(tmp_path):
    with pytest.raises(BitmapError):
        open_images(Config(input_path=str(tmp_path / "missing.bmp")))


def test_open_images_without_path():
    with pytest.raises(BitmapError):
        open_images(Config())


def test_open_images_rejects_compressed(tmp_path):
    header = InfoHeader(size=40, width=4, height=1, compression=Compression.RLE8, size_image=16)
    path = tmp_path / "rle.bmp"
    create_bitmap(header).save(path)
    with pytest.raises(BitmapError):
        open_images(Config(input_path=str(path)))


def test_flip_source_reverses_rows_and_updates_image(source_path):
    images = open_images(Config(input_path=source_path))
    original = bytes(images.src.data)
    images.flip_source()
    assert images.src.data[:16] == original[16:]
    assert images.source_image.data is images.src.data
    images.flip_source()
    assert bytes(images.src.data) == original


def test_flip_destination_round_trip(source_path):
    images = open_images(Config(input_path=source_path))
    original = bytes(images.dst.data)
    images.flip_destination()
    assert images.destination_image.data is images.dst.data
    assert images.dst.data[16:] == original[:16]
    images.flip_destination()
    assert bytes(images.dst.data) == original


def test_save_round_trip(source_path, tmp_path):
    images = open_images(Config(input_path=source_path))
    images.dst.data[:] = bytes(reversed(range(32)))
    out = tmp_path / "out.bmp"
    images.save(Config(output_file=str(out)))
    assert read_bitmap(out).data == images.destination_image.data


def test_save_widens_8_bit_output(source_path, tmp_path):
    config = Config(input_path=source_path, bits_src=8, bits_dst=8, output_file=str(tmp_path / "o.bmp"))
    images = open_images(config)
    images.save(config)
    saved = read_bitmap(config.output_file)
    assert saved.bit_count == 32
    assert len(saved.data) == 4 * 2 * 4
    assert set(saved.data[3::4]) == {255}
    assert saved.data[0::4] == images.src.data


def test_buffer_from_bitmap_shares_data():
    image = new_bitmap(8, 2)
    buffer = Buffer.from_bitmap(image)
    assert buffer.data is image.data
    assert buffer.row_size == image.bytes_per_row()
    assert isinstance(Images(image, image.copy()).dst, Buffer)