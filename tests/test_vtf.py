from pathlib import Path

import numpy as np
import pytest

from purevtf import (
    VTF, Color, Image, PixelFormat, VTFFlags, WriteLayout, VTF_RESOURCE_ENTRY,
    InvalidContainer, ContainerReadFailed, FormatUnsupported, DimensionMismatch,
    mipmap_level_count, mipmap_block_size, get_descriptor,
)


def _texture(width: int = 8, height: int = 4) -> VTF:
    vtf = VTF(width, height)
    vtf.header.lowResImageFormat = PixelFormat.RGB888
    vtf.header.highResImageFormat = PixelFormat.BGRA8888
    vtf.set_flag(VTFFlags.TRILINEAR, True)
    vtf.set_flag(VTFFlags.EIGHTBITALPHA, True)
    vtf.resources = [
        VTF_RESOURCE_ENTRY(b'\x01\0\0', 0, 80),
        VTF_RESOURCE_ENTRY(b'CRC', 0x02, 0x12345678),
    ]
    vtf.thumbnail.fill(Color(10, 20, 30))
    vtf.body = Image(width, height, [Color(i, 255 - i, i // 2, 200) for i in range(width * height)])
    return vtf


@pytest.mark.parametrize("size, expected", [(0, 0), (1, 0), (2, 1), (3, 1), (256, 8), (1024, 10)])
def test_mipmap_level_count(size, expected):
    assert mipmap_level_count(size) == expected


@pytest.mark.parametrize("size, expected", [(1, 0), (2, 4), (4, 20), (8, 84)])
def test_mipmap_block_size(size, expected):
    assert mipmap_block_size(size) == expected


def test_fresh_defaults():
    vtf = VTF(256, 128)
    header = vtf.header
    assert header.version == [7, 2]
    assert header.headerSize == 80
    assert (header.width, header.height) == (256, 128)
    assert header.flags == 0
    assert (header.frames, header.firstFrame) == (1, 0)
    assert header.reflectivity == (1.0, 0.0, 0.0)
    assert header.bumpmapScale == 1.0
    assert header.highResImageFormat == PixelFormat.RGBA8888
    assert header.mipmapCount == 8
    assert header.lowResImageFormat == PixelFormat.DXT1
    assert (header.lowResImageWidth, header.lowResImageHeight) == (16, 16)
    assert header.depth == 1
    assert header.numResources == 0
    assert vtf.resources == []
    assert (vtf.thumbnail.width, vtf.thumbnail.height) == (16, 16)
    assert (vtf.body.width, vtf.body.height) == (256, 128)


def test_fresh_texture_needs_a_thumbnail_format():
    with pytest.raises(FormatUnsupported) as excinfo:
        VTF(4, 4).to_bytes()
    assert excinfo.value.format == PixelFormat.DXT1


def test_packed_layout():
    vtf = _texture()
    data = vtf.to_bytes()

    assert len(data) == 80 + 2 * 8 + 16 * 16 * 3 + 8 * 4 * 4
    assert data[:80] == vtf.header.to_bytes()
    assert data[80:88] == vtf.resources[0].to_bytes()
    assert data[88:96] == vtf.resources[1].to_bytes()
    assert data[96:99] == bytes([10, 20, 30])
    body = data[96 + 768:]
    # BGRA of body pixel 1
    assert body[4:8] == bytes([0, 254, 1, 200])


def test_packed_layout_cannot_be_read_back():
    # The reader expects a second header after the mipmap region; a packed file has none
    data = _texture().to_bytes(WriteLayout.PACKED)
    with pytest.raises(ContainerReadFailed) as excinfo:
        VTF.from_bytes(data)
    assert excinfo.value.stage == 'resources'


def test_round_trip():
    vtf = _texture()
    read = VTF.from_bytes(vtf.to_bytes(WriteLayout.MIRRORED))

    assert read.header == vtf.header
    assert read.resources == vtf.resources
    assert read.thumbnail == vtf.thumbnail
    assert read.body == vtf.body
    assert read.get_flag(VTFFlags.TRILINEAR)
    assert not read.get_flag(VTFFlags.CLAMPS)


@pytest.mark.parametrize("fmt", [
    PixelFormat.RGBA8888, PixelFormat.ABGR8888, PixelFormat.ARGB8888,
    PixelFormat.RGB888_BLUESCREEN, PixelFormat.BGR888,
])
def test_round_trip_formats(fmt):
    vtf = _texture(4, 4)
    vtf.header.highResImageFormat = fmt
    if not get_descriptor(fmt).has_alpha:
        # Alpha is not stored and reads back as 255
        vtf.body.fill_channel(3, 255)
    read = VTF.from_bytes(vtf.to_bytes(WriteLayout.MIRRORED))
    assert read.body == vtf.body


def test_mirrored_layout_offsets():
    vtf = _texture()
    data = vtf.to_bytes(WriteLayout.MIRRORED)
    second_header = 80 + 768 + mipmap_block_size(8)
    assert data[second_header:second_header + 80] == data[:80]
    directory = second_header + 80 + 80
    assert data[directory:directory + 8] == vtf.resources[0].to_bytes()
    assert len(data) == directory + 16 + 8 * 4 * 4


def test_directory_follows_declared_header_size():
    vtf = _texture()
    vtf.header.headerSize = 96
    data = vtf.to_bytes(WriteLayout.MIRRORED)

    second_header = 80 + 768 + mipmap_block_size(8)
    directory = second_header + 80 + 96
    assert data[directory:directory + 8] == vtf.resources[0].to_bytes()

    read = VTF.from_bytes(data)
    assert read.header.headerSize == 96
    assert read.resources == vtf.resources
    assert read.body == vtf.body


def test_failed_write_leaves_header_untouched():
    vtf = VTF(4, 4)
    vtf.resources = [VTF_RESOURCE_ENTRY(b"CRC", 0x02, 0)]
    with pytest.raises(FormatUnsupported):
        vtf.to_bytes()
    assert vtf.header.numResources == 0


def test_resource_count_follows_resource_list():
    vtf = _texture()
    vtf.resources = vtf.resources[:1]
    vtf.to_bytes()
    assert vtf.header.numResources == 1


def test_bad_magic():
    with pytest.raises(InvalidContainer):
        VTF.from_bytes(bytes([1, 2, 3, 4]) + bytes(76))


def test_truncated_header():
    with pytest.raises(ContainerReadFailed) as excinfo:
        VTF.from_bytes(b'VTF\0' + bytes(10))
    assert excinfo.value.stage == 'header'
    assert isinstance(excinfo.value.cause, ValueError)


def test_truncated_thumbnail():
    data = _texture().to_bytes(WriteLayout.MIRRORED)[:200]
    with pytest.raises(ContainerReadFailed) as excinfo:
        VTF.from_bytes(data)
    assert excinfo.value.stage == 'thumbnail'
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_truncated_body():
    data = _texture().to_bytes(WriteLayout.MIRRORED)[:-1]
    with pytest.raises(ContainerReadFailed) as excinfo:
        VTF.from_bytes(data)
    assert excinfo.value.stage == 'body'


def test_dxt1_thumbnail_is_unsupported_on_read():
    vtf = _texture()
    vtf.header.lowResImageFormat = PixelFormat.DXT1
    data = vtf.header.to_bytes() + bytes(4096)
    with pytest.raises(ContainerReadFailed) as excinfo:
        VTF.from_bytes(data)
    assert excinfo.value.stage == 'thumbnail'
    assert isinstance(excinfo.value.cause, FormatUnsupported)
    assert excinfo.value.cause.format == PixelFormat.DXT1


def test_body_must_match_header():
    vtf = _texture()
    vtf.body = Image(4, 4)
    with pytest.raises(DimensionMismatch):
        vtf.to_bytes()


def test_thumbnail_must_be_16x16():
    vtf = _texture()
    vtf.thumbnail = Image(8, 8)
    with pytest.raises(DimensionMismatch):
        vtf.to_bytes()


def test_from_image():
    image = Image(32, 16)
    image.fill(Color(1, 2, 3, 4))
    vtf = VTF.from_image(image)
    assert (vtf.get_width(), vtf.get_height()) == (32, 16)
    assert vtf.header.mipmapCount == 5
    assert vtf.body == image

    # The texture owns its own plane
    image.fill(Color(0, 0, 0, 0))
    assert vtf.body[0] == Color(1, 2, 3, 4)


def test_generate_mipmaps():
    levels = _texture(8, 8).generate_mipmaps()
    assert [(m.width, m.height) for m in levels] == [(4, 4), (2, 2), (1, 1)]


def test_to_image():
    vtf = _texture()
    array = vtf.to_image()
    assert array.shape == (4, 8, 4)
    assert array.dtype == np.uint8
    assert tuple(array[0, 1]) == (1, 254, 0, 200)
    assert vtf.to_image(thumbnail=True).shape == (16, 16, 4)


def test_str():
    text = str(_texture())
    assert "Dimensions: 8x4" in text
    assert "TRILINEAR" in text
    assert "Resources: 2" in text


def test_save_and_load(tmp_path: Path):
    vtf = _texture()
    path = str(tmp_path / "texture.vtf")
    vtf.save(path, WriteLayout.MIRRORED)

    read = VTF.load(path)
    assert read.header == vtf.header
    assert read.body == vtf.body


def test_save_packed(tmp_path: Path):
    vtf = _texture()
    path = tmp_path / "texture.vtf"
    vtf.save(str(path))
    assert path.read_bytes() == vtf.to_bytes()
