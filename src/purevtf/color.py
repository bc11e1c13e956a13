"""Conversion between stored pixel bytes and canonical RGBA"""
from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np

from .enums import PixelFormat
from .formats import CHANNEL_INDEX, require_supported
from .stream import BinaryReader


@dataclass(frozen=True)
class Color:
    """A single RGBA8 pixel"""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name, value in zip('rgba', (self.r, self.g, self.b, self.a)):
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range 0-255: {value}")

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a

    def __getitem__(self, index: int) -> int:
        return (self.r, self.g, self.b, self.a)[index]


def _as_reader(source: Union[BinaryReader, bytes, bytearray, memoryview]) -> BinaryReader:
    if isinstance(source, BinaryReader):
        return source
    return BinaryReader(source)


def decode_color(source: Union[BinaryReader, bytes], fmt: PixelFormat) -> Color:
    """
    Decode one pixel.

    Reads exactly the format's byte width from ``source`` and advances it by that much.
    Formats without a stored alpha channel decode with alpha 255.

    Raises:
        FormatUnsupported: If the format cannot be converted
    """
    descriptor = require_supported(fmt)
    raw = _as_reader(source).read(descriptor.bytes_per_pixel)

    rgba = [0, 0, 0, 255]
    for i, ch in enumerate(descriptor.channels):
        rgba[CHANNEL_INDEX[ch]] = raw[i]
    return Color(*rgba)


def encode_color(color: Color, fmt: PixelFormat) -> bytes:
    """Encode one pixel. Alpha is dropped for formats that do not store it."""
    descriptor = require_supported(fmt)
    return bytes(color[CHANNEL_INDEX[ch]] for ch in descriptor.channels)


def decode_pixels(source: Union[BinaryReader, bytes], count: int, fmt: PixelFormat) -> np.ndarray:
    """
    Decode ``count`` consecutive pixels.

    Returns:
        numpy array of shape (count, 4) with dtype uint8 (RGBA)
    """
    descriptor = require_supported(fmt)
    raw = _as_reader(source).read(count * descriptor.bytes_per_pixel)
    pixels = np.frombuffer(raw, dtype=np.uint8).reshape(count, descriptor.bytes_per_pixel)

    output = np.full((count, 4), 255, dtype=np.uint8)
    for i, ch in enumerate(descriptor.channels):
        output[:, CHANNEL_INDEX[ch]] = pixels[:, i]
    return output


def encode_pixels(pixels: np.ndarray, fmt: PixelFormat) -> bytes:
    """Encode an array of shape (count, 4) RGBA pixels"""
    descriptor = require_supported(fmt)
    order = [CHANNEL_INDEX[ch] for ch in descriptor.channels]
    return np.ascontiguousarray(pixels.reshape(-1, 4)[:, order], dtype=np.uint8).tobytes()
