"""Image planes: a width x height grid of RGBA pixels"""
from typing import List, Optional, Sequence, Union

import imageio.v3 as iio
import numpy as np

from .color import Color, decode_pixels, encode_pixels
from .enums import PixelFormat
from .errors import DimensionMismatch
from .stream import BinaryReader


def _to_uint8(array: np.ndarray) -> np.ndarray:
    """Cast integer channel data to uint8, refusing values that do not fit"""
    if array.dtype != np.uint8 and array.size:
        low, high = int(array.min()), int(array.max())
        if low < 0 or high > 255:
            value = low if low < 0 else high
            raise ValueError(f"Channel value out of range 0-255: {value}")
    return array.astype(np.uint8)


class Image:
    """
    A single image plane.

    Pixels are kept as a numpy array of shape (height, width, 4) with dtype uint8 (RGBA).
    Flattened, row-major, that is the pixel sequence stored on disk.
    """
    def __init__(self, width: int, height: int,
                 colors: Optional[Union[Sequence[Color], np.ndarray]] = None) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be at least 1x1, got {width}x{height}")

        self.width: int = width
        self.height: int = height

        if colors is None:
            self.pixels: np.ndarray = np.zeros((height, width, 4), dtype=np.uint8)
        elif isinstance(colors, np.ndarray):
            if colors.ndim < 2 or colors.shape[-1] != 4:
                raise ValueError(f"Expected an RGBA array with a last axis of 4, got shape {colors.shape}")
            count = colors.size // 4
            if count != width * height:
                raise DimensionMismatch(width, height, count)
            self.pixels = _to_uint8(colors).reshape(height, width, 4)
        else:
            if len(colors) != width * height:
                raise DimensionMismatch(width, height, len(colors))
            self.pixels = np.array([tuple(c) for c in colors], dtype=np.uint8).reshape(height, width, 4)

    def __repr__(self) -> str:
        return f"<Image {self.width}x{self.height}>"

    def __len__(self) -> int:
        return self.width * self.height

    def __getitem__(self, index: int) -> Color:
        """Pixel at a flattened row-major index"""
        return Color(*(int(v) for v in self.pixels.reshape(-1, 4)[index]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and \
            np.array_equal(self.pixels, other.pixels)

    @property
    def colors(self) -> List[Color]:
        """All pixels in row-major order"""
        return [Color(*(int(v) for v in rgba)) for rgba in self.pixels.reshape(-1, 4)]

    def get_pixel(self, x: int, y: int) -> Color:
        return self[y * self.width + x]

    @classmethod
    def from_bytes(cls, source: Union[BinaryReader, bytes], width: int, height: int,
                   fmt: PixelFormat) -> 'Image':
        """
        Decode a plane of width x height pixels stored row by row.

        Args:
            source: Reader positioned at the first pixel, advanced past the last one
            width: Plane width in pixels
            height: Plane height in pixels
            fmt: Stored pixel format

        Raises:
            FormatUnsupported: If the format cannot be converted
            ValueError: If the source runs out of data
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be at least 1x1, got {width}x{height}")
        return cls(width, height, decode_pixels(source, width * height, fmt))

    def to_bytes(self, fmt: PixelFormat) -> bytes:
        """Encode every pixel, row by row, in the given format"""
        return encode_pixels(self.pixels, fmt)

    def fill(self, color: Color) -> None:
        """Set every pixel to the same colour"""
        self.pixels[:, :] = tuple(color)

    def fill_channel(self, channel: int, value: int) -> None:
        """
        Set one channel (0=R, 1=G, 2=B, 3=A) of every pixel.
        Any other channel index leaves the image untouched.
        """
        if not 0 <= value <= 255:
            raise ValueError(f"Channel value out of range 0-255: {value}")
        if 0 <= channel <= 3:
            self.pixels[:, :, channel] = value

    def generate_mipmap(self) -> 'Image':
        """
        Create the next mipmap level at half width and half height.

        Pixels are sampled, not averaged: output pixel i is source pixel 2*i of the
        flattened row-major sequence.
        """
        width = self.width >> 1
        height = self.height >> 1
        flat = self.pixels.reshape(-1, 4)
        return Image(width, height, flat[::2][:width * height])

    @classmethod
    def from_bitmap(cls, width: int, height: int, rgba: bytes) -> 'Image':
        """Build a plane from raw row-major RGBA8 bytes"""
        if len(rgba) != width * height * 4:
            raise DimensionMismatch(width, height, len(rgba) // 4)
        return cls(width, height, np.frombuffer(rgba, dtype=np.uint8).reshape(-1, 4))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Image':
        """
        Build a plane from an image array as returned by imageio.

        Greyscale and RGB arrays are expanded to RGBA with opaque alpha,
        16-bit and float arrays are scaled down to 8 bits.
        """
        if array.dtype == np.uint16:
            array = (array >> 8).astype(np.uint8)
        elif np.issubdtype(array.dtype, np.floating):
            array = (np.clip(array, 0.0, 1.0) * 255.0).astype(np.uint8)
        else:
            array = _to_uint8(array)

        if array.ndim == 2:
            array = np.stack([array, array, array], axis=-1)
        if array.ndim != 3:
            raise ValueError(f"Expected a 2D image array, got shape {array.shape}")

        height, width, channels = array.shape
        if channels == 1:
            array = np.repeat(array, 3, axis=-1)
            channels = 3
        if channels == 2:
            # Grey + alpha
            array = np.stack([array[:, :, 0]] * 3 + [array[:, :, 1]], axis=-1)
        elif channels == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=-1)
        elif channels != 4:
            raise ValueError(f"Unsupported channel count: {channels}")

        return cls(width, height, array)

    @classmethod
    def from_file(cls, path: str) -> 'Image':
        """Load any image file imageio can read"""
        return cls.from_array(iio.imread(path))

    def to_array(self) -> np.ndarray:
        """
        Returns:
            numpy array of shape (height, width, 4) with dtype uint8 (RGBA)
        """
        return self.pixels.copy()

    def save(self, path: str) -> None:
        """Write the plane to an ordinary image file (format chosen by extension)"""
        iio.imwrite(path, self.pixels)
