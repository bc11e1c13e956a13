"""Pixel format table: byte width, channel layout and support status for every VTF format"""
from dataclasses import dataclass
from typing import Dict, Optional

from .enums import PixelFormat
from .errors import FormatUnsupported


@dataclass(frozen=True)
class FormatDescriptor:
    """Descriptor for pixel format properties"""
    bytes_per_pixel: int  # Encoded size of one pixel, 0 for block-compressed formats
    channels: Optional[str] = None  # Byte order of the stored channels, e.g. 'BGRA'. None if unsupported
    paletted: bool = False

    @property
    def supported(self) -> bool:
        return self.channels is not None

    @property
    def has_alpha(self) -> bool:
        """Whether alpha is stored. Formats without it decode with alpha 255"""
        return self.channels is not None and 'A' in self.channels


CHANNEL_INDEX = {'R': 0, 'G': 1, 'B': 2, 'A': 3}

FORMAT_DESCRIPTORS: Dict[PixelFormat, FormatDescriptor] = {
    PixelFormat.NONE: FormatDescriptor(0),

    # 32-bit formats
    PixelFormat.RGBA8888: FormatDescriptor(4, 'RGBA'),
    PixelFormat.ABGR8888: FormatDescriptor(4, 'ABGR'),
    PixelFormat.ARGB8888: FormatDescriptor(4, 'ARGB'),
    PixelFormat.BGRA8888: FormatDescriptor(4, 'BGRA'),

    # 24-bit formats. The bluescreen variants are read as plain colour, no key is applied.
    PixelFormat.RGB888: FormatDescriptor(3, 'RGB'),
    PixelFormat.BGR888: FormatDescriptor(3, 'BGR'),
    PixelFormat.RGB888_BLUESCREEN: FormatDescriptor(3, 'RGB'),
    PixelFormat.BGR888_BLUESCREEN: FormatDescriptor(3, 'BGR'),

    # Paletted
    PixelFormat.RGB565: FormatDescriptor(2, paletted=True),
    PixelFormat.I8: FormatDescriptor(1, paletted=True),
    PixelFormat.IA88: FormatDescriptor(2, paletted=True),
    PixelFormat.P8: FormatDescriptor(1, paletted=True),

    # Recognized, not converted
    PixelFormat.A8: FormatDescriptor(1),
    PixelFormat.DXT1: FormatDescriptor(0),
    PixelFormat.DXT3: FormatDescriptor(0),
    PixelFormat.DXT5: FormatDescriptor(0),
    PixelFormat.BGRX8888: FormatDescriptor(4),
    PixelFormat.BGR565: FormatDescriptor(2),
    PixelFormat.BGRX5551: FormatDescriptor(2),
    PixelFormat.BGRA4444: FormatDescriptor(2),
    PixelFormat.DXT1_ONEBITALPHA: FormatDescriptor(0),
    PixelFormat.BGRA5551: FormatDescriptor(2),
    PixelFormat.UV88: FormatDescriptor(2),
    PixelFormat.UVWQ8888: FormatDescriptor(4),
    PixelFormat.RGBA16161616F: FormatDescriptor(8),
    PixelFormat.RGBA16161616: FormatDescriptor(8),
    PixelFormat.UVLX8888: FormatDescriptor(4),
}


def get_descriptor(fmt: PixelFormat) -> FormatDescriptor:
    """Look up the descriptor of a format, supported or not"""
    return FORMAT_DESCRIPTORS[PixelFormat(fmt)]


def is_supported(fmt: PixelFormat) -> bool:
    return get_descriptor(fmt).supported


def bytes_per_pixel(fmt: PixelFormat) -> int:
    return get_descriptor(fmt).bytes_per_pixel


def require_supported(fmt: PixelFormat) -> FormatDescriptor:
    """
    Get the descriptor of a format that can be converted.

    Raises:
        FormatUnsupported: If the format is paletted, compressed or otherwise not handled
    """
    fmt = PixelFormat(fmt)
    descriptor = FORMAT_DESCRIPTORS[fmt]
    if descriptor.supported:
        return descriptor
    if descriptor.paletted:
        raise FormatUnsupported(fmt, FormatUnsupported.REASON_PALETTED)
    raise FormatUnsupported(fmt)
