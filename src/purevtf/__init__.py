"""purevtf - Valve Texture Format (VTF) reader and writer"""

__version__ = "0.1.0"

# Main VTF class
from .vtf import VTF, mipmap_level_count, mipmap_block_size

# Header structures
from .headers import (
    VTF_HEADER,
    VTF_RESOURCE_ENTRY,
    VTF_MAGIC,
    VTF_HEADER_SIZE,
    RESOURCE_ENTRY_SIZE,
    THUMBNAIL_SIZE,
)

# Pixel data
from .color import Color, decode_color, encode_color
from .image import Image
from .formats import FormatDescriptor, get_descriptor, is_supported, bytes_per_pixel

# Enumerations and flags
from .enums import (
    PixelFormat,
    VTFFlags,
    ResourceEntryFlags,
    WriteLayout,
)

# Errors
from .errors import (
    VTFError,
    InvalidContainer,
    ContainerReadFailed,
    FormatUnsupported,
    DimensionMismatch,
)

__all__ = [
    '__version__',
    'VTF',
    'mipmap_level_count',
    'mipmap_block_size',
    'VTF_HEADER',
    'VTF_RESOURCE_ENTRY',
    'VTF_MAGIC',
    'VTF_HEADER_SIZE',
    'RESOURCE_ENTRY_SIZE',
    'THUMBNAIL_SIZE',
    'Color',
    'decode_color',
    'encode_color',
    'Image',
    'FormatDescriptor',
    'get_descriptor',
    'is_supported',
    'bytes_per_pixel',
    'PixelFormat',
    'VTFFlags',
    'ResourceEntryFlags',
    'WriteLayout',
    'VTFError',
    'InvalidContainer',
    'ContainerReadFailed',
    'FormatUnsupported',
    'DimensionMismatch',
]
