"""Main VTF file handler"""
import logging
from typing import Callable, List, TypeVar

import numpy as np

from .enums import PixelFormat, VTFFlags, WriteLayout
from .errors import ContainerReadFailed, DimensionMismatch, InvalidContainer
from .headers import VTF_HEADER, VTF_RESOURCE_ENTRY, THUMBNAIL_SIZE
from .image import Image
from .stream import BinaryReader, BinaryWriter

logger = logging.getLogger(__name__)

T = TypeVar('T')


def mipmap_level_count(size: int) -> int:
    """Number of times ``size`` can be halved before reaching 1"""
    count = 0
    while size > 1:
        size //= 2
        count += 1
    return count


def mipmap_block_size(size: int) -> int:
    """
    Number of bytes skipped to get past the mipmap chain of a texture.

    Sums (2^i)^2 for every level i from 0 to mipmap_level_count(size) inclusive, minus one.
    """
    return sum((2 ** i) ** 2 for i in range(mipmap_level_count(size) + 1)) - 1


def _format_flags(value: int) -> str:
    """Format a flag value as flag names separated by ' | '"""
    if value == 0:
        return '0'

    flags = [flag.name for flag in VTFFlags if value & flag]
    if not flags:
        return f'0x{value:X}'

    return ' | '.join(flags)


def _read_stage(stage: str, reader: BinaryReader, read: Callable[[], T]) -> T:
    logger.debug("Reading %s at offset %d", stage, reader.offset)
    try:
        return read()
    except Exception as e:
        raise ContainerReadFailed(stage, e) from e


def read_resources(reader: BinaryReader) -> List[VTF_RESOURCE_ENTRY]:
    """
    Read the resource directory.

    The directory is preceded by a copy of the header. That header is parsed again,
    then ``headerSize`` more bytes are skipped before ``numResources`` entries are read.
    """
    header = VTF_HEADER.from_reader(reader)
    reader.skip(header.headerSize)
    return [VTF_RESOURCE_ENTRY.from_reader(reader) for _ in range(header.numResources)]


class VTF:
    """Valve Texture Format container"""
    def __init__(self, width: int = 1, height: int = 1) -> None:
        """Create a blank texture of the given size with a default header"""
        self.header: VTF_HEADER = VTF_HEADER()
        self.header.width = width
        self.header.height = height
        self.header.mipmapCount = mipmap_level_count(width)
        self.resources: List[VTF_RESOURCE_ENTRY] = []
        self.thumbnail: Image = Image(THUMBNAIL_SIZE, THUMBNAIL_SIZE)
        self.body: Image = Image(width, height)

    def __str__(self) -> str:
        """Return debug string representation of VTF file"""
        lines = ["VTF File Information:"]
        lines.append(f"  Version: {self.header.version[0]}.{self.header.version[1]}")
        lines.append(f"  Header Size: {self.header.headerSize}")
        lines.append(f"  Dimensions: {self.header.width}x{self.header.height}")
        lines.append(f"  Depth: {self.header.depth}")
        lines.append(f"  Frames: {self.header.frames} (first: {self.header.firstFrame})")
        lines.append(f"  Mipmap Levels: {self.header.mipmapCount}")
        lines.append(f"  Flags: {_format_flags(self.header.flags)}")
        lines.append(f"  Format: {self.header.highResImageFormat.name}")
        lines.append(f"  Thumbnail Format: {self.header.lowResImageFormat.name} "
                     f"({self.header.lowResImageWidth}x{self.header.lowResImageHeight})")
        lines.append(f"  Reflectivity: {tuple(round(v, 4) for v in self.header.reflectivity)}")
        lines.append(f"  Bumpmap Scale: {self.header.bumpmapScale}")
        lines.append(f"  Resources: {len(self.resources)}")
        for entry in self.resources:
            lines.append(f"    {entry.tag!r} flags=0x{entry.flags:02X} offset={entry.offset}")

        return "\n".join(lines)

    @classmethod
    def from_image(cls, image: Image) -> 'VTF':
        """Create a texture whose body is a copy of the given image"""
        vtf = cls(image.width, image.height)
        vtf.body = Image(image.width, image.height, image.pixels)
        return vtf

    @classmethod
    def from_bytes(cls, data: bytes) -> 'VTF':
        """
        Read VTF from bytes.

        Layout walked: header, 16x16 thumbnail in the low-res format, the mipmap chain
        (skipped, never decoded), resource directory, body in the high-res format.

        Raises:
            InvalidContainer: If the data does not start with the VTF magic number
            ContainerReadFailed: If any later stage fails; ``stage`` names it
        """
        reader = BinaryReader(data)
        vtf = cls()

        try:
            vtf.header = VTF_HEADER.from_reader(reader)
        except InvalidContainer:
            raise
        except ValueError as e:
            raise ContainerReadFailed('header', e) from e
        header = vtf.header

        vtf.thumbnail = _read_stage('thumbnail', reader, lambda: Image.from_bytes(
            reader, THUMBNAIL_SIZE, THUMBNAIL_SIZE, header.lowResImageFormat))
        _read_stage('mipmaps', reader, lambda: reader.skip(mipmap_block_size(header.width)))
        vtf.resources = _read_stage('resources', reader, lambda: read_resources(reader))
        vtf.body = _read_stage('body', reader, lambda: Image.from_bytes(
            reader, header.width, header.height, header.highResImageFormat))

        logger.debug("Read %dx%d VTF with %d resource(s), %d trailing byte(s)",
                     header.width, header.height, len(vtf.resources), reader.remaining())
        return vtf

    @classmethod
    def load(cls, path: str) -> 'VTF':
        """Read a VTF file from disk"""
        with open(path, 'rb') as f:
            data = f.read()
        return cls.from_bytes(data)

    def _check_planes(self) -> None:
        if (self.thumbnail.width, self.thumbnail.height) != (THUMBNAIL_SIZE, THUMBNAIL_SIZE):
            raise DimensionMismatch(THUMBNAIL_SIZE, THUMBNAIL_SIZE, len(self.thumbnail))
        if (self.body.width, self.body.height) != (self.header.width, self.header.height):
            raise DimensionMismatch(self.header.width, self.header.height, len(self.body))

    def to_bytes(self, layout: WriteLayout = WriteLayout.PACKED) -> bytes:
        """
        Serialize the texture.

        No mipmap pixel data is written; ``header.mipmapCount`` only declares the levels.
        The thumbnail is encoded with ``header.lowResImageFormat``, which defaults to DXT1
        and must be set to a supported format before a fresh texture can be written.

        Args:
            layout: PACKED writes header, resource entries, thumbnail and body back to back.
                MIRRORED writes the layout from_bytes walks: header, thumbnail, zeroed
                mipmap region, header copy, zeroed headerSize bytes, resource entries, body.

        Raises:
            FormatUnsupported: If either plane's format cannot be encoded
            DimensionMismatch: If a plane does not match the declared dimensions
        """
        self._check_planes()
        thumbnail = self.thumbnail.to_bytes(self.header.lowResImageFormat)
        body = self.body.to_bytes(self.header.highResImageFormat)
        self.header.numResources = len(self.resources)

        writer = BinaryWriter()
        self.header.write(writer)
        if layout is WriteLayout.MIRRORED:
            writer.write(thumbnail)
            writer.pad(mipmap_block_size(self.header.width))
            self.header.write(writer)
            writer.pad(self.header.headerSize)
            for entry in self.resources:
                entry.write(writer)
        else:
            for entry in self.resources:
                entry.write(writer)
            writer.write(thumbnail)
        writer.write(body)

        logger.debug("Wrote %dx%d VTF (%s layout), %d bytes",
                     self.header.width, self.header.height, layout.value, len(writer))
        return writer.getvalue()

    def save(self, path: str, layout: WriteLayout = WriteLayout.PACKED) -> None:
        """Write the texture to disk, replacing any existing file"""
        data = self.to_bytes(layout)
        with open(path, 'wb') as f:
            f.write(data)

    def set_flag(self, flag: VTFFlags, value: bool) -> None:
        self.header.set_flag(flag, value)

    def get_flag(self, flag: VTFFlags) -> bool:
        return self.header.get_flag(flag)

    def get_width(self) -> int:
        """Get the width of the texture in pixels"""
        return self.header.width

    def get_height(self) -> int:
        """Get the height of the texture in pixels"""
        return self.header.height

    def get_format(self) -> PixelFormat:
        return self.header.highResImageFormat

    def generate_mipmaps(self) -> List[Image]:
        """Halve the body repeatedly, returning every level below the full-size one"""
        levels = []
        image = self.body
        while image.width > 1 and image.height > 1:
            image = image.generate_mipmap()
            levels.append(image)
        return levels

    def to_image(self, thumbnail: bool = False) -> np.ndarray:
        """
        Convert the texture to a numpy array

        Args:
            thumbnail: Return the low resolution thumbnail instead of the body

        Returns:
            numpy array of shape (height, width, 4) with dtype uint8 (RGBA values 0-255)

            Can be saved with imageio:
            - imageio.imwrite('output.png', array)
        """
        return (self.thumbnail if thumbnail else self.body).to_array()
