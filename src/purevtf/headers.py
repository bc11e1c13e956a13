"""VTF header structures"""
from dataclasses import dataclass
from typing import List, Tuple, Union

from .enums import PixelFormat, VTFFlags, ResourceEntryFlags
from .errors import InvalidContainer
from .stream import BinaryReader, BinaryWriter

VTF_MAGIC = b'VTF\0'
VTF_HEADER_SIZE = 80
VTF_VERSION = (7, 2)
RESOURCE_ENTRY_SIZE = 8
THUMBNAIL_SIZE = 16


class VTF_HEADER:
    """VTF header structure (80 bytes including the magic number)"""
    def __init__(self) -> None:
        self.version: List[int] = list(VTF_VERSION)  # Major, minor
        self.headerSize: int = VTF_HEADER_SIZE  # Size of the header (plus resource dictionary in 7.3+)
        self.width: int = 0  # Width of the largest mipmap, a power of 2
        self.height: int = 0  # Height of the largest mipmap, a power of 2
        self._flags: int = 0
        self.frames: int = 1  # Number of frames, 1 if not animated
        self.firstFrame: int = 0  # First animation frame (0 based)
        self.reflectivity: Tuple[float, float, float] = (1.0, 0.0, 0.0)
        self.bumpmapScale: float = 1.0
        self.highResImageFormat: PixelFormat = PixelFormat.RGBA8888
        self.mipmapCount: int = 0
        self.lowResImageFormat: PixelFormat = PixelFormat.DXT1  # Conventionally DXT1, never validated
        self.lowResImageWidth: int = THUMBNAIL_SIZE
        self.lowResImageHeight: int = THUMBNAIL_SIZE
        self.depth: int = 1  # 7.2+, 1 for a 2D texture
        self.numResources: int = 0  # 7.3+

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VTF_HEADER):
            return NotImplemented
        return vars(self) == vars(other)

    def set_flag(self, flag: VTFFlags, value: bool) -> None:
        """Set or clear a texture flag"""
        if value:
            self._flags |= int(flag)
        else:
            self._flags &= ~int(flag) & 0xFFFFFFFF

    def get_flag(self, flag: VTFFlags) -> bool:
        """Check whether a texture flag is set"""
        return (self._flags & int(flag)) != 0

    @property
    def flags(self) -> VTFFlags:
        """Read-only view of the flag bitfield. Use set_flag to change it."""
        return VTFFlags(self._flags)

    @classmethod
    def from_reader(cls, reader: BinaryReader) -> 'VTF_HEADER':
        """
        Read a VTF_HEADER at the reader's position and advance past it.

        Raises:
            InvalidContainer: If the magic number is not "VTF\\0"
            ValueError: If the data ends before the header does
        """
        magic = reader.read(4)
        if magic != VTF_MAGIC:
            raise InvalidContainer(magic)

        header = cls()
        header.version = list(reader.unpack('2I'))
        header.headerSize = reader.read_u32()
        header.width, header.height = reader.unpack('2H')
        header._flags = reader.read_u32()
        header.frames, header.firstFrame = reader.unpack('2H')
        reader.skip(4)
        header.reflectivity = reader.unpack('3f')
        reader.skip(4)
        header.bumpmapScale = reader.read_f32()
        # Formats are read signed so that NONE (-1) survives
        header.highResImageFormat = PixelFormat(reader.read_i32())
        header.mipmapCount = reader.read_u8()
        header.lowResImageFormat = PixelFormat(reader.read_i32())
        header.lowResImageWidth = reader.read_u8()
        header.lowResImageHeight = reader.read_u8()
        header.depth = reader.read_u16()
        reader.skip(3)
        header.numResources = reader.read_u32()
        reader.skip(8)

        return header

    @classmethod
    def from_bytes(cls, data: bytes) -> 'VTF_HEADER':
        """Read VTF_HEADER from 80 bytes of data"""
        if len(data) < VTF_HEADER_SIZE:
            raise ValueError(f"Expected {VTF_HEADER_SIZE} bytes for VTF_HEADER, got {len(data)}")
        return cls.from_reader(BinaryReader(data))

    def write(self, writer: BinaryWriter) -> None:
        """Write the header, zero-filling every reserved span"""
        writer.write(VTF_MAGIC)
        writer.pack('2I', *self.version)
        writer.write_u32(self.headerSize)
        writer.pack('2H', self.width, self.height)
        writer.write_u32(self._flags)
        writer.pack('2H', self.frames, self.firstFrame)
        writer.pad(4)
        writer.pack('3f', *self.reflectivity)
        writer.pad(4)
        writer.write_f32(self.bumpmapScale)
        writer.write_i32(self.highResImageFormat)
        writer.write_u8(self.mipmapCount)
        writer.write_i32(self.lowResImageFormat)
        writer.write_u8(self.lowResImageWidth)
        writer.write_u8(self.lowResImageHeight)
        writer.write_u16(self.depth)
        writer.pad(3)
        writer.write_u32(self.numResources)
        writer.pad(8)

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.getvalue()


@dataclass(frozen=True)
class VTF_RESOURCE_ENTRY:
    """Resource directory entry (8 bytes)"""
    tag: bytes  # Three-byte identifier of the resource
    flags: int  # ResourceEntryFlags
    offset: int  # Offset of the resource data in the file, or the value itself if NO_DATA is set

    def __post_init__(self) -> None:
        if len(self.tag) != 3:
            raise ValueError(f"Resource tag must be 3 bytes, got {self.tag!r}")

    @property
    def has_data(self) -> bool:
        return not (self.flags & ResourceEntryFlags.NO_DATA)

    @classmethod
    def from_reader(cls, reader: BinaryReader) -> 'VTF_RESOURCE_ENTRY':
        tag = reader.read(3)
        flags, offset = reader.unpack('BI')
        return cls(tag, flags, offset)

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray]) -> 'VTF_RESOURCE_ENTRY':
        """Read VTF_RESOURCE_ENTRY from 8 bytes of data"""
        if len(data) < RESOURCE_ENTRY_SIZE:
            raise ValueError(f"Expected {RESOURCE_ENTRY_SIZE} bytes for VTF_RESOURCE_ENTRY, got {len(data)}")
        return cls.from_reader(BinaryReader(data))

    def write(self, writer: BinaryWriter) -> None:
        writer.write(self.tag)
        writer.pack('BI', self.flags, self.offset)

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.getvalue()
