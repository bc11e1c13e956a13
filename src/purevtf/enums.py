"""VTF enumerations and flags"""
from enum import IntEnum, IntFlag, Enum


class PixelFormat(IntEnum):
    """VTF image formats, stored as a 32-bit integer in the header"""
    NONE = -1
    RGBA8888 = 0
    ABGR8888 = 1
    RGB888 = 2
    BGR888 = 3
    RGB565 = 4
    I8 = 5
    IA88 = 6
    P8 = 7
    A8 = 8
    RGB888_BLUESCREEN = 9
    BGR888_BLUESCREEN = 10
    ARGB8888 = 11
    BGRA8888 = 12
    DXT1 = 13
    DXT3 = 14
    DXT5 = 15
    BGRX8888 = 16
    BGR565 = 17
    BGRX5551 = 18
    BGRA4444 = 19
    DXT1_ONEBITALPHA = 20
    BGRA5551 = 21
    UV88 = 22
    UVWQ8888 = 23
    RGBA16161616F = 24
    RGBA16161616 = 25
    UVLX8888 = 26


class VTFFlags(IntFlag):
    """Texture flags stored in the header bitfield"""
    POINTSAMPLE = 0x00000001
    TRILINEAR = 0x00000002
    CLAMPS = 0x00000004
    CLAMPT = 0x00000008
    ANISOTROPIC = 0x00000010
    HINT_DXT5 = 0x00000020
    PWL_CORRECTED = 0x00000040
    NORMAL = 0x00000080
    NOMIP = 0x00000100
    NOLOD = 0x00000200
    ALL_MIPS = 0x00000400
    PROCEDURAL = 0x00000800
    ONEBITALPHA = 0x00001000  # Automatically set when the image has one-bit alpha
    EIGHTBITALPHA = 0x00002000  # Automatically set when the image has eight-bit alpha
    ENVMAP = 0x00004000
    RENDERTARGET = 0x00008000
    DEPTHRENDERTARGET = 0x00010000
    NODEBUGOVERRIDE = 0x00020000
    SINGLECOPY = 0x00040000
    PRE_SRGB = 0x00080000
    NODEPTHBUFFER = 0x00800000
    CLAMPU = 0x02000000
    VERTEXTEXTURE = 0x04000000
    SSBUMP = 0x08000000
    BORDER = 0x20000000


class ResourceEntryFlags(IntFlag):
    """Resource directory entry flags"""
    NO_DATA = 0x02  # Offset field holds the resource value itself, there is no data chunk


class WriteLayout(Enum):
    """Byte layout produced when serializing a VTF container"""
    PACKED = 'packed'  # Header, resource entries, thumbnail, body
    MIRRORED = 'mirrored'  # The layout VTF.from_bytes walks, including skipped regions
