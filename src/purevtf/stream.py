"""Bounds-checked little-endian cursor over a byte buffer"""
import struct
from typing import Tuple


class BinaryReader:
    """Sequential reader over bytes. Every read checks that enough data remains."""
    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = memoryview(data)
        self.offset = offset

    def __len__(self) -> int:
        return len(self.data)

    def remaining(self) -> int:
        """Number of bytes left after the current offset"""
        return max(0, len(self.data) - self.offset)

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes and advance"""
        if size < 0:
            raise ValueError(f"Cannot read a negative number of bytes ({size})")
        if self.offset + size > len(self.data):
            raise ValueError(
                f"Expected {size} bytes at offset {self.offset}, "
                f"but only {self.remaining()} bytes remaining"
            )
        chunk = bytes(self.data[self.offset:self.offset + size])
        self.offset += size
        return chunk

    def skip(self, size: int) -> None:
        """Advance without reading. Skipping past the end is only detected by the next read."""
        if size < 0:
            raise ValueError(f"Cannot skip a negative number of bytes ({size})")
        self.offset += size

    def unpack(self, fmt: str) -> Tuple:
        """Read a struct format (always little-endian)"""
        packer = struct.Struct('<' + fmt)
        return packer.unpack(self.read(packer.size))

    def read_u8(self) -> int:
        return self.unpack('B')[0]

    def read_u16(self) -> int:
        return self.unpack('H')[0]

    def read_u32(self) -> int:
        return self.unpack('I')[0]

    def read_i32(self) -> int:
        return self.unpack('i')[0]

    def read_f32(self) -> float:
        return self.unpack('f')[0]


class BinaryWriter:
    """Append-only little-endian writer"""
    def __init__(self) -> None:
        self.buffer = bytearray()

    def __len__(self) -> int:
        return len(self.buffer)

    def write(self, data: bytes) -> None:
        self.buffer += data

    def pad(self, size: int) -> None:
        """Write ``size`` zero bytes"""
        self.buffer += bytes(size)

    def pack(self, fmt: str, *values) -> None:
        self.buffer += struct.pack('<' + fmt, *values)

    def write_u8(self, value: int) -> None:
        self.pack('B', value)

    def write_u16(self, value: int) -> None:
        self.pack('H', value)

    def write_u32(self, value: int) -> None:
        self.pack('I', value)

    def write_i32(self, value: int) -> None:
        self.pack('i', value)

    def write_f32(self, value: float) -> None:
        self.pack('f', value)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)
