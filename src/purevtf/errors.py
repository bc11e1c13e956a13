"""Exceptions raised while reading and writing VTF data"""
from typing import Optional

from .enums import PixelFormat


class VTFError(Exception):
    """Base class for all purevtf errors"""


class InvalidContainer(VTFError, ValueError):
    """The data does not start with the VTF signature"""
    def __init__(self, magic: bytes) -> None:
        self.magic = magic
        super().__init__(f"Invalid VTF magic number: {magic!r}")


class ContainerReadFailed(VTFError, ValueError):
    """A stage of container decoding failed; the original error is kept in ``cause``"""
    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to read VTF {stage}: {cause}")


class FormatUnsupported(VTFError, NotImplementedError):
    """A pixel format is recognized but cannot be converted by this codec"""
    REASON_UNSUPPORTED = "not supported"
    REASON_PALETTED = "not supported - paletted"

    def __init__(self, fmt: PixelFormat, reason: Optional[str] = None) -> None:
        self.format = fmt
        self.reason = reason or self.REASON_UNSUPPORTED
        super().__init__(f"Pixel format {fmt.name} is {self.reason}")

    @property
    def is_paletted(self) -> bool:
        return self.reason == self.REASON_PALETTED


class DimensionMismatch(VTFError, ValueError):
    """Pixel count does not match the plane's width x height"""
    def __init__(self, width: int, height: int, count: int) -> None:
        self.width = width
        self.height = height
        self.count = count
        super().__init__(
            f"Expected {width * height} pixels for a {width}x{height} image, got {count}"
        )
