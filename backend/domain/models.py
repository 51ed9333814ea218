"""
Core domain models for the placeholder image service.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class ImageFormat(str, Enum):
    """Supported output encodings."""
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"

    @classmethod
    def from_setting(cls, value: Optional[str]) -> "ImageFormat":
        """Resolve a configured format name; anything unknown encodes as PNG."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.PNG

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pillow_format(self) -> str:
        return self.value.upper()


class ValidationKind(str, Enum):
    """Which request constraint was violated."""
    DIMENSIONS_FORMAT = "dimensions_format"
    DIMENSIONS_TOO_LARGE = "dimensions_too_large"
    DIMENSIONS_TOO_SMALL = "dimensions_too_small"
    BACKGROUND_COLOR = "background_color"
    FOREGROUND_COLOR = "foreground_color"
    FONT_SIZE = "font_size"
    TEXT_WRAP_WIDTH = "text_wrap_width"


@dataclass(frozen=True)
class ValidationFailure:
    """A rejected request: the violated constraint plus a client-facing message."""
    kind: ValidationKind
    message: str


@dataclass(frozen=True)
class RenderRequest:
    """
    Fully resolved parameters for one placeholder image.

    `text` is always set by the time a request reaches the render core;
    `font_size` stays None when the caller wants area-based auto sizing.
    """
    width: int
    height: int
    bg_color: str  # 6 hex digits, no leading '#'
    fg_color: str
    text: str
    font_size: Optional[int] = None
    text_wrap: bool = False
    text_wrap_width: int = 80

    @property
    def dims(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class OutputOptions:
    """Encoder configuration shared by every request."""
    image_format: ImageFormat = ImageFormat.PNG
    quality: int = 90
    jpeg_progressive: bool = True
    png_compression_level: int = 6


@dataclass(frozen=True)
class CacheEntry:
    """An encoded image as stored in the image cache."""
    data: bytes
    mime_type: str
    etag: Optional[str] = None


@dataclass
class FontHandle:
    """A loaded font plus the metrics the layout engine needs."""
    key: str
    size: int
    font: Any  # PIL.ImageFont.FreeTypeFont or compatible
    line_height: int

    def measure(self, text: str) -> int:
        """Rendered pixel width of a single line of text."""
        if not text:
            return 0
        return int(round(self.font.getlength(text)))


@dataclass(frozen=True)
class LayoutLine:
    x: float
    y: float
    text: str


@dataclass
class LayoutResult:
    """Where each line of text goes on the canvas."""
    is_wrapped: bool
    lines: List[LayoutLine] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]
