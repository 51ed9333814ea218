"""
Placeholder image rendering using Pillow.

Text is drawn onto a transparent overlay, recoloured to the foreground
colour, composited onto a solid background and encoded in the configured
format.
"""
from io import BytesIO
import logging
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from domain.models import FontHandle, ImageFormat, LayoutResult, OutputOptions
from services.color import hex_to_rgba

logger = logging.getLogger(__name__)

# PNG compression above this level costs more latency than it saves bytes.
PNG_FAST_COMPRESSION_CAP = 3
TEXT_MASK_FILL = (255, 255, 255, 255)


class RenderError(Exception):
    """Raised when any stage of rendering or encoding fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def detail(self) -> str:
        return str(self.cause) if self.cause is not None else str(self)


def _recolor_overlay(overlay: Image.Image, fg_color: str) -> Image.Image:
    """Give every drawn pixel the foreground RGB, keeping the overlay's alpha."""
    r, g, b, _ = hex_to_rgba(fg_color)
    alpha = overlay.getchannel("A")
    channels = [Image.new("L", overlay.size, value) for value in (r, g, b)]
    return Image.merge("RGBA", (*channels, alpha))


def _draw_layout(overlay: Image.Image, font: FontHandle, layout: LayoutResult) -> None:
    draw = ImageDraw.Draw(overlay)
    for line in layout.lines:
        x = max(0, int(line.x))
        y = max(0, int(line.y))
        draw.text((x, y), line.text, font=font.font, fill=TEXT_MASK_FILL)


def encode_image(image: Image.Image, options: OutputOptions) -> Tuple[bytes, str]:
    """Encode to the configured format; returns (bytes, mime type)."""
    fmt = options.image_format
    buf = BytesIO()
    try:
        rgb = image.convert("RGB")
        if fmt == ImageFormat.JPEG:
            rgb.save(
                buf,
                format=fmt.pillow_format,
                quality=options.quality,
                progressive=options.jpeg_progressive,
            )
        elif fmt == ImageFormat.BMP:
            rgb.save(buf, format=fmt.pillow_format)
        else:
            rgb.save(
                buf,
                format=ImageFormat.PNG.pillow_format,
                compress_level=min(options.png_compression_level, PNG_FAST_COMPRESSION_CAP),
            )
            fmt = ImageFormat.PNG
    except Exception as exc:
        raise RenderError(f"Failed to encode {fmt.value} image", exc) from exc
    return buf.getvalue(), fmt.mime_type


def create_placeholder_image(width: int, height: int, color: str, options: OutputOptions) -> Tuple[bytes, str]:
    """Solid colour image with no text."""
    try:
        image = Image.new("RGB", (width, height), hex_to_rgba(color)[:3])
    except Exception as exc:
        raise RenderError("Failed to render image", exc) from exc
    return encode_image(image, options)


def render_image(
    width: int,
    height: int,
    bg_color: str,
    fg_color: str,
    font: FontHandle,
    layout: LayoutResult,
    options: OutputOptions,
) -> Tuple[bytes, str]:
    if not layout.lines:
        return create_placeholder_image(width, height, bg_color, options)

    try:
        background = Image.new("RGBA", (width, height), hex_to_rgba(bg_color))
        overlay = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        _draw_layout(overlay, font, layout)
        overlay = _recolor_overlay(overlay, fg_color)
        background.alpha_composite(overlay, (0, 0))
    except Exception as exc:
        raise RenderError("Failed to render image", exc) from exc

    data, mime_type = encode_image(background, options)
    logger.debug("Rendered %dx%d %s (%d bytes, %d lines)", width, height, mime_type, len(data), len(layout.lines))
    return data, mime_type
