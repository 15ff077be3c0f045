"""Rendering of label text to icon bitmaps.

Labels are drawn with PIL into transparent RGBA images that the host
keeps in its image cache and shows as point icons.
"""
import logging
from functools import lru_cache
from typing import NamedTuple

from PIL import Image, ImageDraw, ImageFont

from .ids import make_icon_id

logger = logging.getLogger(__name__)

MIN_CANVAS_SIZE = 256

# CSS generic families mapped to fonts shipped with most Linux systems
GENERIC_FAMILIES = {
    "sans-serif": "DejaVuSans",
    "serif": "DejaVuSerif",
    "monospace": "DejaVuSansMono",
}


class RasterizedLabel(NamedTuple):
    image_id: str
    bitmap: Image.Image


def _is_bold(font_weight):
    weight = str(font_weight).lower()
    if weight.isdigit():
        return int(weight) >= 600
    return weight in ("bold", "bolder")


@lru_cache(maxsize=64)
def load_font(font_family="sans-serif", font_size=16, font_weight="normal"):
    """Load a TrueType font for a CSS-like family name.

    Falls back to PIL's bundled default font at the requested size when
    no matching font file is found.
    """
    name = GENERIC_FAMILIES.get(font_family, font_family)
    candidates = [name, f"{name}.ttf"]
    if _is_bold(font_weight):
        candidates = [f"{name}-Bold.ttf", f"{name}-Bold"] + candidates
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, font_size)
        except OSError:
            continue
    logger.debug("No font file for %r, using PIL default font", font_family)
    return ImageFont.load_default(size=font_size)


def draw_label(text, font_family="sans-serif", font_size=16, color="#000000",
               font_weight="normal", pixel_ratio=1):
    """Draw label text into an RGBA bitmap.

    The drawing surface is sized from the text length and font size,
    the text is drawn vertically centred on the first ``font_size`` rows
    and the result is clipped to the measured text width.

    Parameters
    ----------
    text : str
        Label text.
    font_family : str, optional
        Font family or font file name, by default "sans-serif".
    font_size : int, optional
        Font size in pixels, by default 16.
    color : str, optional
        Fill colour accepted by PIL, by default "#000000".
    font_weight : str or int, optional
        "normal", "bold" or a numeric CSS weight, by default "normal".
    pixel_ratio : float, optional
        Device pixel ratio applied to the drawing surface, by default 1.

    Returns
    -------
    PIL.Image.Image
        Bitmap of size ``(round(text_width), font_size)``.
    """
    font_size = int(font_size)
    size = int(max(MIN_CANVAS_SIZE, len(text or "") * font_size) * pixel_ratio)
    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    font = load_font(font_family, font_size, font_weight)
    width = draw.textlength(text, font=font) if text else 0
    if text:
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((0, font_size / 2), text, fill=color, font=font, anchor="lm")
        else:
            draw.text((0, 0), text, fill=color, font=font)
    return canvas.crop((0, 0, round(width), font_size))


class LabelRasterizer:
    """Rasterize labels and keep the host image cache in sync.

    Parameters
    ----------
    host : Host
        Renderer providing ``has_image``, ``add_image`` and ``update_image``.
    font_family, font_size, color, font_weight
        Label font, see :func:`draw_label`.
    pixel_ratio : float, optional
        Device pixel ratio, by default 1.
    """

    def __init__(self, host, font_family="sans-serif", font_size=16,
                 color="#000000", font_weight="normal", pixel_ratio=1):
        self.host = host
        self.font_family = font_family
        self.font_size = font_size
        self.color = color
        self.font_weight = font_weight
        self.pixel_ratio = pixel_ratio

    @classmethod
    def from_style(cls, host, style, pixel_ratio=1):
        """Create a rasterizer from a merged label style record."""
        return cls(
            host,
            font_family=style.get("font_family", "sans-serif"),
            font_size=style.get("font_size", 16),
            color=style.get("color", "#000000"),
            font_weight=style.get("font_weight", "normal"),
            pixel_ratio=pixel_ratio,
        )

    def register(self, image_id, bitmap):
        """Replace the host image if ``image_id`` is known, else add it."""
        if self.host.has_image(image_id):
            self.host.update_image(image_id, bitmap)
        else:
            self.host.add_image(image_id, bitmap)

    def rasterize(self, text, image_id=None) -> RasterizedLabel:
        """Draw ``text`` and store it in the host under ``image_id``.

        A fresh id is taken from the process-wide counter when
        ``image_id`` is None.
        """
        image_id = image_id or make_icon_id()
        bitmap = draw_label(text, self.font_family, self.font_size,
                            self.color, self.font_weight, self.pixel_ratio)
        self.register(image_id, bitmap)
        return RasterizedLabel(image_id, bitmap)
