from __future__ import annotations

from pathlib import Path
from typing import Optional

from barcode import Code128
from barcode.writer import ImageWriter
from PIL import Image, ImageDraw, ImageFont

from ..inscritos.model import Inscrito
from ..logger import get_logger
from .options import RenderOptions

logger = get_logger(__name__)


def load_font(font_path: Optional[Path], size: int):
    """Bundled TTF when available, otherwise Pillow's default (scalable) font."""
    if font_path and Path(font_path).is_file():
        try:
            return ImageFont.truetype(str(font_path), size)
        except OSError as e:
            logger.warning("Font %s unusable (%s), using default font", font_path, e)
    return ImageFont.load_default(size=size)


class BadgeRenderer:
    """Draws one badge: name on top, Code 128 of the id in the middle, 'ID: n' at the bottom."""

    def __init__(self, options: RenderOptions | None = None):
        self._options = options or RenderOptions()
        self._name_font = load_font(self._options.font_path, self._options.name_size)
        self._id_font = load_font(self._options.font_path, self._options.id_size)

    def barcode_image(self, value: str) -> Image.Image:
        o = self._options
        code = Code128(value, writer=ImageWriter(format="PNG", mode="RGB"))
        image = code.render(
            writer_options={
                "module_width": o.module_width_mm,
                "module_height": o.module_height_mm,
                "quiet_zone": o.quiet_zone_mm,
                "dpi": o.dpi,
                "background": o.background,
                "foreground": o.color,
                "write_text": False,
            }
        )
        return image.convert("RGB")

    def render(self, inscrito: Inscrito) -> Image.Image:
        o = self._options
        canvas = Image.new("RGB", (o.width, o.height), o.background)
        draw = ImageDraw.Draw(canvas)

        draw.text(
            (o.width // 2, o.name_y),
            inscrito.nombre or "",
            fill=o.color,
            font=self._name_font,
            anchor="mm",
        )

        barcode = self.barcode_image(str(inscrito.id))
        max_width = int(o.width * o.max_barcode_ratio)
        if barcode.width > max_width:
            new_height = max(1, round(barcode.height * max_width / barcode.width))
            barcode = barcode.resize((max_width, new_height), Image.Resampling.NEAREST)
        x = (o.width - barcode.width) // 2
        y = (o.height - barcode.height) // 2 + o.barcode_offset_y
        canvas.paste(barcode, (x, y))

        draw.text(
            (o.width // 2, o.height - o.id_bottom_margin),
            f"ID: {inscrito.id}",
            fill=o.color,
            font=self._id_font,
            anchor="mb",
        )
        return canvas
