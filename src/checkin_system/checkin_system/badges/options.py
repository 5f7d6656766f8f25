from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RenderOptions:
    """Layout of a badge image. Sizes are pixels unless noted."""

    width: int = 600
    height: int = 300
    background: str = "#ffffff"
    color: str = "#000000"
    font_path: Optional[Path] = None

    name_size: int = 34
    name_y: int = 80

    id_size: int = 28
    id_bottom_margin: int = 30

    # Code 128 bars: 0.2 mm modules at 254 dpi = 2 px per module, 12 mm = 120 px bars.
    module_width_mm: float = 0.2
    module_height_mm: float = 12.0
    quiet_zone_mm: float = 2.0
    dpi: int = 254
    barcode_offset_y: int = 30
    max_barcode_ratio: float = 0.85
