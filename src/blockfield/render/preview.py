# src/blockfield/render/preview.py
# Top-down PNG of a generated map using Pillow. Row 0 (foreground) is drawn
# at the bottom, matching how the map is seen from the default camera.

from __future__ import annotations

import os
from typing import Tuple

from PIL import Image, ImageDraw

from ..mapgen.generator import GeneratedMap

FLOOR_COLOR = (220, 220, 220, 255)
CENTER_COLOR = (230, 60, 60, 255)
GAP_COLOR = (24, 24, 24, 255)


def _cell_box(x: int, y: int, height: int, tile_px: int, inset: int, margin: int) -> Tuple[int, int, int, int]:
    x0 = margin + x * tile_px + inset
    y0 = margin + (height - 1 - y) * tile_px + inset
    return (x0, y0, x0 + tile_px - 1 - 2 * inset, y0 + tile_px - 1 - 2 * inset)


def render_map(gm: GeneratedMap, tile_px: int = 16, outline_percent: float = 0.0,
               margin: int = 0, mark_center: bool = True) -> Image.Image:
    w, h = gm.width, gm.height
    canvas = Image.new("RGBA", (w * tile_px + 2 * margin, h * tile_px + 2 * margin), GAP_COLOR)
    draw = ImageDraw.Draw(canvas)
    inset = int(round(tile_px * outline_percent / 2))
    if 2 * inset >= tile_px:
        inset = (tile_px - 1) // 2

    for x in range(w):
        for y in range(h):
            draw.rectangle(_cell_box(x, y, h, tile_px, inset, margin), fill=FLOOR_COLOR)
    for ob in gm.obstacles:
        draw.rectangle(_cell_box(ob.coord.x, ob.coord.y, h, tile_px, inset, margin), fill=ob.color)

    if mark_center:
        c = gm.config.center
        x0, y0, x1, y1 = _cell_box(c.x, c.y, h, tile_px, inset, margin)
        pad = max(1, (x1 - x0) // 4)
        draw.ellipse((x0 + pad, y0 + pad, x1 - pad, y1 - pad), fill=CENTER_COLOR)
    return canvas


def save_preview(gm: GeneratedMap, out_png: str, **kw) -> str:
    d = os.path.dirname(out_png)
    if d:
        os.makedirs(d, exist_ok=True)
    render_map(gm, **kw).save(out_png)
    return out_png
