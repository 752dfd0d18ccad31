# pathviz/viz.py
from __future__ import annotations
import colorsys, os
from typing import Tuple

from PIL import Image, ImageDraw

from .grid import Grid, Node
from .types import NodeKind

RGB = Tuple[int, int, int]

COLORS = {
    NodeKind.EMPTY: (255, 255, 255),
    NodeKind.START: (34, 197, 94),
    NodeKind.END: (239, 68, 68),
    NodeKind.WALL: (31, 41, 55),
    NodeKind.PATH: (192, 132, 252),
    NodeKind.VISITED: (191, 219, 254),
    NodeKind.VISITED_DARK: (147, 197, 253),
}
GRID_LINE = (229, 231, 235)


def weight_color(weight: int) -> RGB:
    # yellow (light) -> red (weight 10)
    intensity = min(weight * 255 // 10, 255)
    return (255, 255 - intensity, 0)


def heat_color(visits: int, max_visits: int) -> RGB:
    # blue (cold) -> red (hot)
    hue = (240 - 240 * visits / max(max_visits, 1)) / 360.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return (round(r * 255), round(g * 255), round(b * 255))


def cell_color(node: Node, heatmap: bool = False, max_visits: int = 1) -> RGB:
    if heatmap and (node.kind is NodeKind.EMPTY or node.kind.is_visited):
        return heat_color(node.visit_count, max_visits)
    if node.kind is NodeKind.WEIGHT:
        return weight_color(node.weight)
    return COLORS[node.kind]


def draw_grid_png(grid: Grid, out_png: str, cell: int = 10, heatmap: bool = False) -> None:
    img = Image.new("RGB", (grid.cols * cell, grid.rows * cell), (255, 255, 255))
    drw = ImageDraw.Draw(img)
    max_visits = max((n.visit_count for n in grid), default=0)

    for n in grid:
        x0, y0 = n.col * cell, n.row * cell
        drw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1),
                      fill=cell_color(n, heatmap, max_visits), outline=GRID_LINE)

    folder = os.path.dirname(out_png)
    if folder:
        os.makedirs(folder, exist_ok=True)
    img.save(out_png)
