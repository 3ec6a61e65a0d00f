"""4-connected flood fill with an explicit stack.

The region is every pixel reachable from the seed through up/right/down/left
steps without leaving the seed's original colour. Depth is bounded by the
heap-allocated stack, not the call stack, so a full-screen region is fine.

The work list is a plain Python list of (x, y) tuples walking a mask of
pixels that match the seed's colour, computed once with numpy.
"""

import logging
from typing import TYPE_CHECKING

import numpy as np

from mathraster.geometry.point import Point
from mathraster.rendering.coordinates import in_bounds, to_pixel
from mathraster.utils.color import Color

if TYPE_CHECKING:
    from mathraster.rendering.screen import Screen

logger = logging.getLogger(__name__)

# Push order; the last pushed (left) is visited first
_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def flood_fill(screen: "Screen", seed: Point, colour: Color) -> int:
    """Recolour the connected region around ``seed`` to ``colour``.

    Parameters
    ----------
    screen : Screen
        Canvas, modified in place
    seed : Point
        Plane coordinate inside the region
    colour : Color
        New colour

    Returns
    -------
    int
        Number of pixels recoloured (0 for a no-op)

    Notes
    -----
    No-op when the seed maps off-screen or already has ``colour``, which
    makes the fill idempotent.
    """
    start = to_pixel(screen, seed)
    if not in_bounds(start, screen):
        logger.debug(f"Fill seed {seed} maps off-screen to {tuple(start)}; nothing to do")
        return 0

    pixels = screen.pixels
    target = colour.as_array()
    original = pixels[start.x, start.y].copy()
    if np.array_equal(original, target):
        return 0

    width, height = screen.horizontal_resolution, screen.vertical_resolution
    # Walk a plain-list copy of the "still original colour" mask, then write
    # the visited set back in one numpy assignment
    matches = np.all(pixels == original, axis=2).tolist()
    visited = np.zeros((width, height), dtype=bool)

    stack = [(start.x, start.y)]
    filled = 0
    while stack:
        x, y = stack.pop()
        if not (0 <= x < width and 0 <= y < height):
            continue
        if not matches[x][y]:
            continue
        matches[x][y] = False
        visited[x, y] = True
        filled += 1
        for dx, dy in _NEIGHBOURS:
            stack.append((x + dx, y + dy))

    pixels[visited] = target
    logger.debug(f"Filled {filled} pixels from {tuple(start)} with {colour.to_hex()}")
    return filled
