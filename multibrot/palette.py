from math import log
from typing import NamedTuple

import numpy as np

from .errors import ConfigurationError


class Color(NamedTuple):
    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)


class Palette:
    """Read-only color ramp indexed by iteration count, 0..ceiling.

    Index ``ceiling`` is the black sentinel for points that never escaped.
    """

    def __init__(self, colors: np.ndarray):
        colors = np.array(colors, dtype=np.uint8)
        colors.setflags(write=False)
        self.colors = colors
        self.ceiling = len(colors) - 1

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> Color:
        r, g, b = self.colors[index]
        return Color(int(r), int(g), int(b))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]


def ramp_position(i: int, ceiling: int) -> float:
    """Position of index ``i`` on the 0..3 green/red/blue ramp."""
    if i == 0:
        return 3.0
    # log(ceiling-1) vanishes for ceiling == 2
    if i == ceiling - 1:
        return 3.0
    return 3.0 * (log(i) / log(ceiling - 1))


def ramp_color(j: float) -> Color:
    if j < 1:
        return Color(0, int(255 * j), 0)
    if j < 2:
        return Color(int(255 * (j - 1)), 255, 0)
    return Color(255, 255, min(255, int(255 * (j - 2))))


def make_palette(ceiling: int) -> Palette:
    if ceiling <= 1:
        raise ConfigurationError(f"iteration ceiling must be > 1, got {ceiling}")
    colors = np.empty((ceiling + 1, 3), dtype=np.uint8)
    for i in range(ceiling):
        colors[i] = ramp_color(ramp_position(i, ceiling))
    colors[ceiling] = BLACK
    return Palette(colors)
