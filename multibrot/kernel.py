import numpy as np
from math import floor, isfinite, log

from .config import RenderConfig
from .palette import Color, Palette


class MultibrotSet:
    """Escape-time coloring of z -> z**power + c over the configured viewport.

    ``color`` evaluates one pixel; ``render_band`` evaluates whole rows at once
    and is what the workers run. Both use the principal branch for non-integer
    powers and the same smooth iteration count.
    """

    def __init__(self, config: RenderConfig, palette: Palette):
        self.config = config
        self.palette = palette
        self.max_iterations = palette.ceiling
        self.escape_radius = config.escape_radius

    def point(self, px: int, py: int) -> complex:
        cfg = self.config
        return complex(cfg.real_min + px*cfg.scale_x, cfg.imag_min + py*cfg.scale_y)

    def smooth_count(self, it: int, modulus: float, power: float) -> float:
        nu = log(log(modulus)/power / log(2)) / log(max(2.0, abs(power)))
        value = it + 1 - nu
        if not isfinite(value):
            return 0.0
        return max(0.0, min(value, float(self.max_iterations)))

    def count_iterations(self, c: complex, power: float) -> float:
        z = c  # 0**power is 0
        for it in range(self.max_iterations):
            if it > 0:
                try:
                    z = z**power + c
                except OverflowError:
                    return 0.0
            modulus = abs(z)
            if not modulus <= self.escape_radius:
                return self.smooth_count(it, modulus, power)
        return float(self.max_iterations)

    def interpolate(self, value: float) -> Color:
        lo = floor(value)
        hi = min(lo + 1, self.max_iterations)
        t = value - lo
        c1 = self.palette.colors[lo]
        c2 = self.palette.colors[hi]
        return Color(*(int(float(a)*(1 - t) + float(b)*t) for a, b in zip(c1, c2)))

    def color(self, px: int, py: int, power: float) -> Color:
        return self.interpolate(self.count_iterations(self.point(px, py), power))

    # --- Vectorized band evaluation ---

    def band_points(self, first_row: int, row_count: int) -> np.ndarray:
        cfg = self.config
        c = np.empty((row_count, cfg.width), dtype=np.complex128)
        c.real = cfg.real_min + np.arange(cfg.width)*cfg.scale_x
        c.imag = (cfg.imag_min + np.arange(first_row, first_row + row_count)*cfg.scale_y)[:, np.newaxis]
        return c

    def count_iterations_array(self, c: np.ndarray, power: float) -> np.ndarray:
        c = c.ravel()
        counts = np.full(c.shape, float(self.max_iterations))
        # Only the points still inside the escape radius are iterated
        active = np.arange(c.size)
        z = c.copy()
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            for it in range(self.max_iterations):
                if it > 0:
                    z = z**power + c[active]
                modulus = np.abs(z)
                escaped = ~(modulus <= self.escape_radius)
                if escaped.any():
                    counts[active[escaped]] = self.smooth_count_array(it, modulus[escaped], power)
                    active = active[~escaped]
                    z = z[~escaped]
                    if active.size == 0:
                        break
        return counts

    def smooth_count_array(self, it: int, modulus: np.ndarray, power: float) -> np.ndarray:
        nu = np.log(np.log(modulus)/power / log(2)) / log(max(2.0, abs(power)))
        value = it + 1 - nu
        return np.where(np.isfinite(value), np.clip(value, 0.0, self.max_iterations), 0.0)

    def interpolate_array(self, counts: np.ndarray) -> np.ndarray:
        lo = np.floor(counts).astype(np.intp)
        hi = np.minimum(lo + 1, self.max_iterations)
        t = (counts - lo)[:, np.newaxis]
        colors = self.palette.colors
        return (colors[lo]*(1 - t) + colors[hi]*t).astype(np.uint8)

    def render_band(self, first_row: int, row_count: int, power: float, out: np.ndarray = None) -> np.ndarray:
        """Colors of rows ``first_row .. first_row+row_count`` as a (rows, width, 3) uint8 array."""
        width = self.config.width
        if out is None:
            out = np.empty((row_count, width, 3), dtype=np.uint8)
        counts = self.count_iterations_array(self.band_points(first_row, row_count), power)
        out[...] = self.interpolate_array(counts).reshape(row_count, width, 3)
        return out
