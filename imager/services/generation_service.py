from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from tqdm import trange

from ..models.fractal_params import FractalParams
from ..models.image import Image
from .image_service import ImageService

logger = logging.getLogger(__name__)

ESCAPE_RADIUS = 2.0


class GenerationService:
    """
    Builds images from nothing but a canvas size and a few parameters.
    *   No I/O here; returns Image objects without a path.
    *   Fractal math keeps real and imaginary parts as separate float32
        arrays and spells out z*z + c term by term, so every pixel gets
        the same rounding as a scalar single-precision loop.
    """

    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()

    # ─── Solid fill ────────────────────────────────────────────────
    def generate_solid(self, width: int, height: int, rgb: Sequence[int]) -> Image:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas must be non-empty, got {width}x{height}")
        if len(rgb) != 3 or any(not 0 <= int(v) <= 255 for v in rgb):
            raise ValueError(f"color must be three values in 0..255, got {tuple(rgb)}")

        canvas = np.empty((height, width, 3), dtype=np.uint8)
        canvas[:, :] = np.asarray(rgb, dtype=np.uint8)
        return self.image_service.create_image(canvas)

    # ─── Julia-style fractal ───────────────────────────────────────
    def synthesize_fractal(
        self,
        width: int,
        height: int,
        c: complex,
        max_iter: int,
        *,
        progress: bool = False,
    ) -> Image:
        """
        Escape-time render of z → z² + c.

        Red and blue are a gradient over x and y (0.3 per pixel, saturated
        at 255). Green is the number of iterations before |z| > 2, capped at
        `max_iter`. Pixel (x, y) starts at z = (y·3/width − 1.5) + (x·3/height − 1.5)i;
        the x/y swap is part of the established output and must stay.

        Args:
            width, height: canvas size in pixels.
            c: constant added on every iteration.
            max_iter: iteration cap (0..255).
            progress: show a tqdm bar over the iteration loop.

        Returns:
            Image: (height, width, 3) uint8 RGB, no path.
        """
        params = FractalParams(width=width, height=height, c=c, max_iter=max_iter)

        xs = np.arange(params.width, dtype=np.float32)
        ys = np.arange(params.height, dtype=np.float32)

        # Gradient background
        red_row = self._to_channel(np.float32(0.3) * xs)
        blue_col = self._to_channel(np.float32(0.3) * ys)

        # Complex-plane starting points, indexed [y, x]
        scale_x = np.float32(3.0) / np.float32(params.width)
        scale_y = np.float32(3.0) / np.float32(params.height)
        cx = ys * scale_x - np.float32(1.5)     # real part follows the pixel row
        cy = xs * scale_y - np.float32(1.5)     # imaginary part follows the column
        re = np.repeat(cx[:, None], params.width, axis=1)
        im = np.repeat(cy[None, :], params.height, axis=0)

        c_re = np.float32(params.c.real)
        c_im = np.float32(params.c.imag)
        green = np.zeros((params.height, params.width), dtype=np.uint8)

        for _ in trange(params.max_iter, desc="fractal", ncols=70, disable=not progress):
            active = np.hypot(re, im) <= ESCAPE_RADIUS
            if not active.any():
                break
            a_re, a_im = re[active], im[active]
            re[active] = (a_re * a_re - a_im * a_im) + c_re
            im[active] = (a_re * a_im + a_im * a_re) + c_im
            green[active] += 1

        canvas = np.empty((params.height, params.width, 3), dtype=np.uint8)
        canvas[:, :, 0] = red_row[None, :]
        canvas[:, :, 1] = green
        canvas[:, :, 2] = blue_col[:, None]

        logger.debug("Rendered %dx%d fractal, c=%s, max_iter=%d",
                     params.width, params.height, params.c, params.max_iter)
        return self.image_service.create_image(canvas)

    def render(self, params: FractalParams, *, progress: bool = False) -> Image:
        return self.synthesize_fractal(params.width, params.height, params.c,
                                       params.max_iter, progress=progress)

    @staticmethod
    def _to_channel(values: np.ndarray) -> np.ndarray:
        # Truncate toward zero, saturate at 255 (a wide canvas would otherwise wrap)
        return np.clip(np.trunc(values), 0, 255).astype(np.uint8)
