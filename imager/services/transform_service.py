from __future__ import annotations

import logging
from typing import Callable, Dict

import cv2
import numpy as np

from ..errors import TransformError
from ..models.image import Image
from ..models.transform import (
    Blur,
    Brighten,
    Crop,
    Grayscale,
    Invert,
    Operation,
    Rotate,
    TransformRequest,
)
from .image_service import ImageService

logger = logging.getLogger(__name__)


class TransformService:
    """
    Business-level helper for the per-image photometric/geometric edits.

    • Every helper takes an (H, W, 3) uint8 RGB array and returns a *new* one.
    • `apply` walks a TransformRequest in its canonical order and updates
      the Image in place through ImageService.
    """

    def __init__(self, image_service: ImageService | None = None):
        self.image_service = image_service or ImageService()
        self._dispatch: Dict[type, Callable[[np.ndarray, Operation], np.ndarray]] = {
            Blur: lambda px, op: self.blur(px, op.amount),
            Brighten: lambda px, op: self.brighten(px, op.amount),
            Crop: lambda px, op: self.crop(px, op.x, op.y, op.width, op.height),
            Rotate: lambda px, op: self.rotate(px, op.angle),
            Invert: lambda px, op: self.invert(px),
            Grayscale: lambda px, op: self.grayscale(px),
        }

    # ─── Public API ────────────────────────────────────────────────
    def apply(self, img: Image, request: TransformRequest) -> Image:
        pixels = img.pixels
        for op in request:
            logger.debug("Applying %s to %s", op, img.path)
            pixels = self._dispatch[type(op)](pixels, op)
        self.image_service.update_pixels(img, pixels)
        return img

    # ─── Individual transforms ─────────────────────────────────────
    @staticmethod
    def blur(pixels: np.ndarray, sigma: float) -> np.ndarray:
        """
        Gaussian blur; kernel size is derived from sigma by OpenCV.
        A non-positive sigma falls back to 1.0.
        """
        if sigma <= 0:
            sigma = 1.0
        try:
            return cv2.GaussianBlur(pixels, (0, 0), sigmaX=sigma, sigmaY=sigma)
        except cv2.error as err:
            # OpenCV rejects sigmas whose derived kernel size overflows
            raise TransformError(f"Cannot blur with sigma {sigma}: {err}") from err

    @staticmethod
    def brighten(pixels: np.ndarray, amount: int) -> np.ndarray:
        """Add `amount` to every channel, saturating to [0, 255]."""
        amount = max(-255, min(255, int(amount)))
        return np.clip(pixels.astype(np.int16) + amount, 0, 255).astype(np.uint8)

    @staticmethod
    def crop(pixels: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
        """
        Crop the (x, y, width, height) rectangle, clipped to the image bounds.
        """
        img_h, img_w = pixels.shape[:2]
        x0, y0 = min(x, img_w), min(y, img_h)
        x1, y1 = min(x0 + width, img_w), min(y0 + height, img_h)

        if x0 >= x1 or y0 >= y1:
            raise TransformError(
                f"Crop ({x}, {y}, {width}, {height}) leaves nothing of a {img_w}x{img_h} image"
            )
        return pixels[y0:y1, x0:x1].copy()

    @staticmethod
    def rotate(pixels: np.ndarray, angle: int) -> np.ndarray:
        """Rotate clockwise by 90, 180 or 270 degrees."""
        if angle not in (90, 180, 270):
            raise TransformError(f"Unsupported rotation angle: {angle}")
        return np.ascontiguousarray(np.rot90(pixels, k=-(angle // 90)))

    @staticmethod
    def invert(pixels: np.ndarray) -> np.ndarray:
        return 255 - pixels

    @staticmethod
    def grayscale(pixels: np.ndarray) -> np.ndarray:
        # back to 3 channels so every Image stays RGB
        gray = cv2.cvtColor(pixels, cv2.COLOR_RGB2GRAY)
        return cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)
