from pathlib import Path
from typing import Union
import logging
import signal

import cv2
import numpy as np
from PIL import Image as PILImage

from ..config import env_int
from ..errors import DecodeError, EncodeError
from ..models.image import Image

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O and pixel updates for Image entities.
    """
    def __init__(self, timeout: int | None = None):
        self.timeout = timeout if timeout is not None else env_int("IMAGE_LOAD_TIMEOUT", 5, minimum=0)

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise DecodeError(path, "no such file")

        # ─── timeout wrapper (SIGALRM, main thread only) ──────────────────
        use_alarm = self.timeout > 0 and hasattr(signal, "SIGALRM")
        if use_alarm:
            def _handler(signum, frame):
                raise TimeoutError(f"cv2.imread timed-out after {self.timeout}s: {path}")

            previous = signal.signal(signal.SIGALRM, _handler)
            signal.alarm(self.timeout)
        try:
            arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        except (TimeoutError, cv2.error) as err:
            raise DecodeError(path, str(err)) from err
        finally:
            if use_alarm:
                signal.alarm(0)  # always disarm
                signal.signal(signal.SIGALRM, previous)
        # ──────────────────────────────────────────────────────────────────

        if arr_bgr is None:
            raise DecodeError(path)

        logger.debug("Loaded %s (%dx%d)", path, arr_bgr.shape[1], arr_bgr.shape[0])
        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1])
        return Image(pixels=arr, path=path)

    @staticmethod
    def save(image: Image) -> None:
        if image.path is None:
            raise EncodeError("<unset>", "image has no destination path")
        try:
            PILImage.fromarray(np.ascontiguousarray(image.pixels)).save(image.path)
        except (ValueError, OSError) as err:
            # Pillow raises ValueError for unknown extensions, OSError for the rest
            raise EncodeError(image.path, str(err)) from err
        logger.debug("Saved %s", image.path)

    @staticmethod
    def set_pixels(image: Image, new_pixels: np.ndarray) -> None:
        image.pixels = new_pixels
