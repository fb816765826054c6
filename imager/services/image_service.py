from pathlib import Path
from typing import Union

import numpy as np

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No transform logic here."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object (raises DecodeError)."""
        return self.image_repository.load(path)

    def update_pixels(self, image: Image, new_pixels: np.ndarray) -> None:
        """
        Business-level method to replace the current image pixels.
        """
        self.image_repository.set_pixels(image, new_pixels)

    def save(self, image: Image, path: str | Path | None = None) -> None:
        """
        Business-level method to save the image, optionally to a new path
        (raises EncodeError).
        """
        if path is not None:
            image.path = Path(path)
        self.image_repository.save(image)
