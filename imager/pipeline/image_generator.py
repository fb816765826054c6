"""
Standalone generation modes: solid-colour background and fractal render.
Neither reads an input image; both write a single output file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..config import env_float, env_int
from ..errors import ConfigError
from ..models.fractal_params import FractalParams
from ..services.generation_service import GenerationService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)


def default_fractal_params() -> FractalParams:
    """Fractal parameters from FRACTAL_* variables (raises ConfigError)."""
    max_iter = env_int("FRACTAL_MAX_ITER", 255, minimum=0)
    if max_iter > 255:
        raise ConfigError("FRACTAL_MAX_ITER", str(max_iter), "in 0..255")
    return FractalParams(
        width=env_int("FRACTAL_WIDTH", 800, minimum=1),
        height=env_int("FRACTAL_HEIGHT", 800, minimum=1),
        c=complex(env_float("FRACTAL_C_REAL", -0.4), env_float("FRACTAL_C_IMAG", 0.6)),
        max_iter=max_iter,
    )


def generate_fractal_image(
    output: str | Path,
    params: FractalParams | None = None,
    *,
    generation_service: GenerationService | None = None,
    image_service: ImageService | None = None,
    progress: bool = False,
) -> Path:
    """Render the fractal and save it to `output` (raises EncodeError)."""
    params = params or default_fractal_params()
    image_service = image_service or ImageService()
    generation_service = generation_service or GenerationService(image_service)

    logger.info("Rendering %dx%d fractal to %s", params.width, params.height, output)
    img = generation_service.render(params, progress=progress)
    image_service.save(img, output)
    print(f"Generated fractal into {output}...")
    return img.path


def generate_solid_image(
    output: str | Path,
    color: Sequence[int],
    width: int | None = None,
    height: int | None = None,
    *,
    generation_service: GenerationService | None = None,
    image_service: ImageService | None = None,
) -> Path:
    """
    Fill a width x height canvas with `color` and save it to `output`.
    The canvas size defaults to GEN_WIDTH x GEN_HEIGHT, read on each call.
    """
    width = width if width is not None else env_int("GEN_WIDTH", 800, minimum=1)
    height = height if height is not None else env_int("GEN_HEIGHT", 800, minimum=1)
    image_service = image_service or ImageService()
    generation_service = generation_service or GenerationService(image_service)

    logger.info("Generating %dx%d solid %s image to %s", width, height, tuple(color), output)
    img = generation_service.generate_solid(width, height, color)
    image_service.save(img, output)
    print(f"Generated solid background into {output}...")
    return img.path
