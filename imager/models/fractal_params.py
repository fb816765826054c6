from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FractalParams:
    """
    Value-object for the Julia-style escape-time render.
    Defaults reproduce the reference 800x800 image.
    """
    width: int = 800
    height: int = 800
    c: complex = complex(-0.4, 0.6)   # constant added on every iteration
    max_iter: int = 255               # also the brightest green value

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas must be non-empty, got {self.width}x{self.height}")
        if not 0 <= self.max_iter <= 255:
            raise ValueError(f"max_iter must fit in one 8-bit channel, got {self.max_iter}")
