"""imager: batch image transforms plus solid-fill and fractal generation."""

__version__ = "1.0.0"
