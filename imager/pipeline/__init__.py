from .transform_pipeline import process_batch
from .image_generator import default_fractal_params, generate_fractal_image, generate_solid_image
