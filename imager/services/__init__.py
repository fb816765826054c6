from .image_service import ImageService
from .transform_service import TransformService
from .generation_service import GenerationService
