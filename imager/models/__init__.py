from .image import Image
from .fractal_params import FractalParams
from .transform import (
    ROTATION_ANGLES,
    Blur,
    Brighten,
    Crop,
    Grayscale,
    Invert,
    Operation,
    Rotate,
    TransformRequest,
)
from .request import (
    BatchRequest,
    FailurePolicy,
    GenerationMode,
    GenerationRequest,
    PairOutcome,
)
