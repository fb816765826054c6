import logging
import sys
from typing import Optional, Sequence

from ..errors import ImagerError, MismatchedPathCountError, UsageError
from ..models.request import BatchRequest, GenerationMode
from ..pipeline.image_generator import generate_fractal_image, generate_solid_image
from ..pipeline.transform_pipeline import process_batch
from .argument_resolver import build_request, parse_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1           # decode/encode/transform failure
EXIT_USAGE = 2             # argparse convention
EXIT_MISMATCH = -1         # reported as 255 by the shell


def configure_logging(level: str = "INFO") -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def run(request) -> int:
    if isinstance(request, BatchRequest):
        outcomes = process_batch(request)
        return EXIT_OK if all(o.ok for o in outcomes) else EXIT_FAILURE

    if request.mode is GenerationMode.FRACTAL:
        generate_fractal_image(request.output, progress=sys.stderr.isatty())
    else:
        generate_solid_image(request.output, request.color)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        args = parse_args(argv)
        configure_logging(args.log_level)
        request = build_request(args)
        return run(request)
    except MismatchedPathCountError as err:
        print(err)
        return EXIT_MISMATCH
    except UsageError as err:
        print(f"imager: error: {err}", file=sys.stderr)
        return EXIT_USAGE
    except ImagerError as err:
        # DecodeError, EncodeError, TransformError
        logger.error("%s", err)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
