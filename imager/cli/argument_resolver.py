"""
Argument Resolver
Turns raw command-line tokens into either a BatchRequest (transform mode)
or a GenerationRequest (fractal / solid fill). No file is touched here.
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import re
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dotenv import load_dotenv

from ..errors import MismatchedPathCountError, UsageError
from ..models.request import (
    BatchRequest,
    FailurePolicy,
    GenerationMode,
    GenerationRequest,
)
from ..models.transform import (
    ROTATION_ANGLES,
    Blur,
    Brighten,
    Crop,
    Grayscale,
    Invert,
    Rotate,
    TransformRequest,
)

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

FRACTAL_OUTPUT = os.getenv("FRACTAL_OUTPUT", "fractal.jpg")
GEN_OUTPUT = os.getenv("GEN_OUTPUT", "gen_bg.jpg")

_FLAG_RE = re.compile(r"argument (\S+?):")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class _RaisingParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        m = _FLAG_RE.search(message)
        raise UsageError(message, flag=m.group(1) if m else None)


# ─── value parsers ────────────────────────────────────────────────
# argparse reports an ArgumentTypeError as "argument <flag>: <message>"
def _finite_float(value: str) -> float:
    message = f"invalid float value: {value!r}"
    try:
        number = float(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(message) from err
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(message)
    return number


def _non_negative_int(value: str) -> int:
    message = f"invalid unsigned integer value: {value!r}"
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(message) from err
    if number < 0:
        raise argparse.ArgumentTypeError(message)
    return number


def _channel(value: str) -> int:
    message = f"invalid 8-bit channel value: {value!r} (expected 0..255)"
    try:
        number = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(message) from err
    if not 0 <= number <= 255:
        raise argparse.ArgumentTypeError(message)
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingParser(
        prog="imager",
        description="Batch image transforms plus solid-fill and fractal generation.",
    )
    parser.add_argument("-i", "--input", nargs="+", metavar="PATH", help="Input files.")
    parser.add_argument("-o", "--output", nargs="+", metavar="PATH", help="Output files.")

    parser.add_argument("-b", "--blur", type=_finite_float, metavar="SIGMA",
                        help="Blur image by some amount. [float]")
    parser.add_argument("-a", "--brighten", type=int, metavar="AMOUNT",
                        help="Brighten image by some amount. [integer]")
    parser.add_argument("-c", "--crop", type=_non_negative_int, nargs=4,
                        metavar=("X", "Y", "W", "H"),
                        help="Crop image. Takes dimensions: x, y, w, and h. [uinteger]")
    parser.add_argument("-r", "--rotate", type=int, choices=ROTATION_ANGLES,
                        help="Rotate image clockwise.")
    parser.add_argument("-v", "--invert", action="store_true", help="Invert image.")
    parser.add_argument("-g", "--grayscale", action="store_true", help="Grayscale image.")

    parser.add_argument("-f", "--fractal", action="store_true",
                        help=f"Make fractal (to the first output, default {FRACTAL_OUTPUT}).")
    parser.add_argument("-n", "--gen", type=_channel, nargs=3, metavar=("R", "G", "B"),
                        help=f"Generate a solid image (to the first output, default {GEN_OUTPUT}).")

    parser.add_argument("-k", "--keep-going", action="store_true",
                        default=_env_flag("IMAGER_KEEP_GOING"),
                        help="Continue with the next image when one fails.")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO").upper(),
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging verbosity.")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _transforms_from_args(args: argparse.Namespace) -> TransformRequest:
    operations: List = []
    if args.blur is not None:
        operations.append(Blur(args.blur))
    if args.brighten is not None:
        operations.append(Brighten(args.brighten))
    if args.crop is not None:
        operations.append(Crop(*args.crop))
    if args.rotate is not None:
        operations.append(Rotate(args.rotate))
    if args.invert:
        operations.append(Invert())
    if args.grayscale:
        operations.append(Grayscale())
    return TransformRequest.of(operations)


def build_request(args: argparse.Namespace) -> Union[BatchRequest, GenerationRequest]:
    """
    Validate parsed arguments and build the request for this invocation.

    Fractal mode is checked first, then solid generation; either one wins
    over any transform flags.

    Raises:
        UsageError: -i/-o missing outside generation mode.
        MismatchedPathCountError: input and output counts differ.
    """
    first_output = Path(args.output[0]) if args.output else None

    if args.fractal or args.gen is not None:
        transforms = _transforms_from_args(args)
        if transforms:
            logger.debug("Generation mode: ignoring %d transform flag(s)", len(transforms))
        if args.fractal:
            return GenerationRequest(GenerationMode.FRACTAL, first_output or Path(FRACTAL_OUTPUT))
        return GenerationRequest(GenerationMode.SOLID, first_output or Path(GEN_OUTPUT),
                                 color=tuple(args.gen))

    if not args.input:
        raise UsageError("the following arguments are required: -i/--input", flag="-i/--input")
    if not args.output:
        raise UsageError("the following arguments are required: -o/--output", flag="-o/--output")
    if len(args.input) != len(args.output):
        raise MismatchedPathCountError(len(args.input), len(args.output))

    return BatchRequest(
        inputs=tuple(Path(p) for p in args.input),
        outputs=tuple(Path(p) for p in args.output),
        transforms=_transforms_from_args(args),
        policy=FailurePolicy.CONTINUE if args.keep_going else FailurePolicy.ABORT,
    )


def resolve(argv: Optional[Sequence[str]] = None) -> Union[BatchRequest, GenerationRequest]:
    """Parse and validate `argv` in one step."""
    return build_request(parse_args(argv))
