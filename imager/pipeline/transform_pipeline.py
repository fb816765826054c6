"""
Transform Pipeline
Opens each input image, applies the requested transforms in their fixed
order and writes the result to the paired output path.
"""

import logging
from typing import List

from ..errors import DecodeError, EncodeError, TransformError
from ..models.request import BatchRequest, FailurePolicy, PairOutcome
from ..services.image_service import ImageService
from ..services.transform_service import TransformService

logger = logging.getLogger(__name__)


def process_batch(
    request: BatchRequest,
    *,
    image_service: ImageService | None = None,
    transform_service: TransformService | None = None,
) -> List[PairOutcome]:
    """
    Run every (input, output) pair of the request, one after another.

    With FailurePolicy.ABORT the first DecodeError/EncodeError/TransformError
    propagates and nothing after it is processed. With FailurePolicy.CONTINUE
    the error is logged, recorded on that pair's outcome and the batch moves on.

    Args:
        request: Validated BatchRequest (equal-length inputs/outputs).
        image_service: Service for loading and saving images
        transform_service: Service applying the TransformRequest

    Returns:
        List[PairOutcome]: one outcome per pair processed, in list order.
    """
    image_service = image_service or ImageService()
    transform_service = transform_service or TransformService(image_service)

    pairs = request.pairs
    logger.info("Processing %d image(s) with %d transform(s)", len(pairs), len(request.transforms))

    outcomes: List[PairOutcome] = []
    for i, (input_path, output_path) in enumerate(pairs, 1):
        logger.debug("Pair %d/%d: %s -> %s", i, len(pairs), input_path, output_path)
        try:
            img = image_service.load(input_path)
            transform_service.apply(img, request.transforms)
            image_service.save(img, output_path)
        except (DecodeError, EncodeError, TransformError) as err:
            if request.policy is FailurePolicy.ABORT:
                raise
            logger.error("Skipping %s: %s", input_path, err)
            outcomes.append(PairOutcome(input_path, output_path, ok=False, error=str(err)))
            continue

        print(f"Finished processing {input_path} into {output_path}...")
        outcomes.append(PairOutcome(input_path, output_path, ok=True))

    failed = sum(not o.ok for o in outcomes)
    if failed:
        logger.warning("%d of %d image(s) failed", failed, len(pairs))
    return outcomes
