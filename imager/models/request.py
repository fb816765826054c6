from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .transform import TransformRequest


class FailurePolicy(Enum):
    """What the batch does when one input/output pair fails."""
    ABORT = "abort"          # first failure ends the whole batch
    CONTINUE = "continue"    # record the failure, move on to the next pair


class GenerationMode(Enum):
    FRACTAL = "fractal"
    SOLID = "solid"


@dataclass(frozen=True)
class BatchRequest:
    inputs: Tuple[Path, ...]
    outputs: Tuple[Path, ...]
    transforms: TransformRequest = field(default_factory=TransformRequest)
    policy: FailurePolicy = FailurePolicy.ABORT

    @property
    def pairs(self):
        return list(zip(self.inputs, self.outputs))


@dataclass(frozen=True)
class GenerationRequest:
    mode: GenerationMode
    output: Path
    color: Optional[Tuple[int, int, int]] = None   # only for SOLID


@dataclass
class PairOutcome:
    """Result of processing one (input, output) pair."""
    input_path: Path
    output_path: Path
    ok: bool
    error: Optional[str] = None
