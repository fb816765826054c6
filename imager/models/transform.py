from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Iterable, Tuple, Union

ROTATION_ANGLES: Tuple[int, ...] = (90, 180, 270)


@dataclass(frozen=True)
class Blur:
    amount: float       # Gaussian sigma
    order: ClassVar[int] = 0


@dataclass(frozen=True)
class Brighten:
    amount: int         # added to every channel, saturating
    order: ClassVar[int] = 1


@dataclass(frozen=True)
class Crop:
    x: int
    y: int
    width: int
    height: int
    order: ClassVar[int] = 2

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"crop {name} must be >= 0, got {getattr(self, name)}")


@dataclass(frozen=True)
class Rotate:
    angle: int          # clockwise degrees
    order: ClassVar[int] = 3

    def __post_init__(self):
        if self.angle not in ROTATION_ANGLES:
            raise ValueError(f"rotation angle must be one of {ROTATION_ANGLES}, got {self.angle}")


@dataclass(frozen=True)
class Invert:
    order: ClassVar[int] = 4


@dataclass(frozen=True)
class Grayscale:
    order: ClassVar[int] = 5


Operation = Union[Blur, Brighten, Crop, Rotate, Invert, Grayscale]


@dataclass(frozen=True)
class TransformRequest:
    """
    Immutable, canonically ordered list of enabled operations.

    Whatever order the operations are passed in, they are stored (and so
    applied) as blur → brighten → crop → rotate → invert → grayscale.
    At most one operation of each kind is allowed.
    """
    operations: Tuple[Operation, ...] = ()

    def __post_init__(self):
        ordered = tuple(sorted(self.operations, key=lambda op: op.order))
        kinds = [type(op) for op in ordered]
        if len(kinds) != len(set(kinds)):
            raise ValueError("each transform may be requested at most once")
        object.__setattr__(self, "operations", ordered)

    @classmethod
    def of(cls, operations: Iterable[Operation]) -> "TransformRequest":
        return cls(tuple(operations))

    def __iter__(self):
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __bool__(self) -> bool:
        return bool(self.operations)
