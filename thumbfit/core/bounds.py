from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from thumbfit.core.errors import InvalidInputError

Number = Union[int, float]


@dataclass(frozen=True)
class NaturalSize:
    width: Number = 0
    height: Number = 0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidInputError(f"Negative natural size: {self.width} x {self.height}")

    @property
    def is_empty(self) -> bool:
        return _filled_count((self.width, self.height)) == 0


@dataclass(frozen=True)
class Bounds:
    min_width: Number = 0
    max_width: Number = 0
    min_height: Number = 0
    max_height: Number = 0

    def __post_init__(self) -> None:
        if any(value < 0 for value in self.as_tuple()):
            raise InvalidInputError(f"Negative bounds: {list(self.as_tuple())}")

    def as_tuple(self) -> tuple[Number, Number, Number, Number]:
        return self.min_width, self.max_width, self.min_height, self.max_height

    @property
    def is_empty(self) -> bool:
        return _filled_count(self.as_tuple()) == 0

    def contains(self, width: float, height: float) -> bool:
        width_in_bounds = self.min_width <= width <= self.max_width
        height_in_bounds = self.min_height <= height <= self.max_height
        return width_in_bounds and height_in_bounds


@dataclass(frozen=True)
class TargetSize:
    width: int
    height: int

    @property
    def is_unconstrained(self) -> bool:
        return self.width == 0 and self.height == 0


UNCONSTRAINED = TargetSize(0, 0)


def _filled_count(values: Iterable[Number]) -> int:
    return sum(1 for value in values if value > 0)


def validate_natural(natural: NaturalSize) -> None:
    if _filled_count((natural.width, natural.height)) == 1:
        raise InvalidInputError(
            f"Partially specified natural size: {natural.width} x {natural.height}"
        )


def validate_bounds(bounds: Bounds) -> None:
    if _filled_count(bounds.as_tuple()) not in (0, 4):
        raise InvalidInputError(f"Partially specified bounds: {list(bounds.as_tuple())}")


def _scale_divisor(width: float, height: float, bounds: Bounds) -> float:
    min_width_ratio = width / bounds.min_width
    max_width_ratio = width / bounds.max_width
    min_height_ratio = height / bounds.min_height
    max_height_ratio = height / bounds.max_height

    # Max bounds are honoured before min bounds; width wins exact ties.
    if max_width_ratio > 1 or max_height_ratio > 1:
        return max_width_ratio if max_width_ratio >= max_height_ratio else max_height_ratio
    if min_width_ratio < 1 or min_height_ratio < 1:
        return min_width_ratio if min_width_ratio <= min_height_ratio else min_height_ratio
    return 1.0


def resolve(natural: NaturalSize, bounds: Bounds) -> TargetSize:
    """Pick a layout size for ``natural`` that fits ``bounds`` with its aspect ratio kept.

    Both sides are scaled by one divisor, chosen so the axis furthest over its
    maximum (or, failing that, furthest under its minimum) lands exactly on
    that limit. The other axis follows the aspect ratio and is not clamped.
    Returns ``UNCONSTRAINED`` when either input is empty.
    """
    validate_natural(natural)
    validate_bounds(bounds)

    if natural.is_empty or bounds.is_empty:
        return UNCONSTRAINED

    width = float(natural.width)
    height = float(natural.height)

    if not bounds.contains(width, height):
        divisor = _scale_divisor(width, height, bounds)
        width /= divisor
        height /= divisor

    return TargetSize(width=int(width), height=int(height))
