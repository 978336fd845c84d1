from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from thumbfit.core.bounds import Bounds, validate_bounds
from thumbfit.core.errors import InvalidInputError

SizeArray = Union[np.ndarray, Sequence[Sequence[float]]]


def _validate_sizes(sizes: np.ndarray) -> np.ndarray:
    if sizes.ndim != 2 or sizes.shape[1] != 2:
        raise InvalidInputError(f"Natural sizes must have shape (N, 2), got {sizes.shape}")

    negative = np.flatnonzero(np.any(sizes < 0, axis=1))
    if negative.size:
        row = int(negative[0])
        raise InvalidInputError(f"Negative natural size at row {row}: {sizes[row].tolist()}")

    filled = np.count_nonzero(sizes > 0, axis=1)
    partial = np.flatnonzero(filled == 1)
    if partial.size:
        row = int(partial[0])
        raise InvalidInputError(f"Partially specified natural size at row {row}: {sizes[row].tolist()}")
    return filled == 2


def _divisors(width: np.ndarray, height: np.ndarray, bounds: Bounds) -> np.ndarray:
    min_width_ratio = width / bounds.min_width
    max_width_ratio = width / bounds.max_width
    min_height_ratio = height / bounds.min_height
    max_height_ratio = height / bounds.max_height

    overflow = (max_width_ratio > 1) | (max_height_ratio > 1)
    underflow = ~overflow & ((min_width_ratio < 1) | (min_height_ratio < 1))

    overflow_divisor = np.where(max_width_ratio >= max_height_ratio, max_width_ratio, max_height_ratio)
    underflow_divisor = np.where(min_width_ratio <= min_height_ratio, min_width_ratio, min_height_ratio)

    return np.where(overflow, overflow_divisor, np.where(underflow, underflow_divisor, 1.0))


def resolve_many(naturals: SizeArray, bounds: Bounds) -> np.ndarray:
    """Vectorized ``resolve`` over an ``(N, 2)`` array of natural sizes.

    Returns an ``(N, 2)`` int64 array; unknown sizes and empty bounds give
    ``(0, 0)`` rows.
    """
    sizes = np.asarray(naturals, dtype=np.float64)
    if sizes.size == 0:
        sizes = sizes.reshape(0, 2)
    known = _validate_sizes(sizes)
    validate_bounds(bounds)

    targets = np.zeros(sizes.shape, dtype=np.int64)
    if bounds.is_empty or not known.any():
        return targets

    width = sizes[:, 0]
    height = sizes[:, 1]
    in_bounds = (
        (width >= bounds.min_width)
        & (width <= bounds.max_width)
        & (height >= bounds.min_height)
        & (height <= bounds.max_height)
    )

    divisor = np.where(in_bounds | ~known, 1.0, _divisors(width, height, bounds))
    scaled = sizes / divisor[:, None]
    targets[known] = np.trunc(scaled[known]).astype(np.int64)
    return targets
