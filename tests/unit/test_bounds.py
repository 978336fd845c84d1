import pytest

from thumbfit.core.bounds import UNCONSTRAINED, Bounds, NaturalSize, TargetSize, resolve
from thumbfit.core.errors import InvalidInputError

BOX = Bounds(min_width=100, max_width=400, min_height=100, max_height=400)


def test_resolve_keeps_size_inside_bounds():
    bounds = Bounds(min_width=100, max_width=200, min_height=100, max_height=200)
    assert resolve(NaturalSize(150, 120), bounds) == TargetSize(150, 120)


def test_resolve_truncates_fractional_size_inside_bounds():
    bounds = Bounds(min_width=100, max_width=200, min_height=100, max_height=200)
    assert resolve(NaturalSize(150.7, 120.2), bounds) == TargetSize(150, 120)


def test_resolve_overflow_width_pivot():
    bounds = Bounds(min_width=100, max_width=400, min_height=50, max_height=300)
    assert resolve(NaturalSize(800, 200), bounds) == TargetSize(400, 100)


def test_resolve_overflow_height_pivot():
    bounds = Bounds(min_width=100, max_width=400, min_height=100, max_height=300)
    assert resolve(NaturalSize(300, 600), bounds) == TargetSize(150, 300)


def test_resolve_overflow_leaves_other_axis_below_min():
    assert resolve(NaturalSize(1600, 100), BOX) == TargetSize(400, 25)


def test_resolve_overflow_wins_over_underflow():
    assert resolve(NaturalSize(800, 50), BOX) == TargetSize(400, 25)


def test_resolve_underflow_width_pivot():
    assert resolve(NaturalSize(50, 100), BOX) == TargetSize(100, 200)


def test_resolve_underflow_is_a_single_pass():
    # Scaling height up to its minimum pushes width past its maximum; no second pass.
    assert resolve(NaturalSize(200, 25), BOX) == TargetSize(800, 100)


def test_resolve_truncates_scaled_size():
    bounds = Bounds(min_width=100, max_width=200, min_height=10, max_height=200)
    assert resolve(NaturalSize(1000, 333), bounds) == TargetSize(200, 66)


def test_resolve_sentinel_for_unknown_natural_size():
    assert resolve(NaturalSize(0, 0), BOX) == UNCONSTRAINED
    assert UNCONSTRAINED.is_unconstrained


def test_resolve_sentinel_for_empty_bounds():
    assert resolve(NaturalSize(640, 480), Bounds()) == UNCONSTRAINED


def test_resolve_partial_natural_size_raises_before_empty_check():
    with pytest.raises(InvalidInputError, match="natural size"):
        resolve(NaturalSize(300, 0), Bounds())


@pytest.mark.parametrize(
    "bounds",
    [
        Bounds(10, 0, 0, 0),
        Bounds(10, 20, 0, 0),
        Bounds(10, 20, 10, 0),
        Bounds(0, 0, 0, 5),
    ],
)
def test_resolve_partial_bounds_raise(bounds):
    with pytest.raises(InvalidInputError, match="bounds"):
        resolve(NaturalSize(100, 100), bounds)


def test_negative_measurements_are_rejected():
    with pytest.raises(InvalidInputError):
        NaturalSize(-1, 10)
    with pytest.raises(InvalidInputError):
        Bounds(10, 20, -10, 20)


def test_invalid_input_error_is_value_error():
    assert issubclass(InvalidInputError, ValueError)


@pytest.mark.parametrize(
    "natural",
    [
        NaturalSize(1000, 333),
        NaturalSize(37, 1001),
        NaturalSize(7, 3),
        NaturalSize(4000, 3000),
        NaturalSize(123.5, 77.25),
    ],
)
def test_resolve_preserves_aspect_ratio(natural):
    target = resolve(natural, BOX)
    cross = target.width * natural.height - target.height * natural.width
    assert abs(cross) <= max(natural.width, natural.height) + 1e-6


def test_resolve_is_deterministic():
    natural = NaturalSize(1234, 567)
    assert resolve(natural, BOX) == resolve(natural, BOX)


def test_resolve_bounds_are_inclusive():
    assert resolve(NaturalSize(100, 400), BOX) == TargetSize(100, 400)


def test_resolve_ratio_of_exactly_one_is_not_overflow():
    # Width sits on its maximum, so only the height underflow applies.
    assert resolve(NaturalSize(400, 50), BOX) == TargetSize(800, 100)
