import numpy as np
import pytest

from stereoshift.errors import ArgumentError, DimensionError, DimensionMismatch
from stereoshift.packing.side_by_side import compose_output, horiz_stack


def solid(h, w, value):
    return np.full((h, w, 4), value, dtype=np.uint8)


def test_horiz_stack_places_both_images():
    rng = np.random.default_rng(0)
    left = rng.integers(0, 256, size=(6, 4, 4), dtype=np.uint8)
    right = rng.integers(0, 256, size=(6, 9, 4), dtype=np.uint8)

    out = horiz_stack(left, right)

    assert out.shape == (6, 13, 4)
    for y in range(6):
        for x in range(13):
            expected = left[y, x] if x < 4 else right[y, x - 4]
            np.testing.assert_array_equal(out[y, x], expected)


def test_horiz_stack_height_mismatch():
    with pytest.raises(DimensionError, match="heights mismatched"):
        horiz_stack(solid(3, 2, 1), solid(4, 2, 1))


def test_dimension_mismatch_alias():
    assert DimensionMismatch is DimensionError


@pytest.mark.parametrize("layout, first, second", [
    ("LR", 200, 100),
    ("RL", 100, 200),
])
def test_compose_output_ordering(layout, first, second):
    base, synth = solid(2, 3, 100), solid(2, 3, 200)
    out = compose_output(base, synth, layout)
    assert out.shape == (2, 6, 4)
    assert np.all(out[:, :3] == first)
    assert np.all(out[:, 3:] == second)


def test_compose_output_left_only():
    base, synth = solid(2, 3, 100), solid(2, 3, 200)
    out = compose_output(base, synth, "L")
    assert out is synth


def test_compose_output_unknown_layout():
    with pytest.raises(ArgumentError, match="type"):
        compose_output(solid(1, 1, 0), solid(1, 1, 0), "TB")
