"""
Tests for the Laplacian stencils and the leapfrog interior update.
"""

import numpy as np
import pytest

from wavegrid import (
    ConfigurationError,
    GridState,
    Layer,
    StencilEvaluator,
    StencilOrder,
    five_point_laplacian,
    fourth_order_laplacian,
)


def quadratic_field(nx, ny):
    x, y = np.meshgrid(np.arange(nx, dtype=np.float64), np.arange(ny, dtype=np.float64), indexing="ij")
    return x ** 2 + 3.0 * y ** 2 + 2.0 * x * y + 5.0
# end def quadratic_field


def test_order_selection():
    assert StencilOrder.from_boundary_size(1) is StencilOrder.FIVE_POINT
    assert StencilOrder.from_boundary_size(4) is StencilOrder.FOURTH_ORDER
    assert StencilEvaluator(1).boundary_size == 1
    assert StencilEvaluator(4).boundary_size == 4
# end def test_order_selection


@pytest.mark.parametrize("boundary_size", [0, 2, 3, 5])
def test_unsupported_order_raises(boundary_size):
    with pytest.raises(ConfigurationError):
        StencilOrder.from_boundary_size(boundary_size)
    # end with
    with pytest.raises(ConfigurationError):
        StencilEvaluator(boundary_size)
    # end with
# end def test_unsupported_order_raises


def test_five_point_matches_formula():
    rng = np.random.default_rng(0)
    field = rng.standard_normal((7, 6))
    laplacian = five_point_laplacian(field)

    assert laplacian.shape == (5, 4)
    for x in range(1, 6):
        for y in range(1, 5):
            expected = field[x + 1, y] + field[x - 1, y] + field[x, y + 1] + field[x, y - 1] - 4 * field[x, y]
            assert laplacian[x - 1, y - 1] == pytest.approx(expected)
        # end for
    # end for
# end def test_five_point_matches_formula


def test_laplacians_are_exact_on_quadratics():
    """Both stencils recover the constant Laplacian of a quadratic field."""
    field = quadratic_field(12, 11)
    np.testing.assert_allclose(five_point_laplacian(field), 8.0)
    np.testing.assert_allclose(fourth_order_laplacian(field, halo=2), 8.0, rtol=1e-12)
    np.testing.assert_allclose(fourth_order_laplacian(field, halo=4), 8.0, rtol=1e-12)
# end def test_laplacians_are_exact_on_quadratics


def test_fourth_order_shape_and_dtype():
    field = np.ones((13, 10), dtype=np.float32)
    laplacian = fourth_order_laplacian(field, halo=4)
    assert laplacian.shape == (5, 2)
    assert laplacian.dtype == np.float32
    np.testing.assert_allclose(laplacian, 0.0, atol=1e-6)
# end def test_fourth_order_shape_and_dtype


@pytest.mark.parametrize("boundary_size", [1, 4])
def test_compute_interior_matches_leapfrog(boundary_size):
    """New interior is tau * lap(prev) + 2 * prev - two_back."""
    dimx, dimy = 14, 12
    b = boundary_size
    rng = np.random.default_rng(1)
    grid = GridState(dimx, dimy, dtype=np.float64)
    previous = rng.standard_normal((dimx, dimy))
    two_back = rng.standard_normal((dimx, dimy))
    grid.buffer(Layer.PREVIOUS)[:] = previous
    grid.buffer(Layer.TWO_BACK)[:] = two_back
    tau = np.full((dimx, dimy), 0.09)

    interior = StencilEvaluator(b).compute_interior(dimx, dimy, tau, grid)

    if b == 1:
        laplacian = five_point_laplacian(previous)
    else:
        laplacian = fourth_order_laplacian(previous, halo=4)
    # end if
    inner = (slice(b, dimx - b), slice(b, dimy - b))
    expected = 0.09 * laplacian + 2 * previous[inner] - two_back[inner]
    assert interior.shape == (dimx - 2 * b, dimy - 2 * b)
    np.testing.assert_allclose(interior, expected)
# end def test_compute_interior_matches_leapfrog


@pytest.mark.parametrize("boundary_size", [1, 4])
def test_zero_history_gives_zero_interior(boundary_size):
    grid = GridState(12, 12)
    tau = np.full((12, 12), 0.25, dtype=np.float32)
    interior = StencilEvaluator(boundary_size).compute_interior(12, 12, tau, grid)
    assert not np.any(interior)
# end def test_zero_history_gives_zero_interior


def test_five_point_locality():
    """An impulse only reaches its four direct neighbours in one update."""
    grid = GridState(9, 9, dtype=np.float64)
    grid.write(Layer.PREVIOUS, 4, 4, 1.0)
    tau = np.full((9, 9), 0.25)

    interior = StencilEvaluator(1).compute_interior(9, 9, tau, grid)
    full = np.zeros((9, 9))
    full[1:-1, 1:-1] = interior

    assert full[4, 4] == pytest.approx(0.25 * -4 + 2)
    for x, y in [(3, 4), (5, 4), (4, 3), (4, 5)]:
        assert full[x, y] == pytest.approx(0.25)
    # end for
    assert np.count_nonzero(full) == 5
# end def test_five_point_locality


def test_fourth_order_locality():
    """An impulse spreads over a cross of radius two."""
    grid = GridState(15, 15, dtype=np.float64)
    grid.write(Layer.PREVIOUS, 7, 7, 1.0)
    tau = np.full((15, 15), 0.1)

    interior = StencilEvaluator(4).compute_interior(15, 15, tau, grid)
    full = np.zeros((15, 15))
    full[4:-4, 4:-4] = interior

    assert full[7, 7] == pytest.approx(0.1 * -5.0 + 2)
    assert full[6, 7] == pytest.approx(0.1 * 4.0 / 3.0)
    assert full[7, 9] == pytest.approx(0.1 * -1.0 / 12.0)
    assert np.count_nonzero(full) == 9
    assert full[6, 6] == 0.0
# end def test_fourth_order_locality
