"""
Tests for the display helpers.
"""

import matplotlib
matplotlib.use("Agg")  # Use non-interactive backend to avoid display issues
import matplotlib.pyplot as plt
import numpy as np
import pytest

from wavegrid.rendering import (
    amplitude_to_rgb,
    animate_fields,
    plot_field,
    sigmoid,
)


def test_sigmoid():
    assert sigmoid(0.0) == pytest.approx(0.5)
    assert sigmoid(1.0, steepness=0.8) == pytest.approx(1.0 / (1.0 + np.exp(-0.8)))
    values = sigmoid(np.array([-10.0, -1.0, 0.0, 1.0, 10.0]))
    assert np.all(np.diff(values) > 0)
    assert np.all((values > 0) & (values < 1))
# end def test_sigmoid


def test_amplitude_to_rgb():
    field = np.array([[0.0, 2.0], [-2.0, 0.0]], dtype=np.float32)
    rgb = amplitude_to_rgb(field)
    assert rgb.shape == (2, 2, 3)
    np.testing.assert_allclose(rgb[..., 0], sigmoid(field))
    np.testing.assert_array_equal(rgb[..., 1], 0.0)
    np.testing.assert_array_equal(rgb[..., 2], 1.0)
    assert rgb[0, 0, 0] == pytest.approx(0.5)
# end def test_amplitude_to_rgb


def test_plot_field_saves_figure(tmp_path):
    field = np.zeros((12, 10))
    field[6, 5] = 1.0
    output = tmp_path / "plots" / "field.png"

    fig = plot_field(field, {"colormap": "viridis", "show_colorbar": False}, title="Test", output=output)

    assert output.exists()
    assert fig.axes[0].get_title() == "Test"
    plt.close(fig)
# end def test_plot_field_saves_figure


def test_animate_fields(tmp_path):
    frames = [np.full((8, 8), value) for value in (-1.0, 0.0, 1.0)]
    output = tmp_path / "anim.gif"

    anim = animate_fields(frames, time_step=0.5, output=output, fps=5)

    assert output.exists()
    assert anim is not None
    plt.close("all")
# end def test_animate_fields


def test_animate_fields_requires_frames():
    with pytest.raises(ValueError):
        animate_fields([], time_step=0.1)
    # end with
# end def test_animate_fields_requires_frames
