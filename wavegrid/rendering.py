"""
Display helpers for the wave field.

The solver only exposes the raw amplitudes of the current layer. These
helpers squash them into colours the way the tile renderer does, and draw
snapshots or animations with matplotlib for the command-line front-end.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib import animation
from matplotlib.colors import ListedColormap

# Steepness of the amplitude squashing used for display.
DEFAULT_STEEPNESS = 0.8


def sigmoid(amplitude: Union[float, np.ndarray], steepness: float = DEFAULT_STEEPNESS) -> Union[float, np.ndarray]:
    """
    Logistic squashing of an amplitude into ``(0, 1)``.

    Args:
        amplitude (float or numpy.ndarray): Raw field amplitude.
        steepness (float): Slope of the logistic curve at zero.

    Returns:
        float or numpy.ndarray: ``1 / (1 + exp(-steepness * amplitude))``.
    """
    return 1.0 / (1.0 + np.exp(-steepness * np.asarray(amplitude, dtype=np.float64)))
# end def sigmoid


def amplitude_to_rgb(field: np.ndarray, steepness: float = DEFAULT_STEEPNESS) -> np.ndarray:
    """
    Map a field to tile colours: red carries the squashed amplitude, blue is full.

    Args:
        field (numpy.ndarray): Amplitudes of shape (dimx, dimy).
        steepness (float): Slope of the squashing function.

    Returns:
        numpy.ndarray: RGB values in ``[0, 1]``, shape (dimx, dimy, 3).
    """
    rgb = np.zeros(field.shape + (3,), dtype=np.float64)
    rgb[..., 0] = sigmoid(field, steepness)
    rgb[..., 2] = 1.0
    return rgb
# end def amplitude_to_rgb


def _tile_colormap(steps: int = 256) -> ListedColormap:
    """Colormap going from blue (0, 0, 1) to magenta (1, 0, 1)."""
    colors = np.zeros((steps, 4))
    colors[:, 0] = np.linspace(0.0, 1.0, steps)
    colors[:, 2] = 1.0
    colors[:, 3] = 1.0
    return ListedColormap(colors, name="wavegrid_tiles")
# end def _tile_colormap


def plot_field(
    field: np.ndarray,
    plot_cfg: Optional[Dict[str, Any]] = None,
    title: Optional[str] = None,
    output: Optional[Path] = None,
    show: bool = False,
) -> plt.Figure:
    """
    Draw one snapshot of the field.

    The x axis of the grid runs horizontally and y runs upward, matching a
    bottom-left window origin.

    Args:
        field (numpy.ndarray): Amplitudes of shape (dimx, dimy).
        plot_cfg (dict, optional): Plot settings (``figsize``, ``dpi``,
            ``colormap``, ``steepness``, ``show_colorbar``).
        title (str, optional): Figure title.
        output (Path, optional): Where to save the figure.
        show (bool): Open an interactive window.

    Returns:
        matplotlib.figure.Figure: The created figure.
    """
    plot_cfg = plot_cfg or {}
    steepness = plot_cfg.get("steepness", DEFAULT_STEEPNESS)
    colormap = plot_cfg.get("colormap", "tiles")
    cmap = _tile_colormap() if colormap == "tiles" else colormap

    fig, ax = plt.subplots(figsize=plot_cfg.get("figsize", (8, 8)), dpi=plot_cfg.get("dpi", 100))
    img = ax.imshow(
        sigmoid(np.asarray(field).T, steepness),
        origin="lower",
        cmap=cmap,
        vmin=0.0,
        vmax=1.0,
        interpolation="nearest",
    )
    if plot_cfg.get("show_colorbar", True):
        cbar = plt.colorbar(img, ax=ax)
        cbar.set_label("Squashed amplitude")
    # end if
    ax.set_xlabel("x (cells)")
    ax.set_ylabel("y (cells)")
    if title:
        ax.set_title(title)
    # end if
    fig.tight_layout()

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=plot_cfg.get("dpi", 100))
    # end if

    if show:
        plt.show()
    # end if

    return fig
# end def plot_field


def animate_fields(
    fields: Sequence[np.ndarray],
    time_step: float,
    output: Optional[Path] = None,
    fps: int = 20,
    plot_cfg: Optional[Dict[str, Any]] = None,
) -> animation.FuncAnimation:
    """
    Animate a sequence of field snapshots.

    Args:
        fields (Sequence[numpy.ndarray]): Snapshots of shape (dimx, dimy).
        time_step (float): Simulated time between two snapshots.
        output (Path, optional): GIF file to write with the pillow writer.
        fps (int): Frames per second.
        plot_cfg (dict, optional): Same settings as :func:`plot_field`.

    Returns:
        matplotlib.animation.FuncAnimation: The animation object.

    Raises:
        ValueError: If ``fields`` is empty.
    """
    if len(fields) == 0:
        raise ValueError("No field snapshots to animate")
    # end if

    plot_cfg = plot_cfg or {}
    steepness = plot_cfg.get("steepness", DEFAULT_STEEPNESS)
    colormap = plot_cfg.get("colormap", "tiles")
    cmap = _tile_colormap() if colormap == "tiles" else colormap

    fig, ax = plt.subplots(figsize=plot_cfg.get("figsize", (8, 8)), dpi=plot_cfg.get("dpi", 100))
    img = ax.imshow(
        sigmoid(np.asarray(fields[0]).T, steepness),
        origin="lower",
        cmap=cmap,
        vmin=0.0,
        vmax=1.0,
        interpolation="nearest",
    )
    ax.set_xlabel("x (cells)")
    ax.set_ylabel("y (cells)")
    timestamp = ax.text(
        0.02, 0.02, "Time: 0.000 s",
        transform=ax.transAxes,
        bbox=dict(facecolor="white", alpha=0.7),
    )

    def update(frame_index):
        img.set_array(sigmoid(np.asarray(fields[frame_index]).T, steepness))
        timestamp.set_text(f"Time: {frame_index * time_step:.3f} s")
        return img, timestamp
    # end def update

    anim = animation.FuncAnimation(
        fig, update, frames=len(fields),
        interval=1000 / fps, blit=True
    )

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        anim.save(output, writer="pillow", fps=fps)
    # end if

    return anim
# end def animate_fields
