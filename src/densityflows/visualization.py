import matplotlib.pyplot as plt
import numpy as np

from .config import DEFAULT_SAMPLE_COUNT
from .density.change_of_variables import (
    density_area,
    naive_pdf,
    normal_pdf,
    sample_function,
    transformed_pdf,
)
from .transforms.transformation.composed_transformation import compose_transformations

STROKE = '#555'


def plot_transformation(ax, transformation, domain, sample_count=100, title=None):
    """Draws the curve y = f(x) over `domain`."""
    xs, ys = sample_function(transformation.f, domain, sample_count)
    ax.plot(xs, ys, color=STROKE, linewidth=2)
    ax.set_xlim(*domain)
    ax.grid(True, alpha=0.3)
    if title:
        ax.set_title(title)
    return ax


def plot_density(ax, pdf, domain, y_limit=None, sample_count=DEFAULT_SAMPLE_COUNT, title=None, show_area=True):
    """
    Draws a density outline with a faint baseline and, optionally, its area
    in the title.
    """
    xs, ys = sample_function(pdf, domain, sample_count)
    ax.axhline(0.0, color=(90 / 255, 74 / 255, 58 / 255, 0.2), linewidth=1)
    ax.plot(xs, ys, color=STROKE, linewidth=1.5)
    ax.set_xlim(*domain)
    if y_limit is not None:
        ax.set_ylim(*y_limit)
    label = title or ""
    if show_area:
        area = density_area(xs, ys)
        label = f"{label}\nArea: {area:.3f}" if label else f"Area: {area:.3f}"
    if label:
        ax.set_title(label)
    ax.grid(True, alpha=0.3)
    return ax


def plot_transformation_chain(transforms, domains, base_pdf=normal_pdf, base_domain=(-10, 10), show=False):
    """
    Draws each map of a chain above the density obtained after applying the
    chain up to and including that map.

    Column 0 holds the base density; column i+1 the curve of transforms[i]
    (over domains[i]) and the density of the composition of transforms[:i+1]
    (over the output domain of transforms[i], which is domains[i+1], or
    the last entry for the final map).

    Args:
        transforms (list of Transformation): The chain.
        domains (list of tuple): Input domain of each map, plus one output
            domain for the final map.

    Returns:
        matplotlib.figure.Figure
    """
    if len(domains) != len(transforms) + 1:
        raise ValueError("domains needs one entry per transform plus the final output domain")

    n = len(transforms)
    fig, axes = plt.subplots(2, n + 1, figsize=(4 * (n + 1), 8), squeeze=False)

    axes[0, 0].axis('off')
    plot_density(axes[1, 0], base_pdf, base_domain, title='Base density')

    for i, transform in enumerate(transforms):
        plot_transformation(axes[0, i + 1], transform, domains[i], title=repr(transform))
        composed = compose_transformations(list(transforms[: i + 1]))
        pdf = transformed_pdf(composed, base_pdf)
        plot_density(axes[1, i + 1], pdf, domains[i + 1], title=f'After step {i + 1}')

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_linear_comparison(transformation, base_pdf=normal_pdf, domain=(-3, 3), show=False):
    """
    Base density next to the naive p(f^{-1}(y)) and the correct
    p(f^{-1}(y)) |d f^{-1}/dy| for the same map.
    """
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    plot_density(axes[0], base_pdf, domain, title='p_Z(z)')
    plot_density(axes[1], naive_pdf(transformation, base_pdf), domain, title='naive')
    plot_density(axes[2], transformed_pdf(transformation, base_pdf), domain, title='correct')
    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_flow_frames(frames, max_columns=5, show=False):
    """
    Scatter plots of the intermediate frames of a flow, e.g. the output of
    NormalizingFlow.generate_frames.
    """
    num_frames = len(frames)
    columns = min(max_columns, num_frames)
    rows = int(np.ceil(num_frames / columns))
    fig, axes = plt.subplots(rows, columns, figsize=(3 * columns, 3 * rows), squeeze=False)

    for index, ax in enumerate(axes.flat):
        if index >= num_frames:
            ax.axis('off')
            continue
        points = np.asarray(frames[index].detach().cpu())
        ax.scatter(points[:, 0], points[:, 1], alpha=0.6, s=1)
        ax.set_title(f'Frame {index}')
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_loss_history(loss_history, ax=None):
    """Plots [(epoch, loss), ...]."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))
    if loss_history:
        epochs, losses = zip(*loss_history)
        ax.plot(epochs, losses, color=STROKE)
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Loss')
    ax.grid(True, alpha=0.3)
    return ax
