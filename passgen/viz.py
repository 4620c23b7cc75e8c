"""
viz.py: Matplotlib helpers for generator audits

Aim:
- Small, dependency-light (matplotlib only).
- Return (fig, ax) so callers can further customize or save.
- Accept plain dicts/arrays from `metrics.py`.


Quick start

>>> from passgen.viz import plot_counts_histogram, plot_uniformity_residuals
>>> fig, ax = plot_counts_histogram({0: 120, 1: 130, 2: 121}, title="uniform_int(3)")

>>> obs = [100, 98, 102, 100]
>>> exp = [100, 100, 100, 100]
>>> fig, ax = plot_uniformity_residuals(obs, exp, title="Residuals")

>>> fig, ax = plot_password_entropy_curve(range(8, 33), alphabet_size=90)
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple
import math

import numpy as np
import matplotlib.pyplot as plt

from .errors import InvalidArgumentError
from .strength import Strength


#Basic helpers

def _autox_labels(ax, labels: Sequence[str]) -> None:
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=0)


#Plots

def plot_counts_histogram(
    counts: Mapping[int, int],
    *,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Bar chart of outcome counts, in key order.
    """
    keys = sorted(counts.keys())
    vals = [int(counts[k]) for k in keys]

    fig, ax = plt.subplots()
    ax.bar(range(len(vals)), vals)
    _autox_labels(ax, [str(k) for k in keys])
    ax.set_ylabel("Counts")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_uniformity_residuals(
    observed: Sequence[float],
    expected: Sequence[float],
    *,
    title: Optional[str] = "Uniformity residuals (observed − expected)",
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Visualize how far each category is from uniform expectation.

    Inputs can be counts or probabilities, as long as both use the same scale.
    """
    observed = np.asarray(observed, dtype=float).reshape(-1)
    expected = np.asarray(expected, dtype=float).reshape(-1)
    if observed.shape != expected.shape:
        raise InvalidArgumentError("observed and expected must have same length.")

    resid = observed - expected
    labels = [str(i) for i in range(len(resid))]

    fig, ax = plt.subplots()
    ax.bar(range(len(resid)), resid)
    _autox_labels(ax, labels)
    ax.axhline(0.0)
    ax.set_ylabel("Observed − Expected")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


def plot_password_entropy_curve(
    lengths: Sequence[int],
    alphabet_size: int,
    *,
    title: Optional[str] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot H = length * log2(alphabet_size) over a set of lengths, with the
    strength band boundaries as dashed lines.
    """
    lengths = list(lengths)
    if not lengths:
        raise InvalidArgumentError("Need at least one length.")
    if any(L <= 0 for L in lengths):
        raise InvalidArgumentError("All lengths must be positive.")
    if alphabet_size < 2:
        raise InvalidArgumentError("alphabet_size must be >= 2")

    H = [L * math.log2(alphabet_size) for L in lengths]

    fig, ax = plt.subplots()
    ax.plot(lengths, H, marker="o")
    for band in Strength:
        if band.min_bits > 0:
            ax.axhline(band.min_bits, linestyle="--", linewidth=0.8)
            ax.annotate(band.label, (lengths[0], band.min_bits), fontsize=8)
    ax.set_xlabel("Password length")
    ax.set_ylabel("Entropy (bits)")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig, ax


__all__ = [
    "plot_counts_histogram",
    "plot_uniformity_residuals",
    "plot_password_entropy_curve",
]
