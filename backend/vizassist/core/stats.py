"""
stats.py - Statistical Helpers for the Chart Engine

  - Five-number summary (floor-index quantiles, no interpolation)
  - Fixed-width histogram binning
  - Pseudo-KDE: bin counts smoothed by a 3-point moving average
  - Pearson correlation from raw sums

These are deliberately simple. The density curve in particular is NOT a
kernel density estimate; charts depend on its exact shape.
"""

import math
from typing import Sequence

import numpy as np

from ..models.schemas import FiveNumberSummary, Point

HISTOGRAM_BINS = 15
DENSITY_BINS = 30
VIOLIN_BINS = 20
RIDGELINE_BINS = 40


def five_number_summary(values: Sequence[float]) -> FiveNumberSummary:
    """
    min, q1, median, q3, max using `sorted[floor(n * q)]`.

    For [1, 2, 3, 4, 100]: q1=2, median=3, q3=4.
    An empty input gives all zeros.
    """
    if len(values) == 0:
        return FiveNumberSummary(min=0, q1=0, median=0, q3=0, max=0)
    ordered = sorted(values)
    n = len(ordered)
    return FiveNumberSummary(
        min=ordered[0],
        q1=ordered[math.floor(n * 0.25)],
        median=ordered[math.floor(n * 0.5)],
        q3=ordered[math.floor(n * 0.75)],
        max=ordered[-1],
    )


def _bin_indices(values: np.ndarray, lo: float, width: float, bin_count: int) -> np.ndarray:
    idx = np.floor((values - lo) / width).astype(int)
    return np.minimum(idx, bin_count - 1)


def histogram_bins(values: Sequence[float], bin_count: int = HISTOGRAM_BINS) -> tuple[list[int], float, float]:
    """
    Count values into `bin_count` equal-width bins over [min, max].

    Returns (counts, min, bin_width). The max value lands in the last bin;
    a zero-width range uses a bin width of 1.
    """
    vals = np.asarray(values, dtype=float)
    if vals.size == 0:
        return [0] * bin_count, 0.0, 1.0
    lo = float(vals.min())
    hi = float(vals.max())
    width = (hi - lo) / bin_count or 1.0
    counts = np.bincount(_bin_indices(vals, lo, width, bin_count), minlength=bin_count)
    return [int(c) for c in counts], lo, width


def smooth(counts: Sequence[float]) -> list[float]:
    """
    3-point weighted moving average: (prev + 2*curr + next) / 4.

    A neighbour past either end, or one whose count is 0, is replaced by
    the current value.
    """
    last = len(counts) - 1
    out = []
    for i, cur in enumerate(counts):
        prev = counts[i - 1] if i > 0 and counts[i - 1] else cur
        nxt = counts[i + 1] if i < last and counts[i + 1] else cur
        out.append((prev + cur * 2 + nxt) / 4)
    return out


def pseudo_density(values: Sequence[float], bin_count: int = DENSITY_BINS) -> list[Point]:
    """
    Approximate a density curve by binning then smoothing.

    Point i sits at x = min + (i / bin_count) * range, i.e. at the left
    edge of its bin.
    """
    vals = np.asarray(values, dtype=float)
    if vals.size == 0:
        return []
    lo = float(vals.min())
    hi = float(vals.max())
    span = hi - lo or 1.0

    idx = np.floor(((vals - lo) / span) * bin_count).astype(int)
    idx = np.minimum(idx, bin_count - 1)
    counts = np.bincount(idx, minlength=bin_count).tolist()

    return [
        Point(x=lo + (i / bin_count) * span, y=y)
        for i, y in enumerate(smooth(counts))
    ]


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    Returns 0 for mismatched or empty inputs and whenever either
    variance term is zero.
    """
    n = len(x)
    if n != len(y) or n == 0:
        return 0.0
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = n * sum_xy - sum_x * sum_y
    radicand = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if radicand <= 0:
        return 0.0
    return numerator / math.sqrt(radicand)
