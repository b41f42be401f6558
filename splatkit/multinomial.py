"""Weighted sampling of distinct indices."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def multinomial_sample(
    weights: Sequence[float] | np.ndarray,
    n: int,
    rng: np.random.Generator | None = None,
) -> list[int]:
    """Draw ``n`` distinct indices, each with probability proportional to its weight.

    NaN weights count as zero. Raises ValueError when the weights are invalid or
    fewer than ``n`` indices can be drawn.
    """
    if rng is None:
        rng = np.random.default_rng()
    raw = np.asarray(weights, dtype=float).ravel()

    def failure(reason: str) -> ValueError:
        return ValueError(
            f"Failed to sample from weights ({reason}). Counts: {raw.size} "
            f"Infinities: {int(np.isinf(raw).sum())} NaN: {int(np.isnan(raw).sum())}"
        )

    if n < 0:
        raise ValueError("sample count must not be negative")
    if n > raw.size:
        raise failure("more samples than weights")
    cleaned = np.where(np.isnan(raw), 0.0, raw)
    if np.any(cleaned < 0):
        raise failure("negative weight")
    positive = cleaned > 0
    if int(positive.sum()) < n:
        raise failure("too few non-zero weights")
    if n == 0:
        return []

    # Efraimidis-Spirakis: keep the n largest keys log(u) / w.
    candidates = np.flatnonzero(positive)
    uniform = rng.random(candidates.size)
    with np.errstate(divide="ignore"):
        keys = np.log(uniform) / cleaned[candidates]
    order = np.argsort(-keys, kind="stable")[:n]
    return [int(i) for i in candidates[order]]