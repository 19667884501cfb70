"""Nonparametric bootstrap for the sample median.

This module draws resamples with replacement from a numeric sample, collects
the median of each resample, and forms a percentile confidence interval from
the sorted bootstrap distribution. Randomness always comes from an explicit
``np.random.Generator``; the global NumPy state is never used.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from accelstats.utils.helpers import (
    InvalidInputError,
    as_float_vector,
    check_n_boot,
    normalize_ci_level,
)

if TYPE_CHECKING:
    from numpy.typing import NDArray

__all__ = [
    "DEFAULT_BOOTSTRAP_ITERATIONS",
    "DEFAULT_CI_LEVEL",
    "BootConfig",
    "boot_median_ci",
    "bootstrap_medians",
    "percentile_indices",
]

_LOGGER = logging.getLogger(__name__)

# Default bootstrap replications
DEFAULT_BOOTSTRAP_ITERATIONS: int = 2000
DEFAULT_CI_LEVEL: float = 0.95

# Upper bound on resample elements materialised at once (rows x sample size)
_MAX_BLOCK_ELEMENTS: int = 1 << 22

# Decimals kept before ceil/floor of the percentile positions
_INDEX_ROUND_DECIMALS: int = 10


@dataclass
class BootConfig:
    """Bootstrap configuration.

    Notes
    -----
    - Replications: default is 2000 (project-wide).
    - Confidence level: probability in (0, 1), default 0.95.
    - Reproducibility: use ``seed`` to initialize the RNG deterministically
      (``np.random.default_rng``). ``seed=None`` draws fresh OS entropy.

    """

    n_boot: int = DEFAULT_BOOTSTRAP_ITERATIONS
    ci_level: float = DEFAULT_CI_LEVEL
    seed: int | None = None

    def __post_init__(self) -> None:
        self.n_boot = check_n_boot(self.n_boot)
        self.ci_level = normalize_ci_level(self.ci_level)

    def make_rng(self) -> np.random.Generator:
        """Return a fresh generator seeded from this configuration."""
        return np.random.default_rng(self.seed)


def _resolve_rng(
    rng: np.random.Generator | None, seed: Any,
) -> np.random.Generator:
    if rng is not None and seed is not None:
        raise InvalidInputError("Pass either rng or seed, not both.")
    if rng is not None:
        if not isinstance(rng, np.random.Generator):
            raise InvalidInputError("rng must be a numpy.random.Generator.")
        return rng
    return np.random.default_rng(seed)


def percentile_indices(n_boot: int, ci_level: float = DEFAULT_CI_LEVEL) -> tuple[int, int]:
    """Zero-based positions of the CI bounds in a sorted bootstrap distribution.

    lower = ceil(B * (1 - level) / 2) and upper = floor(B * (1 - (1 - level) / 2)),
    both clamped to ``[0, B - 1]``. The products are rounded before ceil/floor so
    that e.g. ``1000 * (1 - 0.95) / 2`` maps to 25 and not 26.
    """
    B = check_n_boot(n_boot)
    level = normalize_ci_level(ci_level)
    alpha = 1.0 - level
    lo = int(np.ceil(np.round(B * alpha / 2.0, _INDEX_ROUND_DECIMALS)))
    hi = int(np.floor(np.round(B * (1.0 - alpha / 2.0), _INDEX_ROUND_DECIMALS)))
    lo = min(max(lo, 0), B - 1)
    hi = min(max(hi, 0), B - 1)
    # odd B with a tiny level lets the two positions cross by one
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi


def bootstrap_medians(
    x: Any,
    n_boot: int,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> NDArray[np.float64]:
    """Return the median of each of ``n_boot`` resamples of ``x`` (unsorted).

    Resamples have the length of the full sample and are drawn from all of its
    entries, missing ones included; missing values are dropped only when the
    median of a resample is taken. A resample made entirely of missing values
    yields NaN.
    """
    xa = as_float_vector(x, name="sample")
    B = check_n_boot(n_boot)
    missing = np.isnan(xa)
    if xa.size == 0 or bool(missing.all()):
        raise InvalidInputError("sample has no non-missing values; the median is undefined.")
    gen = _resolve_rng(rng, seed)

    n = xa.size
    block = max(1, min(B, _MAX_BLOCK_ELEMENTS // n))
    _LOGGER.debug("bootstrap_medians: n=%d B=%d block=%d", n, B, block)

    medians = np.empty(B, dtype=np.float64)
    has_missing = bool(missing.any())
    for start in range(0, B, block):
        stop = min(start + block, B)
        idx = gen.integers(0, n, size=(stop - start, n))
        draws = xa[idx]
        if has_missing:
            with warnings.catch_warnings():
                # all-missing rows are reported once by the caller
                warnings.simplefilter("ignore", RuntimeWarning)
                medians[start:stop] = np.nanmedian(draws, axis=1)
        else:
            medians[start:stop] = np.median(draws, axis=1)
    return medians


def boot_median_ci(
    x: Any,
    n_boot: int | None = None,
    ci_level: float | None = None,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    boot: BootConfig | None = None,
) -> tuple[float, float]:
    """Percentile bootstrap confidence interval for the median.

    Parameters
    ----------
    x : sequence of float
        Sample; NaN (or ``None``) marks a missing value.
    n_boot : int, optional
        Number of resamples. Defaults to ``boot.n_boot`` or 2000.
    ci_level : float, optional
        Confidence level in (0, 1). Defaults to ``boot.ci_level`` or 0.95.
    seed, rng
        Randomness source; at most one may be given.
    boot : BootConfig, optional
        Supplies any of ``n_boot``, ``ci_level`` and ``seed`` not passed
        explicitly.

    Returns
    -------
    (lower, upper) : tuple of float

    Raises
    ------
    InvalidInputError
        Empty or all-missing sample, non-positive ``n_boot``, or ``ci_level``
        outside (0, 1).

    """
    if boot is not None:
        n_boot = boot.n_boot if n_boot is None else n_boot
        ci_level = boot.ci_level if ci_level is None else ci_level
        if seed is None and rng is None:
            seed = boot.seed
    B = check_n_boot(DEFAULT_BOOTSTRAP_ITERATIONS if n_boot is None else n_boot)
    level = normalize_ci_level(ci_level, default=DEFAULT_CI_LEVEL)

    medians = bootstrap_medians(x, B, rng=rng, seed=seed)
    # NaN marks an undefined median; +/-inf medians are kept
    defined = medians[~np.isnan(medians)]
    if defined.size < B:
        warnings.warn(
            f"{B - defined.size} of {B} resamples contained only missing values "
            "and were excluded from the median distribution.",
            RuntimeWarning,
            stacklevel=2,
        )
    if defined.size == 0:
        raise InvalidInputError("No resample produced a defined median.")

    defined.sort()
    lo, hi = percentile_indices(defined.size, level)
    return float(defined[lo]), float(defined[hi])
