import warnings

import pytest
import numpy as np
import pandas as pd
from accelstats.core import bootstrap as bs
from accelstats.utils.helpers import InvalidInputError

# ---------------------------------------------------------------------
# Unit Tests: Percentile positions
# ---------------------------------------------------------------------

def test_percentile_indices_standard():
    # 1000 * 0.05 / 2 carries representation noise; must still map to 25 / 975
    assert bs.percentile_indices(1000, 0.95) == (25, 975)
    assert bs.percentile_indices(2000, 0.90) == (100, 1900)
    assert bs.percentile_indices(100, 0.5) == (25, 75)

def test_percentile_indices_clamped():
    # single replication: both formulas overshoot, clamp to the only draw
    assert bs.percentile_indices(1, 0.95) == (0, 0)
    # level so close to 1 that the upper position equals B
    assert bs.percentile_indices(10, 1.0 - 1e-12) == (0, 9)
    lo, hi = bs.percentile_indices(2, 0.99)
    assert 0 <= lo <= hi <= 1

def test_percentile_indices_never_cross():
    for B in (1, 2, 3, 5, 7, 11, 101):
        for level in np.linspace(0.01, 0.99, 99):
            lo, hi = bs.percentile_indices(B, float(level))
            assert 0 <= lo <= hi <= B - 1

def test_percentile_indices_monotone_in_level():
    for B in (100, 101, 1000):
        levels = np.linspace(0.05, 0.999, 200)
        pos = [bs.percentile_indices(B, float(c)) for c in levels]
        lows = [p[0] for p in pos]
        highs = [p[1] for p in pos]
        assert all(a >= b for a, b in zip(lows, lows[1:]))
        assert all(a <= b for a, b in zip(highs, highs[1:]))

# ---------------------------------------------------------------------
# Unit Tests: Bootstrap median distribution
# ---------------------------------------------------------------------

def test_bootstrap_medians_shape_and_support():
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    med = bs.bootstrap_medians(x, 500, seed=3)
    assert med.shape == (500,)
    # odd-length resamples: every median is one of the sample values
    assert np.all(np.isin(med, x))

def test_bootstrap_medians_blocks(monkeypatch):
    # force many small blocks
    monkeypatch.setattr(bs, "_MAX_BLOCK_ELEMENTS", 7)
    x = np.full(4, 2.5)
    med = bs.bootstrap_medians(x, 37, seed=0)
    assert med.shape == (37,)
    assert np.all(med == 2.5)

def test_bootstrap_medians_drop_missing_within_resample():
    x = np.array([4.0, np.nan, np.nan])
    med = bs.bootstrap_medians(x, 300, seed=11)
    finite = med[np.isfinite(med)]
    assert finite.size > 0
    assert np.all(finite == 4.0)

# ---------------------------------------------------------------------
# Unit Tests: Confidence interval
# ---------------------------------------------------------------------

@pytest.mark.parametrize("n_boot,level", [(1, 0.5), (10, 0.9), (1000, 0.95), (57, 0.99)])
def test_constant_sample_degenerate_interval(n_boot, level):
    x = [7.25] * 12
    assert bs.boot_median_ci(x, n_boot, level, seed=0) == (7.25, 7.25)

def test_lower_not_above_upper(rng):
    for _ in range(25):
        x = rng.standard_normal(int(rng.integers(1, 40)))
        B = int(rng.integers(1, 300))
        level = float(rng.uniform(0.01, 0.99))
        lo, hi = bs.boot_median_ci(x, B, level, rng=rng)
        assert lo <= hi

def test_seed_determinism():
    x = np.random.default_rng(5).exponential(size=60)
    a = bs.boot_median_ci(x, 800, 0.9, seed=2024)
    b = bs.boot_median_ci(x, 800, 0.9, seed=2024)
    c = bs.boot_median_ci(x, 800, 0.9, rng=np.random.default_rng(2024))
    assert a == b == c

def test_interval_widens_with_level():
    x = np.random.default_rng(8).standard_normal(80)
    widths = []
    for level in (0.5, 0.8, 0.9, 0.95, 0.99):
        lo, hi = bs.boot_median_ci(x, 1000, level, seed=99)
        widths.append(hi - lo)
    assert all(a <= b for a, b in zip(widths, widths[1:]))

def test_interval_covers_true_median_across_seeds():
    x = [1, 2, 3, 4, 5]
    for seed in range(20):
        lo, hi = bs.boot_median_ci(x, 1000, 0.95, seed=seed)
        assert lo <= 3.0 <= hi

def test_default_level_is_95():
    x = np.arange(30, dtype=float)
    assert bs.boot_median_ci(x, 400, seed=1) == bs.boot_median_ci(x, 400, 0.95, seed=1)

def test_missing_values_in_sample():
    x = np.array([1.0, 2.0, np.nan, 3.0, 4.0, np.nan, 5.0])
    lo, hi = bs.boot_median_ci(x, 1000, 0.95, seed=4)
    assert np.isfinite(lo) and np.isfinite(hi)
    assert 1.0 <= lo <= hi <= 5.0

def test_all_missing_resamples_warn():
    x = [1.0, np.nan]
    with pytest.warns(RuntimeWarning, match="only missing values"):
        lo, hi = bs.boot_median_ci(x, 200, 0.95, seed=0)
    assert (lo, hi) == (1.0, 1.0)

def test_no_warning_without_missing():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        bs.boot_median_ci([1.0, 2.0, 3.0], 100, seed=0)

def test_pandas_nullable_input():
    s = pd.Series([1.0, None, 3.0, 2.0], dtype="Float64")
    lo, hi = bs.boot_median_ci(s, 200, 0.9, seed=0)
    assert 1.0 <= lo <= hi <= 3.0

# ---------------------------------------------------------------------
# Unit Tests: Input validation
# ---------------------------------------------------------------------

def test_empty_sample_rejected():
    with pytest.raises(InvalidInputError, match="median is undefined"):
        bs.boot_median_ci([], 100)

def test_all_missing_sample_rejected():
    with pytest.raises(InvalidInputError):
        bs.boot_median_ci([np.nan, None, np.nan], 100)

@pytest.mark.parametrize("n_boot", [0, -5, 2.5, True, "10"])
def test_bad_n_boot_rejected(n_boot):
    with pytest.raises(InvalidInputError, match="n_boot"):
        bs.boot_median_ci([1.0, 2.0], n_boot)

@pytest.mark.parametrize("level", [1.0, 0.0, -0.1, 95, float("nan")])
def test_bad_ci_level_rejected(level):
    with pytest.raises(InvalidInputError, match="ci_level"):
        bs.boot_median_ci([1.0, 2.0], 100, level)

def test_invalid_input_is_value_error():
    assert issubclass(InvalidInputError, ValueError)

def test_seed_and_rng_exclusive():
    with pytest.raises(InvalidInputError, match="either rng or seed"):
        bs.boot_median_ci([1.0, 2.0], 10, seed=1, rng=np.random.default_rng(1))

def test_rng_type_checked():
    with pytest.raises(InvalidInputError, match="Generator"):
        bs.boot_median_ci([1.0, 2.0], 10, rng=np.random.RandomState(0))

# ---------------------------------------------------------------------
# Unit Tests: BootConfig
# ---------------------------------------------------------------------

def test_boot_config_defaults():
    b = bs.BootConfig()
    assert b.n_boot == bs.DEFAULT_BOOTSTRAP_ITERATIONS == 2000
    assert b.ci_level == 0.95
    assert b.seed is None

def test_boot_config_validation():
    with pytest.raises(InvalidInputError):
        bs.BootConfig(n_boot=0)
    with pytest.raises(InvalidInputError):
        bs.BootConfig(ci_level=1.5)

def test_boot_config_drives_estimator():
    x = np.random.default_rng(1).standard_normal(25)
    cfg = bs.BootConfig(n_boot=300, ci_level=0.8, seed=17)
    assert bs.boot_median_ci(x, boot=cfg) == bs.boot_median_ci(x, 300, 0.8, seed=17)
    # explicit arguments take precedence over the config
    assert bs.boot_median_ci(x, 100, boot=cfg) == bs.boot_median_ci(x, 100, 0.8, seed=17)

def test_boot_config_make_rng():
    cfg = bs.BootConfig(seed=3)
    assert cfg.make_rng().integers(0, 1000) == np.random.default_rng(3).integers(0, 1000)
