"""Device selection for dense matrix products.

The least-squares kernels multiply through :func:`dot`, which runs on a CUDA
device via CuPy when one is requested and present and on NumPy otherwise.
Either way the product comes back as a float64 NumPy array.

The device is requested with ``ACCELSTATS_DEVICE`` (``gpu``/``cuda`` or
``cpu``) or the shorthand flag ``ACCELSTATS_USE_GPU=1``. An explicit
``ACCELSTATS_DEVICE`` wins over the flag.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any

import numpy as np

try:  # pragma: no cover - optional dependency
    import cupy as _cp  # type: ignore
    _CUPY_OK = True
except ImportError:  # pragma: no cover - optional dependency
    _cp = None  # type: ignore
    _CUPY_OK = False


_LOGGER = logging.getLogger(__name__)

DEVICE_ENV = "ACCELSTATS_DEVICE"
USE_GPU_ENV = "ACCELSTATS_USE_GPU"

_GPU_NAMES = frozenset({"gpu", "cuda"})
_TRUE_FLAGS = frozenset({"1", "true", "yes", "on"})


def gpu_requested() -> bool:
    """Whether the environment asks for the GPU product path."""
    dev = os.environ.get(DEVICE_ENV, "").strip().lower()
    if dev:
        return dev in _GPU_NAMES
    return os.environ.get(USE_GPU_ENV, "").strip().lower() in _TRUE_FLAGS


@lru_cache(maxsize=1)
def gpu_available() -> bool:
    """Return True if CuPy is importable and sees at least one CUDA device."""
    if not _CUPY_OK:
        return False
    try:  # pragma: no cover - environment-specific
        return int(_cp.cuda.runtime.getDeviceCount()) > 0  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError) as exc:  # pragma: no cover - environment-specific
        _LOGGER.debug("No usable CUDA device, products stay on NumPy: %s", exc)
        return False


def gpu_enabled() -> bool:
    return gpu_requested() and gpu_available()


def dot(A: Any, B: Any, prefer_gpu: bool | None = None) -> np.ndarray:
    """Float64 product ``A @ B`` as a NumPy array.

    ``prefer_gpu`` overrides the environment; a GPU request without a device
    quietly runs on NumPy. Device memory is released after a GPU product.
    """
    Ad = np.asarray(A, dtype=np.float64)
    Bd = np.asarray(B, dtype=np.float64)
    use_gpu = gpu_requested() if prefer_gpu is None else bool(prefer_gpu)
    if not (use_gpu and gpu_available()):
        return Ad @ Bd
    _LOGGER.debug("dot: %s @ %s on GPU", Ad.shape, Bd.shape)
    try:  # pragma: no cover - environment-specific
        out = _cp.asarray(Ad) @ _cp.asarray(Bd)  # type: ignore[attr-defined]
        return _cp.asnumpy(out)  # type: ignore[attr-defined]
    finally:  # pragma: no cover - environment-specific
        free_gpu_cache()


class DeviceGuard:
    """Pin products to ``"cpu"`` or ``"gpu"`` for the duration of a block.

    Sets ``ACCELSTATS_DEVICE`` and restores its previous value on exit.
    """

    def __init__(self, device: str):
        name = str(device).strip().lower()
        if name not in _GPU_NAMES and name != "cpu":
            raise ValueError(f"device must be 'cpu' or 'gpu', got {device!r}.")
        self.device = "cpu" if name == "cpu" else "gpu"
        self._saved: str | None = None

    def __enter__(self):
        self._saved = os.environ.get(DEVICE_ENV)
        os.environ[DEVICE_ENV] = self.device
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._saved is None:
            os.environ.pop(DEVICE_ENV, None)
        else:
            os.environ[DEVICE_ENV] = self._saved
        return False


def free_gpu_cache() -> None:
    """Return pooled CuPy device and pinned memory to the driver."""
    if not _CUPY_OK:
        return
    try:  # pragma: no cover - environment-specific
        _cp.get_default_memory_pool().free_all_blocks()  # type: ignore[attr-defined]
        _cp.get_default_pinned_memory_pool().free_all_blocks()  # type: ignore[attr-defined]
    except (AttributeError, RuntimeError) as exc:  # pragma: no cover - environment-specific
        _LOGGER.debug("GPU memory pool release failed: %s", exc)
