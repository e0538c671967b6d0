from __future__ import annotations

import numbers
from typing import Any, Protocol

import numpy as np

from .runtime import normalize_seed
from .warnings import MatxDTypeWarning, warn


_MATX_MODULE: Any | None = None


def _get_matx() -> Any:
    global _MATX_MODULE
    if _MATX_MODULE is None:
        import matx as _matx  # type: ignore

        _MATX_MODULE = _matx
    return _MATX_MODULE


class UniformSampler(Protocol):
    def sample(self, low: Any, high: Any) -> Any: ...


def _is_integral(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class NumpySampler:
    """Uniform sampler over the half-open range [low, high).

    Integer bounds draw integers, anything else draws floats. Backed by
    ``numpy.random.default_rng`` so a seed gives a reproducible stream.
    """

    def __init__(self, seed: int | str | None = None):
        self._seed = normalize_seed(seed)
        self._rng = np.random.default_rng(self._seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def sample(self, low: Any, high: Any) -> Any:
        if _is_integral(low) and _is_integral(high):
            return int(self._rng.integers(low, high))
        return float(self._rng.uniform(low, high))


def default_sampler() -> NumpySampler:
    return NumpySampler(_get_matx().seed)


def check_bounds(low: Any, high: Any) -> None:
    if not low < high:
        raise ValueError(f"Sampling range is empty: low={low!r} must be < high={high!r}")
    if _is_integral(low) != _is_integral(high):
        warn(
            f"Random bounds mix integer and non-integer values ({low!r}, {high!r}); "
            "cells will be sampled as floats.",
            MatxDTypeWarning,
        )


def draw(count: int, low: Any, high: Any, sampler: UniformSampler | None) -> list[Any]:
    """Draw ``count`` values from [low, high), one sampler call per cell, in order."""
    check_bounds(low, high)
    if sampler is None:
        sampler = default_sampler()
    return [sampler.sample(low, high) for _ in range(count)]
