from __future__ import annotations

import os
import random
from typing import Any


def normalize_seed(seed: Any) -> int | None:
    """Map a user seed onto a non-negative integer.

    Integers are used as-is; strings or other hashable objects are mapped
    deterministically through Python's random module.
    """
    if seed is None:
        return None
    if isinstance(seed, bool):
        raise TypeError("seed must be an int, a string or None, not bool")
    if isinstance(seed, int):
        if seed < 0:
            raise ValueError("seed must be non-negative")
        return seed
    rng = random.Random(seed)
    return rng.randint(0, 2**63 - 1)


class Runtime:
    """Environment-driven defaults for the package facade."""

    def __init__(
        self,
        *,
        seed_env_var: str = "MATX_SEED",
        slow_ops_env_var: str = "MATX_SLOW_OPS_WARN",
        default_slow_ops_threshold: int = 50_000_000,
    ) -> None:
        self._seed_env_var = seed_env_var
        self._slow_ops_env_var = slow_ops_env_var
        self._default_slow_ops_threshold = default_slow_ops_threshold

    def initial_seed(self) -> int | None:
        env = os.environ.get(self._seed_env_var)
        if not env:
            return None
        env = env.strip()
        try:
            return normalize_seed(int(env))
        except ValueError:
            return normalize_seed(env)

    def slow_ops_threshold(self) -> int:
        env = os.environ.get(self._slow_ops_env_var)
        if not env:
            return self._default_slow_ops_threshold
        try:
            value = int(env.strip())
        except ValueError as e:
            raise ValueError(
                f"{self._slow_ops_env_var} must be an integer, got {env!r}"
            ) from e
        if value < 0:
            raise ValueError(f"{self._slow_ops_env_var} must be non-negative, got {value}")
        return value
