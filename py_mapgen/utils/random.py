"""
Random number generation utilities.

Site placement draws from a NumPy ``Generator`` created per run, so separate
generation runs never share random state. Seeds may be integers or strings;
string seeds are hashed to a stable integer so the same string gives the same
sites on every interpreter.
"""

import hashlib
from typing import Optional, Union

import numpy as np

Seed = Union[int, str, None]


def normalize_seed(seed: Seed) -> Optional[int]:
    """
    Convert a user facing seed into an integer seed for NumPy.

    Args:
        seed: Integer, string or None (non-deterministic)

    Returns:
        Nonnegative integer seed, or None
    """
    if seed is None:
        return None
    if isinstance(seed, (bool, np.bool_)):
        raise TypeError("Seed must be an int or str, not bool")
    if isinstance(seed, (int, np.integer)):
        return abs(int(seed))
    digest = hashlib.sha256(str(seed).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def make_rng(seed: Seed = None) -> np.random.Generator:
    """
    Create a fresh random generator for one generation run.

    Args:
        seed: Seed string or number

    Returns:
        Seeded NumPy Generator
    """
    return np.random.default_rng(normalize_seed(seed))
