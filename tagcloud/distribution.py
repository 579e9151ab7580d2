#!/usr/bin/env python3
"""
Module distribution.py
Points uniformly distributed on the unit sphere.

Uses the simplest Fibonacci lattice variant from:
  http://extremelearning.com.au/evenly-distributing-points-on-a-sphere/
"""
import math
from typing import Iterator

import numpy as np

from tagcloud.utilities import Vector3


class FibonacciLattice:
    """
    Deterministic generator of `size` points on the unit sphere.
    The same (size, index) pair always yields the same point.
    """

    THETA_PART = math.pi * (1.0 + math.sqrt(5.0))

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError(f"Lattice size must be positive, got {size}")
        self.size = size

    def item(self, index: int) -> Vector3:
        """Position of the item with a given index, 0 <= index < size."""
        k = index + 0.5

        phi = math.acos(1.0 - 2.0 * k / self.size)
        theta = self.THETA_PART * k

        return Vector3(
            math.cos(theta) * math.sin(phi),
            math.sin(theta) * math.sin(phi),
            math.cos(phi),
        )

    def points(self) -> np.ndarray:
        """The whole lattice as an (size, 3) array."""
        k = np.arange(self.size) + 0.5
        phi = np.arccos(1.0 - 2.0 * k / self.size)
        theta = self.THETA_PART * k
        return np.column_stack([
            np.cos(theta) * np.sin(phi),
            np.sin(theta) * np.sin(phi),
            np.cos(phi),
        ])

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Vector3]:
        for index in range(self.size):
            yield self.item(index)
