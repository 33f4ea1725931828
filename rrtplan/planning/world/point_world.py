# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Point Robot World

A minimal world for planning in an n-dimensional box: the robot is a point
whose coordinates are its degrees of freedom. Useful for tests, demos and as
a template for real backends.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


class PointRobot:
    """Kinematic model of a point with per-coordinate position limits."""

    def __init__(
        self,
        lower_limits: ArrayLike,
        upper_limits: ArrayLike,
        positions: ArrayLike | None = None,
    ):
        self._lower = np.asarray(lower_limits, dtype=np.float64)
        self._upper = np.asarray(upper_limits, dtype=np.float64)
        if self._lower.shape != self._upper.shape or self._lower.ndim != 1:
            raise ValueError("lower and upper limits must be 1-D arrays of equal length")
        if np.any(self._lower > self._upper):
            raise ValueError("lower limits must not exceed upper limits")

        if positions is None:
            self._positions = (self._lower + self._upper) / 2.0
        else:
            self._positions = np.array(positions, dtype=np.float64)
            if self._positions.shape != self._lower.shape:
                raise ValueError(
                    f"Expected {self._lower.size} positions, got {self._positions.size}"
                )

    @property
    def num_dofs(self) -> int:
        return int(self._lower.size)

    @property
    def positions(self) -> NDArray[np.float64]:
        """Copy of the full position vector."""
        return self._positions.copy()

    def get_positions(self, dofs: Sequence[int]) -> NDArray[np.float64]:
        return self._positions[list(dofs)].copy()

    def set_positions(self, dofs: Sequence[int], positions: NDArray[np.float64]) -> None:
        values = np.asarray(positions, dtype=np.float64)
        if values.shape != (len(dofs),):
            raise ValueError(f"Expected {len(dofs)} positions, got shape {values.shape}")
        self._positions[list(dofs)] = values

    def get_position_limits(
        self, dofs: Sequence[int]
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        index = list(dofs)
        return self._lower[index].copy(), self._upper[index].copy()


class PredicateCollisionOracle:
    """Reports collision whenever `predicate(positions)` is true.

    Counts queries in `num_queries`.
    """

    def __init__(
        self,
        model: PointRobot,
        predicate: Callable[[NDArray[np.float64]], bool] | None = None,
    ):
        self._model = model
        self._predicate = predicate
        self.num_queries = 0

    def is_in_collision(self) -> bool:
        self.num_queries += 1
        if self._predicate is None:
            return False
        return bool(self._predicate(self._model.positions))


@dataclass(frozen=True)
class BoxObstacle:
    """Axis-aligned box in the robot's coordinate space (bounds inclusive)."""

    lower: tuple[float, ...]
    upper: tuple[float, ...]

    def contains(self, point: NDArray[np.float64]) -> bool:
        return bool(np.all(point >= self.lower) and np.all(point <= self.upper))


class BoxCollisionOracle:
    """Reports collision when the point lies inside any box obstacle."""

    def __init__(self, model: PointRobot, obstacles: Sequence[BoxObstacle] = ()):
        self._model = model
        self._obstacles: list[BoxObstacle] = []
        for obstacle in obstacles:
            self.add_obstacle(obstacle)

    @property
    def obstacles(self) -> list[BoxObstacle]:
        return list(self._obstacles)

    def add_obstacle(self, obstacle: BoxObstacle) -> None:
        ndim = self._model.num_dofs
        if len(obstacle.lower) != ndim or len(obstacle.upper) != ndim:
            raise ValueError(
                f"Obstacle must have {ndim} dimensions to match the robot"
            )
        self._obstacles.append(obstacle)

    def clear_obstacles(self) -> None:
        self._obstacles.clear()

    def is_in_collision(self) -> bool:
        point = self._model.positions
        return any(obstacle.contains(point) for obstacle in self._obstacles)
