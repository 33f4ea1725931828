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
Path Utilities

Standalone utility functions for path measurement and post-processing.
These functions are stateless and can be used with any planner output.

## Functions

- compute_path_length(): Summed Euclidean length of a path
- max_segment_length(): Longest step between consecutive waypoints
- interpolate_path(): Densify a path to a uniform resolution
- simplify_path(): Random shortcutting (requires a collision oracle)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from rrtplan.planning.world.collision import check_edge_collision_free

if TYPE_CHECKING:
    from rrtplan.planning.spec import (
        CollisionOracleSpec,
        ConfigPath,
        DofIndices,
        KinematicModelSpec,
    )


def compute_path_length(path: ConfigPath) -> float:
    """Compute total path length.

    Sums the Euclidean distances between consecutive waypoints.

    Example:
        success, path = planner.plan_path(dofs, start, goal)
        print(f"Path length: {compute_path_length(path):.2f}")
    """
    if len(path) <= 1:
        return 0.0
    waypoints = np.asarray(path, dtype=np.float64)
    return float(np.sum(np.linalg.norm(np.diff(waypoints, axis=0), axis=1)))


def max_segment_length(path: ConfigPath) -> float:
    """Largest Euclidean distance between consecutive waypoints (0.0 for short paths)."""
    if len(path) <= 1:
        return 0.0
    waypoints = np.asarray(path, dtype=np.float64)
    return float(np.max(np.linalg.norm(np.diff(waypoints, axis=0), axis=1)))


def interpolate_path(path: ConfigPath, resolution: float = 0.05) -> ConfigPath:
    """Interpolate path to have uniform resolution.

    Adds intermediate waypoints so that the Euclidean distance between
    consecutive waypoints is at most `resolution`. Original waypoints are kept.

    Args:
        path: Original path
        resolution: Maximum distance between waypoints

    Returns:
        Interpolated path with more waypoints
    """
    if resolution <= 0.0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    if len(path) <= 1:
        return [np.array(q, dtype=np.float64) for q in path]

    interpolated: ConfigPath = [np.array(path[0], dtype=np.float64)]
    for i in range(len(path) - 1):
        q_start = np.asarray(path[i], dtype=np.float64)
        q_end = np.asarray(path[i + 1], dtype=np.float64)
        num_steps = max(1, int(np.ceil(np.linalg.norm(q_end - q_start) / resolution)))
        for step in range(1, num_steps + 1):
            interpolated.append(q_start + (step / num_steps) * (q_end - q_start))

    return interpolated


def simplify_path(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    dofs: DofIndices,
    path: ConfigPath,
    rng: np.random.Generator | None = None,
    max_iterations: int = 100,
    collision_resolution: float = 0.02,
) -> ConfigPath:
    """Simplify path by random shortcutting.

    Randomly selects two waypoints at least two apart; if the straight
    segment between them is collision-free, the waypoints in between are
    removed. Endpoints never change.

    Args:
        oracle: Collision oracle for the current world
        model: Model the oracle observes
        dofs: Degrees of freedom the path is expressed in
        path: Original path
        rng: Random generator (a fresh unseeded one if omitted)
        max_iterations: Maximum shortcutting attempts
        collision_resolution: Spacing of collision checks along shortcuts

    Returns:
        Simplified path with fewer or equal waypoints
    """
    if len(path) <= 2:
        return list(path)

    rng = rng if rng is not None else np.random.default_rng()
    simplified = list(path)

    for _ in range(max_iterations):
        if len(simplified) <= 2:
            break

        i = int(rng.integers(0, len(simplified) - 2))
        j = int(rng.integers(i + 2, len(simplified)))

        if check_edge_collision_free(
            oracle, model, dofs, simplified[i], simplified[j], collision_resolution
        ):
            simplified = simplified[: i + 1] + simplified[j:]

    return simplified
