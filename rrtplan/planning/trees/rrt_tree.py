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

"""Euclidean RRT implementing TreeSpec.

Nodes live in a growable arena: row `i` of `_configs` holds a configuration and
`_parents[i]` the index of its parent (-1 for roots). Nodes are only appended
with a reference to an existing index, so every parent chain ends at a root.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from rrtplan.planning.spec import StepResult
from rrtplan.planning.world.collision import is_config_collision_free, preserved_positions

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from rrtplan.planning.spec import (
        CollisionOracleSpec,
        ConfigPath,
        DofIndices,
        KinematicModelSpec,
        Projector,
    )


class RRTTree:
    """Rapidly-exploring random tree over a DOF subset of a kinematic model.

    A step moves at most `step_size` from the nearest node toward a target.
    A target closer than `tolerance` to the nearest node, or to the node a
    step just added, counts as REACHED. `get_gap` measures with the same
    Euclidean metric.
    """

    def __init__(
        self,
        oracle: CollisionOracleSpec,
        model: KinematicModelSpec,
        dofs: DofIndices,
        seeds: Sequence[NDArray[np.float64]],
        step_size: float,
        *,
        tolerance: float | None = None,
        rng: np.random.Generator | None = None,
        projector: Projector | None = None,
        max_connect_steps: int = 10_000,
        initial_capacity: int = 1024,
    ):
        if not step_size > 0.0:
            raise ValueError(f"step_size must be positive, got {step_size}")
        if tolerance is not None and not tolerance > 0.0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")

        self._oracle = oracle
        self._model = model
        self.step_size = float(step_size)
        self.tolerance = self.step_size if tolerance is None else float(tolerance)
        self._projector = projector
        self._max_connect_steps = max_connect_steps
        self._initial_capacity = max(1, initial_capacity)
        self._rng = rng if rng is not None else np.random.default_rng()

        self.active_node = -1
        self.seeds: list[NDArray[np.float64]] = []
        self.reset(dofs, seeds)

    # ============= Lifecycle =============

    def reset(
        self,
        dofs: DofIndices,
        seeds: Sequence[NDArray[np.float64]],
        rng: np.random.Generator | None = None,
    ) -> None:
        """Discard all nodes and add one root per seed.

        Passing `rng` replaces the random generator; otherwise the current
        one keeps its state.
        """
        ndim = len(dofs)
        roots = [np.array(seed, dtype=np.float64) for seed in seeds]
        if not roots:
            raise ValueError("A tree needs at least one seed configuration")
        for root in roots:
            if root.shape != (ndim,):
                raise ValueError(f"Seed has shape {root.shape}, expected ({ndim},)")

        self._dofs = list(dofs)
        self._lower, self._upper = self._model.get_position_limits(self._dofs)
        if rng is not None:
            self._rng = rng

        capacity = max(self._initial_capacity, len(roots))
        self._configs = np.empty((capacity, ndim), dtype=np.float64)
        self._parents = np.full(capacity, -1, dtype=np.intp)
        self._size = 0

        self.seeds = [root.copy() for root in roots]
        for root in roots:
            self._add_node(root, -1)

    # ============= Queries =============

    def get_size(self) -> int:
        return self._size

    def get_config(self, node: int) -> NDArray[np.float64]:
        self._check_index(node)
        return self._configs[node].copy()

    def get_parent(self, node: int) -> int:
        """Parent index of a node, -1 for roots."""
        self._check_index(node)
        return int(self._parents[node])

    @property
    def configs(self) -> NDArray[np.float64]:
        """Copy of all node configurations, one row per node."""
        return self._configs[: self._size].copy()

    @property
    def parents(self) -> NDArray[np.intp]:
        """Copy of all parent indices."""
        return self._parents[: self._size].copy()

    def get_random_config(self) -> NDArray[np.float64]:
        return self._rng.uniform(self._lower, self._upper)

    def get_gap(self, point: NDArray[np.float64]) -> float:
        diff = np.asarray(point, dtype=np.float64) - self._configs[self.active_node]
        return float(np.linalg.norm(diff))

    def nearest(self, target: NDArray[np.float64]) -> int:
        """Index of the node closest to target. Makes it the active node."""
        diffs = self._configs[: self._size] - target
        self.active_node = int(np.argmin(np.einsum("ij,ij->i", diffs, diffs)))
        return self.active_node

    # ============= Growth =============

    def try_step(self, target: NDArray[np.float64]) -> StepResult:
        target = np.asarray(target, dtype=np.float64)
        return self._step_from(target, self.nearest(target))

    def connect(self, target: NDArray[np.float64]) -> bool:
        target = np.asarray(target, dtype=np.float64)
        node = self.nearest(target)
        result = StepResult.ADVANCED
        for _ in range(self._max_connect_steps):
            result = self._step_from(target, node)
            if result is not StepResult.ADVANCED:
                break
            node = self._size - 1
        return result is StepResult.REACHED

    def _step_from(self, target: NDArray[np.float64], node: int) -> StepResult:
        self.active_node = node
        q_near = self._configs[node]
        diff = target - q_near
        dist = float(np.linalg.norm(diff))

        if dist < self.tolerance:
            return StepResult.REACHED

        if dist <= self.step_size:
            q_new = target.copy()
        else:
            q_new = q_near + diff * (self.step_size / dist)

        if self._projector is not None:
            projected = self._projector(q_new)
            if projected is None:
                return StepResult.BLOCKED
            q_new = np.asarray(projected, dtype=np.float64)

        if not self._is_collision_free(q_new):
            return StepResult.BLOCKED

        self._add_node(q_new, node)
        if float(np.linalg.norm(target - q_new)) < self.tolerance:
            return StepResult.REACHED
        return StepResult.ADVANCED

    def _is_collision_free(self, config: NDArray[np.float64]) -> bool:
        with preserved_positions(self._model, self._dofs):
            return is_config_collision_free(self._oracle, self._model, self._dofs, config)

    def _add_node(self, config: NDArray[np.float64], parent: int) -> int:
        if self._size >= len(self._configs):
            capacity = 2 * len(self._configs)
            configs = np.empty((capacity, self._configs.shape[1]), dtype=np.float64)
            configs[: self._size] = self._configs[: self._size]
            parents = np.full(capacity, -1, dtype=np.intp)
            parents[: self._size] = self._parents[: self._size]
            self._configs, self._parents = configs, parents

        index = self._size
        self._configs[index] = config
        self._parents[index] = parent
        self._size += 1
        self.active_node = index
        return index

    # ============= Path Reconstruction =============

    def trace_path(self, node: int, out: ConfigPath, reverse: bool = False) -> None:
        """Append configurations along the parent chain of `node` to `out`.

        Order is node -> root, or root -> node when `reverse` is set, so a
        start tree traced with reverse=True followed by a goal tree traced
        with reverse=False gives one start -> goal path.
        """
        self._check_index(node)
        chain: list[NDArray[np.float64]] = []
        index = node
        while index != -1:
            chain.append(self._configs[index].copy())
            index = int(self._parents[index])
        if reverse:
            chain.reverse()
        out.extend(chain)

    def _check_index(self, node: int) -> None:
        if not 0 <= node < self._size:
            raise IndexError(f"Node index {node} out of range for tree of size {self._size}")
