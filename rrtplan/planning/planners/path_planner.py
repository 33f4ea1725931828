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

"""Single-tree and bidirectional RRT path planner implementing PlannerSpec.

The planner only talks to CollisionOracleSpec, KinematicModelSpec and TreeSpec,
so any backend and any tree implementation honoring those protocols plugs in.
"""

from __future__ import annotations

from collections.abc import Sequence
import time
from typing import TYPE_CHECKING

import numpy as np

from rrtplan.planning.planners.sampler import GoalBiasedSampler
from rrtplan.planning.spec import PlannerConfig, PlanningResult, PlanningStatus, StepResult
from rrtplan.planning.trees.rrt_tree import RRTTree
from rrtplan.planning.utils.path_utils import compute_path_length
from rrtplan.planning.world.collision import filter_feasible, preserved_positions
from rrtplan.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from rrtplan.planning.spec import (
        CollisionOracleSpec,
        ConfigPath,
        DofIndices,
        KinematicModelSpec,
        Projector,
        TreeFactory,
        TreeSpec,
    )

logger = setup_logger()


class PathPlanner:
    """Plans paths between sets of start and goal configurations with RRT.

    With `bidirectional` off, one tree grows from the feasible starts toward
    the first feasible goal. With it on, a start tree and a goal tree take
    turns: one extends toward a (goal-biased) random target, then the other
    tries to reach the newest node of the first. The trees are kept on the
    planner (`start_tree`, `goal_tree`) after planning and are reset rather
    than reallocated on the next call.

    A planning call mutates the model's positions and restores them before
    returning, so one model must not be shared by concurrent calls.
    """

    def __init__(
        self,
        oracle: CollisionOracleSpec,
        model: KinematicModelSpec,
        config: PlannerConfig | None = None,
        *,
        tree_factory: TreeFactory = RRTTree,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        projector: Projector | None = None,
    ):
        self.oracle = oracle
        self.model = model
        self._config = config if config is not None else PlannerConfig()
        self._tree_factory = tree_factory
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._projector = projector
        self._sampler = GoalBiasedSampler(self._rng, self._config.goal_bias)

        self.start_tree: TreeSpec | None = None
        self.goal_tree: TreeSpec | None = None

    @property
    def config(self) -> PlannerConfig:
        return self._config

    @property
    def rng(self) -> np.random.Generator:
        """Random source shared by the sampler and the trees."""
        return self._rng

    def get_name(self) -> str:
        """Get planner name."""
        name = "RRTConnect" if self._config.connect else "RRT"
        return f"Bi{name}" if self._config.bidirectional else name

    def plan_path(
        self,
        dofs: DofIndices,
        starts: Sequence[NDArray[np.float64]] | NDArray[np.float64],
        goals: Sequence[NDArray[np.float64]] | NDArray[np.float64],
    ) -> tuple[bool, ConfigPath]:
        """Plan a path and return (success, path). The path is empty on failure."""
        result = self.plan(dofs, starts, goals)
        return result.is_success(), result.path

    def plan(
        self,
        dofs: DofIndices,
        starts: Sequence[NDArray[np.float64]] | NDArray[np.float64],
        goals: Sequence[NDArray[np.float64]] | NDArray[np.float64],
    ) -> PlanningResult:
        """Plan a collision-free path from any feasible start to any feasible goal.

        Args:
            dofs: Indices of the degrees of freedom to plan over
            starts: One start configuration or a sequence of candidates. With a
                single DOF, a flat sequence lists one scalar per candidate.
            goals: One goal configuration or a sequence of candidates, as above

        Returns:
            PlanningResult. Infeasible start/goal sets and an exhausted node
            budget are reported through its status, never raised.
        """
        start_time = time.time()
        dofs = list(dofs)
        start_configs = _as_config_list(starts, len(dofs), "start")
        goal_configs = _as_config_list(goals, len(dofs), "goal")

        with preserved_positions(self.model, dofs):
            feasible_start = filter_feasible(self.oracle, self.model, dofs, start_configs)
            if not feasible_start:
                logger.warning(
                    f"Feasible start configurations are empty ({len(start_configs)} candidates)"
                )
                return _create_failure_result(
                    PlanningStatus.NO_FEASIBLE_START,
                    "All start configurations are in collision",
                    time.time() - start_time,
                )

            feasible_goal = filter_feasible(self.oracle, self.model, dofs, goal_configs)
            if not feasible_goal:
                logger.warning(
                    f"Feasible goal configurations are empty ({len(goal_configs)} candidates)"
                )
                return _create_failure_result(
                    PlanningStatus.NO_FEASIBLE_GOAL,
                    "All goal configurations are in collision",
                    time.time() - start_time,
                )

            if self._config.bidirectional:
                result = self._plan_bidirectional(dofs, feasible_start, feasible_goal)
            else:
                if len(feasible_goal) > 1:
                    logger.warning(
                        f"Single-tree planning uses only the first of "
                        f"{len(feasible_goal)} feasible goals"
                    )
                result = self._plan_single_tree(dofs, feasible_start, feasible_goal[0])

        result.planning_time = time.time() - start_time
        if result.is_success():
            logger.info(
                f"{self.get_name()} found a path with {len(result.path)} waypoints "
                f"after {result.iterations} iterations ({result.num_nodes} nodes)"
            )
        else:
            logger.info(f"{self.get_name()}: {result.message}")
        return result

    # ============= Growth Procedures =============

    def _plan_single_tree(
        self,
        dofs: list[int],
        starts: list[NDArray[np.float64]],
        goal: NDArray[np.float64],
    ) -> PlanningResult:
        tree = self._prepare_start_tree(dofs, starts)
        tolerance = self._config.reach_tolerance

        num_nodes = tree.get_size()
        iterations = 0
        while num_nodes <= self._config.max_nodes and iterations < self._config.iteration_limit:
            iterations += 1
            target = self._sampler.sample(tree, goal)
            self._extend(tree, target)

            if tree.get_gap(goal) < tolerance:
                path: ConfigPath = []
                tree.trace_path(tree.active_node, path, reverse=True)
                if not np.array_equal(path[-1], goal):
                    path.append(np.array(goal, dtype=np.float64))
                return _create_success_result(path, iterations, tree.get_size())

            num_nodes = tree.get_size()

        return _create_failure_result(
            PlanningStatus.EXHAUSTED,
            f"No path found after {iterations} iterations ({num_nodes} nodes)",
            iterations=iterations,
            num_nodes=num_nodes,
        )

    def _plan_bidirectional(
        self,
        dofs: list[int],
        starts: list[NDArray[np.float64]],
        goals: list[NDArray[np.float64]],
    ) -> PlanningResult:
        start_tree = self._prepare_start_tree(dofs, starts)
        goal_tree = self._prepare_goal_tree(dofs, goals)

        # tree_a reaches for a sampled target; tree_b then reaches for tree_a's
        # newest node. Roles swap at the top of every iteration.
        tree_a, tree_b = start_tree, goal_tree
        smallest_gap = float("inf")

        num_nodes = tree_a.get_size() + tree_b.get_size()
        iterations = 0
        while num_nodes < self._config.max_nodes and iterations < self._config.iteration_limit:
            iterations += 1
            tree_a, tree_b = tree_b, tree_a

            target = self._sampler.sample(tree_a, tree_b.seeds[0])
            self._extend(tree_a, target)

            meeting_config = tree_a.get_config(tree_a.active_node)
            if self._extend(tree_b, meeting_config):
                path: ConfigPath = []
                start_tree.trace_path(start_tree.active_node, path, reverse=True)
                goal_tree.trace_path(goal_tree.active_node, path)
                return _create_success_result(
                    path, iterations, start_tree.get_size() + goal_tree.get_size()
                )

            num_nodes = tree_a.get_size() + tree_b.get_size()

            gap = tree_b.get_gap(meeting_config)
            if gap < smallest_gap:
                smallest_gap = gap
                logger.debug(
                    f"Gap: {smallest_gap:.4f}  Sizes: "
                    f"{start_tree.get_size()}/{goal_tree.get_size()}"
                )

        return _create_failure_result(
            PlanningStatus.EXHAUSTED,
            f"Trees did not meet after {iterations} iterations ({num_nodes} nodes)",
            iterations=iterations,
            num_nodes=num_nodes,
        )

    def _extend(self, tree: TreeSpec, target: NDArray[np.float64]) -> bool:
        """Grow `tree` toward `target`. True iff the target was reached."""
        if self._config.connect:
            return tree.connect(target)
        return tree.try_step(target) is StepResult.REACHED

    # ============= Tree Management =============

    def _prepare_start_tree(self, dofs: list[int], seeds: list[NDArray[np.float64]]) -> TreeSpec:
        if self.start_tree is None:
            self.start_tree = self._create_tree(dofs, seeds)
        else:
            self.start_tree.reset(dofs, seeds)
        return self.start_tree

    def _prepare_goal_tree(self, dofs: list[int], seeds: list[NDArray[np.float64]]) -> TreeSpec:
        if self.goal_tree is None:
            self.goal_tree = self._create_tree(dofs, seeds)
        else:
            self.goal_tree.reset(dofs, seeds)
        return self.goal_tree

    def _create_tree(self, dofs: list[int], seeds: list[NDArray[np.float64]]) -> TreeSpec:
        return self._tree_factory(
            self.oracle,
            self.model,
            dofs,
            seeds,
            self._config.step_size,
            tolerance=self._config.reach_tolerance,
            rng=self._rng,
            projector=self._projector,
        )


def _as_config_list(
    configs: Sequence[NDArray[np.float64]] | NDArray[np.float64],
    ndim: int,
    label: str,
) -> list[NDArray[np.float64]]:
    """Normalize one configuration or a sequence of them to a list of 1-D arrays."""
    array = np.asarray(configs, dtype=np.float64)
    if array.size == 0:
        return []
    if array.ndim == 0:
        array = array.reshape(1, 1)
    elif array.ndim == 1:
        # With a single DOF, a flat sequence holds one scalar per candidate
        array = array.reshape(-1, 1) if ndim == 1 else array[np.newaxis, :]
    if array.ndim != 2 or array.shape[1] != ndim:
        raise ValueError(
            f"Each {label} configuration must have {ndim} values to match the DOFs, "
            f"got array of shape {np.shape(configs)}"
        )
    return [row.copy() for row in array]


# ============= Result Helpers =============


def _create_success_result(path: ConfigPath, iterations: int, num_nodes: int) -> PlanningResult:
    """Create a successful planning result."""
    return PlanningResult(
        status=PlanningStatus.SUCCESS,
        path=path,
        path_length=compute_path_length(path),
        iterations=iterations,
        num_nodes=num_nodes,
        message="Path found",
    )


def _create_failure_result(
    status: PlanningStatus,
    message: str,
    planning_time: float = 0.0,
    iterations: int = 0,
    num_nodes: int = 0,
) -> PlanningResult:
    """Create a failed planning result."""
    return PlanningResult(
        status=status,
        path=[],
        planning_time=planning_time,
        iterations=iterations,
        num_nodes=num_nodes,
        message=message,
    )
