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

"""Factory functions for path planning components."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields
from typing import TYPE_CHECKING, Any

from rrtplan.planning.spec import PlannerConfig

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from rrtplan.core.global_config import GlobalConfig
    from rrtplan.planning.planners.path_planner import PathPlanner
    from rrtplan.planning.spec import (
        CollisionOracleSpec,
        KinematicModelSpec,
        TreeFactory,
        TreeSpec,
    )


def get_tree_factory(name: str = "rrt") -> TreeFactory:
    """Look up a tree class by name. name='rrt'."""
    if name == "rrt":
        from rrtplan.planning.trees.rrt_tree import RRTTree

        return RRTTree
    else:
        raise ValueError(f"Unknown tree: {name}. Available: ['rrt']")


def create_tree(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    dofs: Sequence[int],
    seeds: Sequence[NDArray[np.float64]],
    step_size: float = 0.1,
    name: str = "rrt",
    **kwargs: Any,
) -> TreeSpec:
    """Create a search tree rooted at `seeds`. name='rrt'."""
    return get_tree_factory(name)(oracle, model, dofs, seeds, step_size, **kwargs)


def create_planner(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    config: PlannerConfig | None = None,
    tree: str = "rrt",
    global_config: GlobalConfig | None = None,
    **kwargs: Any,
) -> PathPlanner:
    """Create a path planner.

    Without `config`, parameters come from `global_config` (or the RRTPLAN_*
    environment when that is omitted too), with any PlannerConfig field in
    `kwargs` applied on top. Remaining kwargs (rng, seed, projector) go to
    the planner.
    """
    from rrtplan.planning.planners.path_planner import PathPlanner

    config_fields = {f.name for f in fields(PlannerConfig)}
    overrides = {key: kwargs.pop(key) for key in list(kwargs) if key in config_fields}

    if config is None:
        if global_config is None:
            from rrtplan.core.global_config import GlobalConfig

            global_config = GlobalConfig()
        config = PlannerConfig.from_global_config(global_config, **overrides)
        kwargs.setdefault("seed", global_config.random_seed)
    elif overrides:
        raise ValueError(
            f"Pass either a PlannerConfig or field overrides, not both: {sorted(overrides)}"
        )

    return PathPlanner(oracle, model, config, tree_factory=get_tree_factory(tree), **kwargs)
