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
Path Planning Module

Sampling-based path planning between sets of start and goal configurations
using Protocol-based architecture.

## Architecture

- CollisionOracleSpec: answers "is the current world state in collision?"
- KinematicModelSpec: reads/stages positions of a DOF subset
- TreeSpec: search tree with step/connect extension, gap query and tracing
  - RRTTree: Euclidean RRT over an index-linked node arena
- PathPlanner: filters infeasible starts/goals, grows one or two trees,
  reconstructs the path

## Factory Functions

```python
from rrtplan.planning import PlannerConfig, create_planner
from rrtplan.planning.world import PointRobot, PredicateCollisionOracle

model = PointRobot(lower_limits=[0.0, 0.0], upper_limits=[1.0, 1.0])
oracle = PredicateCollisionOracle(model, lambda q: abs(q[0] - 0.5) < 0.1 and q[1] < 0.8)
planner = create_planner(oracle, model, PlannerConfig(step_size=0.05), seed=0)
success, path = planner.plan_path([0, 1], [0.1, 0.1], [0.9, 0.1])
```
"""

from rrtplan.planning.factory import create_planner, create_tree, get_tree_factory
from rrtplan.planning.planners import GoalBiasedSampler, PathPlanner
from rrtplan.planning.spec import (
    CollisionOracleSpec,
    ConfigPath,
    Configuration,
    DofIndices,
    KinematicModelSpec,
    PlannerConfig,
    PlannerSpec,
    PlanningResult,
    PlanningStatus,
    Projector,
    StepResult,
    TreeFactory,
    TreeSpec,
)
from rrtplan.planning.trees import RRTTree

__all__ = [
    "CollisionOracleSpec",
    "ConfigPath",
    "Configuration",
    "DofIndices",
    "GoalBiasedSampler",
    "KinematicModelSpec",
    "PathPlanner",
    "PlannerConfig",
    "PlannerSpec",
    "PlanningResult",
    "PlanningStatus",
    "Projector",
    "RRTTree",
    "StepResult",
    "TreeFactory",
    "TreeSpec",
    "create_planner",
    "create_tree",
    "get_tree_factory",
]
