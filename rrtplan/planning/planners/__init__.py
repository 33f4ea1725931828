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
Path Planners Module

Contains planner implementations that use CollisionOracleSpec, KinematicModelSpec
and TreeSpec only.

## Implementations

- PathPlanner: single-tree or bidirectional RRT, step or connect extension

## Usage

```python
from rrtplan.planning.factory import create_planner

planner = create_planner(oracle, model, bidirectional=True, step_size=0.05)
success, path = planner.plan_path(dofs, q_start, q_goal)
```
"""

from rrtplan.planning.planners.path_planner import PathPlanner
from rrtplan.planning.planners.sampler import GoalBiasedSampler

__all__ = ["GoalBiasedSampler", "PathPlanner"]
