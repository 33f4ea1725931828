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

"""Goal-biased target sampling shared by the growth procedures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from rrtplan.planning.spec import TreeSpec


class GoalBiasedSampler:
    """Picks the goal with probability `goal_bias`, else a random configuration.

    The generator is owned by the caller so that one seeded source drives
    every draw of a planning call.
    """

    def __init__(self, rng: np.random.Generator, goal_bias: float):
        if not 0.0 <= goal_bias <= 1.0:
            raise ValueError(f"goal_bias must be in [0, 1], got {goal_bias}")
        self._rng = rng
        self.goal_bias = goal_bias

    def sample(self, tree: TreeSpec, goal: NDArray[np.float64]) -> NDArray[np.float64]:
        if self._rng.random() < self.goal_bias:
            return goal
        return tree.get_random_config()
