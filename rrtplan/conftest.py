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

import os

os.environ.setdefault("RRTPLAN_LOG_TO_FILE", "0")

import numpy as np
import pytest

from rrtplan.planning.world import (
    BoxCollisionOracle,
    BoxObstacle,
    PointRobot,
    PredicateCollisionOracle,
)

DOFS_2D = [0, 1]


@pytest.fixture
def dofs():
    return list(DOFS_2D)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def point_robot():
    """2-D point robot in [-0.5, 1.5] x [-1, 1], parked away from the test starts."""
    return PointRobot(
        lower_limits=[-0.5, -1.0],
        upper_limits=[1.5, 1.0],
        positions=[0.25, 0.75],
    )


@pytest.fixture
def free_oracle(point_robot):
    """Oracle for an empty world."""
    return PredicateCollisionOracle(point_robot)


@pytest.fixture
def wall_oracle(point_robot):
    """Vertical wall at x in [0.45, 0.55] with a gap at y in (0.2, 0.6)."""
    return BoxCollisionOracle(
        point_robot,
        [
            BoxObstacle(lower=(0.45, -1.0), upper=(0.55, 0.2)),
            BoxObstacle(lower=(0.45, 0.6), upper=(0.55, 1.0)),
        ],
    )


@pytest.fixture
def sealed_oracle(point_robot):
    """Wall spanning the whole y range: x in [0.45, 0.55] is unreachable."""
    return BoxCollisionOracle(point_robot, [BoxObstacle(lower=(0.45, -1.0), upper=(0.55, 1.0))])
