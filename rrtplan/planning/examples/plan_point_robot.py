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
Point robot planning demo.

Plans around a wall with a single gap in the unit square, once with each
strategy, and prints the resulting statistics.

Usage:
    python -m rrtplan.planning.examples.plan_point_robot
"""

from __future__ import annotations

from rrtplan.planning import PlannerConfig, create_planner
from rrtplan.planning.utils import max_segment_length, simplify_path
from rrtplan.planning.world import BoxCollisionOracle, BoxObstacle, PointRobot
from rrtplan.utils.logging_config import setup_logger

logger = setup_logger()

DOFS = [0, 1]
START = [0.1, 0.1]
GOAL = [0.9, 0.1]


def build_world() -> tuple[PointRobot, BoxCollisionOracle]:
    model = PointRobot(lower_limits=[0.0, 0.0], upper_limits=[1.0, 1.0])
    oracle = BoxCollisionOracle(
        model,
        [
            BoxObstacle(lower=(0.45, 0.0), upper=(0.55, 0.7)),
            BoxObstacle(lower=(0.45, 0.8), upper=(0.55, 1.0)),
        ],
    )
    return model, oracle


def main() -> None:
    model, oracle = build_world()

    for bidirectional in (False, True):
        for connect in (False, True):
            config = PlannerConfig(
                bidirectional=bidirectional,
                connect=connect,
                step_size=0.05,
                goal_bias=0.2,
                max_nodes=20_000,
            )
            planner = create_planner(oracle, model, config, seed=42)
            result = planner.plan(DOFS, START, GOAL)

            if not result.is_success():
                logger.warning(f"{planner.get_name()}: {result.message}")
                continue

            shortcut = simplify_path(oracle, model, DOFS, result.path, rng=planner.rng)
            logger.info(
                f"{planner.get_name()}: {len(result.path)} waypoints, "
                f"length {result.path_length:.3f}, "
                f"max step {max_segment_length(result.path):.3f}, "
                f"{result.num_nodes} nodes, {result.planning_time * 1000:.1f} ms, "
                f"{len(shortcut)} waypoints after shortcutting"
            )


if __name__ == "__main__":
    main()
