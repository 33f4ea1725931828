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

"""Path Planning Specifications."""

from rrtplan.planning.spec.config import PlannerConfig
from rrtplan.planning.spec.enums import PlanningStatus, StepResult
from rrtplan.planning.spec.protocols import (
    CollisionOracleSpec,
    KinematicModelSpec,
    PlannerSpec,
    Projector,
    TreeFactory,
    TreeSpec,
)
from rrtplan.planning.spec.types import (
    ConfigPath,
    Configuration,
    DofIndices,
    PlanningResult,
)

__all__ = [
    "CollisionOracleSpec",
    "ConfigPath",
    "Configuration",
    "DofIndices",
    "KinematicModelSpec",
    "PlannerConfig",
    "PlannerSpec",
    "PlanningResult",
    "PlanningStatus",
    "Projector",
    "StepResult",
    "TreeFactory",
    "TreeSpec",
]
