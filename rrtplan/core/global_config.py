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

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GlobalConfig(BaseSettings):
    """Process-wide planner defaults, overridable through RRTPLAN_* variables."""

    bidirectional: bool = True
    connect: bool = True
    step_size: float = Field(default=0.1, gt=0.0)
    max_nodes: int = Field(default=1_000_000, ge=1)
    goal_bias: float = Field(default=0.3, ge=0.0, le=1.0)
    random_seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="RRTPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )
