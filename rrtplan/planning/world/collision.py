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
Collision Helpers

Stateless helpers that stage configurations on a model and query a collision
oracle. Every helper leaves the model's positions as it found them except
`is_config_collision_free`, which is meant to run inside `preserved_positions`.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from rrtplan.planning.spec import CollisionOracleSpec, DofIndices, KinematicModelSpec


@contextmanager
def preserved_positions(
    model: KinematicModelSpec, dofs: DofIndices
) -> Iterator[NDArray[np.float64]]:
    """Restore the positions of `dofs` on exit, whatever happens inside.

    Yields the saved positions.

    Example:
        with preserved_positions(model, dofs):
            model.set_positions(dofs, candidate)
            hit = oracle.is_in_collision()
    """
    saved = np.array(model.get_positions(dofs), dtype=np.float64, copy=True)
    try:
        yield saved
    finally:
        model.set_positions(dofs, saved)


def is_config_collision_free(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    dofs: DofIndices,
    config: NDArray[np.float64],
) -> bool:
    """Stage `config` on the model and ask the oracle. Leaves `config` staged."""
    model.set_positions(dofs, config)
    return not oracle.is_in_collision()


def filter_feasible(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    dofs: DofIndices,
    configs: Sequence[NDArray[np.float64]],
) -> list[NDArray[np.float64]]:
    """Return the collision-free subset of `configs`, preserving order."""
    with preserved_positions(model, dofs):
        return [q for q in configs if is_config_collision_free(oracle, model, dofs, q)]


def check_edge_collision_free(
    oracle: CollisionOracleSpec,
    model: KinematicModelSpec,
    dofs: DofIndices,
    start: NDArray[np.float64],
    end: NDArray[np.float64],
    resolution: float = 0.02,
) -> bool:
    """Check configurations along the straight segment start -> end.

    Samples the segment so consecutive checks are at most `resolution`
    apart, endpoints included.
    """
    if resolution <= 0.0:
        raise ValueError(f"resolution must be positive, got {resolution}")

    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)
    distance = float(np.linalg.norm(end - start))
    num_steps = max(1, int(np.ceil(distance / resolution)))

    with preserved_positions(model, dofs):
        for alpha in np.linspace(0.0, 1.0, num_steps + 1):
            if not is_config_collision_free(oracle, model, dofs, start + alpha * (end - start)):
                return False
    return True
