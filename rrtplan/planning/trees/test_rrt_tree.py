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

"""Unit tests for RRTTree."""

from __future__ import annotations

import numpy as np
import pytest

from rrtplan.planning.spec import StepResult, TreeSpec
from rrtplan.planning.trees import RRTTree


def _make_tree(oracle, model, seeds, step_size=0.1, **kwargs):
    seeds = [np.array(s, dtype=float) for s in seeds]
    return RRTTree(oracle, model, [0, 1], seeds, step_size, **kwargs)


# =============================================================================
# Construction and Reset
# =============================================================================


class TestConstruction:
    def test_satisfies_tree_protocol(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        assert isinstance(tree, TreeSpec)

    def test_one_root_per_seed(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0], [1.0, 0.0]])
        assert tree.get_size() == 2
        assert tree.get_parent(0) == -1
        assert tree.get_parent(1) == -1
        np.testing.assert_allclose(tree.seeds[1], [1.0, 0.0])

    def test_rejects_empty_seeds(self, free_oracle, point_robot):
        with pytest.raises(ValueError, match="at least one seed"):
            RRTTree(free_oracle, point_robot, [0, 1], [], 0.1)

    def test_rejects_seed_of_wrong_dimension(self, free_oracle, point_robot):
        with pytest.raises(ValueError, match="shape"):
            _make_tree(free_oracle, point_robot, [[0.0, 0.0, 0.0]])

    def test_rejects_non_positive_step(self, free_oracle, point_robot):
        with pytest.raises(ValueError, match="step_size"):
            _make_tree(free_oracle, point_robot, [[0.0, 0.0]], step_size=0.0)

    def test_tolerance_defaults_to_step_size(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], step_size=0.2)
        assert tree.tolerance == pytest.approx(0.2)

    def test_reset_replaces_nodes(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        tree.connect(np.array([1.0, 0.0]))
        assert tree.get_size() > 1

        tree.reset([0, 1], [np.array([0.5, 0.5])])

        assert tree.get_size() == 1
        np.testing.assert_allclose(tree.get_config(0), [0.5, 0.5])
        np.testing.assert_allclose(tree.seeds[0], [0.5, 0.5])

    def test_reset_with_same_seed_and_rng_grows_identical_trees(self, free_oracle, point_robot):
        seeds = [np.array([0.0, 0.0])]
        tree = _make_tree(free_oracle, point_robot, seeds)

        def grow():
            tree.reset([0, 1], seeds, rng=np.random.default_rng(7))
            for _ in range(50):
                tree.try_step(tree.get_random_config())
            return tree.configs, tree.parents

        configs_a, parents_a = grow()
        configs_b, parents_b = grow()

        assert len(configs_a) > 1
        np.testing.assert_array_equal(configs_a, configs_b)
        np.testing.assert_array_equal(parents_a, parents_b)

    def test_arena_grows_past_initial_capacity(self, free_oracle, point_robot):
        tree = _make_tree(
            free_oracle, point_robot, [[0.0, 0.0]], step_size=0.01, initial_capacity=4
        )
        assert tree.connect(np.array([0.5, 0.0]))
        assert tree.get_size() > 4
        for node in range(1, tree.get_size()):
            assert tree.get_parent(node) == node - 1


# =============================================================================
# Extension Primitives
# =============================================================================


class TestTryStep:
    def test_advances_by_step_size_toward_target(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])

        result = tree.try_step(np.array([1.0, 0.0]))

        assert result is StepResult.ADVANCED
        assert tree.get_size() == 2
        assert tree.active_node == 1
        np.testing.assert_allclose(tree.get_config(1), [0.1, 0.0])
        assert tree.get_parent(1) == 0

    def test_steps_from_nearest_node(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0], [1.0, 0.0]])

        tree.try_step(np.array([1.0, 1.0]))

        assert tree.get_parent(2) == 1
        np.testing.assert_allclose(tree.get_config(2), [1.0, 0.1])

    def test_landing_on_target_is_reached(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], tolerance=0.01)

        assert tree.try_step(np.array([0.05, 0.0])) is StepResult.REACHED
        assert tree.get_size() == 2
        assert tree.active_node == 1
        np.testing.assert_allclose(tree.get_config(1), [0.05, 0.0])

    def test_reached_again_adds_no_node(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], tolerance=0.01)
        tree.try_step(np.array([0.05, 0.0]))

        assert tree.try_step(np.array([0.05, 0.0])) is StepResult.REACHED
        assert tree.get_size() == 2

    def test_projected_step_off_target_advances(self, free_oracle, point_robot):
        def clamp_to_axis(q):
            return np.array([q[0], 0.0])

        tree = _make_tree(
            free_oracle, point_robot, [[0.0, 0.0]], tolerance=0.01, projector=clamp_to_axis
        )

        assert tree.try_step(np.array([0.05, 0.05])) is StepResult.ADVANCED
        np.testing.assert_allclose(tree.get_config(1), [0.05, 0.0])

    def test_reached_adds_no_node(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])

        result = tree.try_step(np.array([0.05, 0.05]))

        assert result is StepResult.REACHED
        assert tree.get_size() == 1
        assert tree.active_node == 0

    def test_blocked_by_collision(self, sealed_oracle, point_robot):
        tree = _make_tree(sealed_oracle, point_robot, [[0.4, 0.0]])

        result = tree.try_step(np.array([1.0, 0.0]))

        assert result is StepResult.BLOCKED
        assert tree.get_size() == 1

    def test_restores_model_positions(self, free_oracle, point_robot):
        before = point_robot.positions
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        tree.try_step(np.array([1.0, 0.0]))
        np.testing.assert_array_equal(point_robot.positions, before)

    def test_projector_output_is_stored(self, free_oracle, point_robot):
        def clamp_to_axis(q):
            return np.array([q[0], 0.0])

        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], projector=clamp_to_axis)
        tree.try_step(np.array([0.0, 1.0]))

        np.testing.assert_allclose(tree.get_config(1), [0.0, 0.0])

    def test_projector_failure_blocks(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], projector=lambda q: None)

        assert tree.try_step(np.array([1.0, 0.0])) is StepResult.BLOCKED
        assert tree.get_size() == 1


class TestConnect:
    def test_reaches_target_in_free_space(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], tolerance=1e-6)

        assert tree.connect(np.array([1.0, 0.0])) is True
        assert tree.get_gap(np.array([1.0, 0.0])) < tree.tolerance
        # 0.1, 0.2, ..., 1.0 (the final step lands on the target)
        assert tree.get_size() == 11

    def test_stops_when_blocked(self, sealed_oracle, point_robot):
        tree = _make_tree(sealed_oracle, point_robot, [[0.0, 0.0]])

        assert tree.connect(np.array([1.0, 0.0])) is False
        last = tree.get_config(tree.get_size() - 1)
        assert last[0] < 0.45
        assert tree.get_size() == 5

    def test_every_edge_is_at_most_one_step(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], step_size=0.07)
        tree.connect(np.array([1.0, 0.8]))

        for node in range(1, tree.get_size()):
            parent = tree.get_parent(node)
            step = np.linalg.norm(tree.get_config(node) - tree.get_config(parent))
            assert step <= 0.07 + 1e-12


# =============================================================================
# Queries and Path Tracing
# =============================================================================


class TestQueries:
    def test_random_configs_within_limits(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], rng=np.random.default_rng(0))
        samples = np.array([tree.get_random_config() for _ in range(200)])

        assert np.all(samples >= [-0.5, -1.0])
        assert np.all(samples <= [1.5, 1.0])

    def test_gap_measures_from_active_node(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        tree.try_step(np.array([1.0, 0.0]))

        assert tree.get_gap(np.array([0.1, 0.3])) == pytest.approx(0.3)

    def test_get_config_returns_copy(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        config = tree.get_config(0)
        config[0] = 42.0
        np.testing.assert_allclose(tree.get_config(0), [0.0, 0.0])


class TestTracePath:
    def test_node_to_root_by_default(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], tolerance=1e-6)
        tree.connect(np.array([0.3, 0.0]))

        path = []
        tree.trace_path(tree.active_node, path)

        np.testing.assert_allclose(path, [[0.3, 0.0], [0.2, 0.0], [0.1, 0.0], [0.0, 0.0]])

    def test_root_to_node_when_reversed(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]], tolerance=1e-6)
        tree.connect(np.array([0.3, 0.0]))

        path = []
        tree.trace_path(tree.active_node, path, reverse=True)

        np.testing.assert_allclose(path, [[0.0, 0.0], [0.1, 0.0], [0.2, 0.0], [0.3, 0.0]])

    def test_appends_to_existing_path(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        tree.try_step(np.array([1.0, 0.0]))

        path = [np.array([-1.0, -1.0])]
        tree.trace_path(1, path)

        assert len(path) == 3
        np.testing.assert_allclose(path[0], [-1.0, -1.0])

    def test_invalid_node_raises(self, free_oracle, point_robot):
        tree = _make_tree(free_oracle, point_robot, [[0.0, 0.0]])
        with pytest.raises(IndexError):
            tree.trace_path(5, [])
