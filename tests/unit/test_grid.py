"""Unit tests for Grid, SimulationParameters and initial state generation."""

import math

import numpy as np
import pytest

from segsim.core.errors import InvalidGrid, InvalidParameter
from segsim.core.grid import (
    Kind,
    SimulationParameters,
    as_matrix,
    generate_initial_state,
    grid_equals,
    kind_at,
    make_grid,
    validate_grid,
)

E, A, B = Kind.EMPTY, Kind.A, Kind.B


class TestSimulationParameters:
    """Tests for SimulationParameters."""

    def test_default_params(self):
        params = SimulationParameters()
        assert params.grid_width == 50
        assert params.tolerance == 0.7
        assert params.empty_ratio == 0.1
        assert params.kind_a_ratio == 0.2
        assert params.boundary == "clipped"
        assert params.area == 2500

    def test_custom_params(self):
        params = SimulationParameters(
            grid_width=20,
            tolerance=0.0,
            empty_ratio=1.0,
            kind_a_ratio=0.5,
            boundary="row_bounded",
        )
        assert params.grid_width == 20
        assert params.tolerance == 0.0
        assert params.empty_ratio == 1.0
        assert params.boundary == "row_bounded"

    @pytest.mark.parametrize("name", ["tolerance", "empty_ratio", "kind_a_ratio"])
    @pytest.mark.parametrize("value", [-0.1, 1.01, math.nan, "0.5", None, True])
    def test_ratio_out_of_range_rejected(self, name, value):
        with pytest.raises(InvalidParameter):
            SimulationParameters(**{name: value})

    @pytest.mark.parametrize("width", [0, -3, 2.5, True, "10"])
    def test_bad_width_rejected(self, width):
        with pytest.raises(InvalidParameter):
            SimulationParameters(grid_width=width)

    def test_unknown_boundary_rejected(self):
        with pytest.raises(InvalidParameter):
            SimulationParameters(boundary="periodic")

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            SimulationParameters(tolerance=2.0)

    def test_replace_validates(self):
        params = SimulationParameters()
        assert params.replace(tolerance=0.2).tolerance == 0.2
        with pytest.raises(InvalidParameter):
            params.replace(empty_ratio=1.5)
        with pytest.raises(InvalidParameter):
            params.replace(no_such_field=1)

    def test_frozen(self):
        params = SimulationParameters()
        with pytest.raises(AttributeError):
            params.tolerance = 0.1


class TestGenerateInitialState:
    """Tests for initial grid generation."""

    @pytest.mark.parametrize("width", [1, 2, 3, 17, 50])
    def test_length_is_width_squared(self, width, rng):
        params = SimulationParameters(grid_width=width)
        grid = generate_initial_state(params, rng)
        assert len(grid) == width * width

    def test_only_legal_values(self, default_params, rng):
        grid = generate_initial_state(default_params, rng)
        assert set(np.unique(grid)) <= {E, A, B}

    def test_seeded_reproducible(self, default_params):
        g1 = generate_initial_state(default_params, np.random.default_rng(7))
        g2 = generate_initial_state(default_params, np.random.default_rng(7))
        assert grid_equals(g1, g2)

    def test_without_rng(self, small_params):
        grid = generate_initial_state(small_params)
        assert len(grid) == 100

    def test_all_empty(self, rng):
        params = SimulationParameters(grid_width=10, empty_ratio=1.0)
        grid = generate_initial_state(params, rng)
        assert np.all(grid == E)

    def test_no_empty_all_a(self, rng):
        params = SimulationParameters(grid_width=10, empty_ratio=0.0, kind_a_ratio=1.0)
        grid = generate_initial_state(params, rng)
        assert np.all(grid == A)

    def test_ratios_are_approximate(self, rng):
        params = SimulationParameters(grid_width=100, empty_ratio=0.2, kind_a_ratio=0.25)
        grid = generate_initial_state(params, rng)

        n = len(grid)
        empty = np.sum(grid == E) / n
        kind_a = np.sum(grid == A) / n

        # 0.2 empty, 0.8 * 0.25 = 0.2 A, 0.6 B
        assert np.isclose(empty, 0.2, atol=0.02)
        assert np.isclose(kind_a, 0.2, atol=0.02)

    def test_fresh_allocation(self, small_params, rng):
        g1 = generate_initial_state(small_params, rng)
        g2 = generate_initial_state(small_params, rng)
        assert g1 is not g2

    def test_rejects_non_params(self, rng):
        with pytest.raises(InvalidParameter):
            generate_initial_state({"grid_width": 10}, rng)


class TestGridHelpers:
    """Tests for grid construction, validation and equality."""

    def test_make_grid(self):
        grid = make_grid([A, B, E, E])
        assert grid.dtype == np.int8
        assert list(grid) == [1, 2, 0, 0]

    def test_make_grid_rejects_illegal_value(self):
        with pytest.raises(InvalidGrid):
            make_grid([A, 3, E, E])

    @pytest.mark.parametrize("slot", [1.7, 1.0, True, "A"])
    def test_make_grid_rejects_non_integer_slot(self, slot):
        with pytest.raises(InvalidGrid):
            make_grid([A, slot, E, E])

    def test_validate_grid_length(self):
        with pytest.raises(InvalidGrid):
            validate_grid(make_grid([A, B, E]), 2)

    def test_validate_grid_illegal_value(self):
        grid = np.array([1, 2, 0, 7], dtype=np.int8)
        with pytest.raises(InvalidGrid):
            validate_grid(grid, 2)

    def test_validate_grid_must_be_flat(self):
        grid = np.zeros((2, 2), dtype=np.int8)
        with pytest.raises(InvalidGrid):
            validate_grid(grid, 2)

    def test_grid_equals(self):
        assert grid_equals(make_grid([A, B, E, E]), make_grid([A, B, E, E]))
        assert not grid_equals(make_grid([A, B, E, E]), make_grid([B, A, E, E]))

    def test_grid_equals_different_lengths(self):
        assert not grid_equals(make_grid([A, B, E, E]), make_grid([A]))

    def test_kind_at(self):
        grid = make_grid([A, B, E, E])
        assert kind_at(grid, 0) is Kind.A
        assert kind_at(grid, 1) is Kind.B
        assert kind_at(grid, 3) is Kind.EMPTY

    @pytest.mark.parametrize("index", [-1, -4, 4])
    def test_kind_at_out_of_range(self, index):
        grid = make_grid([A, B, E, E])
        with pytest.raises(IndexError):
            kind_at(grid, index)

    def test_as_matrix(self):
        grid = make_grid([A, B, E, E])
        m = as_matrix(grid, 2)
        assert m.shape == (2, 2)
        assert m[0, 1] == B
        assert m[1, 0] == E

    def test_as_matrix_read_only(self):
        grid = make_grid([A, B, E, E])
        m = as_matrix(grid, 2)
        with pytest.raises(ValueError):
            m[0, 0] = B
        assert grid[0] == A
