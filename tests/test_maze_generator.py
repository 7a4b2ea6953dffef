"""Tests for maze generation: solvability, corners, fallback carving, determinism."""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mazerun.config import MazeConfig
from mazerun.core.enums import Material
from mazerun.core.grid import Grid
from mazerun.core.models import Vector2
from mazerun.systems.maze import MazeGenerator, has_path
from mazerun.systems.rng import DeterministicRNG


def _generator(seed: int = 42, **overrides) -> MazeGenerator:
    cfg = MazeConfig(world_seed=seed, **overrides)
    return MazeGenerator(cfg, DeterministicRNG(seed))


class TestHasPath:
    def test_open_grid_is_solvable(self):
        assert has_path(Grid(6))

    def test_full_wall_row_blocks(self):
        g = Grid.from_rows([
            "....",
            "####",
            "....",
            "....",
        ])
        assert not has_path(g)

    def test_winding_corridor(self):
        g = Grid.from_rows([
            ".###",
            ".#..",
            ".#.#",
            "....",
        ])
        assert has_path(g)

    def test_diagonal_gap_is_not_a_path(self):
        """Only 4-directional adjacency counts."""
        g = Grid.from_rows([
            "..##",
            "..##",
            "##..",
            "##..",
        ])
        assert not has_path(g)


class TestRejectionSampling:
    def test_every_maze_is_solvable(self):
        gen = _generator()
        for key in range(40):
            grid = gen.generate(10, key=key)
            assert grid.size == 10
            assert grid.get(Vector2(0, 0)) == Material.FLOOR
            assert grid.get(Vector2(9, 9)) == Material.FLOOR
            assert grid.has_path(Vector2(0, 0), Vector2(9, 9)), f"maze #{key} unsolvable"

    def test_exit_in_entry_component(self):
        """Exhaustive check: BFS flood from the entry contains the exit."""
        gen = _generator(seed=7)
        for key in range(20):
            grid = gen.generate(10, key=key)
            assert grid.exit in grid.reachable_from(grid.entry)

    def test_mazes_have_walls(self):
        gen = _generator()
        walls = sum(
            1
            for key in range(20)
            for row in gen.generate(10, key=key).to_rows()
            for ch in row
            if ch == "#"
        )
        assert walls > 0

    def test_same_key_same_maze(self):
        a = _generator(seed=3).generate(10, key=5)
        b = _generator(seed=3).generate(10, key=5)
        assert a.to_rows() == b.to_rows()

    def test_different_keys_differ(self):
        gen = _generator(seed=3)
        layouts = {tuple(gen.generate(10, key=k).to_rows()) for k in range(5)}
        assert len(layouts) > 1

    def test_other_sizes(self):
        gen = _generator()
        for size in (4, 7, 15):
            grid = gen.generate(size, key=size)
            assert grid.size == size
            assert has_path(grid)

    def test_zero_wall_probability_gives_open_grid(self):
        grid = _generator(wall_probability=0.0).generate(10)
        assert all(set(row) == {"."} for row in grid.to_rows())


class TestConstructiveFallback:
    def test_fallback_is_solvable(self, caplog):
        gen = _generator(wall_probability=0.95, max_generation_attempts=3)
        with caplog.at_level(logging.WARNING, logger="mazerun.systems.maze"):
            grid = gen.generate(10, key=1)
        assert has_path(grid)
        assert grid.is_floor(grid.entry) and grid.is_floor(grid.exit)
        assert any("carving a path" in rec.getMessage() for rec in caplog.records)

    def test_fallback_over_many_keys(self):
        gen = _generator(wall_probability=0.9, max_generation_attempts=1)
        for key in range(25):
            assert has_path(gen.generate(8, key=key))
