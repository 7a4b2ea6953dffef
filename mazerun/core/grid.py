"""Grid / maze map."""

from __future__ import annotations

from collections import deque

from mazerun.core.enums import Material
from mazerun.core.models import DIRECTION_OFFSETS, Vector2


class Grid:
    """Square wall/floor grid backed by a flat list for cache-friendly access.

    The engine treats a generated grid as immutable: it is replaced
    wholesale, never edited, once a maze instance is live.
    """

    __slots__ = ("size", "_tiles")

    def __init__(self, size: int, default: Material = Material.FLOOR) -> None:
        self.size = size
        self._tiles: list[Material] = [default] * (size * size)

    @classmethod
    def from_rows(cls, rows: list[str]) -> Grid:
        """Build a grid from text rows: ``#`` is a wall, anything else floor."""
        grid = cls(len(rows))
        for y, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError(f"row {y} has length {len(row)}, expected {grid.size}")
            for x, ch in enumerate(row):
                if ch == "#":
                    grid.set(Vector2(x, y), Material.WALL)
        return grid

    # -- access --

    @property
    def entry(self) -> Vector2:
        return Vector2(0, 0)

    @property
    def exit(self) -> Vector2:
        return Vector2(self.size - 1, self.size - 1)

    def is_corner(self, pos: Vector2) -> bool:
        return pos == self.entry or pos == self.exit

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def get(self, pos: Vector2) -> Material:
        if not self.in_bounds(pos):
            return Material.WALL
        return self._tiles[pos.y * self.size + pos.x]

    def set(self, pos: Vector2, material: Material) -> None:
        if self.in_bounds(pos):
            self._tiles[pos.y * self.size + pos.x] = material

    def is_floor(self, pos: Vector2) -> bool:
        return self.get(pos) == Material.FLOOR

    def floor_neighbors(self, pos: Vector2) -> list[Vector2]:
        """FLOOR cells 4-adjacent to *pos*, in up/down/left/right order."""
        result: list[Vector2] = []
        for offset in DIRECTION_OFFSETS.values():
            npos = pos + offset
            if self.is_floor(npos):
                result.append(npos)
        return result

    def floor_cells(self) -> list[Vector2]:
        return [
            Vector2(i % self.size, i // self.size)
            for i, mat in enumerate(self._tiles)
            if mat == Material.FLOOR
        ]

    # -- reachability --

    def reachable_from(self, start: Vector2) -> set[Vector2]:
        """BFS flood over FLOOR cells from *start* (4-directional)."""
        if not self.is_floor(start):
            return set()
        visited: set[Vector2] = {start}
        queue: deque[Vector2] = deque([start])
        while queue:
            pos = queue.popleft()
            for npos in self.floor_neighbors(pos):
                if npos not in visited:
                    visited.add(npos)
                    queue.append(npos)
        return visited

    def has_path(self, start: Vector2, goal: Vector2) -> bool:
        """Early-exit BFS: is *goal* reachable from *start* over FLOOR?"""
        if not self.is_floor(start) or not self.is_floor(goal):
            return False
        visited: set[Vector2] = {start}
        queue: deque[Vector2] = deque([start])
        while queue:
            pos = queue.popleft()
            if pos == goal:
                return True
            for npos in self.floor_neighbors(pos):
                if npos not in visited:
                    visited.add(npos)
                    queue.append(npos)
        return False

    # -- export --

    def to_rows(self) -> list[str]:
        return [
            "".join("#" if self._tiles[y * self.size + x] == Material.WALL else "." for x in range(self.size))
            for y in range(self.size)
        ]

    def run_length_encode(self) -> list[int]:
        """RLE of the tile values: ``[value, count, value, count, ...]``."""
        rle: list[int] = []
        if not self._tiles:
            return rle
        cur_val = int(self._tiles[0])
        cur_count = 1
        for mat in self._tiles[1:]:
            v = int(mat)
            if v == cur_val:
                cur_count += 1
            else:
                rle.append(cur_val)
                rle.append(cur_count)
                cur_val = v
                cur_count = 1
        rle.append(cur_val)
        rle.append(cur_count)
        return rle
