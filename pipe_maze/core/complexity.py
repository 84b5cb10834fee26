import random

from pipe_maze.algo.connectivity import check_connected, SOURCE_INDEX
from pipe_maze.core import cell as c
from pipe_maze.core.maze import Maze

STRAIGHTS = (c.NORTH | c.SOUTH, c.EAST | c.WEST)


class MazePostProcessor:
    @staticmethod
    def scramble(maze: Maze, seed: int = None, factor: float = 1.0, source: int = SOURCE_INDEX) -> Maze:
        """
        Turns a supplied grid into a puzzle by rotating cells at random.
        factor: 0.0 = Touch NO cells
                1.0 = Rotate EVERY cell by 1-3 quarter turns
        ROTATING flags are cleared and connectivity is recomputed.
        """
        rng = random.Random(seed)

        indices = list(range(maze.size))
        rng.shuffle(indices)
        target = max(0, int(len(indices) * factor))

        cells = [val & ~c.ROTATING for val in maze.cells]
        for idx in indices[:target]:
            cells[idx] = c.rotate_cell(cells[idx], rng.randint(1, 3))

        return check_connected(maze.with_cells(cells), source)

    @staticmethod
    def calculate_stats(maze: Maze):
        empty = dead_ends = straights = corners = tees = crosses = 0

        for val in maze.cells:
            bits = c.decode_connections(val)
            openings = c.popcount(bits)
            if openings == 0: empty += 1
            elif openings == 1: dead_ends += 1
            elif openings == 2:
                if bits in STRAIGHTS: straights += 1
                else: corners += 1
            elif openings == 3: tees += 1
            else: crosses += 1

        total = maze.size
        visited = maze.visited_count
        return {
            "empty": empty,
            "dead_ends": dead_ends,
            "straights": straights,
            "corners": corners,
            "tees": tees,
            "crosses": crosses,
            "visited": visited,
            "visited_percent": (visited / total) * 100 if total > 0 else 0
        }
