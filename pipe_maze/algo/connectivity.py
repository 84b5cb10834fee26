import logging
from array import array
from typing import List

from pipe_maze.core import cell as c
from pipe_maze.core.maze import Maze

logger = logging.getLogger(__name__)

# The entry cell; always counted as connected
SOURCE_INDEX = 0


def check_connected(maze: Maze, source: int = SOURCE_INDEX) -> Maze:
    """
    Recomputes the VISITED bit of every cell.

    Flood-fills from 'source' through pipes that are open on BOTH sides:
    the current cell must open toward the neighbor and the neighbor must open
    back in the OPPOSITE direction. A one-sided opening is not a passage.
    Rotating cells keep their pre-rotation connections.
    Returns a new Maze; every non-VISITED bit is preserved.
    """
    maze.check_index(source)
    cells = array('B', (val & ~c.VISITED for val in maze.cells))

    cells[source] |= c.VISITED
    stack: List[int] = [source]

    while stack:
        idx = stack.pop()
        for direction in c.directions(cells[idx]):
            n_idx = maze.neighbor(idx, direction)
            if n_idx is None:
                continue
            n_val = cells[n_idx]
            if n_val & c.VISITED:
                continue
            if n_val & c.OPPOSITE[direction]:
                cells[n_idx] |= c.VISITED
                stack.append(n_idx)

    return maze.with_cells(cells)


def begin_rotation(index: int, maze: Maze, source: int = SOURCE_INDEX) -> Maze:
    """
    Marks cell 'index' as ROTATING; its connections stay untouched until
    end_rotation. Beginning twice on the same cell is a no-op.
    """
    maze.check_index(index)
    val = maze.cells[index]
    if val & c.ROTATING:
        logger.debug(f"Cell {index} already rotating")
    return check_connected(maze.replace(index, val | c.ROTATING), source)


def end_rotation(index: int, maze: Maze, steps: int = 1, source: int = SOURCE_INDEX) -> Maze:
    """
    Applies 'steps' clockwise quarter turns to cell 'index' and clears ROTATING.
    """
    maze.check_index(index)
    val = maze.cells[index]
    connections = c.rotate(c.decode_connections(val), steps)
    status = c.decode_status(val) & ~c.ROTATING
    logger.debug(f"Cell {index}: {c.decode_connections(val):#x} -> {connections:#x} ({steps} step(s))")
    return check_connected(maze.replace(index, c.encode(connections, status)), source)


def count_visited(maze: Maze) -> int:
    return maze.visited_count


def is_finished(maze: Maze) -> bool:
    """Solved when every cell, not just the source's component, is reachable."""
    return count_visited(maze) == maze.size
