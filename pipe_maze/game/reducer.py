import logging
from dataclasses import dataclass
from typing import Union

from pipe_maze.algo.connectivity import begin_rotation, end_rotation, is_finished
from pipe_maze.core.maze import Maze

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    maze: Maze
    finished: bool = False


@dataclass(frozen=True)
class StartRotation:
    index: int


@dataclass(frozen=True)
class EndRotation:
    index: int


@dataclass(frozen=True)
class UpdateMaze:
    maze: Maze


Action = Union[StartRotation, EndRotation, UpdateMaze]


def reduce(state: GameState, action: Action) -> GameState:
    """
    Pure transition: (state, action) -> new state.
    'finished' is only recomputed when a rotation completes.
    """
    if isinstance(action, StartRotation):
        if state.finished:
            # Solved boards are locked; rotations already in flight may still end
            return state
        return GameState(begin_rotation(action.index, state.maze), state.finished)

    if isinstance(action, EndRotation):
        maze = end_rotation(action.index, state.maze)
        finished = is_finished(maze)
        if finished and not state.finished:
            logger.debug(f"Puzzle solved ({maze.size} cells connected)")
        return GameState(maze, finished)

    if isinstance(action, UpdateMaze):
        # Stored as supplied; connectivity is not re-run
        return GameState(action.maze, False)

    raise TypeError(f"Unknown action: {action!r}")
