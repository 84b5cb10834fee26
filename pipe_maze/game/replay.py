import logging
from typing import Iterator

from pipe_maze.core.events import EventReader, EVT_START_ROTATION, EVT_END_ROTATION
from pipe_maze.game.reducer import GameState, StartRotation, EndRotation, reduce

logger = logging.getLogger(__name__)

ACTIONS = {
    EVT_START_ROTATION: StartRotation,
    EVT_END_ROTATION: EndRotation,
}


class EventAdapter:
    """
    Feeds a recorded rotation log through the reducer.
    The reader's header must already be read; self.state is updated as it iterates.
    """
    def __init__(self, state: GameState, reader: EventReader):
        self.state = state
        self.reader = reader
        self.action_count = 0

        maze = state.maze
        if reader.columns != maze.columns or reader.cell_count != maze.size:
            logger.warning(
                f"Log shape ({reader.columns} columns, {reader.cell_count} cells) does not match "
                f"maze ({maze.columns} columns, {maze.size} cells). Replay may fail."
            )

    def run(self) -> Iterator[GameState]:
        for type_code, index in self.reader.stream_events():
            action = ACTIONS[type_code](index)
            self.state = reduce(self.state, action)
            self.action_count += 1
            yield self.state

        logger.debug(f"Replayed {self.action_count} actions, finished={self.state.finished}")

    def run_all(self) -> GameState:
        for _ in self.run():
            pass
        return self.state
