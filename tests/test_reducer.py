import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pipe_maze.core import cell as c
from pipe_maze.core.maze import Maze
from pipe_maze.game.reducer import GameState, StartRotation, EndRotation, UpdateMaze, reduce

N, E, S, W = c.NORTH, c.EAST, c.SOUTH, c.WEST

class TestReducer(unittest.TestCase):
    def test_start_keeps_finished(self):
        state = GameState(Maze(2, [E, S]))
        state = reduce(state, StartRotation(1))
        self.assertTrue(state.maze.cells[1] & c.ROTATING)
        self.assertFalse(state.finished)

    def test_end_computes_finished(self):
        state = GameState(Maze(2, [E, S]))
        state = reduce(state, StartRotation(1))
        state = reduce(state, EndRotation(1))
        self.assertTrue(state.finished)
        self.assertEqual(state.maze.cells[1], W | c.VISITED)

    def test_solved_board_is_locked(self):
        state = GameState(Maze(2, [E, S]))
        state = reduce(reduce(state, StartRotation(1)), EndRotation(1))
        self.assertTrue(state.finished)

        locked = reduce(state, StartRotation(1))
        self.assertIs(locked, state)
        self.assertFalse(locked.maze.cells[1] & c.ROTATING)
        self.assertTrue(locked.finished)

    def test_in_flight_rotation_ends_after_solve(self):
        # Cell 2 starts turning before cell 1 completes the board
        state = GameState(Maze(3, [E, N | S, W]))
        state = reduce(state, StartRotation(2))
        state = reduce(state, StartRotation(1))
        state = reduce(state, EndRotation(1))
        self.assertTrue(state.finished)

        state = reduce(state, EndRotation(2))
        self.assertEqual(c.decode_connections(state.maze.cells[2]), N)
        self.assertFalse(state.maze.cells[2] & c.ROTATING)
        self.assertFalse(state.finished)

    def test_repeated_start_is_noop(self):
        state = reduce(GameState(Maze(2, [E, S])), StartRotation(1))
        again = reduce(state, StartRotation(1))
        self.assertEqual(state, again)

    def test_update_resets(self):
        state = GameState(Maze(2, [E | c.VISITED, W | c.VISITED]), finished=True)
        fresh = Maze(3, [E, W, 0])
        state = reduce(state, UpdateMaze(fresh))
        self.assertFalse(state.finished)
        self.assertIs(state.maze, fresh)

    def test_unknown_action(self):
        with self.assertRaises(TypeError):
            reduce(GameState(Maze(1, [0])), "ROTATE")

if __name__ == '__main__':
    unittest.main()
