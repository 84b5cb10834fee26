import unittest
import sys
import os
import shutil

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pipe_maze.core import cell as c
from pipe_maze.core.maze import Maze
from pipe_maze.core.events import EventWriter, EventReader, EVT_START_ROTATION, EVT_END_ROTATION
from pipe_maze.game.reducer import GameState
from pipe_maze.game.replay import EventAdapter

N, E, S, W = c.NORTH, c.EAST, c.SOUTH, c.WEST

class TestEvents(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_log_contents(self):
        path = "test_out/log.events"
        with EventWriter(path) as writer:
            writer.write_header(3, 6)
            writer.log_start_rotation(4)
            writer.log_end_rotation(4)

        with EventReader(path) as reader:
            self.assertEqual(reader.read_header(), (3, 6))
            events = list(reader.stream_events())
        self.assertEqual(events, [(EVT_START_ROTATION, 4), (EVT_END_ROTATION, 4)])

        # Header (7 + 8) + 2 records of 5 bytes
        self.assertEqual(os.path.getsize(path), 25)

    def test_bad_magic(self):
        path = "test_out/bad.events"
        with open(path, "wb") as f:
            f.write(b"MAZELOG" + bytes(8))
        with EventReader(path) as reader:
            with self.assertRaises(ValueError):
                reader.read_header()

    def test_truncated_record(self):
        path = "test_out/trunc.events"
        with EventWriter(path) as writer:
            writer.write_header(2, 2)
            writer.file.write(bytes([EVT_END_ROTATION, 0]))
        with EventReader(path) as reader:
            reader.read_header()
            with self.assertRaises(ValueError):
                list(reader.stream_events())

    def test_replay(self):
        path = "test_out/replay.events"
        with EventWriter(path) as writer:
            writer.write_header(2, 2)
            writer.log_start_rotation(1)
            writer.log_end_rotation(1)

        with EventReader(path) as reader:
            reader.read_header()
            adapter = EventAdapter(GameState(Maze(2, [E, S])), reader)
            states = list(adapter.run())

        self.assertEqual(adapter.action_count, 2)
        self.assertEqual(len(states), 2)
        self.assertTrue(states[0].maze.cells[1] & c.ROTATING)
        self.assertTrue(adapter.state.finished)

    def test_replay_end_without_start(self):
        path = "test_out/end_only.events"
        with EventWriter(path) as writer:
            writer.write_header(2, 2)
            writer.log_end_rotation(1)
            writer.log_end_rotation(1)

        with EventReader(path) as reader:
            reader.read_header()
            state = EventAdapter(GameState(Maze(2, [E, N])), reader).run_all()
        self.assertEqual(c.decode_connections(state.maze.cells[1]), S)
        self.assertFalse(state.finished)

    def test_replay_shape_mismatch_warns(self):
        path = "test_out/mismatch.events"
        with EventWriter(path) as writer:
            writer.write_header(4, 8)

        with EventReader(path) as reader:
            reader.read_header()
            with self.assertLogs("pipe_maze.game.replay", level="WARNING"):
                adapter = EventAdapter(GameState(Maze(2, [E, W])), reader)
            state = adapter.run_all()
        self.assertEqual(adapter.action_count, 0)
        self.assertFalse(state.finished)

if __name__ == '__main__':
    unittest.main()
