import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'pipe_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def cell_value(text: str) -> int:
    # Accepts decimal or 0x-prefixed hex
    return int(text, 0)

def add_maze_args(parser: argparse.ArgumentParser):
    parser.add_argument("--columns", type=int, required=True, help="Maze width in cells")
    parser.add_argument("cells", type=cell_value, nargs="+", help="Cell values, row-major (decimal or 0x hex)")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pipe Maze: rotating-pipe puzzle engine")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Evaluate Command
    eval_parser = subparsers.add_parser("evaluate", help="Recompute connectivity of a maze")
    add_maze_args(eval_parser)

    # Rotate Command
    rot_parser = subparsers.add_parser("rotate", help="Rotate one cell and re-evaluate")
    rot_parser.add_argument("--index", type=int, required=True, help="Cell index to rotate")
    rot_parser.add_argument("--steps", type=int, default=1, help="Quarter turns (clockwise)")
    rot_parser.add_argument("--record-events", type=str, help="Append the rotation to a new event log")
    add_maze_args(rot_parser)

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay a rotation event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    add_maze_args(replay_parser)

    # Scramble Command
    scr_parser = subparsers.add_parser("scramble", help="Randomly rotate the cells of a maze")
    scr_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    scr_parser.add_argument("--factor", type=float, default=1.0, help="Share of cells to rotate (0.0 - 1.0)")
    add_maze_args(scr_parser)

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time the connectivity pass")
    bench_parser.add_argument("--size", type=int, default=1000, help="Benchmark size (size x size)")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("pipe_maze")

    if args.command is None:
        parser.print_help()
        return

    logger.debug(f"Running command: {args.command}")

    from pipe_maze.core.maze import Maze
    maze = None
    if hasattr(args, "cells"):
        try:
            maze = Maze(args.columns, args.cells)
        except ValueError as e:
            parser.error(str(e))
        logger.debug(f"Loaded {maze.columns}x{maze.rows} maze")

    if args.command == "evaluate":
        from pipe_maze.algo.connectivity import check_connected
        maze = check_connected(maze)
        print(maze.dump())
        print(f"Connected: {maze.visited_count}/{maze.size}")
        print(f"Finished: {maze.finished}")

    elif args.command == "rotate":
        from pipe_maze.algo.connectivity import begin_rotation, end_rotation
        from pipe_maze.core.events import EventWriter

        if not 0 <= args.index < maze.size:
            parser.error(f"--index must be between 0 and {maze.size - 1}")

        evt_writer = None
        if args.record_events:
            evt_writer = EventWriter(args.record_events)
            evt_writer.write_header(maze.columns, maze.size)
            logger.info(f"Recording events to {args.record_events}...")

        maze = begin_rotation(args.index, maze)
        maze = end_rotation(args.index, maze, steps=args.steps)

        if evt_writer:
            # The log format has no step count; one start/end pair per quarter turn
            for _ in range(args.steps % 4):
                evt_writer.log_start_rotation(args.index)
                evt_writer.log_end_rotation(args.index)
            evt_writer.close()

        print(maze.dump())
        print(f"Connected: {maze.visited_count}/{maze.size}")
        print(f"Finished: {maze.finished}")

    elif args.command == "replay":
        logger.info(f"Replaying {args.event_file}...")
        from pipe_maze.core.events import EventReader
        from pipe_maze.game.reducer import GameState
        from pipe_maze.game.replay import EventAdapter

        with EventReader(args.event_file) as reader:
            columns, count = reader.read_header()
            logger.info(f"Log Header: {columns} columns, {count} cells")
            adapter = EventAdapter(GameState(maze), reader)
            state = adapter.run_all()

        print(state.maze.dump())
        print(f"Actions: {adapter.action_count}")
        print(f"Finished: {state.finished}")

    elif args.command == "scramble":
        from pipe_maze.core.complexity import MazePostProcessor
        maze = MazePostProcessor.scramble(maze, seed=args.seed, factor=args.factor)
        print(' '.join(f"{v:#04x}" for v in maze.cells))
        logger.info(f"Stats: {MazePostProcessor.calculate_stats(maze)}")

    elif args.command == "benchmark":
        from pipe_maze.algo.connectivity import check_connected
        from pipe_maze.core import cell as c

        logger.info(f"Running connectivity benchmark (Size: {args.size}x{args.size})...")
        bench = Maze(args.size, (c.DIRECTION_MASK,) * (args.size * args.size))

        t0 = time.time()
        bench = check_connected(bench)
        duration = time.time() - t0

        print(f"{'CELLS':<12} | {'TIME (s)':<10} | {'CELLS/SEC':<12}")
        print("-" * 40)
        print(f"{bench.size:<12} | {duration:<10.4f} | {bench.size / duration if duration else 0:<12,.0f}")

if __name__ == "__main__":
    main()
