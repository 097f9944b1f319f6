import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'puzzler' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Puzzler: step-by-step perfect maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--rows", type=int, default=None, help="Maze rows (default: fill the window)")
    gen_parser.add_argument("--cols", type=int, default=None, help="Maze columns (default: fill the window)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--visual", action="store_true", help="Animate generation in a window (Q quits, R restarts)")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")
    gen_parser.add_argument("--steps-per-frame", type=int, default=1, help="Grid steps per rendered frame")
    gen_parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    gen_parser.add_argument("--hud", action="store_true", help="Show status overlay")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time full generation")
    bench_parser.add_argument("--size", type=int, default=200, help="Benchmark size (square)")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser

def run_generate(args, logger):
    from puzzler.core.grid import Grid
    from puzzler.core.events import EventLog
    from puzzler.algo.backtracker import StepwiseBacktracker
    from puzzler.core.complexity import MazeAnalyzer
    from puzzler.viz.renderer import Renderer

    rows, cols = args.rows, args.cols
    if rows is None or cols is None:
        default_rows, default_cols = Renderer.grid_shape_for_window()
        rows = default_rows if rows is None else rows
        cols = default_cols if cols is None else cols

    logger.info(f"Generating {rows}x{cols} maze (seed={args.seed})...")
    event_log = EventLog()
    grid = Grid(rows, cols, seed=args.seed, event_log=event_log)
    generator = StepwiseBacktracker(grid)

    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        record_file = None
        if args.record:
            from puzzler.viz.recorder import VideoRecorder
            record_file = VideoRecorder.filename_for(rows, cols, args.seed)
            logger.info(f"Recording video to {record_file}")

        renderer = Renderer(grid, generator=generator, steps_per_frame=args.steps_per_frame,
                            fps=args.fps, show_hud=args.hud, record=args.record,
                            record_file=record_file)

        renderer.init_window()
        renderer.run_loop()
    else:
        logger.info("Headless generation...")
        generator.run_all()

    if not grid.complete:
        logger.info(f"Stopped before completion ({grid.visited_count}/{rows * cols} cells visited).")
        return

    from puzzler.core.events import EVT_CARVE, EVT_BACKTRACK
    logger.info(f"Done in {generator.step_count} steps: "
                f"{event_log.count(EVT_CARVE)} walls removed, {event_log.count(EVT_BACKTRACK)} backtracks.")
    logger.info(f"Stats: {MazeAnalyzer.calculate_stats(grid)}")
    logger.info(f"Perfect maze: {MazeAnalyzer.is_perfect(grid)}")

def run_benchmark(args, logger):
    from puzzler.core.grid import Grid
    from puzzler.algo.backtracker import StepwiseBacktracker
    import time

    logger.info(f"Running generation benchmark (Size: {args.size}x{args.size})...")

    t0 = time.time()
    grid = Grid(args.size, args.size, seed=args.seed)
    logger.info(f"Grid Init: {time.time() - t0:.4f}s")

    gen = StepwiseBacktracker(grid)
    t1 = time.time()
    gen.run_all()
    duration = time.time() - t1

    cells = args.size * args.size
    print(f"\n{'CELLS':<12} | {'STEPS':<12} | {'TIME (s)':<10} | {'STEPS/SEC':<12}")
    print("-" * 54)
    rate = gen.step_count / duration if duration > 0 else float("inf")
    print(f"{cells:<12,} | {gen.step_count:<12,} | {duration:<10.4f} | {rate:<12,.0f}")

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("puzzler")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            run_generate(args, logger)
        elif args.command == "benchmark":
            run_benchmark(args, logger)
    except ValueError as e:
        logger.error(str(e))
        return 2
    return 0

if __name__ == "__main__":
    sys.exit(main())
