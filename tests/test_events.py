import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from puzzler.core.grid import Grid
from puzzler.algo.backtracker import StepwiseBacktracker
from puzzler.core.complexity import MazeAnalyzer
from puzzler.core.events import (EventLog, EVT_INIT, EVT_VISIT, EVT_CARVE,
                                 EVT_BACKTRACK, EVT_COMPLETE)

class TestEventLog(unittest.TestCase):
    def test_header_on_construction(self):
        log = EventLog()
        grid = Grid(3, 4, seed=1, event_log=log)
        self.assertEqual(log.events, [(EVT_INIT, (3, 4, grid.current))])
        self.assertEqual((log.rows, log.cols), (3, 4))

    def test_full_run(self):
        log = EventLog()
        grid = Grid(5, 6, seed=9, event_log=log)
        while not grid.complete:
            grid.step()
        n = 5 * 6

        self.assertEqual(log.count(EVT_INIT), 1)
        self.assertEqual(log.count(EVT_VISIT), n)
        self.assertEqual(log.count(EVT_CARVE), n - 1)
        self.assertEqual(log.count(EVT_BACKTRACK), n - 1)
        self.assertEqual(log.count(EVT_COMPLETE), 1)
        self.assertEqual(log.events[-1], (EVT_COMPLETE, (grid.current,)))

        # Completion is logged once even if stepping continues
        grid.step()
        self.assertEqual(log.count(EVT_COMPLETE), 1)

    def test_carves_are_adjacent_and_descend(self):
        log = EventLog()
        grid = Grid(6, 6, seed=4, event_log=log)
        while not grid.complete:
            grid.step()

        carved_into = set()
        for current, nxt in log.carves():
            self.assertIn(nxt, set(grid.neighbors(current)))
            self.assertNotIn(nxt, carved_into, "a cell is carved into only once")
            carved_into.add(nxt)

    def test_visits_in_stream_order(self):
        log = EventLog()
        grid = Grid(2, 3, seed=6, event_log=log)
        while not grid.complete:
            grid.step()

        visited = [data[0] for code, data in log.stream_events() if code == EVT_VISIT]
        self.assertEqual(sorted(visited), list(range(6)))
        start = log.events[0][1][2]
        self.assertEqual(visited[0], start)

    def test_reset_writes_new_header(self):
        log = EventLog()
        grid = Grid(3, 3, seed=2, event_log=log)
        grid.step()
        grid.reset()
        self.assertEqual(log.events, [(EVT_INIT, (3, 3, grid.current))])

    def test_restart_mid_run_counts_only_new_run(self):
        rows, cols = 6, 9
        log = EventLog()
        grid = Grid(rows, cols, seed=4, event_log=log)
        gen = StepwiseBacktracker(grid)
        it = gen.run()
        for _ in range(40):
            next(it)

        gen.restart()
        gen.run_all()

        self.assertEqual(log.count(EVT_INIT), 1)
        self.assertEqual(log.count(EVT_CARVE), rows * cols - 1)
        self.assertEqual(log.count(EVT_CARVE), len(MazeAnalyzer.carved_edges(grid)))
        self.assertEqual(log.count(EVT_BACKTRACK), rows * cols - 1)
        self.assertEqual(log.count(EVT_VISIT), rows * cols)

if __name__ == '__main__':
    unittest.main()
