import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from puzzler.core.grid import Grid
from puzzler.algo.backtracker import StepwiseBacktracker
from puzzler.core.complexity import MazeAnalyzer

class TestAnalyzer(unittest.TestCase):
    def test_fresh_grid(self):
        grid = Grid(4, 4, seed=0)
        self.assertEqual(MazeAnalyzer.carved_edges(grid), set())
        self.assertTrue(MazeAnalyzer.walls_symmetric(grid))
        self.assertFalse(MazeAnalyzer.is_perfect(grid))

    def test_single_cell_is_perfect(self):
        grid = Grid(1, 1, seed=0)
        self.assertTrue(MazeAnalyzer.is_perfect(grid))

    def test_asymmetric_wall_detected(self):
        grid = Grid(2, 2, seed=0)
        grid.cells[0].right = False
        self.assertFalse(MazeAnalyzer.walls_symmetric(grid))
        # Half-open wall is not a passage
        self.assertEqual(MazeAnalyzer.carved_edges(grid), set())

    def test_cycle_is_not_perfect(self):
        grid = Grid(2, 2, seed=0)
        # 0 1
        # 2 3
        grid.remove_wall(0, 1)
        grid.remove_wall(1, 3)
        grid.remove_wall(3, 2)
        self.assertTrue(MazeAnalyzer.is_perfect(grid))
        grid.remove_wall(2, 0)
        self.assertFalse(MazeAnalyzer.is_perfect(grid))

    def test_disconnected_with_right_edge_count(self):
        # 5 edges on 6 cells, but four of them form a loop and split off cells 2 and 5
        grid = Grid(2, 3, seed=0)
        # 0 1 2
        # 3 4 5
        grid.remove_wall(0, 1)
        grid.remove_wall(1, 4)
        grid.remove_wall(4, 3)
        grid.remove_wall(3, 0)
        grid.remove_wall(2, 5)
        self.assertEqual(len(MazeAnalyzer.carved_edges(grid)), 5)
        self.assertFalse(MazeAnalyzer.is_perfect(grid))

    def test_stats(self):
        w, h = 20, 20
        grid = Grid(h, w, seed=42)
        StepwiseBacktracker(grid).run_all()

        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertGreater(stats["dead_ends"], 0)
        self.assertEqual(stats["passages"], w * h - 1)
        self.assertEqual(stats["isolated"], 0)
        self.assertEqual(stats["dead_ends"] + stats["corridors"] + stats["intersections"], w * h)
        self.assertAlmostEqual(stats["dead_end_percent"], stats["dead_ends"] / (w * h) * 100)

    def test_buckets_cover_every_cell(self):
        # A finished 1x1 maze keeps all four walls
        grid = Grid(1, 1, seed=0)
        grid.step()
        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertEqual(stats["isolated"], 1)
        self.assertEqual(stats["passages"], 0)

        # Half-carved grid: untouched cells count as isolated
        grid = Grid(5, 5, seed=3)
        for _ in range(6):
            grid.step()
        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertGreater(stats["isolated"], 0)

        for g in (Grid(1, 1, seed=0), grid):
            stats = MazeAnalyzer.calculate_stats(g)
            total = stats["isolated"] + stats["dead_ends"] + stats["corridors"] + stats["intersections"]
            self.assertEqual(total, g.rows * g.cols)

    def test_corridor_stats(self):
        grid = Grid(1, 3, seed=0)
        grid.remove_wall(0, 1)
        grid.remove_wall(1, 2)
        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["corridors"], 1)
        self.assertEqual(stats["passages"], 2)

if __name__ == '__main__':
    unittest.main()
