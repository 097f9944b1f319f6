from typing import Dict, Set, Tuple
from puzzler.core.grid import Grid


def _open_between(grid: Grid, a: int, b: int) -> Tuple[bool, bool]:
    """
    Returns (a's wall toward b is open, b's wall toward a is open)
    for two 4-adjacent cells.
    """
    ca = grid.cells[a]
    cb = grid.cells[b]
    if cb.row == ca.row - 1:
        return not ca.top, not cb.bot
    if cb.row == ca.row + 1:
        return not ca.bot, not cb.top
    if cb.col == ca.col - 1:
        return not ca.left, not cb.right
    return not ca.right, not cb.left


class MazeAnalyzer:
    @staticmethod
    def carved_edges(grid: Grid) -> Set[Tuple[int, int]]:
        """Index pairs (a < b) whose shared wall is open on both sides."""
        edges = set()
        for a in range(len(grid.cells)):
            for b in grid.neighbors(a):
                if a < b and all(_open_between(grid, a, b)):
                    edges.add((a, b))
        return edges

    @staticmethod
    def walls_symmetric(grid: Grid) -> bool:
        for a in range(len(grid.cells)):
            for b in grid.neighbors(a):
                a_open, b_open = _open_between(grid, a, b)
                if a_open != b_open:
                    return False
        return True

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """
        True if the open walls form a spanning tree of the grid:
        exactly rows*cols - 1 passages and no passage closes a loop.
        """
        n = grid.rows * grid.cols
        edges = MazeAnalyzer.carved_edges(grid)
        if len(edges) != n - 1:
            return False

        # Union-Find
        parent = list(range(n))

        def find(x):
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        for a, b in edges:
            ra, rb = find(a), find(b)
            if ra == rb:
                return False
            parent[rb] = ra
        return True

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        isolated = 0 # 4 walls, not carved into yet
        dead_ends = 0
        intersections = 0 # 0, 1 walls
        corridors = 0 # 2 walls

        # Border walls never open, so a corner cell with a single exit has
        # 3 walls like any other dead end.
        for cell in grid.cells:
            walls = cell.wall_count
            if walls == 4: isolated += 1
            elif walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            elif walls <= 1: intersections += 1

        total = grid.rows * grid.cols
        return {
            "isolated": isolated,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "passages": len(MazeAnalyzer.carved_edges(grid)),
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
