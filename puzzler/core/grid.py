import random
from typing import Iterator, List, Optional


def index(row: int, col: int, rows: int, cols: int) -> Optional[int]:
    """Flat offset of (row, col), or None if it falls outside a rows x cols grid."""
    if row < 0 or col < 0 or row > rows - 1 or col > cols - 1:
        return None
    return row * cols + col


class Cell:
    __slots__ = ('row', 'col', 'visited', 'top', 'bot', 'left', 'right')

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.visited = False
        # All walls present by default
        self.top = True
        self.bot = True
        self.left = True
        self.right = True

    @property
    def wall_count(self) -> int:
        return int(self.top) + int(self.bot) + int(self.left) + int(self.right)

    def __repr__(self):
        return f"Cell({self.row}, {self.col}, visited={self.visited})"


class Grid:
    # Step results
    GENERATING = "generating"
    BACKTRACKING = "backtracking"
    COMPLETE = "complete"

    __slots__ = ('rows', 'cols', 'cells', 'stack', 'current', 'next',
                 'complete', 'seed', 'rng', '_own_rng', 'event_log')

    def __init__(self, rows: int, cols: int, seed: int = None,
                 rng: random.Random = None, event_log=None):
        for name, value in (("rows", rows), ("cols", cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {value!r}")
            if value < 1:
                raise ValueError(f"Grid needs at least one row and column, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.seed = seed
        self._own_rng = rng is None
        self.rng = rng if rng is not None else random.Random(seed)
        self.event_log = event_log
        self._build()

    def _build(self):
        self.cells: List[Cell] = [Cell(row, col)
                                  for row in range(self.rows)
                                  for col in range(self.cols)]
        self.stack: List[int] = []
        self.next: Optional[int] = None
        self.complete = False
        self.current = self.rng.randrange(self.rows * self.cols)

        if self.event_log is not None:
            self.event_log.write_header(self.rows, self.cols, self.current)

    def reset(self):
        """
        Rebuilds every cell and picks a new start, as if the grid were
        constructed again. An explicit seed replays the same maze.
        """
        if self._own_rng:
            self.rng = random.Random(self.seed)
        self._build()

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        idx = index(row, col, self.rows, self.cols)
        if idx is None:
            return None
        return self.cells[idx]

    @property
    def current_cell(self) -> Cell:
        return self.cells[self.current]

    @property
    def visited_count(self) -> int:
        return sum(1 for cell in self.cells if cell.visited)

    def neighbors(self, idx: int) -> Iterator[int]:
        """
        Yields in-bounds indices above, below, left and right of idx.
        Does NOT check walls or visited flags.
        """
        cell = self.cells[idx]
        for row, col in ((cell.row - 1, cell.col),
                         (cell.row + 1, cell.col),
                         (cell.row, cell.col - 1),
                         (cell.row, cell.col + 1)):
            candidate = index(row, col, self.rows, self.cols)
            if candidate is not None:
                yield candidate

    def get_random_neighbor(self, current: int) -> Optional[int]:
        candidates = [n for n in self.neighbors(current) if not self.cells[n].visited]
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def remove_wall(self, current: int, next: int) -> bool:
        """
        Removes the wall between two 4-adjacent cells, on both sides.
        Returns False (and changes nothing) if the cells are not adjacent.
        """
        a = self.cells[current]
        b = self.cells[next]
        dr = a.row - b.row
        dc = a.col - b.col

        if abs(dr) + abs(dc) != 1:
            return False

        if dc == 1:
            a.left = False
            b.right = False
        elif dc == -1:
            a.right = False
            b.left = False
        elif dr == 1:
            a.top = False
            b.bot = False
        else:
            a.bot = False
            b.top = False

        if self.event_log is not None:
            self.event_log.log_carve(current, next)
        return True

    def step(self) -> str:
        """Advances generation by one descent or one backtrack."""
        cell = self.cells[self.current]
        if not cell.visited:
            cell.visited = True
            if self.event_log is not None:
                self.event_log.log_visit(self.current)

        self.next = self.get_random_neighbor(self.current)

        if self.next is not None:
            self.stack.append(self.current)
            self.remove_wall(self.current, self.next)
            self.current = self.next
            return self.GENERATING

        if self.stack:
            previous = self.current
            self.current = self.stack.pop()
            if self.event_log is not None:
                self.event_log.log_backtrack(previous, self.current)
            return self.BACKTRACKING

        if not self.complete:
            self.complete = True
            if self.event_log is not None:
                self.event_log.log_complete(self.current)
        return self.COMPLETE
