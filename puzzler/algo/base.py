from abc import ABC, abstractmethod
from typing import Iterator
from puzzler.core.grid import Grid

class Generator(ABC):
    """
    Drives a Grid towards completion. Subclasses yield once per unit of work
    so a caller can pace generation (one yield per frame, N per frame, ...).
    """
    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0

    @property
    def finished(self) -> bool:
        return self.grid.complete

    @abstractmethod
    def run(self) -> Iterator[str]:
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass

    def restart(self):
        """Rebuilds the grid (same seed policy) and zeroes the step count."""
        self.grid.reset()
        self.step_count = 0
