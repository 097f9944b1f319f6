import logging
from typing import Iterator
from puzzler.algo.base import Generator

logger = logging.getLogger(__name__)

class StepwiseBacktracker(Generator):
    """
    Randomized depth-first carving, one Grid.step() per iteration.
    Yields the state each step performed, then "Done".
    """
    LOG_EVERY = 1000

    def run(self) -> Iterator[str]:
        while not self.finished:
            state = self.grid.step()
            self.step_count += 1

            if self.step_count % self.LOG_EVERY == 0:
                logger.debug(f"Step {self.step_count}: {state}, stack {len(self.grid.stack)}")
            yield state

        logger.debug(f"Generation complete after {self.step_count} steps")
        yield "Done"
