import logging
import pygame
from typing import Tuple
from puzzler.core.grid import Grid, Cell
from puzzler.algo.backtracker import StepwiseBacktracker

logger = logging.getLogger(__name__)

class Renderer:
    TITLE = "Puzzler"
    WINDOW_WIDTH = 800
    WINDOW_HEIGHT = 800
    CELL_SIZE = 20.0  # Pixels per cell
    MIN_CELL_SIZE = 1.0
    WALL_WIDTH = 2

    COLOR_BG = (0, 0, 0)
    COLOR_WALL = (255, 255, 255)
    COLOR_VISITED = (112, 31, 126)  # Dark purple
    COLOR_CURRENT = (0, 82, 172)    # Dark blue
    COLOR_TEXT = (255, 255, 255)

    def __init__(self, grid: Grid, generator=None, width=WINDOW_WIDTH, height=WINDOW_HEIGHT,
                 steps_per_frame=1, fps=60, show_hud=False, record=False, record_file=None):
        self.grid = grid
        self.generator = generator if generator is not None else StepwiseBacktracker(grid)
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = max(1, steps_per_frame)
        self.fps = fps
        self.show_hud = show_hud

        self.cell_size = self.CELL_SIZE
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.fit_to_screen()

        from puzzler.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, output_file=record_file)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_iter = None
        self.gen_finished = False
        self.held = False

    @classmethod
    def grid_shape_for_window(cls, width=WINDOW_WIDTH, height=WINDOW_HEIGHT, cell_size=CELL_SIZE) -> Tuple[int, int]:
        """(rows, cols) of CELL_SIZE cells that fill the window."""
        return max(1, int(height // cell_size)), max(1, int(width // cell_size))

    def fit_to_screen(self):
        """
        Shrink cells if the grid is larger than the window, then center it.
        Cells never go below MIN_CELL_SIZE; a grid that still does not fit
        is drawn from the top-left corner and clipped by the window.
        """
        zoom_x = self.screen_width / self.grid.cols
        zoom_y = self.screen_height / self.grid.rows
        fit = min(self.CELL_SIZE, zoom_x, zoom_y)
        if fit < self.MIN_CELL_SIZE:
            logger.warning(f"{self.grid.rows}x{self.grid.cols} grid does not fit a "
                           f"{self.screen_width}x{self.screen_height} window at "
                           f"{self.MIN_CELL_SIZE:g}px per cell; drawing is clipped")
        self.cell_size = max(self.MIN_CELL_SIZE, fit)

        total_maze_w = self.grid.cols * self.cell_size
        total_maze_h = self.grid.rows * self.cell_size

        self.offset_x = max(0.0, (self.screen_width - total_maze_w) / 2)
        self.offset_y = max(0.0, (self.screen_height - total_maze_h) / 2)

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(self.TITLE)
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def cell_origin(self, cell: Cell) -> Tuple[int, int]:
        x = int(cell.col * self.cell_size + self.offset_x)
        y = int(cell.row * self.cell_size + self.offset_y)
        return x, y

    def restart(self):
        logger.info("Restarting generation")
        self.generator.restart()
        self.gen_iter = self.generator.run()
        self.gen_finished = False
        self.held = False

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.restart()

    def advance(self):
        """Pull steps_per_frame steps from the generator."""
        if self.gen_iter is None or self.gen_finished:
            return
        try:
            for _ in range(self.steps_per_frame):
                next(self.gen_iter)
        except StopIteration:
            self.gen_finished = True
            logger.info(f"Maze complete ({self.generator.step_count} steps)")

    def highlight(self, cell: Cell, color):
        x, y = self.cell_origin(cell)
        size = int(self.cell_size)
        pygame.draw.rect(self.surface, color, (x, y, size, size))

    def draw_cell(self, cell: Cell):
        x, y = self.cell_origin(cell)
        size = int(self.cell_size)

        if cell.visited:
            self.highlight(cell, self.COLOR_VISITED)

        wall_color = self.COLOR_WALL
        if cell.top:
            pygame.draw.line(self.surface, wall_color, (x, y), (x + size, y), self.WALL_WIDTH)
        if cell.bot:
            pygame.draw.line(self.surface, wall_color, (x, y + size), (x + size, y + size), self.WALL_WIDTH)
        if cell.left:
            pygame.draw.line(self.surface, wall_color, (x, y), (x, y + size), self.WALL_WIDTH)
        if cell.right:
            pygame.draw.line(self.surface, wall_color, (x + size, y), (x + size, y + size), self.WALL_WIDTH)

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)

        for cell in self.grid.cells:
            self.draw_cell(cell)

        self.highlight(self.grid.current_cell, self.COLOR_CURRENT)

    def draw_hud(self):
        if self.font is None:
            return
        fps = int(self.clock.get_fps()) if self.clock else 0
        status = "Done" if self.grid.complete else "Running"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.rows}x{self.grid.cols}",
            f"Visited: {self.grid.visited_count}/{self.grid.rows * self.grid.cols}",
            f"Stack: {len(self.grid.stack)}",
            f"Status: {status}",
            "REC" if self.recorder.active else ""
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        self.gen_iter = self.generator.run()

        while self.running:
            self.handle_input()

            # Frame shows the grid as left by the previous tick
            self.draw_grid()
            if self.show_hud:
                self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)
                if self.gen_finished and not self.held:
                    self.recorder.hold(self.surface)
                    self.held = True

            self.advance()
            self.clock.tick(self.fps)

        self.recorder.stop()
        pygame.quit()
