import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

class VideoRecorder:
    """
    Writes rendered maze frames to an MP4. One frame per rendered tick, so
    the video plays the carving at the recorder's fps regardless of how
    fast the window ran.
    """
    DIRECTORY = "recordings"
    HOLD_SECONDS = 2.0  # Finished maze stays on screen this long at the end

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = self.filename_for()

    @classmethod
    def filename_for(cls, rows=None, cols=None, seed=None, directory=None):
        """
        recordings/gen_<rows>x<cols>[_seed<seed>]_<timestamp>.mp4,
        creating the directory if needed.
        """
        directory = directory or cls.DIRECTORY
        os.makedirs(directory, exist_ok=True)

        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        parts = ["gen"]
        if rows is not None and cols is not None:
            parts.append(f"{rows}x{cols}")
        if seed is not None:
            parts.append(f"seed{seed}")
        parts.append(ts)
        return os.path.join(directory, "_".join(parts) + ".mp4")

    @staticmethod
    def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
        # surfarray is (width, height, 3) RGB; OpenCV wants (height, width, 3) BGR
        frame = np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def _open(self, size):
        self.frame_size = size
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
        logger.info(f"Recording started: {self.output_file}")

    def capture_frame(self, surface: pygame.Surface, repeat: int = 1):
        if not self.active or repeat < 1:
            return
        if self.writer is None:
            self._open(surface.get_size())

        frame = self.surface_to_frame(surface)
        for _ in range(repeat):
            self.writer.write(frame)
        self.frame_count += repeat

    def hold(self, surface: pygame.Surface, seconds: float = HOLD_SECONDS):
        """Repeat the current frame so the completed maze lingers in the video."""
        self.capture_frame(surface, repeat=int(round(seconds * self.fps)))

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
