from typing import Iterator, List, Tuple

# Event Types
EVT_INIT = 0x01
EVT_VISIT = 0x02
EVT_CARVE = 0x03
EVT_BACKTRACK = 0x04
EVT_COMPLETE = 0x05


class EventLog:
    """
    In-memory record of what a Grid did while generating.
    Attach with Grid(..., event_log=EventLog()); the grid calls the log_* hooks.
    Events are (type_code, data) tuples, appended in step order.
    """
    def __init__(self):
        self.events: List[Tuple[int, Tuple]] = []
        self.rows = 0
        self.cols = 0

    def write_header(self, rows: int, cols: int, start: int):
        # Called on construction and on every reset; the log only ever
        # describes the run in progress
        self.rows, self.cols = rows, cols
        self.events = [(EVT_INIT, (rows, cols, start))]

    def log_visit(self, idx: int):
        self.events.append((EVT_VISIT, (idx,)))

    def log_carve(self, current: int, next: int):
        self.events.append((EVT_CARVE, (current, next)))

    def log_backtrack(self, from_idx: int, to_idx: int):
        self.events.append((EVT_BACKTRACK, (from_idx, to_idx)))

    def log_complete(self, idx: int):
        self.events.append((EVT_COMPLETE, (idx,)))

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        yield from self.events

    def count(self, type_code: int) -> int:
        return sum(1 for code, _ in self.events if code == type_code)

    def carves(self) -> List[Tuple[int, int]]:
        return [data for code, data in self.events if code == EVT_CARVE]

    def clear(self):
        self.events = []
