"""Frame counters collected per one-second period."""

from __future__ import annotations

from dataclasses import dataclass

_COUNTER_MASK = 0xFFFF


@dataclass
class Statistics:
    """Counts detected, good and shown frames and keeps the last period's totals."""

    start_time: int = 0
    good_frames: int = 0
    show_frames: int = 0
    total_frames: int = 0
    final_good_frames: int = 0
    final_show_frames: int = 0
    final_total_frames: int = 0

    def increase_total(self) -> None:
        """A new frame header was detected."""
        self.total_frames = (self.total_frames + 1) & _COUNTER_MASK

    def increase_show(self) -> None:
        """A frame was shown on the strip."""
        self.show_frames = (self.show_frames + 1) & _COUNTER_MASK

    def increase_good(self) -> None:
        """A frame was received correctly."""
        self.good_frames = (self.good_frames + 1) & _COUNTER_MASK

    def _clear_current(self) -> None:
        self.good_frames = 0
        self.total_frames = 0
        self.show_frames = 0

    def update(self, current_time: int) -> None:
        """Close the period: save its counters (if any frame came) and start a new one."""
        if self.total_frames > 0:
            self.final_show_frames = self.show_frames
            self.final_good_frames = min(self.good_frames, self.total_frames)
            self.final_total_frames = self.total_frames
        self.start_time = current_time
        self._clear_current()

    def report(self, current_time: int, mem1: int = 0, mem2: int = 0, heap: int = 0) -> str:
        """Restart the period and return the line describing the last saved totals."""
        self.start_time = current_time
        self._clear_current()
        incomplete = self.final_total_frames - self.final_good_frames
        return (
            f"HyperHDR frames: {self.final_show_frames} (FPS), "
            f"receiv.: {self.final_total_frames}, good: {self.final_good_frames}, "
            f"incompl.: {incomplete}, mem1: {mem1}, mem2: {mem2}, heap: {heap}"
        )

    def reset(self, current_time: int) -> None:
        """Clear both the current and the saved counters."""
        self.start_time = current_time
        self.final_show_frames = 0
        self.final_good_frames = 0
        self.final_total_frames = 0
        self._clear_current()

    def light_reset(self, current_time: int, has_data: bool) -> None:
        """Clear the current counters; restart the period only when data is flowing."""
        if has_data:
            self.start_time = current_time
        self._clear_current()