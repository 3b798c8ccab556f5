from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Viewport:
    start: int = 0
    size: int = 1

    def update(self, selected: int, total: int) -> None:
        """Scroll just enough to keep *selected* inside ``[start, start + size)``."""
        if selected >= self.start + self.size:
            self.start = selected - self.size + 1
        elif selected < self.start:
            self.start = selected
        self.start = max(0, min(self.start, self.max_start(total)))

    def resize(self, rows: int, selected: int, total: int) -> None:
        self.size = max(1, rows)
        self.update(selected, total)

    def reset(self) -> None:
        self.start = 0

    def max_start(self, total: int) -> int:
        return max(0, total - self.size)

    def scroll_up(self) -> None:
        if self.start > 0:
            self.start -= 1

    def scroll_down(self, total: int) -> None:
        if self.start < self.max_start(total):
            self.start += 1

    def clamp_selection(self, selected: int, total: int) -> int:
        """Pull *selected* back into the visible window after a wheel scroll."""
        if total <= 0:
            return 0
        end = min(total, self.start + self.size)
        return max(self.start, min(selected, end - 1))

    @property
    def end(self) -> int:
        return self.start + self.size

    def visible_range(self, total: int) -> range:
        return range(self.start, min(total, self.end))
