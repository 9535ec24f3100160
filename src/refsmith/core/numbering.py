"""Hierarchical title numbering and heading-adornment depth tracking."""

from __future__ import annotations

from dataclasses import dataclass, field


TITLE_DEPTHS = 16
TITLE_MARKER = "title"


def _check_level(level: int) -> None:
    if not 0 <= level < TITLE_DEPTHS:
        raise ValueError(f"Title level {level} outside 0..{TITLE_DEPTHS - 1}")


@dataclass(slots=True)
class TitleNumbering:
    """Per-document numbering state.

    ``counters`` hold the section numbers used to build title anchors while
    ``numbers`` back the per-depth enumerations handed out by
    :meth:`get_number` (figures, footnotes). Both cascade: opening a title at
    a given depth resets every deeper depth.
    """

    counters: list[int] = field(default_factory=lambda: [0] * TITLE_DEPTHS)
    numbers: list[int] = field(default_factory=lambda: [1] * TITLE_DEPTHS)
    letters: dict[int, str] = field(default_factory=dict)
    current_level: int = 0

    def reset(self) -> None:
        """Restore the initial counters and forget the adornment letters."""
        self.counters = [0] * TITLE_DEPTHS
        self.numbers = [1] * TITLE_DEPTHS
        self.letters = {}
        self.current_level = 0

    def create_title(self, level: int) -> str:
        """Open a title at ``level`` and return its numbering token."""
        _check_level(level)
        for depth in range(level + 1, TITLE_DEPTHS):
            self.numbers[depth] = 1
            self.counters[depth] = 0

        # A title opened below a depth never numbered implies its ancestors.
        for depth in range(1, level):
            if self.counters[depth] == 0:
                self.counters[depth] = 1

        self.numbers[level] = 1
        self.counters[level] += 1
        token = [TITLE_MARKER]
        token.extend(str(self.counters[depth]) for depth in range(1, level + 1))
        return ".".join(token)

    def get_number(self, level: int) -> int:
        """Return the next enumeration value at ``level``."""
        _check_level(level)
        number = self.numbers[level]
        self.numbers[level] += 1
        return number

    def get_level(self, letter: str) -> int:
        """Return the depth bound to an adornment character, allocating it if new."""
        for level, title_letter in self.letters.items():
            if title_letter == letter:
                return level

        self.current_level += 1
        self.letters[self.current_level] = letter
        return self.current_level


__all__ = ["TITLE_DEPTHS", "TITLE_MARKER", "TitleNumbering"]
