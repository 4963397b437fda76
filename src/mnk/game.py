"""
m,n,k board rules and state management.

Board representation: tuple[str] of length width * height, row-major
  - ' ': empty
  - 'X' / 'O': player and computer markers (either side may be X)

Index of cell (x, y) is x + y * width. A Board is never mutated; every
move returns a new Board.
"""

import numbers
from functools import cached_property
from typing import Iterable, List, Optional, Tuple

X_MARKER = "X"
O_MARKER = "O"
BLANK_MARKER = " "
# Scratch marker for score(); doubles as the delimiter of the text encoding
TEST_MARKER = "?"

MARKERS = (X_MARKER, O_MARKER)


def _check_int(value, name: str):
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer.")


class Board:
    """
    Immutable game position on a width x height grid.

    A marker wins with win_length consecutive copies along any row, column
    or diagonal.
    """

    def __init__(
        self,
        width: int,
        height: int,
        length: int,
        player: str,
        computer: str,
        cells: Optional[Iterable[str]] = None,
    ):
        _check_int(width, "width")
        _check_int(height, "height")
        _check_int(length, "length")
        if player not in MARKERS or computer not in MARKERS:
            raise ValueError(f"markers must be one of {MARKERS}.")
        if player == computer:
            raise ValueError("player and computer markers must differ.")

        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.win_length = max(2, int(length))
        self.player_marker = player
        self.computer_marker = computer

        size = self.width * self.height
        if cells is None:
            self.cells: Tuple[str, ...] = (BLANK_MARKER,) * size
        else:
            cells = tuple(cells)
            if len(cells) != size:
                raise ValueError(f"cells must hold {size} markers, got {len(cells)}.")
            allowed = (BLANK_MARKER, player, computer)
            for v in cells:
                if v not in allowed:
                    raise ValueError(f"invalid cell marker {v!r}.")
            self.cells = cells

    def _with_cells(self, cells: Tuple[str, ...]) -> "Board":
        """Build a sibling board sharing this board's configuration."""
        board = Board.__new__(Board)
        board.width = self.width
        board.height = self.height
        board.win_length = self.win_length
        board.player_marker = self.player_marker
        board.computer_marker = self.computer_marker
        board.cells = cells
        return board

    def _index(self, x: int, y: int) -> int:
        return x + y * self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_marker(self, x: int, y: int) -> str:
        """Return the marker at (x, y); BLANK outside the grid."""
        _check_int(x, "x")
        _check_int(y, "y")
        if not self.in_bounds(x, y):
            return BLANK_MARKER
        return self.cells[self._index(x, y)]

    def blank_cells(self) -> List[Tuple[int, int]]:
        """Empty cells in scan order (x ascending, then y ascending)."""
        return [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if self.cells[self._index(x, y)] == BLANK_MARKER
        ]

    # Geometry

    @property
    def rows(self) -> List[str]:
        w = self.width
        return ["".join(self.cells[y * w:(y + 1) * w]) for y in range(self.height)]

    @property
    def columns(self) -> List[str]:
        w = self.width
        return ["".join(self.cells[x::w]) for x in range(w)]

    def diagonal(self, x: int, y: int, left: bool = False) -> str:
        """
        Markers along the diagonal starting at (x, y) and moving down.

        Steps (+1, +1), or (-1, +1) when left is set, until leaving the grid.
        """
        return "".join(self._walk(x, y, -1 if left else 1))

    def _walk(self, x: int, y: int, dx: int) -> List[str]:
        result = []
        while self.in_bounds(x, y):
            result.append(self.cells[self._index(x, y)])
            x += dx
            y += 1
        return result

    @property
    def left_diagonals(self) -> List[str]:
        starts = [(x, 0) for x in range(self.width)]
        starts += [(self.width - 1, y) for y in range(1, self.height)]
        return [self.diagonal(x, y, left=True) for x, y in starts]

    @property
    def right_diagonals(self) -> List[str]:
        starts = [(0, y) for y in range(self.height - 1, 0, -1)]
        starts += [(x, 0) for x in range(self.width)]
        return [self.diagonal(x, y) for x, y in starts]

    @property
    def lines(self) -> List[str]:
        """Every row, column and diagonal."""
        return self.rows + self.columns + self.left_diagonals + self.right_diagonals

    def lines_through(self, x: int, y: int) -> List[str]:
        """Row, column and both diagonals passing through (x, y)."""
        # Back up to the topmost cell of each diagonal
        k = min(x, y)
        right = self.diagonal(x - k, y - k)
        k = min(self.width - 1 - x, y)
        left = self.diagonal(x + k, y - k, left=True)
        return [self.rows[y], self.columns[x], left, right]

    # Terminal state

    def _wins(self, marker: str) -> bool:
        run = marker * self.win_length
        return any(run in line for line in self.lines)

    @cached_property
    def player_win(self) -> bool:
        return self._wins(self.player_marker)

    @cached_property
    def computer_win(self) -> bool:
        return self._wins(self.computer_marker)

    @cached_property
    def done(self) -> bool:
        if self.player_win or self.computer_win:
            return True
        # Tied game
        return BLANK_MARKER not in self.cells

    # Moves

    def place(self, x: int, y: int, marker: str) -> "Board":
        """
        Return the board resulting from placing marker at (x, y).

        Invalid moves (game over, out of bounds, occupied cell, unknown
        marker) return this board unchanged.
        """
        _check_int(x, "x")
        _check_int(y, "y")

        if self.done:
            return self
        if not self.in_bounds(x, y):
            return self
        index = self._index(x, y)
        if self.cells[index] != BLANK_MARKER:
            return self
        if marker != self.player_marker and marker != self.computer_marker:
            return self

        cells = list(self.cells)
        cells[index] = marker
        return self._with_cells(tuple(cells))

    def mark(self, x: int, y: int, is_computer: bool) -> "Board":
        marker = self.computer_marker if is_computer else self.player_marker
        return self.place(x, y, marker)

    def swapped(self) -> "Board":
        """Same position seen from the other side (markers exchanged)."""
        board = self._with_cells(self.cells)
        board.player_marker = self.computer_marker
        board.computer_marker = self.player_marker
        return board

    def score(self, x: int, y: int) -> int:
        """
        Heuristic value of the computer taking (x, y).

        +1000 for an immediate win, +100 when the player would win there, and
        per line through (x, y) at least win_length long: +10 if it holds
        computer markers only, +2 if it is empty, +1 if it holds player
        markers only.
        """
        _check_int(x, "x")
        _check_int(y, "y")

        if self.done:
            return 0
        if not self.in_bounds(x, y):
            return 0
        if self.get_marker(x, y) != BLANK_MARKER:
            return 0

        computer_take = self.place(x, y, self.computer_marker)
        player_take = self.place(x, y, self.player_marker)
        score = 0

        if computer_take.computer_win:
            score += 1000
        if player_take.player_win:
            score += 100

        # The taken cell reads as TEST_MARKER so it counts for neither side
        cells = list(computer_take.cells)
        cells[self._index(x, y)] = TEST_MARKER
        scratch = self._with_cells(tuple(cells))
        for line in scratch.lines_through(x, y):
            if len(line) < self.win_length:
                continue
            if self.player_marker in line:
                if self.computer_marker not in line:
                    score += 1
            elif self.computer_marker in line:
                # Continue a run
                score += 10
            else:
                # Start an unblocked run
                score += 2

        return score

    # Encoding

    def to_string(self) -> str:
        parts = [
            str(self.width),
            str(self.height),
            str(self.win_length),
            self.player_marker,
            self.computer_marker,
            "".join(self.cells),
        ]
        return TEST_MARKER.join(parts)

    @classmethod
    def from_string(cls, s: str) -> "Board":
        """Decode a board produced by to_string()."""
        if not isinstance(s, str):
            raise TypeError("s must be a string.")
        parts = s.split(TEST_MARKER)
        if len(parts) != 6:
            raise ValueError(f"expected 6 fields separated by {TEST_MARKER!r}, got {len(parts)}.")
        try:
            width, height, length = (int(p) for p in parts[:3])
        except ValueError:
            raise ValueError(f"invalid board dimensions in {s!r}.") from None
        return cls(width, height, length, parts[3], parts[4], cells=parts[5])

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Board.from_string({self.to_string()!r})"

    def _key(self):
        return (
            self.width,
            self.height,
            self.win_length,
            self.player_marker,
            self.computer_marker,
            self.cells,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())
