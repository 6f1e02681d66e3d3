"""3x3 board with a move-history stack for exact undo."""

from contextlib import contextmanager
from enum import Enum
from typing import List, Optional

EMPTY = 0
PLAYER_A = 1   # human, X, moves first
PLAYER_B = -1  # engine, O

SIZE = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

SYMBOLS = {EMPTY: ".", PLAYER_A: "X", PLAYER_B: "O"}


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    A_WINS = "a_wins"
    B_WINS = "b_wins"
    DRAW = "draw"


class Board:
    def __init__(self, cells: Optional[List[int]] = None):
        """Start empty, or replay `cells` (X/O counts must be balanced) onto a fresh board."""
        self._cells = [EMPTY] * SIZE
        self._history: List[int] = []
        if cells is not None:
            self._load(cells)

    def _load(self, cells: List[int]):
        if len(cells) != SIZE or any(v not in SYMBOLS for v in cells):
            raise ValueError(f"Expected {SIZE} cells of -1/0/1, got {cells!r}")
        xs = [i for i, v in enumerate(cells) if v == PLAYER_A]
        os_ = [i for i, v in enumerate(cells) if v == PLAYER_B]
        if len(xs) - len(os_) not in (0, 1):
            raise ValueError(f"Unbalanced position: {len(xs)} X against {len(os_)} O")
        # interleave so the history stays in turn order
        for turn in range(len(xs)):
            self.apply(xs[turn], PLAYER_A)
            if turn < len(os_):
                self.apply(os_[turn], PLAYER_B)

    def reset(self):
        """Clear every cell and the history."""
        self._cells = [EMPTY] * SIZE
        self._history.clear()

    def apply(self, index: int, player: int) -> bool:
        """Occupy an empty cell. Returns False (board untouched) for an invalid move."""
        if player not in (PLAYER_A, PLAYER_B):
            return False
        if not isinstance(index, int) or index < 0 or index >= SIZE:
            return False
        if self._cells[index] != EMPTY:
            return False
        self._cells[index] = player
        self._history.append(index)
        return True

    def undo(self) -> bool:
        """Vacate the most recently occupied cell. Returns False if there is nothing to undo."""
        if not self._history:
            return False
        last = self._history.pop()
        self._cells[last] = EMPTY
        return True

    @contextmanager
    def trial(self, index: int, player: int):
        """Apply a move for the duration of a `with` block and always take it back."""
        if not self.apply(index, player):
            raise ValueError(f"Invalid move {index} for {SYMBOLS.get(player, player)}")
        try:
            yield self
        finally:
            self.undo()

    def get(self, index: int) -> int:
        return self._cells[index]

    @property
    def cells(self) -> List[int]:
        return list(self._cells)

    @property
    def history(self) -> List[int]:
        return list(self._history)

    def copy(self) -> "Board":
        clone = Board()
        clone._cells = list(self._cells)
        clone._history = list(self._history)
        return clone

    def empty_cells(self) -> List[int]:
        return [i for i, v in enumerate(self._cells) if v == EMPTY]

    def is_full(self) -> bool:
        return EMPTY not in self._cells

    def winner(self) -> int:
        """PLAYER_A or PLAYER_B if a line is complete, EMPTY otherwise."""
        c = self._cells
        for a, b, d in LINES:
            s = c[a] + c[b] + c[d]
            if s == 3:
                return PLAYER_A
            if s == -3:
                return PLAYER_B
        return EMPTY

    def outcome(self) -> Outcome:
        w = self.winner()
        if w == PLAYER_A:
            return Outcome.A_WINS
        if w == PLAYER_B:
            return Outcome.B_WINS
        if self.is_full():
            return Outcome.DRAW
        return Outcome.IN_PROGRESS

    def is_game_over(self) -> bool:
        return self.outcome() != Outcome.IN_PROGRESS

    def side_to_move(self) -> int:
        xs = self._cells.count(PLAYER_A)
        os_ = self._cells.count(PLAYER_B)
        return PLAYER_A if xs == os_ else PLAYER_B

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells and self._history == other._history

    def __str__(self):
        rows = []
        for r in range(3):
            rows.append(" ".join(SYMBOLS[v] for v in self._cells[r * 3:r * 3 + 3]))
        return "\n".join(rows)

    def print_board(self):
        """Print ASCII representation."""
        print(self)
