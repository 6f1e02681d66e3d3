from typing import Optional

from calmtac.core.board import Board, Outcome, PLAYER_A
from calmtac.core.search import SearchEngine
from calmtac.core.evaluator import Evaluator

STATUS_TEXT = {
    Outcome.A_WINS: "You win!",
    Outcome.B_WINS: "AI wins - better luck next time.",
    Outcome.DRAW: "Draw - a calm stalemate.",
}


class Game:
    """Human (X) against the engine (O). Owns the board; front ends only read it."""

    def __init__(self, depth: Optional[int] = None):
        self.board = Board()
        self.search = SearchEngine(Evaluator(), depth=depth)
        self.human = PLAYER_A
        self.engine = self.search.player
        self.player_turn = True

    def human_move(self, index: int) -> bool:
        """Play the human's mark. False if it's not their turn, the game is over, or the cell is taken."""
        if not self.player_turn or self.board.is_game_over():
            return False
        if not self.board.apply(index, self.human):
            return False
        self.player_turn = False
        return True

    def engine_move(self) -> Optional[int]:
        """Search and play the engine's reply. None when it is not the engine's turn."""
        if self.player_turn or self.board.is_game_over():
            return None
        move = self.search.choose_move(self.board)
        self.play_engine_move(move)
        return move

    def play_engine_move(self, index: int) -> bool:
        """Apply a move computed elsewhere (e.g. by a SearchWorker)."""
        if self.player_turn or not self.board.apply(index, self.engine):
            return False
        self.player_turn = True
        return True

    def undo(self) -> bool:
        """Take back one ply."""
        if not self.board.undo():
            return False
        self.player_turn = self.board.side_to_move() == self.human
        return True

    def take_back(self) -> bool:
        """Undo until it is the human's turn again."""
        if not self.undo():
            return False
        while not self.player_turn and self.undo():
            pass
        return True

    def restart(self):
        self.board.reset()
        self.player_turn = True

    def set_difficulty(self, depth: int):
        self.search.set_max_depth(depth)

    @property
    def difficulty(self) -> int:
        return self.search.max_depth

    def outcome(self) -> Outcome:
        return self.board.outcome()

    def status(self) -> str:
        outcome = self.outcome()
        if outcome in STATUS_TEXT:
            return STATUS_TEXT[outcome]
        return "Your turn - X" if self.player_turn else "AI thinking..."

    def print_board(self):
        self.board.print_board()
