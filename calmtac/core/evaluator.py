from calmtac.config import CONFIG
from calmtac.core.board import Board, CENTER, CORNERS, LINES


class Evaluator:
    """Static score of a non-terminal position, used only at the depth cutoff."""

    def __init__(self, weights=None):
        self.weights = dict(weights or CONFIG.eval.weights)

    def evaluate(self, board: Board, player: int) -> int:
        """Score `board` for `player` (positive = good for `player`)."""
        w = self.weights
        b = board.cells
        opponent = -player
        score = 0

        # Center
        if b[CENTER] == player:
            score += w["center"]
        elif b[CENTER] == opponent:
            score -= w["center"]

        # Corners
        for c in CORNERS:
            if b[c] == player:
                score += w["corner"]
            elif b[c] == opponent:
                score -= w["corner"]

        # Lines one move from completion
        for l in LINES:
            s = b[l[0]] + b[l[1]] + b[l[2]]
            if s == 2 * player:
                score += w["win_threat"]
            if s == 2 * opponent:
                score -= w["block_threat"]

        return score
