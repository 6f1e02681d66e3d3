import time
from typing import Dict, List, Optional, Tuple

from calmtac.config import CONFIG
from calmtac.core.board import Board, CENTER, CORNERS, SIZE, SYMBOLS
from calmtac.core.evaluator import Evaluator
from calmtac.core.utils import print_info

INF = 1000000
WIN_SCORE = CONFIG.search.win_score


class NoLegalMove(Exception):
    """Raised when a search is requested on a board with no empty cell."""


def clamp_depth(depth: int) -> int:
    return max(CONFIG.search.min_depth, min(CONFIG.search.max_depth, int(depth)))


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None,
                 player: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.player = CONFIG.search.engine_player if player is None else player
        self.max_depth = clamp_depth(CONFIG.search.depth if depth is None else depth)
        self.win_score = WIN_SCORE
        self.priority = self._priority_table(CONFIG.eval.move_priority)
        self.verbose = CONFIG.verbose
        self.nodes = 0

    @staticmethod
    def _priority_table(weights: Dict[str, int]) -> List[int]:
        table = [weights["edge"]] * SIZE
        for c in CORNERS:
            table[c] = weights["corner"]
        table[CENTER] = weights["center"]
        return table

    def set_max_depth(self, depth: int):
        """Difficulty: 1 (shallow) to 9 (full game tree)."""
        self.max_depth = clamp_depth(depth)

    def choose_move(self, board: Board, max_depth: Optional[int] = None) -> int:
        move, _score = self.search_best_move(board, max_depth)
        return move

    def search_best_move(self, board: Board, max_depth: Optional[int] = None) -> Tuple[int, int]:
        """Return (move, score) for the engine's side. The board is restored before returning."""
        moves = self.order_moves(board)
        if not moves:
            raise NoLegalMove(f"No empty cell left for {SYMBOLS[self.player]}")

        depth = self.max_depth if max_depth is None else clamp_depth(max_depth)
        self.nodes = 0
        start_time = time.time()

        alpha, beta = -INF, INF
        best_score = -INF
        best_move = moves[0]
        for move in moves:
            with board.trial(move, self.player):
                score = -self._negamax(board, depth - 1, -beta, -alpha, -self.player)
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        if self.verbose:
            print_info(depth, best_score, self.nodes, time.time() - start_time, best_move, self.win_score)
        return best_move, best_score

    def _negamax(self, board: Board, depth: int, alpha: int, beta: int, player: int) -> int:
        self.nodes += 1

        winner = board.winner()
        if winner == -player:
            return -(self.win_score + depth)  # slower losses score higher
        if winner == player:
            return self.win_score + depth  # faster wins score higher

        moves = self.order_moves(board)
        if not moves:
            return 0
        if depth <= 0:
            return self.evaluator.evaluate(board, player)

        best_score = -INF
        for move in moves:
            with board.trial(move, player):
                score = -self._negamax(board, depth - 1, -beta, -alpha, -player)
            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
                if alpha >= beta:
                    break

        return best_score

    def order_moves(self, board: Board) -> List[int]:
        """Empty cells by static priority: center, corners, edges. Ties keep index order."""
        return sorted(board.empty_cells(), key=lambda i: self.priority[i], reverse=True)
