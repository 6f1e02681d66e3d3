"""Core engine components: board, evaluator and search."""

from .board import Board, Outcome, EMPTY, PLAYER_A, PLAYER_B
from .evaluator import Evaluator
from .search import SearchEngine, NoLegalMove
