"""Background search so front ends never block on the engine."""

from concurrent.futures import ThreadPoolExecutor, Future
from typing import Optional

from calmtac.core.board import Board
from calmtac.core.search import SearchEngine


class SearchWorker:
    """Single-thread executor that runs engine searches on private board copies."""

    def __init__(self, engine: Optional[SearchEngine] = None):
        self.engine = engine or SearchEngine()
        self.pool: Optional[ThreadPoolExecutor] = None

    def start(self):
        if self.pool is None:
            # one worker keeps searches strictly serialized on the shared engine
            self.pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="calmtac-search")

    def submit(self, board: Board, depth: Optional[int] = None) -> Future:
        """Queue a search; the future resolves to the chosen cell index."""
        if self.pool is None:
            raise RuntimeError("SearchWorker.start() must be called before submit()")
        return self.pool.submit(self.engine.choose_move, board.copy(), depth)

    def shutdown(self):
        if self.pool:
            self.pool.shutdown(wait=False, cancel_futures=True)
            self.pool = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.shutdown()
        return False
