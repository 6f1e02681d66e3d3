"""CalmTac: tic-tac-toe against a negamax search engine."""

__version__ = "1.0.0"
