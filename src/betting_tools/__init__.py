"""Betting tools: an Elo-driven SaltyBet bot and its supporting clients."""

__version__ = "0.1.0"
