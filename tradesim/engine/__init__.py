"""
Simulator Engine - Session Coordinator for the Trade Simulator
"""

from .simulator_engine import (
    TradeSimulator,
    create_simulator,
)

__all__ = [
    "TradeSimulator",
    "create_simulator",
]
