"""
Simulation Models for the Trade Simulator
"""

from .simulation import (
    RunState,
    PresetDefinition,
    StrategyProfile,
    TradeOutcome,
    SimulationSnapshot,
    SimulationStatistics,
)

__all__ = [
    "RunState",
    "PresetDefinition",
    "StrategyProfile",
    "TradeOutcome",
    "SimulationSnapshot",
    "SimulationStatistics",
]
