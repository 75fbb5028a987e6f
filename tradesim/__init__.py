"""
TradeSim - Interactive Monte-Carlo Trade Simulator

Simulates a trading strategy described by win probability, reward
multiple and loss multiple, one random trade at a time, with
compounding risk sizing and running drawdown statistics.

Modules:
    sampler: Draws a signed R-multiple from a strategy profile
    position_sizing: Converts an R-multiple into P&L at a fraction of equity
    simulation_state: Equity, counters, peak/drawdown and bounded history
    run_controller: Cancellable timed auto-run loop
    analytics: Expectancy, win rate, drawdown and normalized equity series
    engine: Session coordinator exposing the public interface

Usage:
    >>> from tradesim import create_simulator
    >>> sim = create_simulator(seed=7)
    >>> sim.apply_preset("trend")
    >>> sim.step_once()
    >>> snapshot = sim.get_snapshot()
"""

__version__ = "1.0.0"
__author__ = "TradeSim"

from .engine.simulator_engine import TradeSimulator, create_simulator
from .run_controller import RunController
from .simulation_state import SimulationState
from .sampler import OutcomeSampler, create_random_source, sample_r_multiple
from .position_sizing import RiskSizer, size_trade
from .analytics import (
    calculate_expectancy,
    calculate_observed_win_rate,
    normalize_equity_series,
    project_statistics,
)
from .exceptions import SimulatorError, UnknownPresetError, InvalidParameterError

# Import models
from .models.simulation import (
    RunState,
    PresetDefinition,
    StrategyProfile,
    TradeOutcome,
    SimulationSnapshot,
    SimulationStatistics,
)

# Import config
from .config.presets import PRESETS, get_preset, list_presets
from .config.settings import SimulationSettings, get_settings

__all__ = [
    # Main classes
    "TradeSimulator",
    "create_simulator",
    "RunController",
    "SimulationState",
    "OutcomeSampler",
    "create_random_source",
    "sample_r_multiple",
    "RiskSizer",
    "size_trade",
    
    # Statistics
    "calculate_expectancy",
    "calculate_observed_win_rate",
    "normalize_equity_series",
    "project_statistics",
    
    # Errors
    "SimulatorError",
    "UnknownPresetError",
    "InvalidParameterError",
    
    # Models
    "RunState",
    "PresetDefinition",
    "StrategyProfile",
    "TradeOutcome",
    "SimulationSnapshot",
    "SimulationStatistics",
    
    # Config
    "PRESETS",
    "get_preset",
    "list_presets",
    "SimulationSettings",
    "get_settings",
]
