"""
Simulation Data Models for the Trade Simulator

Defines the data structures shared across the engine:
- Strategy profile and preset definitions
- Trade outcomes
- Read-only snapshots and derived statistics
- Run controller states
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Tuple

from ..utils.helpers import clamp


class RunState(Enum):
    """Run controller states"""
    IDLE = auto()
    RUNNING = auto()


@dataclass(frozen=True)
class PresetDefinition:
    """Named, immutable strategy archetype"""
    key: str
    name: str
    win_pct: float
    reward_r: float
    loss_r: float
    note: str = ""


@dataclass
class StrategyProfile:
    """
    Strategy parameters driving the outcome sampler.

    Values are stored exactly as given; clamping happens where they are
    consumed, never here.
    """
    win_pct: float = 55.0  # Win probability in percent
    reward_r: float = 2.0  # R gained on a win
    loss_r: float = 1.0  # R lost (magnitude) on a loss

    @property
    def win_probability(self) -> float:
        """Win probability as a fraction clamped into [0, 1]"""
        return clamp(self.win_pct / 100.0, 0.0, 1.0)

    def apply(self, preset: PresetDefinition) -> None:
        """Overwrite the three fields with a preset's values"""
        self.win_pct = preset.win_pct
        self.reward_r = preset.reward_r
        self.loss_r = preset.loss_r

    def copy(self) -> "StrategyProfile":
        return StrategyProfile(
            win_pct=self.win_pct,
            reward_r=self.reward_r,
            loss_r=self.loss_r,
        )


@dataclass(frozen=True)
class TradeOutcome:
    """Result of a single simulated trade"""
    r_multiple: float
    pnl: float

    @property
    def is_win(self) -> bool:
        # Zero R counts as a loss
        return self.r_multiple > 0


@dataclass(frozen=True)
class SimulationSnapshot:
    """Point-in-time, read-only view of the simulation state"""
    equity: float
    trade_count: int
    win_count: int
    loss_count: int
    peak_equity: float
    max_drawdown_fraction: float
    last_outcome: Optional[TradeOutcome] = None
    equity_history: Tuple[float, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SimulationStatistics:
    """Derived statistics for display"""
    expectancy: float
    observed_win_rate: float  # Percent
    drawdown_percent: float
    normalized_equity_series: Tuple[float, ...]
    equity: float
    trade_count: int
    peak_equity: float
    current_drawdown_fraction: float
    total_return_pct: float
    last_outcome: Optional[TradeOutcome] = None
