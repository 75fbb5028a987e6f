"""
Statistics Projector for the Trade Simulator
============================================

Pure projections of the simulation state for display:
- Theoretical expectancy of the strategy profile
- Observed win rate
- Drawdown percentages
- Min-max normalized equity series for a renderer

Nothing here mutates state; every value is recomputed on demand.
"""

from typing import Sequence, Tuple

import numpy as np

from .models.simulation import SimulationSnapshot, SimulationStatistics, StrategyProfile
from .utils.helpers import safe_divide


DEFAULT_NORMALIZATION_EPSILON = 1e-6


def calculate_expectancy(profile: StrategyProfile) -> float:
    """
    Theoretical expectancy in R per trade.

    E[R] = p * reward - (1 - p) * loss, with p the clamped win probability.
    Independent of any observed trades.
    """
    p = profile.win_probability
    return p * profile.reward_r - (1.0 - p) * profile.loss_r


def calculate_observed_win_rate(snapshot: SimulationSnapshot, profile: StrategyProfile) -> float:
    """
    Observed win rate in percent.

    Falls back to the configured win percentage before the first trade.
    """
    if snapshot.trade_count > 0:
        return snapshot.win_count / snapshot.trade_count * 100.0
    return profile.win_pct


def normalize_equity_series(
    history: Sequence[float],
    epsilon: float = DEFAULT_NORMALIZATION_EPSILON,
) -> Tuple[float, ...]:
    """
    Min-max normalize an equity series into [0, 1].

    The span is floored at epsilon so a flat series (e.g. a fresh session)
    maps to zeros instead of dividing by zero.
    """
    values = np.asarray(history, dtype=float)
    if values.size == 0:
        return ()
    low = values.min()
    span = max(values.max() - low, epsilon)
    return tuple(float(v) for v in (values - low) / span)


def project_statistics(
    snapshot: SimulationSnapshot,
    profile: StrategyProfile,
    initial_equity: float,
    epsilon: float = DEFAULT_NORMALIZATION_EPSILON,
) -> SimulationStatistics:
    """
    Derive all display statistics from a snapshot and the current profile.

    Args:
        snapshot: Simulation snapshot
        profile: Current strategy profile
        initial_equity: Session starting equity
        epsilon: Minimum span for equity normalization

    Returns:
        SimulationStatistics
    """
    if snapshot.peak_equity > 0:
        current_drawdown = 1.0 - snapshot.equity / snapshot.peak_equity
    else:
        current_drawdown = 0.0
    
    return SimulationStatistics(
        expectancy=calculate_expectancy(profile),
        observed_win_rate=calculate_observed_win_rate(snapshot, profile),
        drawdown_percent=snapshot.max_drawdown_fraction * 100.0,
        normalized_equity_series=normalize_equity_series(snapshot.equity_history, epsilon),
        equity=snapshot.equity,
        trade_count=snapshot.trade_count,
        peak_equity=snapshot.peak_equity,
        current_drawdown_fraction=current_drawdown,
        total_return_pct=(safe_divide(snapshot.equity, initial_equity, 1.0) - 1.0) * 100.0,
        last_outcome=snapshot.last_outcome,
    )
