"""
Simulation State for the Trade Simulator

Owns the single mutable record of a session: equity, trade counters,
running peak, running max drawdown, the last outcome and a bounded
equity history.

The only writer is SimulationState.execute_trade (and reset), which
applies every effect of a trade as one unit:
    sample -> size -> counters -> equity -> last outcome -> peak
    -> max drawdown (against the post-update peak) -> history
"""

import logging
from collections import deque
from typing import Deque, Optional

from .models.simulation import SimulationSnapshot, StrategyProfile, TradeOutcome
from .position_sizing import size_trade
from .sampler import RandomSource, sample_r_multiple


logger = logging.getLogger(__name__)


class SimulationState:
    """
    Equity and statistics tracker for one simulation session.
    """
    
    def __init__(self, initial_equity: float = 1000.0, history_cap: int = 300):
        if initial_equity <= 0:
            raise ValueError("initial_equity must be positive")
        if history_cap < 1:
            raise ValueError("history_cap must be at least 1")
        
        self.initial_equity = float(initial_equity)
        self.history_cap = int(history_cap)
        
        self.equity: float = self.initial_equity
        self.trade_count: int = 0
        self.win_count: int = 0
        self.loss_count: int = 0
        self.peak_equity: float = self.initial_equity
        self.max_drawdown_fraction: float = 0.0
        self.last_outcome: Optional[TradeOutcome] = None
        self._equity_history: Deque[float] = deque([self.initial_equity], maxlen=self.history_cap)
    
    def reset(self):
        """Return every field to its creation value"""
        self.equity = self.initial_equity
        self.trade_count = 0
        self.win_count = 0
        self.loss_count = 0
        self.peak_equity = self.initial_equity
        self.max_drawdown_fraction = 0.0
        self.last_outcome = None
        self._equity_history = deque([self.initial_equity], maxlen=self.history_cap)
    
    @property
    def equity_history(self) -> tuple:
        """Equity values, oldest first (read-only copy)"""
        return tuple(self._equity_history)
    
    @property
    def current_drawdown_fraction(self) -> float:
        if self.peak_equity <= 0:
            return 0.0
        return 1.0 - self.equity / self.peak_equity
    
    def execute_trade(
        self,
        profile: StrategyProfile,
        risk_fraction: float,
        random_source: RandomSource,
    ) -> TradeOutcome:
        """
        Execute one simulated trade and apply all of its effects.
        
        Args:
            profile: Strategy profile to sample from
            risk_fraction: Fraction of current equity at risk (clamped by the sizer)
            random_source: Uniform random source, one draw consumed
            
        Returns:
            TradeOutcome recorded as the last outcome
        """
        r_multiple = sample_r_multiple(profile, random_source)
        pnl, new_equity = size_trade(self.equity, risk_fraction, r_multiple)
        outcome = TradeOutcome(r_multiple=r_multiple, pnl=pnl)
        
        self.trade_count += 1
        if outcome.is_win:
            self.win_count += 1
        else:
            self.loss_count += 1
        
        self.equity = new_equity
        self.last_outcome = outcome
        
        # Peak first, then drawdown against the updated peak
        self.peak_equity = max(self.peak_equity, new_equity)
        if self.peak_equity > 0:
            self.max_drawdown_fraction = max(
                self.max_drawdown_fraction, 1.0 - new_equity / self.peak_equity
            )
        
        # deque(maxlen) evicts from the front
        self._equity_history.append(new_equity)
        
        logger.debug(
            f"Trade #{self.trade_count}: {r_multiple:+.2f}R pnl={pnl:.2f} equity={new_equity:.2f}"
        )
        return outcome
    
    def snapshot(self) -> SimulationSnapshot:
        """Build a read-only snapshot of the current state"""
        return SimulationSnapshot(
            equity=self.equity,
            trade_count=self.trade_count,
            win_count=self.win_count,
            loss_count=self.loss_count,
            peak_equity=self.peak_equity,
            max_drawdown_fraction=self.max_drawdown_fraction,
            last_outcome=self.last_outcome,
            equity_history=self.equity_history,
        )
