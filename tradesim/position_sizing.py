"""
Position Sizing Module for the Trade Simulator

Fixed-fractional (compounding) risk sizing: the amount at risk on each
trade is a fraction of current equity, and the trade's R-multiple scales
that amount into a monetary P&L.

Equity is never floored; a run may go to zero or below (ruin).
"""

from dataclasses import dataclass
from typing import Tuple

from .config.settings import MIN_RISK_FRACTION, MAX_RISK_FRACTION
from .utils.helpers import clamp


def clamp_risk_fraction(risk_fraction: float) -> float:
    """Clamp a risk fraction into [MIN_RISK_FRACTION, MAX_RISK_FRACTION]"""
    return clamp(risk_fraction, MIN_RISK_FRACTION, MAX_RISK_FRACTION)


def size_trade(equity: float, risk_fraction: float, r_multiple: float) -> Tuple[float, float]:
    """
    Convert an R-multiple into a monetary result.

    risk = equity * clamp(risk_fraction)
    pnl = r_multiple * risk
    new_equity = equity + pnl

    Args:
        equity: Equity before the trade
        risk_fraction: Fraction of equity at risk (clamped)
        r_multiple: Signed outcome of the trade

    Returns:
        (pnl, new_equity)
    """
    risk_amount = equity * clamp_risk_fraction(risk_fraction)
    pnl = r_multiple * risk_amount
    return pnl, equity + pnl


@dataclass
class RiskSizer:
    """Holds the current risk setting (fraction of equity, stored as given) and sizes trades with it"""
    fraction: float = 0.02
    
    @classmethod
    def from_pct(cls, risk_pct: float) -> "RiskSizer":
        return cls(fraction=risk_pct / 100.0)
    
    @property
    def risk_fraction(self) -> float:
        """Effective, clamped risk fraction"""
        return clamp_risk_fraction(self.fraction)
    
    def size(self, equity: float, r_multiple: float) -> Tuple[float, float]:
        """Size a trade at the current risk setting"""
        return size_trade(equity, self.risk_fraction, r_multiple)
