"""
Configuration for the Trade Simulator
"""

from .presets import (
    VANTHARP_PRESET,
    BREAKOUT_PRESET,
    SCALPER_PRESET,
    TREND_PRESET,
    PRESETS,
    get_preset,
    list_presets,
)
from .settings import (
    MIN_RISK_FRACTION,
    MAX_RISK_FRACTION,
    SimulationSettings,
    LoggingSettings,
    ApplicationSettings,
    get_settings,
)

__all__ = [
    "VANTHARP_PRESET",
    "BREAKOUT_PRESET",
    "SCALPER_PRESET",
    "TREND_PRESET",
    "PRESETS",
    "get_preset",
    "list_presets",
    "MIN_RISK_FRACTION",
    "MAX_RISK_FRACTION",
    "SimulationSettings",
    "LoggingSettings",
    "ApplicationSettings",
    "get_settings",
]
