"""
Simulator Engine - Session Coordinator for the Trade Simulator

The engine owns one session and wires its components together:
- Strategy profile and presets
- Outcome sampling and risk sizing
- Simulation state
- Run controller (auto-run)
- Statistics projection

All reads and writes happen on the caller's thread / event loop. A
trade is applied as one unit; no caller sees a half-updated state.
"""

import logging
from typing import Callable, List, Optional

from ..analytics import project_statistics
from ..config.presets import get_preset
from ..config.settings import SimulationSettings, get_settings
from ..exceptions import UnknownPresetError
from ..models.simulation import (
    PresetDefinition,
    SimulationSnapshot,
    SimulationStatistics,
    StrategyProfile,
    TradeOutcome,
)
from ..position_sizing import RiskSizer
from ..run_controller import RunController, SleepFunc
from ..sampler import OutcomeSampler, RandomSource
from ..simulation_state import SimulationState


logger = logging.getLogger(__name__)

TradeListener = Callable[[TradeOutcome, SimulationSnapshot], None]


class TradeSimulator:
    """
    Interactive Monte-Carlo trade simulator session.
    
    Usage:
        >>> sim = TradeSimulator()
        >>> sim.apply_preset("vantharp")
        >>> sim.step_once()
        >>> stats = sim.get_statistics()  # expectancy ~0.8R
        >>>
        >>> await sim.start()   # trades every interval_ms until stopped
        >>> await sim.stop()
    """
    
    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        random_source: Optional[RandomSource] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        """
        Initialize a simulator session.
        
        Args:
            settings: Session defaults, falls back to environment settings
            random_source: Uniform source with random() -> [0, 1)
            sleep: Sleep primitive for the run controller (tests inject a fake clock)
        """
        self.settings = settings or get_settings().simulation
        
        self.profile = StrategyProfile(
            win_pct=self.settings.default_win_pct,
            reward_r=self.settings.default_reward_r,
            loss_r=self.settings.default_loss_r,
        )
        self.sizer = RiskSizer.from_pct(self.settings.default_risk_pct)
        self.sampler = OutcomeSampler(random_source, seed=self.settings.random_seed)
        self.state = SimulationState(
            initial_equity=self.settings.initial_equity,
            history_cap=self.settings.history_cap,
        )
        self.controller = RunController(
            on_tick=self.step_once,
            interval_ms=self.settings.default_interval_ms,
            sleep=sleep,
        )
        
        self._listeners: List[TradeListener] = []
        
        logger.info(
            f"TradeSimulator initialized (equity={self.state.initial_equity}, "
            f"history_cap={self.state.history_cap})"
        )
    
    # ========================================================================
    # STRATEGY PROFILE
    # ========================================================================
    
    def get_profile(self) -> StrategyProfile:
        """Return a copy of the current profile"""
        return self.profile.copy()
    
    def set_win_pct(self, win_pct: float):
        """Set the win probability in percent (stored as given)"""
        self.profile.win_pct = win_pct
    
    def set_reward_r(self, reward_r: float):
        """Set the R gained on a winning trade"""
        self.profile.reward_r = reward_r
    
    def set_loss_r(self, loss_r: float):
        """Set the R lost on a losing trade"""
        self.profile.loss_r = loss_r
    
    def apply_preset(self, name: str) -> PresetDefinition:
        """
        Overwrite the profile with a named preset.
        
        Raises:
            UnknownPresetError: If the name is not a preset key; the
                profile is left unchanged
        """
        try:
            preset = get_preset(name)
        except UnknownPresetError:
            logger.warning(f"Rejected unknown preset: {name!r}")
            raise
        
        self.profile.apply(preset)
        logger.info(f"Preset applied: {preset.key} ({preset.note})")
        return preset
    
    # ========================================================================
    # RISK AND CADENCE
    # ========================================================================
    
    def get_risk_fraction(self) -> float:
        """Effective (clamped) fraction of equity risked per trade"""
        return self.sizer.risk_fraction
    
    def set_risk_fraction(self, risk_fraction: float):
        self.sizer.fraction = risk_fraction
    
    def set_risk_pct(self, risk_pct: float):
        self.sizer.fraction = risk_pct / 100.0
    
    def get_interval_ms(self) -> int:
        return self.controller.interval_ms
    
    def set_interval_ms(self, interval_ms: float):
        self.controller.set_interval_ms(interval_ms)
    
    # ========================================================================
    # EXECUTION
    # ========================================================================
    
    async def start(self):
        """Start trading automatically every interval_ms"""
        await self.controller.start()
    
    async def stop(self):
        """Stop automatic trading"""
        await self.controller.stop()
    
    def is_running(self) -> bool:
        return self.controller.is_running()
    
    def step_once(self) -> TradeOutcome:
        """Execute exactly one trade with the current profile and risk"""
        outcome = self.state.execute_trade(
            self.profile,
            self.sizer.risk_fraction,
            self.sampler.random_source,
        )
        self._notify(outcome)
        return outcome
    
    def reset(self):
        """Stop auto-run and return the session to its creation state"""
        self.controller.cancel()
        self.state.reset()
        logger.info("Simulation reset")
    
    # ========================================================================
    # QUERIES
    # ========================================================================
    
    def get_snapshot(self) -> SimulationSnapshot:
        return self.state.snapshot()
    
    def get_statistics(self) -> SimulationStatistics:
        """Derived statistics for the current state and profile"""
        return project_statistics(
            self.state.snapshot(),
            self.profile,
            initial_equity=self.state.initial_equity,
            epsilon=self.settings.normalization_epsilon,
        )
    
    # ========================================================================
    # LISTENERS
    # ========================================================================
    
    def add_listener(self, listener: TradeListener):
        """Register a callback invoked after every trade"""
        self._listeners.append(listener)
    
    def remove_listener(self, listener: TradeListener):
        if listener in self._listeners:
            self._listeners.remove(listener)
    
    def _notify(self, outcome: TradeOutcome):
        if not self._listeners:
            return
        snapshot = self.state.snapshot()
        for listener in list(self._listeners):
            try:
                listener(outcome, snapshot)
            except Exception as e:
                logger.error(f"Error in trade listener: {e}")


def create_simulator(
    seed: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
    sleep: Optional[SleepFunc] = None,
    **overrides,
) -> TradeSimulator:
    """
    Factory function to create a TradeSimulator.
    
    Args:
        seed: Seed for the default random source
        random_source: Explicit random source (takes precedence over seed)
        sleep: Sleep primitive for the run controller
        **overrides: SimulationSettings fields (initial_equity, history_cap, ...)
        
    Returns:
        Configured TradeSimulator instance
        
    Example:
        >>> sim = create_simulator(seed=42, initial_equity=5000)
    """
    if seed is not None:
        overrides["random_seed"] = seed
    base = get_settings().simulation.model_dump()
    settings = SimulationSettings(**{**base, **overrides})
    return TradeSimulator(settings=settings, random_source=random_source, sleep=sleep)
