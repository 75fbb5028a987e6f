"""
Simulation Router

Exposes the single simulator session to a presentation layer: profile
and preset control, risk and cadence settings, stepping, auto-run and
snapshot/statistics polling.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from ..engine.simulator_engine import TradeSimulator, create_simulator
from ..exceptions import InvalidParameterError
from ..config.presets import list_presets
from ..models.simulation import SimulationSnapshot, StrategyProfile
from ..utils.helpers import format_money, format_r, is_finite_number

router = APIRouter(prefix="/simulator", tags=["Simulator"])


# Request/Response Models
class ProfileUpdateRequest(BaseModel):
    win_pct: Optional[float] = None
    reward_r: Optional[float] = None
    loss_r: Optional[float] = None
    
    @field_validator("win_pct", "reward_r", "loss_r")
    @classmethod
    def validate_finite(cls, v: Optional[float], info) -> Optional[float]:
        if v is not None and not is_finite_number(v):
            raise InvalidParameterError(info.field_name, v)
        return v


class ProfileResponse(BaseModel):
    win_pct: float
    reward_r: float
    loss_r: float
    win_probability: float


class PresetResponse(BaseModel):
    key: str
    name: str
    win_pct: float
    reward_r: float
    loss_r: float
    note: str


class RiskRequest(BaseModel):
    risk_fraction: float
    
    @field_validator("risk_fraction")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not is_finite_number(v):
            raise InvalidParameterError("risk_fraction", v)
        return v


class RiskResponse(BaseModel):
    risk_fraction: float


class IntervalRequest(BaseModel):
    interval_ms: int = Field(..., ge=1)


class IntervalResponse(BaseModel):
    interval_ms: int


class OutcomeResponse(BaseModel):
    r_multiple: float
    pnl: float


class SnapshotResponse(BaseModel):
    equity: float
    trade_count: int
    win_count: int
    loss_count: int
    peak_equity: float
    max_drawdown_fraction: float
    last_outcome: Optional[OutcomeResponse]
    equity_history: List[float]


class StatisticsResponse(BaseModel):
    expectancy: float
    observed_win_rate: float
    drawdown_percent: float
    normalized_equity_series: List[float]
    equity: float
    trade_count: int
    peak_equity: float
    current_drawdown_fraction: float
    total_return_pct: float
    last_outcome: Optional[OutcomeResponse]
    expectancy_label: str
    equity_display: str
    last_pnl_display: Optional[str]


class RunStatusResponse(BaseModel):
    running: bool
    interval_ms: int


# Single in-process session
_simulator: Optional[TradeSimulator] = None


def get_simulator() -> TradeSimulator:
    """Return the session simulator, creating it on first use."""
    global _simulator
    if _simulator is None:
        _simulator = create_simulator()
    return _simulator


def set_simulator(simulator: Optional[TradeSimulator]):
    """Replace the session simulator (used by the app factory and tests)."""
    global _simulator
    _simulator = simulator


def _profile_response(profile: StrategyProfile) -> ProfileResponse:
    return ProfileResponse(
        win_pct=profile.win_pct,
        reward_r=profile.reward_r,
        loss_r=profile.loss_r,
        win_probability=profile.win_probability,
    )


def _snapshot_response(snapshot: SimulationSnapshot) -> SnapshotResponse:
    data = asdict(snapshot)
    data["equity_history"] = list(snapshot.equity_history)
    return SnapshotResponse(**data)


def _run_status(simulator: TradeSimulator) -> RunStatusResponse:
    return RunStatusResponse(
        running=simulator.is_running(),
        interval_ms=simulator.get_interval_ms(),
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile():
    """Get the current strategy profile."""
    return _profile_response(get_simulator().get_profile())


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(request: ProfileUpdateRequest):
    """Update any of win %, reward R and loss R."""
    simulator = get_simulator()
    if request.win_pct is not None:
        simulator.set_win_pct(request.win_pct)
    if request.reward_r is not None:
        simulator.set_reward_r(request.reward_r)
    if request.loss_r is not None:
        simulator.set_loss_r(request.loss_r)
    return _profile_response(simulator.get_profile())


@router.get("/presets", response_model=List[PresetResponse])
async def get_presets():
    """List the strategy presets."""
    return [PresetResponse(**asdict(preset)) for preset in list_presets()]


@router.post("/presets/{name}", response_model=ProfileResponse)
async def apply_preset(name: str):
    """Apply a preset to the strategy profile (404 if unknown)."""
    simulator = get_simulator()
    simulator.apply_preset(name)
    return _profile_response(simulator.get_profile())


@router.get("/risk", response_model=RiskResponse)
async def get_risk():
    """Get the effective risk fraction."""
    return RiskResponse(risk_fraction=get_simulator().get_risk_fraction())


@router.put("/risk", response_model=RiskResponse)
async def set_risk(request: RiskRequest):
    """Set the fraction of equity risked per trade."""
    simulator = get_simulator()
    simulator.set_risk_fraction(request.risk_fraction)
    return RiskResponse(risk_fraction=simulator.get_risk_fraction())


@router.get("/interval", response_model=IntervalResponse)
async def get_interval():
    """Get the auto-run interval."""
    return IntervalResponse(interval_ms=get_simulator().get_interval_ms())


@router.put("/interval", response_model=IntervalResponse)
async def set_interval(request: IntervalRequest):
    """Set the auto-run interval; takes effect from the next firing."""
    simulator = get_simulator()
    simulator.set_interval_ms(request.interval_ms)
    return IntervalResponse(interval_ms=simulator.get_interval_ms())


@router.post("/step", response_model=SnapshotResponse)
async def step():
    """Execute one trade."""
    simulator = get_simulator()
    simulator.step_once()
    return _snapshot_response(simulator.get_snapshot())


@router.post("/start", response_model=RunStatusResponse)
async def start():
    """Start auto-running."""
    simulator = get_simulator()
    await simulator.start()
    return _run_status(simulator)


@router.post("/stop", response_model=RunStatusResponse)
async def stop():
    """Stop auto-running."""
    simulator = get_simulator()
    await simulator.stop()
    return _run_status(simulator)


@router.post("/reset", response_model=SnapshotResponse)
async def reset():
    """Stop auto-run and reset the session."""
    simulator = get_simulator()
    simulator.reset()
    return _snapshot_response(simulator.get_snapshot())


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot():
    """Get the current simulation state."""
    return _snapshot_response(get_simulator().get_snapshot())


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics():
    """Get derived statistics for display."""
    statistics = get_simulator().get_statistics()
    data = asdict(statistics)
    data["normalized_equity_series"] = list(statistics.normalized_equity_series)
    data["expectancy_label"] = format_r(statistics.expectancy)
    data["equity_display"] = format_money(statistics.equity)
    data["last_pnl_display"] = (
        format_money(statistics.last_outcome.pnl) if statistics.last_outcome else None
    )
    return StatisticsResponse(**data)
