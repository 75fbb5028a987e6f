"""
Strategy Presets for the Trade Simulator

Common strategy archetypes expressed as (win %, reward R, loss R).
Preset keys and values are part of the public contract.
"""

from typing import Dict, List

from ..exceptions import UnknownPresetError
from ..models.simulation import PresetDefinition


# ============================================================================
# PRESETS
# ============================================================================
VANTHARP_PRESET = PresetDefinition(
    key="vantharp",
    name="Van Tharp",
    win_pct=60.0,
    reward_r=2.0,
    loss_r=1.0,
    note="60% +2R / 40% -1R",
)

BREAKOUT_PRESET = PresetDefinition(
    key="breakout",
    name="Breakout",
    win_pct=40.0,
    reward_r=3.0,
    loss_r=1.0,
    note="40% +3R / 60% -1R",
)

SCALPER_PRESET = PresetDefinition(
    key="scalper",
    name="Scalper",
    win_pct=65.0,
    reward_r=1.0,
    loss_r=1.5,
    note="65% +1R / 35% -1.5R",
)

TREND_PRESET = PresetDefinition(
    key="trend",
    name="Trend",
    win_pct=30.0,
    reward_r=5.0,
    loss_r=1.0,
    note="30% +5R / 70% -1R",
)


# ============================================================================
# PRESET MAPPING
# ============================================================================
PRESETS: Dict[str, PresetDefinition] = {
    preset.key: preset
    for preset in (VANTHARP_PRESET, BREAKOUT_PRESET, SCALPER_PRESET, TREND_PRESET)
}


def get_preset(name: str) -> PresetDefinition:
    """
    Look up a preset by key.

    Args:
        name: Preset key, matched case-insensitively

    Returns:
        PresetDefinition for the key

    Raises:
        UnknownPresetError: If the key is not in the table
    """
    key = name.strip().lower() if isinstance(name, str) else name
    try:
        return PRESETS[key]
    except (KeyError, TypeError):
        raise UnknownPresetError(str(name), PRESETS.keys()) from None


def list_presets() -> List[PresetDefinition]:
    """Return all presets in declaration order"""
    return list(PRESETS.values())
