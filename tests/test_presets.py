import unittest
import sys
import os

# Add project root to path so we can import tradesim
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tradesim.config.presets import PRESETS, get_preset, list_presets
from tradesim.exceptions import SimulatorError, UnknownPresetError
from tradesim.models.simulation import StrategyProfile


class TestPresetTable(unittest.TestCase):
    def test_preset_values(self):
        """Preset keys and values are fixed."""
        expected = {
            "vantharp": (60, 2, 1),
            "breakout": (40, 3, 1),
            "scalper": (65, 1, 1.5),
            "trend": (30, 5, 1),
        }
        self.assertEqual(set(PRESETS), set(expected))
        for key, (win, reward, loss) in expected.items():
            preset = PRESETS[key]
            self.assertEqual(preset.key, key)
            self.assertEqual((preset.win_pct, preset.reward_r, preset.loss_r), (win, reward, loss))

    def test_display_names_and_notes(self):
        self.assertEqual(PRESETS["vantharp"].name, "Van Tharp")
        self.assertEqual(PRESETS["scalper"].note, "65% +1R / 35% -1.5R")

    def test_list_presets_keeps_declaration_order(self):
        self.assertEqual([p.key for p in list_presets()], ["vantharp", "breakout", "scalper", "trend"])

    def test_lookup_ignores_case_and_whitespace(self):
        self.assertIs(get_preset(" Scalper "), PRESETS["scalper"])

    def test_unknown_preset_raises(self):
        with self.assertRaises(UnknownPresetError) as ctx:
            get_preset("martingale")
        self.assertEqual(ctx.exception.preset, "martingale")
        self.assertIn("trend", ctx.exception.available)
        self.assertEqual(ctx.exception.error_code, "UNKNOWN_PRESET")
        self.assertIsInstance(ctx.exception, SimulatorError)

    def test_unknown_preset_is_a_key_error(self):
        with self.assertRaises(KeyError) as ctx:
            get_preset("martingale")
        message = str(ctx.exception)
        self.assertTrue(message.startswith("Unknown preset"))
        self.assertFalse(message.startswith("\""))

    def test_non_string_key_raises_unknown_preset(self):
        with self.assertRaises(UnknownPresetError):
            get_preset(None)

    def test_presets_are_immutable(self):
        with self.assertRaises(Exception):
            PRESETS["trend"].win_pct = 99


class TestStrategyProfile(unittest.TestCase):
    def test_apply_overwrites_fields_not_identity(self):
        profile = StrategyProfile(win_pct=12, reward_r=7.5, loss_r=0.3)
        before = id(profile)
        profile.apply(PRESETS["scalper"])
        self.assertEqual(id(profile), before)
        self.assertEqual((profile.win_pct, profile.reward_r, profile.loss_r), (65, 1, 1.5))

    def test_values_stored_unclamped(self):
        profile = StrategyProfile(win_pct=150, reward_r=-2, loss_r=-1)
        self.assertEqual(profile.win_pct, 150)
        self.assertEqual(profile.reward_r, -2)

    def test_win_probability_is_clamped(self):
        self.assertEqual(StrategyProfile(win_pct=150).win_probability, 1.0)
        self.assertEqual(StrategyProfile(win_pct=-20).win_probability, 0.0)
        self.assertAlmostEqual(StrategyProfile(win_pct=55).win_probability, 0.55)
        self.assertEqual(StrategyProfile(win_pct=float("nan")).win_probability, 0.0)

    def test_copy_is_detached(self):
        profile = StrategyProfile()
        clone = profile.copy()
        clone.win_pct = 1
        self.assertEqual(profile.win_pct, 55)


if __name__ == '__main__':
    unittest.main()
