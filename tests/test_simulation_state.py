import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tradesim.models.simulation import StrategyProfile
from tradesim.sampler import create_random_source
from tradesim.simulation_state import SimulationState
from fakes import ScriptedRandom


ALWAYS_WIN = StrategyProfile(win_pct=100, reward_r=2, loss_r=1)
ALWAYS_LOSE = StrategyProfile(win_pct=0, reward_r=2, loss_r=1)


class TestCreationState(unittest.TestCase):
    def test_initial_values(self):
        state = SimulationState()
        snap = state.snapshot()
        self.assertEqual(snap.equity, 1000.0)
        self.assertEqual((snap.trade_count, snap.win_count, snap.loss_count), (0, 0, 0))
        self.assertEqual(snap.peak_equity, 1000.0)
        self.assertEqual(snap.max_drawdown_fraction, 0.0)
        self.assertIsNone(snap.last_outcome)
        self.assertEqual(snap.equity_history, (1000.0,))

    def test_rejects_bad_construction(self):
        with self.assertRaises(ValueError):
            SimulationState(initial_equity=0)
        with self.assertRaises(ValueError):
            SimulationState(history_cap=0)


class TestExecuteTrade(unittest.TestCase):
    def test_single_winning_trade(self):
        state = SimulationState(initial_equity=1000)
        outcome = state.execute_trade(ALWAYS_WIN, 0.02, ScriptedRandom([0.5]))
        self.assertEqual(outcome.r_multiple, 2.0)
        self.assertAlmostEqual(outcome.pnl, 40.0)
        self.assertAlmostEqual(state.equity, 1040.0)
        self.assertEqual((state.win_count, state.loss_count), (1, 0))
        self.assertAlmostEqual(state.peak_equity, 1040.0)
        self.assertEqual(state.max_drawdown_fraction, 0.0)
        self.assertEqual(state.last_outcome, outcome)

    def test_single_losing_trade(self):
        state = SimulationState(initial_equity=1000)
        outcome = state.execute_trade(ALWAYS_LOSE, 0.10, ScriptedRandom([0.5]))
        self.assertAlmostEqual(outcome.pnl, -100.0)
        self.assertAlmostEqual(state.equity, 900.0)
        self.assertEqual(state.peak_equity, 1000.0)
        self.assertAlmostEqual(state.max_drawdown_fraction, 0.10)
        self.assertEqual((state.win_count, state.loss_count), (0, 1))

    def test_all_winning_run_has_no_drawdown(self):
        state = SimulationState()
        rng = create_random_source(3)
        for _ in range(50):
            state.execute_trade(ALWAYS_WIN, 0.02, rng)
        self.assertEqual(state.max_drawdown_fraction, 0.0)
        self.assertEqual(state.peak_equity, state.equity)

    def test_zero_r_counts_as_loss(self):
        state = SimulationState()
        flat = StrategyProfile(win_pct=100, reward_r=0, loss_r=1)
        state.execute_trade(flat, 0.02, ScriptedRandom([0.1]))
        self.assertEqual((state.win_count, state.loss_count), (0, 1))
        self.assertEqual(state.equity, 1000.0)

    def test_drawdown_measured_against_updated_peak(self):
        state = SimulationState(initial_equity=1000)
        profile = StrategyProfile(win_pct=50, reward_r=1, loss_r=1)
        # win -> 1100 (new peak), loss -> 990, win -> 1089
        rng = ScriptedRandom([0.1, 0.9, 0.1])
        state.execute_trade(profile, 0.10, rng)
        self.assertAlmostEqual(state.peak_equity, 1100.0)
        self.assertEqual(state.max_drawdown_fraction, 0.0)
        state.execute_trade(profile, 0.10, rng)
        self.assertAlmostEqual(state.max_drawdown_fraction, 0.10)
        state.execute_trade(profile, 0.10, rng)
        self.assertAlmostEqual(state.peak_equity, 1100.0)
        self.assertAlmostEqual(state.max_drawdown_fraction, 0.10)
        self.assertAlmostEqual(state.current_drawdown_fraction, 1 - 1089 / 1100)

    def test_invariants_hold_over_random_run(self):
        state = SimulationState(history_cap=50)
        profile = StrategyProfile(win_pct=45, reward_r=2, loss_r=1)
        rng = create_random_source(2024)
        previous_dd = 0.0
        previous_peak = state.peak_equity
        for n in range(1, 400):
            state.execute_trade(profile, 0.05, rng)
            self.assertEqual(state.trade_count, n)
            self.assertEqual(state.trade_count, state.win_count + state.loss_count)
            self.assertGreaterEqual(state.max_drawdown_fraction, previous_dd)
            self.assertGreaterEqual(state.peak_equity, previous_peak)
            self.assertLessEqual(state.max_drawdown_fraction, 1.0)
            self.assertEqual(len(state.equity_history), min(n + 1, 50))
            previous_dd = state.max_drawdown_fraction
            previous_peak = state.peak_equity

    def test_ruin_is_representable(self):
        state = SimulationState(initial_equity=1000)
        profile = StrategyProfile(win_pct=0, reward_r=1, loss_r=3)
        state.execute_trade(profile, 1.0, ScriptedRandom([0.5]))
        self.assertAlmostEqual(state.equity, -2000.0)
        self.assertAlmostEqual(state.max_drawdown_fraction, 3.0)


class TestEquityHistory(unittest.TestCase):
    def test_history_is_a_sliding_window(self):
        state = SimulationState(initial_equity=1000, history_cap=300)
        rng = create_random_source(11)
        profile = StrategyProfile(win_pct=55, reward_r=2, loss_r=1)
        equities = [state.equity]
        for _ in range(305):
            state.execute_trade(profile, 0.01, rng)
            equities.append(state.equity)
        self.assertEqual(len(state.equity_history), 300)
        self.assertEqual(state.equity_history, tuple(equities[-300:]))
        self.assertEqual(state.equity_history[-1], state.equity)

    def test_history_is_read_only(self):
        state = SimulationState()
        history = state.equity_history
        self.assertIsInstance(history, tuple)
        state.execute_trade(ALWAYS_WIN, 0.02, ScriptedRandom([0.1]))
        self.assertEqual(history, (1000.0,))


class TestReset(unittest.TestCase):
    def test_reset_restores_creation_state(self):
        fresh = SimulationState().snapshot()
        state = SimulationState()
        rng = create_random_source(8)
        for _ in range(25):
            state.execute_trade(StrategyProfile(), 0.05, rng)
        state.reset()
        self.assertEqual(state.snapshot(), fresh)

    def test_reset_is_idempotent(self):
        state = SimulationState()
        state.execute_trade(ALWAYS_LOSE, 0.1, ScriptedRandom([0.3]))
        state.reset()
        once = state.snapshot()
        state.reset()
        self.assertEqual(state.snapshot(), once)
        self.assertEqual(once.equity, 1000.0)
        self.assertEqual(once.trade_count, 0)
        self.assertEqual(once.equity_history, (1000.0,))

    def test_reset_keeps_history_cap(self):
        state = SimulationState(history_cap=3)
        state.reset()
        for _ in range(10):
            state.execute_trade(ALWAYS_WIN, 0.01, ScriptedRandom([0.1]))
        self.assertEqual(len(state.equity_history), 3)


if __name__ == '__main__':
    unittest.main()
