"""
Pytest tests for batting on before a declaration.

Run with: pytest tests/test_extension_model.py -v
"""

import pytest

from app.engine.context import MatchContext
from app.engine.extension import ExtensionModel, TrialState
from app.engine.sampler import Mulberry32


def seeds(n: int, base: int = 0) -> list[int]:
    return [base + i * 7919 for i in range(n)]


class TestTrialStates:
    """BATTING -> DECLARED / ALL_OUT transitions"""

    def test_declare_now_adds_nothing(self):
        model = ExtensionModel(run_rate=3.8, wicket_prob=0.5, wickets_in_hand=6)
        trial = model.simulate_trial(0, Mulberry32(1))
        assert trial.state is TrialState.DECLARED
        assert trial.runs == 0
        assert trial.wickets == 0

    def test_no_wicket_risk_bats_full_overs(self):
        model = ExtensionModel(run_rate=3.8, wicket_prob=0.0, wickets_in_hand=6)
        trial = model.simulate_trial(12, Mulberry32(5))
        assert trial.state is TrialState.DECLARED
        assert trial.overs_batted == 12
        assert trial.wickets == 0

    def test_certain_wickets_end_innings_early(self):
        """A wicket every over bowls out a side with 3 wickets in hand during the 3rd over"""
        model = ExtensionModel(run_rate=3.8, wicket_prob=1.0, wickets_in_hand=3)
        trial = model.simulate_trial(10, Mulberry32(11))
        assert trial.state is TrialState.ALL_OUT
        assert trial.wickets == 3
        assert trial.overs_batted == 2

    def test_no_wickets_in_hand_is_already_all_out(self):
        model = ExtensionModel(run_rate=3.8, wicket_prob=0.1, wickets_in_hand=0)
        trial = model.simulate_trial(5, Mulberry32(3))
        assert trial.state is TrialState.ALL_OUT
        assert trial.runs == 0
        assert trial.wickets == 0

    def test_trial_is_deterministic(self):
        model = ExtensionModel(run_rate=4.0, wicket_prob=0.15, wickets_in_hand=4)
        assert model.simulate_trial(20, Mulberry32(77)) == model.simulate_trial(20, Mulberry32(77))


class TestInvariants:

    @pytest.mark.parametrize("wickets_in_hand", [1, 3, 6, 10])
    def test_wickets_never_exceed_wickets_in_hand(self, wickets_in_hand):
        model = ExtensionModel(run_rate=3.5, wicket_prob=0.4, wickets_in_hand=wickets_in_hand)
        for seed in seeds(300):
            trial = model.simulate_trial(30, Mulberry32(seed))
            assert trial.wickets <= wickets_in_hand
            assert trial.runs >= 0

    def test_all_out_rate_reported(self):
        model = ExtensionModel(run_rate=3.5, wicket_prob=1.0, wickets_in_hand=2)
        summary = model.simulate(10, seeds(50))
        assert summary.all_out_p == 1.0
        assert summary.expect_wickets_lost == 2.0

    def test_mean_added_runs_near_run_rate(self):
        model = ExtensionModel(run_rate=3.8, wicket_prob=0.0, wickets_in_hand=6)
        summary = model.simulate(10, seeds(2000))
        assert 36 <= summary.expect_added_runs <= 40

    def test_from_context(self):
        context = MatchContext(continue_batting_run_rate=4.4, continue_batting_wicket_prob=0.07, wickets_in_hand=8)
        model = ExtensionModel.from_context(context)
        assert (model.run_rate, model.wicket_prob, model.wickets_in_hand) == (4.4, 0.07, 8)


class TestTargetMonotonicInOvers:
    """With no wicket risk, more overs never means fewer expected runs"""

    def test_mean_added_runs_non_decreasing(self):
        context_rng = Mulberry32(31337)
        for _ in range(10):
            run_rate = context_rng.random() * 6
            model = ExtensionModel(run_rate=run_rate, wicket_prob=0.0, wickets_in_hand=10)
            trial_seeds = seeds(200, base=int(context_rng.random() * 1e6))

            previous = -1.0
            for overs in range(0, 31, 3):
                mean_runs = model.simulate(overs, trial_seeds).expect_added_runs
                assert mean_runs >= previous
                previous = mean_runs
