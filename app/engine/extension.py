"""
Extension model - batting on for K more overs before declaring.
"""
import enum
from dataclasses import dataclass
from typing import Iterable

from app.engine.context import MatchContext
from app.engine.sampler import Mulberry32, normal, round_runs


class TrialState(str, enum.Enum):
    BATTING = "batting"
    ALL_OUT = "all_out"
    DECLARED = "declared"


@dataclass
class ExtensionTrial:
    """One batting-on sample"""
    runs: int = 0
    wickets: int = 0
    overs_batted: int = 0
    state: TrialState = TrialState.BATTING


@dataclass
class ExtensionSummary:
    overs: int
    trials: int
    expect_added_runs: float
    expect_wickets_lost: float
    all_out_p: float


class ExtensionModel:
    """
    Simulates the batting side continuing for a fixed number of overs.
    The mean of the added runs becomes the lead-on-top for the chase target.
    """

    RUN_RATE_SD = 0.8
    OVER_RUNS_SD = 1.0

    def __init__(self, run_rate: float, wicket_prob: float, wickets_in_hand: int):
        self.run_rate = run_rate
        self.wicket_prob = wicket_prob
        self.wickets_in_hand = wickets_in_hand

    @classmethod
    def from_context(cls, context: MatchContext) -> "ExtensionModel":
        return cls(
            run_rate=context.continue_batting_run_rate,
            wicket_prob=context.continue_batting_wicket_prob,
            wickets_in_hand=context.wickets_in_hand,
        )

    def _over_runs(self, rng: Mulberry32) -> int:
        rpo = max(0.0, normal(rng, self.run_rate, self.RUN_RATE_SD))
        return round_runs(normal(rng, rpo, self.OVER_RUNS_SD))

    def simulate_trial(self, overs: int, rng: Mulberry32) -> ExtensionTrial:
        trial = ExtensionTrial()
        if self.wickets_in_hand <= 0 and overs > 0:
            trial.state = TrialState.ALL_OUT

        while trial.state is TrialState.BATTING:
            if trial.overs_batted >= overs:
                trial.state = TrialState.DECLARED
                continue

            if rng.random() < self.wicket_prob:
                trial.wickets += 1
                if trial.wickets >= self.wickets_in_hand:
                    # last man out mid-over, the runs scored in that over still count
                    trial.runs += self._over_runs(rng)
                    trial.state = TrialState.ALL_OUT
                    continue

            trial.runs += self._over_runs(rng)
            trial.overs_batted += 1

        return trial

    def simulate(self, overs: int, seeds: Iterable[int]) -> ExtensionSummary:
        """Run one trial per seed and average the results"""
        total_runs = 0
        total_wickets = 0
        all_outs = 0
        trials = 0

        for seed in seeds:
            trial = self.simulate_trial(overs, Mulberry32(seed))
            total_runs += trial.runs
            total_wickets += trial.wickets
            if trial.state is TrialState.ALL_OUT:
                all_outs += 1
            trials += 1

        if trials == 0:
            return ExtensionSummary(overs, 0, 0.0, 0.0, 0.0)

        return ExtensionSummary(
            overs=overs,
            trials=trials,
            expect_added_runs=total_runs / trials,
            expect_wickets_lost=total_wickets / trials,
            all_out_p=all_outs / trials,
        )
