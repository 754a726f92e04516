"""
Chase model - the opponent's pursuit of a fixed target in the time left.

Each trial samples the overs available (weather can wash out part of a
session), then plays the chase over by over until the target is reached,
ten wickets fall or time runs out.
"""
import enum
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from app.engine.context import MatchContext, SimResult
from app.engine.presets import GroundPreset
from app.engine.sampler import Mulberry32, clamp, normal, round_runs


class ChaseOutcome(str, enum.Enum):
    WIN = "win"  # opponent bowled out
    DRAW = "draw"  # time ran out
    LOSS = "loss"  # target chased down


@dataclass
class ChaseEvent:
    outcome: ChaseOutcome
    margin: float


@dataclass
class ChaseTrial:
    """One simulated fourth innings"""
    available_overs: float
    runs: int = 0
    wickets: int = 0
    overs_bowled: int = 0
    events: List[ChaseEvent] = field(default_factory=list)

    @property
    def outcome(self) -> Optional[ChaseOutcome]:
        if not self.events:
            return None
        return self.events[-1].outcome


@dataclass
class ChaseHazard:
    """Opening hazards for the chasing side"""
    wicket_p: float
    run_rate: float

    BASE_WICKET_P = 0.08
    BASE_RPO = 3.2

    @classmethod
    def from_context(cls, context: MatchContext, preset: GroundPreset) -> "ChaseHazard":
        strength_factor = (context.our_bowling_strength / 50) * preset.wicket_help * context.pitch_bowling_factor
        batting_factor = (context.opponent_batting_strength / 50) * preset.chase_ease

        return cls(
            wicket_p=clamp(cls.BASE_WICKET_P * strength_factor / max(0.6, batting_factor), 0.03, 0.2),
            run_rate=clamp(cls.BASE_RPO * batting_factor / max(0.7, context.pitch_bowling_factor), 1.5, 4.5),
        )


@dataclass
class ChaseTally:
    trials: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    margin_total: float = 0.0
    available_overs_total: float = 0.0
    overcounted: int = 0  # trials that recorded more than one terminal event
    unresolved: int = 0  # trials that recorded none

    def add(self, trial: ChaseTrial) -> None:
        self.trials += 1
        self.available_overs_total += trial.available_overs
        if len(trial.events) > 1:
            self.overcounted += 1
        elif not trial.events:
            self.unresolved += 1

        for event in trial.events:
            if event.outcome is ChaseOutcome.WIN:
                self.wins += 1
            elif event.outcome is ChaseOutcome.LOSS:
                self.losses += 1
            else:
                self.draws += 1
            self.margin_total += event.margin

    @property
    def mean_available_overs(self) -> float:
        if self.trials == 0:
            return 0.0
        return self.available_overs_total / self.trials

    def to_sim_result(self) -> SimResult:
        if self.trials == 0:
            return SimResult()
        return SimResult(
            win_p=self.wins / self.trials,
            draw_p=self.draws / self.trials,
            loss_p=self.losses / self.trials,
            exp_margin_runs=self.margin_total / self.trials,
        )


def session_allotments(context: MatchContext, declare_after_overs: int) -> Tuple[int, List[int]]:
    """
    Overs left to bowl after batting on: (current session, [whole sessions]).

    The current session keeps whatever K leaves of it, clamped at zero. When
    no overs are left in it the session has ended, every remaining session
    counts as whole and batting on comes out of the first of them.
    """
    if context.overs_left_this_session > 0:
        current = max(0, context.overs_left_this_session - declare_after_overs)
        whole_sessions = context.sessions_remaining - 1
        first_session_used = 0
    else:
        current = 0
        whole_sessions = context.sessions_remaining
        first_session_used = min(context.overs_per_session, declare_after_overs)

    later = [context.overs_per_session] * max(0, whole_sessions)
    if later:
        later[0] -= first_session_used

    return current, later


def sample_available_overs(context: MatchContext, declare_after_overs: int, rng: Mulberry32) -> float:
    """Overs available to bowl, after a weather draw for every whole session"""
    current, later = session_allotments(context, declare_after_overs)

    overs_avail = float(current)
    for i, session_overs in enumerate(later):
        rain_chance = context.rain_chances[i] if i < len(context.rain_chances) else 0.0
        rain_occurs = rng.random() < rain_chance
        # rain costs 20%..80% of the session
        lost_fraction = (0.2 + 0.6 * rng.random()) if rain_occurs else 0.0
        overs_avail += session_overs * (1 - lost_fraction)

    return overs_avail


class ChaseModel:
    """
    Fourth-innings chase against a fixed target.

    The draw check fires on over floor(available) - 1 while the over loop runs
    while over < available. With a fractional allowance a trial can record a
    draw and then a result on the extra over; both events are kept and counted.
    """

    PRESSURE_FACTOR = 0.15
    MAX_PRESSURE_LIFT = 0.8
    OVER_RUNS_SD = 1.0
    WICKET_P_FLOOR = 0.03
    WICKET_P_CAP = 0.25
    WICKET_P_GROWTH = 1.02  # per wicket, lower order coming in
    WEAR_INTERVAL = 20
    WEAR_RUN_RATE = 0.98
    WEAR_WICKET_P = 1.03
    MIN_RUN_RATE = 1.2
    ALL_OUT = 10

    def __init__(self, context: MatchContext, preset: GroundPreset, declare_after_overs: int, target: float):
        self.context = context
        self.preset = preset
        self.declare_after_overs = declare_after_overs
        self.target = target
        self.hazard = ChaseHazard.from_context(context, preset)

    def play(self, available_overs: float, rng: Mulberry32) -> ChaseTrial:
        trial = ChaseTrial(available_overs=available_overs)
        target = self.target

        # only reachable by batting out the final session
        if available_overs <= 0:
            trial.events.append(ChaseEvent(ChaseOutcome.DRAW, target))
            return trial

        wicket_p = self.hazard.wicket_p
        rpo_mean = self.hazard.run_rate
        draw_over = math.floor(available_overs) - 1

        over = 0
        while over < available_overs:
            required_rpo = (target - trial.runs) / max(1, available_overs - over)
            pressure_lift = 0.0
            if required_rpo > rpo_mean:
                pressure_lift = clamp((required_rpo - rpo_mean) * self.PRESSURE_FACTOR, 0, self.MAX_PRESSURE_LIFT)

            trial.runs += round_runs(normal(rng, rpo_mean + pressure_lift, self.OVER_RUNS_SD))

            if rng.random() < wicket_p:
                trial.wickets += 1
                wicket_p = clamp(wicket_p * self.WICKET_P_GROWTH, self.WICKET_P_FLOOR, self.WICKET_P_CAP)

            if (over + 1) % self.WEAR_INTERVAL == 0:
                rpo_mean = max(self.MIN_RUN_RATE, rpo_mean * self.WEAR_RUN_RATE)
                wicket_p = clamp(wicket_p * self.WEAR_WICKET_P, self.WICKET_P_FLOOR, self.WICKET_P_CAP)

            trial.overs_bowled = over + 1

            if trial.runs >= target:
                trial.events.append(ChaseEvent(ChaseOutcome.LOSS, -(trial.runs - target)))
                break
            if trial.wickets >= self.ALL_OUT:
                trial.events.append(ChaseEvent(ChaseOutcome.WIN, target - trial.runs))
                break
            if over == draw_over:
                trial.events.append(ChaseEvent(ChaseOutcome.DRAW, target - trial.runs))

            over += 1

        return trial

    def simulate_trial(self, rng: Mulberry32) -> ChaseTrial:
        available_overs = sample_available_overs(self.context, self.declare_after_overs, rng)
        return self.play(available_overs, rng)

    def simulate(self, seeds: Iterable[int]) -> ChaseTally:
        tally = ChaseTally()
        for seed in seeds:
            tally.add(self.simulate_trial(Mulberry32(seed)))
        return tally
