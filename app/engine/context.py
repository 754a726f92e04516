"""
Match context and simulation result dataclasses with serialization support.
"""
from dataclasses import dataclass, field, asdict, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class MatchContext:
    """Match situation for one declaration evaluation"""
    ground: str = "Generic Test Ground"
    overs_per_session: int = 30
    sessions_remaining: int = 3  # whole sessions left, including the current one
    overs_left_this_session: int = 24

    current_lead: int = 250  # runs ahead right now
    wickets_in_hand: int = 6
    continue_batting_run_rate: float = 3.8  # rpo while batting on
    continue_batting_wicket_prob: float = 0.12  # per over while batting on

    opponent_batting_strength: float = 60  # 0..100
    our_bowling_strength: float = 65  # 0..100
    pitch_bowling_factor: float = 1.15  # > 1 helps bowlers

    rain_chances: Tuple[float, ...] = (0.1, 0.2, 0.2, 0.2)  # one per session after the current one

    risk_appetite: float = 1.0  # 0 conservative .. 2 aggressive
    ground_preset_key: str = "generic"

    def __post_init__(self):
        # lists from JSON would make the context unhashable
        object.__setattr__(self, "rain_chances", tuple(self.rain_chances))

    @property
    def total_overs_remaining(self) -> int:
        return self.overs_left_this_session + (self.sessions_remaining - 1) * self.overs_per_session

    def replace(self, **changes) -> "MatchContext":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["rain_chances"] = list(self.rain_chances)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "MatchContext":
        defaults = cls()
        return cls(
            ground=d.get("ground", defaults.ground),
            overs_per_session=d.get("overs_per_session", defaults.overs_per_session),
            sessions_remaining=d.get("sessions_remaining", defaults.sessions_remaining),
            overs_left_this_session=d.get("overs_left_this_session", defaults.overs_left_this_session),
            current_lead=d.get("current_lead", defaults.current_lead),
            wickets_in_hand=d.get("wickets_in_hand", defaults.wickets_in_hand),
            continue_batting_run_rate=d.get("continue_batting_run_rate", defaults.continue_batting_run_rate),
            continue_batting_wicket_prob=d.get("continue_batting_wicket_prob", defaults.continue_batting_wicket_prob),
            opponent_batting_strength=d.get("opponent_batting_strength", defaults.opponent_batting_strength),
            our_bowling_strength=d.get("our_bowling_strength", defaults.our_bowling_strength),
            pitch_bowling_factor=d.get("pitch_bowling_factor", defaults.pitch_bowling_factor),
            rain_chances=tuple(d.get("rain_chances", defaults.rain_chances)),
            risk_appetite=d.get("risk_appetite", defaults.risk_appetite),
            ground_preset_key=d.get("ground_preset_key", defaults.ground_preset_key),
        )


@dataclass
class SimResult:
    """Aggregated chase outcome for one declaration option"""
    win_p: float = 0.0
    draw_p: float = 0.0
    loss_p: float = 0.0
    exp_margin_runs: float = 0.0  # +ve: runs the opponent fell short by, -ve: runs they won by

    @property
    def outcome_mass(self) -> float:
        """win + draw + loss, 1.0 unless the last-over boundary double counts"""
        return self.win_p + self.draw_p + self.loss_p


def option_label(declare_after_overs: int) -> str:
    if declare_after_overs == 0:
        return "Declare now"
    suffix = "" if declare_after_overs == 1 else "s"
    return f"Declare in {declare_after_overs} over{suffix}"


@dataclass
class OptionOutcome(SimResult):
    """Result of one 'declare after K overs' option"""
    option_label: str = ""
    declare_after_overs: int = 0
    expect_added_runs: float = 0.0
    expect_wkts_lost_while_batting: float = 0.0
    extension_all_out_p: float = 0.0
    target: float = 0.0
    bowl_overs_avail: float = 0.0
    utility: Optional[float] = None
    overcounted_trials: int = field(default=0, repr=False)
    unresolved_trials: int = field(default=0, repr=False)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["outcome_mass"] = self.outcome_mass
        return d
