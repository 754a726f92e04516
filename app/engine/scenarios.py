"""
Ready-made match situations for quick evaluation.
"""
from app.engine.context import MatchContext
from app.engine.presets import GROUND_PRESETS

SCENARIOS = {
    "default": MatchContext(),
    "day5_squeeze": MatchContext(
        ground=GROUND_PRESETS["scg"].name,
        overs_per_session=30,
        sessions_remaining=2,
        overs_left_this_session=18,
        current_lead=310,
        wickets_in_hand=7,
        continue_batting_run_rate=3.7,
        continue_batting_wicket_prob=0.11,
        opponent_batting_strength=55,
        our_bowling_strength=70,
        pitch_bowling_factor=1.25,
        rain_chances=(0.05, 0.15, 0.15),
        risk_appetite=1.0,
        ground_preset_key="scg",
    ),
    "flat_pitch_rain_risk": MatchContext(
        ground=GROUND_PRESETS["rawalpindi"].name,
        overs_per_session=30,
        sessions_remaining=3,
        overs_left_this_session=22,
        current_lead=180,
        wickets_in_hand=5,
        continue_batting_run_rate=4.2,
        continue_batting_wicket_prob=0.09,
        opponent_batting_strength=70,
        our_bowling_strength=60,
        pitch_bowling_factor=0.9,
        rain_chances=(0.3, 0.4, 0.4),
        risk_appetite=0.7,
        ground_preset_key="rawalpindi",
    ),
}


def get_scenario(name: str) -> MatchContext:
    """Look up a scenario by name, KeyError if unknown"""
    try:
        return SCENARIOS[name]
    except KeyError:
        raise KeyError(f"Unknown scenario '{name}'. Must be one of: {', '.join(SCENARIOS)}") from None
