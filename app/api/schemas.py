"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel
from typing import Optional
from enum import Enum


class RiskProfileEnum(str, Enum):
    CONSERVATIVE = "Conservative"
    BALANCED = "Balanced"
    AGGRESSIVE = "Aggressive"


# Match context
class MatchContextSchema(BaseModel):
    ground: str = "Generic Test Ground"
    overs_per_session: int = 30
    sessions_remaining: int = 3
    overs_left_this_session: int = 24

    current_lead: int = 250
    wickets_in_hand: int = 6
    continue_batting_run_rate: float = 3.8
    continue_batting_wicket_prob: float = 0.12

    opponent_batting_strength: float = 60
    our_bowling_strength: float = 65
    pitch_bowling_factor: float = 1.15

    rain_chances: list[float] = [0.1, 0.2, 0.2, 0.2]

    risk_appetite: float = 1.0
    ground_preset_key: str = "generic"


class EvaluateRequest(BaseModel):
    context: MatchContextSchema
    sims: Optional[int] = None
    seed: Optional[int] = None


class ScenarioEvaluateRequest(BaseModel):
    sims: Optional[int] = None
    seed: Optional[int] = None


# Ground presets
class GroundPresetResponse(BaseModel):
    key: str
    name: str
    wicket_help: float
    chase_ease: float


class ScenarioResponse(BaseModel):
    name: str
    context: MatchContextSchema


# Evaluation results
class OptionOutcomeResponse(BaseModel):
    option_label: str
    declare_after_overs: int
    expect_added_runs: float
    expect_wkts_lost_while_batting: float
    extension_all_out_p: float
    target: float
    bowl_overs_avail: float
    win_p: float
    draw_p: float
    loss_p: float
    exp_margin_runs: float
    utility: float
    outcome_mass: float


class EvaluationResponse(BaseModel):
    best: Optional[OptionOutcomeResponse] = None
    runner_up: Optional[OptionOutcomeResponse] = None
    options: list[OptionOutcomeResponse]
    preset: GroundPresetResponse
    risk_profile: RiskProfileEnum
    reasoning: list[str]
    sims: int
    seed: int
    truncated: bool
