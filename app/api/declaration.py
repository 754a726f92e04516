from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.config import settings
from app.engine.context import MatchContext, OptionOutcome
from app.engine.evaluator import DeclarationEvaluator, DeclarationReport
from app.engine.presets import GROUND_PRESETS
from app.engine.reasoning import build_reasoning, risk_profile
from app.engine.scenarios import SCENARIOS
from app.validators.match_context_validator import InvalidInput
from app.api.schemas import (
    EvaluateRequest, EvaluationResponse, GroundPresetResponse, MatchContextSchema,
    OptionOutcomeResponse, ScenarioEvaluateRequest, ScenarioResponse,
)

router = APIRouter(prefix="/declaration", tags=["Declaration Advisor"])


def get_evaluator() -> DeclarationEvaluator:
    """FastAPI dependency - fresh evaluator over the built-in ground presets"""
    return DeclarationEvaluator()


def _option_response(option: OptionOutcome) -> OptionOutcomeResponse:
    return OptionOutcomeResponse(**option.to_dict())


def _evaluation_response(report: DeclarationReport) -> EvaluationResponse:
    return EvaluationResponse(
        best=_option_response(report.best) if report.best else None,
        runner_up=_option_response(report.runner_up) if report.runner_up else None,
        options=[_option_response(o) for o in report.options],
        preset=GroundPresetResponse(**report.preset.to_dict()),
        risk_profile=risk_profile(report.context.risk_appetite),
        reasoning=build_reasoning(report),
        sims=report.sims,
        seed=report.seed,
        truncated=report.truncated,
    )


def _run_evaluation(evaluator: DeclarationEvaluator, context: MatchContext, sims, seed) -> EvaluationResponse:
    if sims is not None and sims > settings.MAX_SIMS:
        raise HTTPException(status_code=400, detail=[f"Trial count is capped at {settings.MAX_SIMS}, got {sims}"])

    try:
        report = evaluator.evaluate(context, sims=sims, seed=seed)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=e.errors)

    return _evaluation_response(report)


@router.get("/grounds", response_model=list[GroundPresetResponse])
def list_grounds():
    """Ground presets with their wicket help and chase ease"""
    return [GroundPresetResponse(**preset.to_dict()) for preset in GROUND_PRESETS.values()]


@router.get("/scenarios", response_model=list[ScenarioResponse])
def list_scenarios():
    """Ready-made match situations"""
    return [
        ScenarioResponse(name=name, context=MatchContextSchema(**context.to_dict()))
        for name, context in SCENARIOS.items()
    ]


@router.post("/evaluate", response_model=EvaluationResponse)
def evaluate(request: EvaluateRequest, evaluator: DeclarationEvaluator = Depends(get_evaluator)):
    """Rank every 'declare after K overs' option for a match context"""
    context = MatchContext.from_dict(request.context.model_dump())
    return _run_evaluation(evaluator, context, request.sims, request.seed)


@router.post("/scenarios/{name}/evaluate", response_model=EvaluationResponse)
def evaluate_scenario(
    name: str,
    request: Optional[ScenarioEvaluateRequest] = None,
    evaluator: DeclarationEvaluator = Depends(get_evaluator),
):
    """Rank declaration options for a named scenario"""
    context = SCENARIOS.get(name)
    if context is None:
        raise HTTPException(status_code=404, detail="Scenario not found")

    request = request or ScenarioEvaluateRequest()
    return _run_evaluation(evaluator, context, request.sims, request.seed)
