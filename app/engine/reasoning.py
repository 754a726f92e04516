"""
Plain-language explanation of a declaration recommendation.
"""
from typing import List

from app.engine.evaluator import DeclarationReport


def risk_profile(risk_appetite: float) -> str:
    if risk_appetite < 0.9:
        return "Conservative"
    if risk_appetite < 1.4:
        return "Balanced"
    return "Aggressive"


def _pct(p: float) -> str:
    return f"{p * 100:.1f}%"


def _delta_points(a: float, b: float) -> float:
    return round((a - b) * 1000) / 10


def headline(report: DeclarationReport) -> str:
    best = report.best
    if best is None:
        return "No declaration options to evaluate"
    return (
        f"{best.option_label}: projected target ~{round(best.target)} "
        f"with an expected additional {round(best.expect_added_runs)} runs if you bat on"
    )


def build_reasoning(report: DeclarationReport) -> List[str]:
    """Headline followed by the trade-offs behind the recommended option"""
    best = report.best
    if best is None:
        return [headline(report)]

    ctx = report.context
    runner_up = report.runner_up

    weather = ", ".join(
        f"{i + 1}:{round(chance * 100)}%"
        for i, chance in enumerate(ctx.rain_chances[:ctx.sessions_remaining])
    )

    if runner_up:
        comparison = (
            f"Compared with {runner_up.option_label}, this choice changes win by "
            f"{_delta_points(best.win_p, runner_up.win_p)}% and loss by "
            f"{_delta_points(best.loss_p, runner_up.loss_p)}%, reflecting a "
            f"{risk_profile(ctx.risk_appetite).lower()} risk appetite ({ctx.risk_appetite:.2f})."
        )
    else:
        comparison = "No other declaration option was available to compare against."

    return [
        headline(report),
        (
            f"Trade-off between time to take 10 wickets and runs on the board: this option balances "
            f"a target near {round(best.target)} with the time cost of batting on "
            f"(~{best.bowl_overs_avail:.0f} overs left to bowl)."
        ),
        (
            f"Bowling context: our attack strength {ctx.our_bowling_strength:g} versus their batting "
            f"{ctx.opponent_batting_strength:g}, adjusted by pitch factor {ctx.pitch_bowling_factor:.2f} "
            f"and ground profile {report.preset.name}."
        ),
        (
            f"Weather risk reduces available overs. Session rain chances considered: {weather}. "
            f"Declaring earlier preserves overs when rain is likely."
        ),
        comparison,
        (
            f"Expected margin if time expires or wickets fall: {round(best.exp_margin_runs)} runs "
            f"in our favour on average (win {_pct(best.win_p)}, draw {_pct(best.draw_p)}, "
            f"loss {_pct(best.loss_p)})."
        ),
    ]
