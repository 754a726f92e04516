#!/usr/bin/env python3
"""
CLI for the Test cricket declaration advisor
"""
import sys

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from app.config import settings
from app.logging_config import configure_logging
from app.engine import DeclarationEvaluator
from app.engine.presets import GROUND_PRESETS
from app.engine.reasoning import build_reasoning, risk_profile
from app.engine.scenarios import SCENARIOS
from app.validators.match_context_validator import InvalidInput

console = Console()

# CLI option name -> MatchContext field
CONTEXT_OPTIONS = {
    "overs_per_session": "overs_per_session",
    "sessions": "sessions_remaining",
    "overs_left": "overs_left_this_session",
    "lead": "current_lead",
    "wickets": "wickets_in_hand",
    "run_rate": "continue_batting_run_rate",
    "wicket_prob": "continue_batting_wicket_prob",
    "batting": "opponent_batting_strength",
    "bowling": "our_bowling_strength",
    "pitch": "pitch_bowling_factor",
    "risk": "risk_appetite",
    "ground": "ground_preset_key",
}


def _pct(p: float) -> str:
    return f"{p * 100:.1f}%"


@click.group()
@click.option("--log-level", default=settings.LOG_LEVEL, help="Logging level")
def cli(log_level: str):
    """Declaration Advisor - when should the captain declare?"""
    configure_logging(log_level)


@cli.command()
def grounds():
    """List ground presets"""
    table = Table(title="Ground Presets")
    table.add_column("Key", style="cyan")
    table.add_column("Ground")
    table.add_column("Wicket help", justify="right")
    table.add_column("Chase ease", justify="right")

    for preset in GROUND_PRESETS.values():
        table.add_row(preset.key, preset.name, f"{preset.wicket_help:.2f}", f"{preset.chase_ease:.2f}")

    console.print(table)


@cli.command()
def scenarios():
    """List ready-made match scenarios"""
    table = Table(title="Scenarios")
    table.add_column("Name", style="cyan")
    table.add_column("Ground")
    table.add_column("Lead", justify="right")
    table.add_column("Wkts", justify="right")
    table.add_column("Sessions", justify="right")
    table.add_column("Overs left", justify="right")
    table.add_column("Rain")

    for name, ctx in SCENARIOS.items():
        table.add_row(
            name,
            ctx.ground,
            str(ctx.current_lead),
            str(ctx.wickets_in_hand),
            str(ctx.sessions_remaining),
            str(ctx.overs_left_this_session),
            ", ".join(f"{round(c * 100)}%" for c in ctx.rain_chances),
        )

    console.print(table)


@cli.command()
@click.option("--scenario", default="default", type=click.Choice(list(SCENARIOS)), help="Starting match situation")
@click.option("--overs-per-session", type=int, help="Overs in a full session")
@click.option("--sessions", type=int, help="Sessions remaining, including the current one")
@click.option("--overs-left", type=int, help="Overs left in the current session")
@click.option("--lead", type=int, help="Current lead in runs")
@click.option("--wickets", type=int, help="Wickets in hand")
@click.option("--run-rate", type=float, help="Run rate while batting on")
@click.option("--wicket-prob", type=float, help="Wicket probability per over while batting on")
@click.option("--batting", type=float, help="Opponent batting strength (0-100)")
@click.option("--bowling", type=float, help="Our bowling strength (0-100)")
@click.option("--pitch", type=float, help="Pitch bowling factor (>1 helps bowlers)")
@click.option("--rain", multiple=True, type=float, help="Rain chance per session after this one (repeatable)")
@click.option("--risk", type=float, help="Risk appetite (0 conservative .. 2 aggressive)")
@click.option("--ground", type=str, help="Ground preset key")
@click.option("--sims", default=settings.DEFAULT_SIMS, help="Simulations per option")
@click.option("--seed", default=settings.DEFAULT_SEED, help="Scenario seed")
@click.option("--workers", default=settings.SWEEP_WORKERS, help="Processes for the option sweep")
@click.option("--top", default=0, help="Only show the best N options (0 shows all)")
def evaluate(scenario, rain, sims, seed, workers, top, **overrides):
    """Simulate every declaration option and recommend one"""
    changes = {CONTEXT_OPTIONS[k]: v for k, v in overrides.items() if v is not None}
    if rain:
        changes["rain_chances"] = tuple(rain)

    context = SCENARIOS[scenario].replace(**changes)
    if "ground_preset_key" in changes and changes["ground_preset_key"] in GROUND_PRESETS:
        context = context.replace(ground=GROUND_PRESETS[changes["ground_preset_key"]].name)

    evaluator = DeclarationEvaluator(workers=workers)

    try:
        with console.status(f"[yellow]Simulating {sims} chases per option...[/yellow]"):
            report = evaluator.evaluate(context, sims=sims, seed=seed)
    except InvalidInput as e:
        console.print("[red]Invalid match context:[/red]")
        for error in e.errors:
            console.print(f"  [red]- {error}[/red]")
        sys.exit(1)

    _print_options(report, top)
    _print_recommendation(report)


def _print_options(report, top: int):
    """Print the ranked option table"""
    table = Table(title=f"Win/draw/loss by declaration timing ({report.sims} sims/option, seed {report.seed})")
    table.add_column("Declare", style="cyan")
    table.add_column("Target", justify="right")
    table.add_column("+Runs", justify="right")
    table.add_column("Wkts lost", justify="right")
    table.add_column("Overs to bowl", justify="right")
    table.add_column("Win", justify="right", style="green")
    table.add_column("Draw", justify="right")
    table.add_column("Loss", justify="right", style="red")
    table.add_column("Utility", justify="right", style="magenta")

    options = report.options[:top] if top > 0 else report.options
    for option in options:
        table.add_row(
            option.option_label,
            str(round(option.target)),
            f"{option.expect_added_runs:.1f}",
            f"{option.expect_wkts_lost_while_batting:.2f}",
            f"{option.bowl_overs_avail:.1f}",
            _pct(option.win_p),
            _pct(option.draw_p),
            _pct(option.loss_p),
            f"{option.utility:.3f}",
        )

    console.print(table)


def _print_recommendation(report):
    """Print the recommended option with its reasoning"""
    best = report.best
    if best is None:
        console.print("[red]No declaration options available.[/red]")
        return

    lines = build_reasoning(report)
    body = [f"[bold green]{lines[0]}[/bold green]", ""]
    body.extend(f"• {line}" for line in lines[1:])

    runner_up = report.runner_up
    if runner_up:
        body.append("")
        body.append(
            f"Next best: {runner_up.option_label} with {_pct(runner_up.win_p)} win and {_pct(runner_up.loss_p)} loss."
        )

    profile = risk_profile(report.context.risk_appetite)
    console.print(Panel("\n".join(body), title=f"Recommendation ({profile})"))
    console.print(
        f"Ground factors - wicket help: {report.preset.wicket_help:.2f}, chase ease: {report.preset.chase_ease:.2f}"
    )

    if report.truncated:
        console.print("[yellow]Sweep stopped early by the time budget; later options were not simulated.[/yellow]")


if __name__ == "__main__":
    cli()
