"""
Option evaluator - sweeps 'declare after K overs' options and ranks them.
"""
import logging
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from app.config import settings
from app.engine.chase import ChaseModel
from app.engine.context import MatchContext, OptionOutcome, SimResult, option_label
from app.engine.extension import ExtensionModel
from app.engine.presets import GROUND_PRESETS, GroundPreset, resolve_ground_preset
from app.engine.sampler import Mulberry32, derive_seed
from app.validators.match_context_validator import MatchContextValidator

logger = logging.getLogger(__name__)

MAX_DECLARE_OVERS = 30
OPTION_SEED_STRIDE = 101
WIN_WEIGHT = 1.0
MASS_TOLERANCE = 1e-9


def loss_weight(risk_appetite: float) -> float:
    """Penalty on loss probability, heavier for cautious captains"""
    if risk_appetite < 1:
        return 2.0
    if risk_appetite < 1.5:
        return 1.2
    return 0.8


def option_utility(result: SimResult, risk_appetite: float) -> float:
    return WIN_WEIGHT * result.win_p - loss_weight(risk_appetite) * result.loss_p


def max_declare_overs(context: MatchContext) -> int:
    """Largest K worth simulating: capped at 30 and by the overs left in the match"""
    if context.wickets_in_hand <= 0:
        return 0
    return max(0, min(MAX_DECLARE_OVERS, context.total_overs_remaining))


def simulate_option(
    context: MatchContext,
    preset: GroundPreset,
    declare_after_overs: int,
    sims: int,
    seed: int,
) -> OptionOutcome:
    """Bat on for K overs, fix the mean target, then simulate the chase"""
    option_rng = Mulberry32(seed + declare_after_overs * OPTION_SEED_STRIDE)

    extension_seeds = [derive_seed(option_rng) for _ in range(sims)]
    extension = ExtensionModel.from_context(context).simulate(declare_after_overs, extension_seeds)
    target = context.current_lead + extension.expect_added_runs

    chase_seeds = [derive_seed(option_rng, s) for s in range(sims)]
    tally = ChaseModel(context, preset, declare_after_overs, target).simulate(chase_seeds)
    result = tally.to_sim_result()

    return OptionOutcome(
        win_p=result.win_p,
        draw_p=result.draw_p,
        loss_p=result.loss_p,
        exp_margin_runs=result.exp_margin_runs,
        option_label=option_label(declare_after_overs),
        declare_after_overs=declare_after_overs,
        expect_added_runs=extension.expect_added_runs,
        expect_wkts_lost_while_batting=extension.expect_wickets_lost,
        extension_all_out_p=extension.all_out_p,
        target=target,
        bowl_overs_avail=tally.mean_available_overs,
        overcounted_trials=tally.overcounted,
        unresolved_trials=tally.unresolved,
    )


def _simulate_option_task(args) -> OptionOutcome:
    return simulate_option(*args)


def rank_options(options: List[OptionOutcome], risk_appetite: float) -> List[OptionOutcome]:
    """Attach utilities and sort best first; ties keep ascending K order"""
    for option in options:
        option.utility = option_utility(option, risk_appetite)
    return sorted(options, key=lambda o: o.utility, reverse=True)


@dataclass
class DeclarationReport:
    """Ranked declaration options for one match context"""
    context: MatchContext
    preset: GroundPreset
    sims: int
    seed: int
    options: List[OptionOutcome] = field(default_factory=list)
    truncated: bool = False  # sweep stopped early by the time budget

    @property
    def best(self) -> Optional[OptionOutcome]:
        return self.options[0] if self.options else None

    @property
    def runner_up(self) -> Optional[OptionOutcome]:
        return self.options[1] if len(self.options) > 1 else None


class DeclarationEvaluator:
    """
    Sweeps K = 0..max_k, simulating each option independently.

    Every option derives its generators from (seed, K) alone, so running the
    sweep in a process pool gives the same results as running it in order.
    """

    def __init__(
        self,
        presets: Mapping[str, GroundPreset] = GROUND_PRESETS,
        strict_presets: Optional[bool] = None,
        workers: Optional[int] = None,
    ):
        self.presets = presets
        self.strict_presets = settings.STRICT_GROUND_PRESETS if strict_presets is None else strict_presets
        self.workers = settings.SWEEP_WORKERS if workers is None else workers

    def resolve_preset(self, context: MatchContext) -> GroundPreset:
        return resolve_ground_preset(context.ground_preset_key, self.presets, strict=self.strict_presets)

    def evaluate(
        self,
        context: MatchContext,
        sims: Optional[int] = None,
        seed: Optional[int] = None,
        time_budget: Optional[float] = None,
    ) -> DeclarationReport:
        """
        Evaluate every declaration option and rank them by utility.

        Raises InvalidInput before any trial runs if the context is malformed.
        With a time budget (seconds) the sweep stops between options once the
        budget is spent and the report is marked truncated. In a process pool the
        pending options are cancelled and evaluate returns without waiting for
        the ones already running.
        """
        sims = settings.DEFAULT_SIMS if sims is None else sims
        seed = settings.DEFAULT_SEED if seed is None else seed

        MatchContextValidator.ensure_valid(context, sims)
        preset = self.resolve_preset(context)

        max_k = max_declare_overs(context)
        logger.info(
            "Evaluating %d declaration options at %s (%d sims, seed %d)",
            max_k + 1, preset.name, sims, seed,
        )

        started = time.monotonic()
        report = DeclarationReport(context=context, preset=preset, sims=sims, seed=seed)
        tasks = [(context, preset, k, sims, seed) for k in range(max_k + 1)]

        def over_budget() -> bool:
            return time_budget is not None and time.monotonic() - started > time_budget

        if self.workers > 1 and len(tasks) > 1:
            executor = ProcessPoolExecutor(max_workers=self.workers)
            try:
                futures = [executor.submit(_simulate_option_task, task) for task in tasks]
                for i, future in enumerate(futures):
                    report.options.append(future.result())
                    if i < len(futures) - 1 and over_budget():
                        report.truncated = True
                        break
            finally:
                # options already running in a worker finish in the background
                executor.shutdown(wait=not report.truncated, cancel_futures=True)
        else:
            for i, task in enumerate(tasks):
                report.options.append(_simulate_option_task(task))
                if i < len(tasks) - 1 and over_budget():
                    report.truncated = True
                    break

        if report.truncated:
            logger.warning(
                "Time budget of %.1fs spent, stopped after %d of %d options",
                time_budget, len(report.options), len(tasks),
            )

        for option in report.options:
            self._check_outcome_mass(option)

        report.options = rank_options(report.options, context.risk_appetite)

        if report.best:
            logger.info(
                "Recommended: %s (win %.3f, draw %.3f, loss %.3f, utility %.3f)",
                report.best.option_label, report.best.win_p, report.best.draw_p,
                report.best.loss_p, report.best.utility,
            )
        return report

    @staticmethod
    def _check_outcome_mass(option: OptionOutcome) -> None:
        if abs(option.outcome_mass - 1.0) > MASS_TOLERANCE:
            logger.warning(
                "%s: win+draw+loss = %.4f (%d trials counted twice on the final partial over, %d with no result)",
                option.option_label, option.outcome_mass,
                option.overcounted_trials, option.unresolved_trials,
            )
