from typing import List, Optional


class InvalidInput(ValueError):
    """Match context or evaluation parameters break a simulation invariant"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class MatchContextValidator:
    @staticmethod
    def validate(context, sims: Optional[int] = None) -> dict:
        """
        Validate a match context before any trials are run.

        Rules:
        1. Overs values are non-negative, overs per session is positive
        2. At least the current session remains
        3. Wickets in hand within 0-10
        4. Probabilities within [0, 1]
        5. Rain chances cover every remaining session
        6. Ratings within 0-100, pitch factor positive, risk appetite within [0, 2]
        7. Trial count (when given) is positive
        """
        errors = []

        if context.overs_per_session <= 0:
            errors.append(f"Overs per session must be positive, got {context.overs_per_session}")
        if context.overs_left_this_session < 0:
            errors.append(f"Overs left this session cannot be negative, got {context.overs_left_this_session}")
        if context.sessions_remaining < 1:
            errors.append(f"At least one session must remain, got {context.sessions_remaining}")

        if not 0 <= context.wickets_in_hand <= 10:
            errors.append(f"Wickets in hand must be between 0 and 10, got {context.wickets_in_hand}")

        if context.continue_batting_run_rate < 0:
            errors.append(f"Run rate while batting on cannot be negative, got {context.continue_batting_run_rate}")
        if not 0 <= context.continue_batting_wicket_prob <= 1:
            errors.append(
                f"Wicket probability per over must be between 0 and 1, got {context.continue_batting_wicket_prob}"
            )

        if len(context.rain_chances) < context.sessions_remaining:
            errors.append(
                f"Need a rain chance for each of {context.sessions_remaining} sessions, "
                f"got {len(context.rain_chances)}"
            )
        for i, chance in enumerate(context.rain_chances):
            if not 0 <= chance <= 1:
                errors.append(f"Rain chance for session {i + 1} must be between 0 and 1, got {chance}")

        for label, rating in (
            ("Opponent batting strength", context.opponent_batting_strength),
            ("Our bowling strength", context.our_bowling_strength),
        ):
            if not 0 <= rating <= 100:
                errors.append(f"{label} must be between 0 and 100, got {rating}")

        if context.pitch_bowling_factor <= 0:
            errors.append(f"Pitch bowling factor must be positive, got {context.pitch_bowling_factor}")
        if not 0 <= context.risk_appetite <= 2:
            errors.append(f"Risk appetite must be between 0 and 2, got {context.risk_appetite}")

        if sims is not None and sims <= 0:
            errors.append(f"Trial count must be positive, got {sims}")

        return {
            "valid": len(errors) == 0,
            "errors": errors,
        }

    @staticmethod
    def ensure_valid(context, sims: Optional[int] = None) -> None:
        """Raise InvalidInput listing every violated rule"""
        result = MatchContextValidator.validate(context, sims)
        if not result["valid"]:
            raise InvalidInput(result["errors"])
