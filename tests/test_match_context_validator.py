"""
Tests for match context validation and ground preset lookup.
"""
import pytest

from app.engine.context import MatchContext
from app.engine.presets import GROUND_PRESETS, GroundPreset, resolve_ground_preset
from app.validators.match_context_validator import InvalidInput, MatchContextValidator


class TestMatchContextValidator:

    def test_default_context_is_valid(self):
        result = MatchContextValidator.validate(MatchContext(), sims=2500)
        assert result == {"valid": True, "errors": []}

    def test_collects_every_error(self):
        context = MatchContext(
            overs_left_this_session=-1,
            wickets_in_hand=12,
            continue_batting_wicket_prob=1.5,
            risk_appetite=3.0,
        )
        result = MatchContextValidator.validate(context, sims=0)
        assert result["valid"] is False
        assert len(result["errors"]) == 5

    def test_rain_chances_must_cover_sessions(self):
        context = MatchContext(sessions_remaining=3, rain_chances=(0.1, 0.2))
        result = MatchContextValidator.validate(context)
        assert result["valid"] is False
        assert "rain chance" in result["errors"][0]

    def test_rain_chance_out_of_range(self):
        context = MatchContext(sessions_remaining=2, rain_chances=(0.1, 1.2))
        errors = MatchContextValidator.validate(context)["errors"]
        assert errors == ["Rain chance for session 2 must be between 0 and 1, got 1.2"]

    @pytest.mark.parametrize("changes", [
        {"overs_per_session": 0},
        {"sessions_remaining": 0},
        {"continue_batting_run_rate": -0.5},
        {"opponent_batting_strength": 101},
        {"our_bowling_strength": -1},
        {"pitch_bowling_factor": 0},
        {"wickets_in_hand": -1},
    ])
    def test_single_rule_violations(self, changes):
        result = MatchContextValidator.validate(MatchContext().replace(**changes))
        assert result["valid"] is False
        assert len(result["errors"]) == 1

    def test_trial_count_only_checked_when_given(self):
        assert MatchContextValidator.validate(MatchContext())["valid"] is True
        assert MatchContextValidator.validate(MatchContext(), sims=-5)["valid"] is False

    def test_ensure_valid_raises_with_errors(self):
        with pytest.raises(InvalidInput) as exc:
            MatchContextValidator.ensure_valid(MatchContext(wickets_in_hand=11))
        assert exc.value.errors == ["Wickets in hand must be between 0 and 10, got 11"]
        assert isinstance(exc.value, ValueError)

    def test_ensure_valid_passes_quietly(self):
        MatchContextValidator.ensure_valid(MatchContext(), sims=10)


class TestGroundPresets:

    def test_known_key(self):
        assert resolve_ground_preset("gabba").name == "The Gabba, Brisbane"

    def test_unknown_key_strict(self):
        with pytest.raises(InvalidInput) as exc:
            resolve_ground_preset("nowhere")
        assert "nowhere" in exc.value.errors[0]

    def test_unknown_key_lenient_uses_generic(self):
        assert resolve_ground_preset("nowhere", strict=False) is GROUND_PRESETS["generic"]

    def test_lenient_without_generic_uses_neutral(self):
        fixtures = {"fortress": GroundPreset("fortress", "Fortress Oval", 1.3, 0.8)}
        preset = resolve_ground_preset("nowhere", fixtures, strict=False)
        assert (preset.wicket_help, preset.chase_ease) == (1.0, 1.0)

    def test_catalogue_keys_match_preset_keys(self):
        for key, preset in GROUND_PRESETS.items():
            assert preset.key == key


class TestMatchContextSerialization:

    def test_round_trip(self):
        context = MatchContext(current_lead=301, rain_chances=(0.0, 0.5))
        assert MatchContext.from_dict(context.to_dict()) == context

    def test_from_dict_fills_defaults(self):
        context = MatchContext.from_dict({"current_lead": 120, "rain_chances": [0.1, 0.1, 0.1]})
        assert context.current_lead == 120
        assert context.rain_chances == (0.1, 0.1, 0.1)
        assert context.wickets_in_hand == MatchContext().wickets_in_hand

    def test_total_overs_remaining(self):
        assert MatchContext(overs_left_this_session=24, sessions_remaining=3, overs_per_session=30).total_overs_remaining == 84
