"""
Ground presets for the declaration simulator.
Each ground nudges the chase hazard through wicket help and chase ease.
"""
import logging
from dataclasses import dataclass
from typing import Mapping

from app.validators.match_context_validator import InvalidInput

logger = logging.getLogger(__name__)

NEUTRAL_PRESET_KEY = "generic"


@dataclass(frozen=True)
class GroundPreset:
    key: str
    name: str
    wicket_help: float = 1.0
    chase_ease: float = 1.0

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "wicket_help": self.wicket_help,
            "chase_ease": self.chase_ease,
        }


GROUND_PRESETS = {
    "generic":     GroundPreset("generic",     "Generic Test Ground",        wicket_help=1.0,  chase_ease=1.0),
    "lords":       GroundPreset("lords",       "Lord's, London",             wicket_help=1.05, chase_ease=0.95),
    "gabba":       GroundPreset("gabba",       "The Gabba, Brisbane",        wicket_help=1.1,  chase_ease=0.95),
    "edenGardens": GroundPreset("edenGardens", "Eden Gardens, Kolkata",      wicket_help=0.95, chase_ease=1.05),
    "mcg":         GroundPreset("mcg",         "MCG, Melbourne",             wicket_help=1.0,  chase_ease=0.98),
    "scg":         GroundPreset("scg",         "SCG, Sydney",                wicket_help=1.05, chase_ease=1.0),
    "wanderers":   GroundPreset("wanderers",   "Wanderers, Johannesburg",    wicket_help=1.12, chase_ease=0.93),
    "rawalpindi":  GroundPreset("rawalpindi",  "Rawalpindi Cricket Stadium", wicket_help=0.9,  chase_ease=1.1),
}


def resolve_ground_preset(
    key: str,
    presets: Mapping[str, GroundPreset] = GROUND_PRESETS,
    strict: bool = True,
) -> GroundPreset:
    """
    Look up a ground preset by key.

    Strict mode rejects unknown keys with InvalidInput. Lenient mode falls back
    to the neutral preset (or a neutral stand-in when the mapping lacks one).
    """
    preset = presets.get(key)
    if preset is not None:
        return preset

    if strict:
        known = ", ".join(sorted(presets))
        raise InvalidInput([f"Unknown ground preset '{key}'. Must be one of: {known}"])

    logger.warning("Unknown ground preset %r, using neutral preset", key)
    return presets.get(NEUTRAL_PRESET_KEY) or GroundPreset(NEUTRAL_PRESET_KEY, "Neutral Ground")
