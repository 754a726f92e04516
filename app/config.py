"""
Simulator configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str) -> list:
    """Comma-separated environment value as a list, blanks dropped"""
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Simulation settings from environment variables"""

    # Monte Carlo defaults
    DEFAULT_SIMS: int = int(os.getenv("DEFAULT_SIMS", "2500"))
    DEFAULT_SEED: int = int(os.getenv("DEFAULT_SEED", "1234"))
    MAX_SIMS: int = int(os.getenv("MAX_SIMS", "20000"))  # per option, guards the API

    # Process pool size for the option sweep, 1 runs sequentially
    SWEEP_WORKERS: int = int(os.getenv("SWEEP_WORKERS", "1"))

    # Reject unknown ground preset keys instead of falling back to generic
    STRICT_GROUND_PRESETS: bool = _env_bool("STRICT_GROUND_PRESETS", True)

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Browser origins allowed to call the API, none unless configured
    CORS_ORIGINS: list = _env_list("CORS_ORIGINS")


settings = Settings()
