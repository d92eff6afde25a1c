"""Configuration read from the environment."""
import os
from dataclasses import dataclass
from functools import lru_cache

from .cards import validate_pair_count


@dataclass(frozen=True)
class Config:
    flip_back_delay: float
    reset_banner_seconds: float
    default_pair_count: int
    columns: int
    debug: bool


@lru_cache
def get_config() -> Config:
    config = Config(
        flip_back_delay=float(os.environ.get("MEMORY_FLIP_BACK_DELAY", "1.0")),
        reset_banner_seconds=float(os.environ.get("MEMORY_RESET_BANNER_SECONDS", "2.0")),
        default_pair_count=int(os.environ.get("MEMORY_DEFAULT_PAIRS", "3")),
        columns=int(os.environ.get("MEMORY_COLUMNS", "4")),
        debug=os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes"),
    )
    validate_pair_count(config.default_pair_count)
    if config.flip_back_delay < 0 or config.reset_banner_seconds < 0:
        raise ValueError("delays must not be negative")
    if config.columns < 1:
        raise ValueError("MEMORY_COLUMNS must be at least 1")
    return config
