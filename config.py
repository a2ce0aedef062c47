"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field

from core.hand import HAND_SIZE


def _parse_optional_int(name: str) -> int | None:
    """Parse an optional integer environment variable."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return int(raw)


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    starting_balance: int = field(
        default_factory=lambda: int(os.getenv("CARD_GAME_STARTING_BALANCE", "100"))
    )
    max_replacements: int = 2
    rng_seed: int | None = field(default_factory=lambda: _parse_optional_int("CARD_GAME_SEED"))

    def __post_init__(self) -> None:
        if self.starting_balance < 0:
            raise ValueError("Starting balance cannot be negative")
        if not 0 <= self.max_replacements < HAND_SIZE:
            raise ValueError("max_replacements must leave at least one card locked")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(
        default_factory=lambda: os.getenv("CARD_GAME_LOG_LEVEL", "INFO").upper()
    )

    game: GameConfig = field(default_factory=GameConfig)


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for applications embedding the engine."""
    if level is None:
        level = "DEBUG" if config.debug else config.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Global configuration instance
config = AppConfig()
