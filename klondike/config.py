"""
Runtime configuration from environment variables.

    KLONDIKE_ENV          development | production (default: development)
    KLONDIKE_MODE         classic | draw_three (default: classic)
    KLONDIKE_SEED         integer seed for dealing; unset = unpredictable
    KLONDIKE_LOG_LEVEL    logging level name (default: WARNING)
    KLONDIKE_SESSION_TTL  seconds before an idle session is dropped (> 0)
    ALLOWED_ORIGINS       comma-separated CORS origins (default: *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from typing import Mapping

from .engine_core.moves import GameMode

MODE_NAMES = {
    "classic": GameMode.CLASSIC,
    "draw_three": GameMode.DRAW_THREE,
}


def parse_mode(name: str) -> GameMode:
    """Map a mode name to a GameMode."""
    try:
        return MODE_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown game mode {name!r}; expected one of {', '.join(MODE_NAMES)}"
        ) from None


@dataclass
class Settings:
    env: str = "development"
    mode: GameMode = GameMode.CLASSIC
    seed: int | None = None
    log_level: str = "WARNING"
    session_ttl: int = 3600
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read Settings from the environment. Raises ValueError on bad values."""
    env = os.environ if environ is None else environ

    seed = env.get("KLONDIKE_SEED")
    if seed is not None and seed.strip():
        try:
            seed = int(seed)
        except ValueError:
            raise ValueError(f"KLONDIKE_SEED must be an integer, got {seed!r}") from None
    else:
        seed = None

    log_level = env.get("KLONDIKE_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level}")

    try:
        session_ttl = int(env.get("KLONDIKE_SESSION_TTL", "3600"))
    except ValueError:
        raise ValueError("KLONDIKE_SESSION_TTL must be an integer number of seconds") from None
    if session_ttl <= 0:
        raise ValueError(f"KLONDIKE_SESSION_TTL must be positive, got {session_ttl}")

    return Settings(
        env=env.get("KLONDIKE_ENV", "development"),
        mode=parse_mode(env.get("KLONDIKE_MODE", "classic")),
        seed=seed,
        log_level=log_level,
        session_ttl=session_ttl,
        allowed_origins=[o.strip() for o in env.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()],
    )
