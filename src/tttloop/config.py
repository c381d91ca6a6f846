"""Game settings, environment-first.

TTT_BOARD_SIZE, TTT_INVALID_MOVE_POLICY, TTT_MAX_INVALID_ATTEMPTS and
TTT_SEED provide defaults; CLI flags override them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .game import InvalidMovePolicy


@dataclass(frozen=True)
class GameSettings:
    board_size: int = 3
    on_invalid: InvalidMovePolicy = InvalidMovePolicy.RAISE
    max_invalid_attempts: int = 3
    seed: Optional[int] = None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> GameSettings:
    size = _env_int("TTT_BOARD_SIZE", 3)
    if size < 3:
        raise ValueError(f"TTT_BOARD_SIZE must be >= 3, got {size}")
    policy_raw = (os.getenv("TTT_INVALID_MOVE_POLICY") or "raise").strip().lower()
    try:
        policy = InvalidMovePolicy(policy_raw)
    except ValueError:
        choices = ", ".join(p.value for p in InvalidMovePolicy)
        raise ValueError(f"TTT_INVALID_MOVE_POLICY must be one of: {choices}") from None
    attempts = _env_int("TTT_MAX_INVALID_ATTEMPTS", 3)
    if attempts < 1:
        raise ValueError(f"TTT_MAX_INVALID_ATTEMPTS must be >= 1, got {attempts}")
    return GameSettings(
        board_size=size,
        on_invalid=policy,
        max_invalid_attempts=attempts,
        seed=_env_int("TTT_SEED", None),
    )
