# stepsearch/config.py
# Search settings supplied by whoever drives the stepping (UI, CLI, benchmarks).
from __future__ import annotations

import logging
from typing import Annotated, Any, Mapping, Optional, Tuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigurationError, describe_validation_error
from .problems.checks import validate_puzzle_board

HEURISTICS = ("default", "manhattan", "misplaced")
DEFAULT_GOAL: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 0)
ENV_PREFIX = "STEPSEARCH_"


class SearchSettings(BaseSettings):
    """
    Everything an algorithm or problem needs from the active configuration.

    Defaults mirror the classroom app: depth 5 for minimax, 1000 MCTS iterations with
    C = 1.414, Manhattan distance for the sliding puzzle and X as the maximizing player.
    Every field can be overridden by a ``STEPSEARCH_<FIELD>`` environment variable.
    """

    # Adversarial search
    max_depth: int = Field(default=5, description="Depth limit for minimax / alpha-beta", ge=0)
    max_player: str = Field(default="X", description="Mark the maximizing side plays")

    # MCTS
    mcts_iterations: int = Field(default=1000, description="Iteration budget", ge=1)
    mcts_exploration: float = Field(default=1.414, description="UCB1 exploration constant C", ge=0)
    mcts_seed: Optional[int] = Field(default=0, description="Rollout seed (None = nondeterministic)")
    mcts_rollout_depth: int = Field(default=50, description="Random playout move limit", ge=0)

    # Sliding puzzle
    heuristic: str = Field(default="default", description="default, manhattan or misplaced")
    goal_state: Annotated[Tuple[int, ...], NoDecode] = Field(
        default=DEFAULT_GOAL, description="Goal tiles, comma or space separated in the environment"
    )

    # Iterative deepening
    ids_max_depth: int = Field(default=50, description="IDS depth safety limit", ge=0)
    ida_max_expansions: int = Field(default=5000, description="IDA* expansion ceiling", ge=1)

    # Fast-forward ceilings
    fast_forward_limit: int = Field(default=5000, ge=1)
    fast_forward_heavy_limit: int = Field(default=500, description="Ceiling for MCTS, IDS and IDA*", ge=1)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    @field_validator("heuristic")
    @classmethod
    def validate_heuristic(cls, v: str) -> str:
        v = v.lower()
        if v not in HEURISTICS:
            raise ValueError(f"unknown heuristic {v!r}; expected one of {HEURISTICS}")
        return v

    @field_validator("max_player")
    @classmethod
    def validate_max_player(cls, v: str) -> str:
        v = v.upper()
        if v not in ("X", "O"):
            raise ValueError(f"max_player must be 'X' or 'O', got {v!r}")
        return v

    @field_validator("goal_state", mode="before")
    @classmethod
    def validate_goal_state(cls, v: Any) -> Tuple[int, ...]:
        if isinstance(v, str):
            try:
                v = [int(tok) for tok in v.replace(",", " ").split()]
            except ValueError as e:
                raise ValueError(f"goal_state {v!r} is not a list of tile numbers") from e
        return validate_puzzle_board(v, what="goal_state")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SearchSettings":
        """
        Build settings from STEPSEARCH_* variables; keyword overrides win.

        With ``environ`` given, only that mapping is read (the process environment is ignored).
        """
        if environ is None:
            try:
                return cls(**overrides)
            except ValidationError as e:
                raise ConfigurationError(describe_validation_error(e)) from e
        values = {}
        for var, raw in environ.items():
            if not var.upper().startswith(ENV_PREFIX) or raw == "":
                continue
            name = var[len(ENV_PREFIX):].lower()
            if name in cls.model_fields:
                values[name] = raw
        values.update(overrides)
        return cls._checked(values)

    @classmethod
    def _checked(cls, values: Mapping[str, Any]) -> "SearchSettings":
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(describe_validation_error(e)) from e

    def replace(self, **changes) -> "SearchSettings":
        """Validated copy with ``changes`` applied."""
        return self._checked({**self.model_dump(), **changes})

    @property
    def heuristic_name(self) -> str:
        return "manhattan" if self.heuristic == "default" else self.heuristic


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging for the command-line entry points."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
