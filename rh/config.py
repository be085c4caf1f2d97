import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

BOARD_SIZE = 6
BOARD_EXIT_Y = 2
TARGET_CAR = "X"
BLANK = " "
PROGRESS_EVERY = 100

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise RuntimeError(f"Env var {name} must be an integer, got {v!r}") from None


def _bool_env(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    v = v.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


@dataclass
class SolverConfig:
    board_size: int = BOARD_SIZE
    exit_row: int = BOARD_EXIT_Y
    target: str = TARGET_CAR
    verbose: bool = False
    progress_every: int = PROGRESS_EVERY

    def __post_init__(self):
        if self.board_size < 2:
            raise ValueError(f"board_size must be at least 2, got {self.board_size}")
        if not 0 <= self.exit_row < self.board_size:
            raise ValueError(f"exit_row {self.exit_row} is off a {self.board_size}x{self.board_size} board")
        if len(self.target) != 1 or self.target == BLANK:
            raise ValueError(f"target must be a single non-blank symbol, got {self.target!r}")
        if self.progress_every < 1:
            raise ValueError(f"progress_every must be positive, got {self.progress_every}")

    @classmethod
    def from_env(cls, **overrides) -> "SolverConfig":
        """
        Build a config from RH_* environment variables (a .env file is picked up too).
        Keyword overrides that are not None win over the environment.
        """
        load_dotenv(find_dotenv(usecwd=True))

        values = {
            "board_size": _int_env("RH_BOARD_SIZE", BOARD_SIZE),
            "exit_row": _int_env("RH_EXIT_ROW", BOARD_EXIT_Y),
            "target": os.getenv("RH_TARGET") or TARGET_CAR,
            "verbose": _bool_env("RH_VERBOSE", False),
            "progress_every": _int_env("RH_PROGRESS_EVERY", PROGRESS_EVERY),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
