import os
from dataclasses import dataclass, replace
from typing import Optional

from .game_logic import Cell, NoughtsError

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

COMPUTER_DELAY_MS = 500         # pause before the computer plays
COMPUTER_SYMBOL = Cell.O
LOG_LEVEL = "INFO"

ENV_PREFIX = "NOUGHTS_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(NoughtsError, ValueError):
    """bad config value"""


def parse_symbol(value):
    # accepts 'x' / 'O' etc.
    try:
        symbol = Cell(str(value).strip().upper())
    except ValueError:
        raise ConfigError(f"symbol must be X or O, got {value!r}") from None
    if symbol is Cell.EMPTY:
        raise ConfigError("symbol must be X or O, got an empty value")
    return symbol


def parse_delay(value):
    try:
        delay = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"delay must be an integer (ms), got {value!r}") from None
    if delay < 0:
        raise ConfigError(f"delay can't be negative, got {delay}")
    return delay


def parse_log_level(value):
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def parse_seed(value):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"seed must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """
    runtime settings, from env then overridden by cli flags
    """
    computer_delay_ms: int = COMPUTER_DELAY_MS
    computer_symbol: Cell = COMPUTER_SYMBOL
    seed: Optional[int] = None
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        cfg = cls()
        if env.get(ENV_PREFIX + "COMPUTER_DELAY_MS"):
            cfg = replace(cfg, computer_delay_ms=parse_delay(env[ENV_PREFIX + "COMPUTER_DELAY_MS"]))
        if env.get(ENV_PREFIX + "COMPUTER_SYMBOL"):
            cfg = replace(cfg, computer_symbol=parse_symbol(env[ENV_PREFIX + "COMPUTER_SYMBOL"]))
        if env.get(ENV_PREFIX + "SEED"):
            cfg = replace(cfg, seed=parse_seed(env[ENV_PREFIX + "SEED"]))
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            cfg = replace(cfg, log_level=parse_log_level(env[ENV_PREFIX + "LOG_LEVEL"]))
        return cfg

    def with_overrides(self, delay=None, computer_symbol=None, seed=None,
                       verbose=False):
        """apply cli flags; None means keep the current value"""
        cfg = self
        if delay is not None:
            cfg = replace(cfg, computer_delay_ms=parse_delay(delay))
        if computer_symbol is not None:
            cfg = replace(cfg, computer_symbol=parse_symbol(computer_symbol))
        if seed is not None:
            cfg = replace(cfg, seed=parse_seed(seed))
        if verbose:
            cfg = replace(cfg, log_level="DEBUG")
        return cfg
