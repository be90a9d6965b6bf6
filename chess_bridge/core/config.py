"""Configuration of the bridge, read from environment variables."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

ENV_PREFIX = "CHESS_BRIDGE_"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class BridgeConfig:
    log_level: str = "WARNING"
    debug: bool = False
    # how many candidate moves get written to the debug log per legal-move query
    move_log_sample: int = 5

    @property
    def effective_log_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def load_config(environ: dict[str, str] | None = None) -> BridgeConfig:
    """Build a BridgeConfig from a mapping of environment variables (defaults to os.environ)."""
    env = os.environ if environ is None else environ
    sample = env.get(f"{ENV_PREFIX}MOVE_LOG_SAMPLE", "5")
    return BridgeConfig(
        log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING"),
        debug=env.get(f"{ENV_PREFIX}DEBUG", "0").lower() in ("1", "true", "yes"),
        move_log_sample=int(sample) if sample.isdigit() else 5,
    )


@lru_cache
def get_config() -> BridgeConfig:
    return load_config()


def configure_logging(config: BridgeConfig | None = None) -> None:
    """To be called once by the host at startup."""
    config = config or get_config()
    logging.basicConfig(level=config.effective_log_level, format=LOG_FORMAT)
    logging.getLogger("chess_bridge").setLevel(config.effective_log_level)
