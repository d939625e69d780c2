"""Runtime settings, read from the environment with safe defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

PROJECT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_DIR = PROJECT_DIR / "data"
DEFAULT_RISK_LIMIT = 10
DEFAULT_LOG_LEVEL = "INFO"

ENV_DATA_DIR = "INSIGHTS_DATA_DIR"
ENV_RISK_JITTER = "INSIGHTS_RISK_JITTER"
ENV_RISK_LIMIT = "INSIGHTS_RISK_LIMIT"
ENV_LOG_LEVEL = "INSIGHTS_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    # Half-width of the seeded score noise; 0 keeps risk scores purely deterministic.
    risk_jitter: float = 0.0
    risk_limit: int = DEFAULT_RISK_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        data_dir = Path(env[ENV_DATA_DIR]) if env.get(ENV_DATA_DIR) else DEFAULT_DATA_DIR

        try:
            risk_jitter = max(0.0, float(env.get(ENV_RISK_JITTER, 0.0)))
        except ValueError:
            risk_jitter = 0.0

        try:
            risk_limit = int(env.get(ENV_RISK_LIMIT, DEFAULT_RISK_LIMIT))
        except ValueError:
            risk_limit = DEFAULT_RISK_LIMIT
        risk_limit = max(1, min(200, risk_limit))

        log_level = str(env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
        return cls(data_dir=data_dir, risk_jitter=risk_jitter, risk_limit=risk_limit, log_level=log_level)
