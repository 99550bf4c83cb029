from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .errors import ConfigurationError
from .models import Algorithm

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SchedulerConfig:
    """
    Defaults for the command line. Flags given on the command line win.
    """

    quantum: int = 2
    log_level: str = "WARNING"
    compare_algorithms: List[Algorithm] = field(default_factory=lambda: list(Algorithm))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SchedulerConfig":
        """
        Read SCHEDSIM_QUANTUM, SCHEDSIM_LOG_LEVEL and SCHEDSIM_ALGORITHMS.
        """
        env = os.environ if environ is None else environ
        config = cls()

        raw_quantum = env.get("SCHEDSIM_QUANTUM")
        if raw_quantum:
            try:
                config.quantum = int(raw_quantum)
            except ValueError:
                raise ConfigurationError(f"SCHEDSIM_QUANTUM must be an integer, got {raw_quantum!r}") from None
            if config.quantum <= 0:
                raise ConfigurationError(f"SCHEDSIM_QUANTUM must be positive, got {config.quantum}")

        raw_level = env.get("SCHEDSIM_LOG_LEVEL")
        if raw_level:
            level = raw_level.strip().upper()
            if level not in LOG_LEVELS:
                raise ConfigurationError(f"SCHEDSIM_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
            config.log_level = level

        raw_algorithms = env.get("SCHEDSIM_ALGORITHMS")
        if raw_algorithms:
            config.compare_algorithms = [
                Algorithm.parse(name) for name in raw_algorithms.split(",") if name.strip()
            ]

        return config
