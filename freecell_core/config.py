from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in _TRUE_VALUES


def env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


@dataclass(frozen=True)
class EngineConfig:
    """Engine settings. `auto_route` sends a chosen source card straight to a foundation when it fits."""
    auto_route: bool = True
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        return cls(
            auto_route=env_flag('FREECELL_AUTO_ROUTE', True),
            seed=env_int('FREECELL_SEED'),
        )


def setup_logging(verbose: bool = False) -> None:
    """Configures root logging on stdout. FREECELL_LOG_LEVEL applies unless verbose is set."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv('FREECELL_LOG_LEVEL', 'WARNING').upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
