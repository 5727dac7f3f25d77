from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)2s %(name)s | %(message)s'
LOGGER_NAMES = ('cubebot_core', 'app')


def _truthy(value: Optional[str]) -> bool:
    return (value or '0').strip().lower() in ('1', 'true', 'yes', 'on')


def _float_or(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning('%s=%r is not a number; using %s', name, value, default)
        return default


@dataclass(frozen=True)
class RunConfig:
    """Settings threaded explicitly through a solve/apply/drive run."""
    solver_exe: Optional[str] = None
    solver_timeout: Optional[float] = 30.0  # seconds; None waits forever
    verbose: bool = False  # log calibration and the cube net for every move
    debug: bool = False  # additionally log every whole-cube reorientation
    actuator_timeout: float = 5.0
    poll_interval: float = 0.05

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'RunConfig':
        """
        Build a config from CUBEBOT_* environment variables:
        CUBEBOT_SOLVER_EXE, CUBEBOT_SOLVER_TIMEOUT (0 disables), CUBEBOT_VERBOSE,
        CUBEBOT_DEBUG, CUBEBOT_ACTUATOR_TIMEOUT, CUBEBOT_POLL_INTERVAL.
        """
        env = os.environ if environ is None else environ
        timeout = _float_or(env, 'CUBEBOT_SOLVER_TIMEOUT', 30.0)
        debug = _truthy(env.get('CUBEBOT_DEBUG'))
        return cls(
            solver_exe=env.get('CUBEBOT_SOLVER_EXE') or None,
            solver_timeout=timeout if timeout > 0 else None,
            verbose=_truthy(env.get('CUBEBOT_VERBOSE')) or debug,
            debug=debug,
            actuator_timeout=_float_or(env, 'CUBEBOT_ACTUATOR_TIMEOUT', 5.0),
            poll_interval=_float_or(env, 'CUBEBOT_POLL_INTERVAL', 0.05),
        )

    def with_overrides(self, **changes) -> 'RunConfig':
        """Return a copy with the non-None values of ``changes`` applied."""
        kept = {k: v for k, v in changes.items() if v is not None}
        if kept.get('debug'):
            kept['verbose'] = True
        return replace(self, **kept)


def setup_logging(config: RunConfig, stream=None, names=LOGGER_NAMES) -> logging.Handler:
    """Attach a single stdout handler to the cubebot loggers."""
    level = logging.DEBUG if config.debug else logging.INFO
    hldr = logging.StreamHandler(stream or sys.stdout)
    hldr.setFormatter(logging.Formatter(LOG_FORMAT))
    hldr.setLevel(level)

    for name in names:
        named = logging.getLogger(name)
        named.setLevel(level)
        for old in list(named.handlers):
            named.removeHandler(old)
        named.addHandler(hldr)
    return hldr
