from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional, Protocol

from .config import RunConfig
from .errors import ActuatorTimeoutError
from .moves import Actuation, perform
from .state import CubeState

logger = logging.getLogger(__name__)


class ActuationSink(Protocol):
    def send(self, token: Actuation) -> None:
        ...


class Actuator(Protocol):
    """A polled device: ``start`` begins a motion, ``reached`` reports whether it finished."""

    def start(self, token: Actuation) -> None:
        ...

    def reached(self) -> bool:
        ...


class RecordingSink:
    """Collects tokens in order."""

    def __init__(self) -> None:
        self.tokens: List[Actuation] = []

    def send(self, token: Actuation) -> None:
        self.tokens.append(token)


class SimulatedSink:
    """Replays tokens on its own CubeState, standing in for the rig or a visualizer."""

    def __init__(self, state: CubeState, show: bool = False):
        self.state = state
        self.show = show
        self.sent = 0

    def send(self, token: Actuation) -> None:
        perform(self.state, token)
        self.sent += 1
        if self.show:
            logger.info('sim[%d]: %s\n%s', self.sent, token, self.state.pretty())


class ActuatorDriver:
    """
    Sink that drives a polled actuator one token at a time.

    Each token blocks until the actuator reports its target position or
    ``timeout`` seconds pass. A timeout raises ActuatorTimeoutError unless the
    ``confirm`` callback (an operator check) returns True for it, in which case
    driving goes on with a warning.
    """

    def __init__(
        self,
        actuator: Actuator,
        timeout: float = 5.0,
        poll_interval: float = 0.05,
        confirm: Optional[Callable[[ActuatorTimeoutError], bool]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.actuator = actuator
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.confirm = confirm
        self.clock = clock
        self.sleep = sleep
        self.sent = 0

    @classmethod
    def from_config(cls, actuator: Actuator, config: RunConfig, confirm=None) -> 'ActuatorDriver':
        return cls(actuator, timeout=config.actuator_timeout, poll_interval=config.poll_interval, confirm=confirm)

    def send(self, token: Actuation) -> None:
        index = self.sent
        self.actuator.start(token)
        started = self.clock()
        while not self.actuator.reached():
            elapsed = self.clock() - started
            if elapsed >= self.timeout:
                err = ActuatorTimeoutError(token, index, elapsed)
                if self.confirm is not None and self.confirm(err):
                    logger.warning('%s; continuing on operator confirmation', err)
                    break
                logger.error('%s', err)
                raise err
            self.sleep(self.poll_interval)
        self.sent += 1


def drive(tokens: Iterable[Actuation], sink: ActuationSink) -> int:
    """Send ``tokens`` to ``sink`` strictly in order; returns how many were sent."""
    n = 0
    for token in tokens:
        sink.send(token)
        n += 1
    return n
