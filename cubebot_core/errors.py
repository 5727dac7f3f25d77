from __future__ import annotations

from typing import List, Optional


class CubeError(Exception):
    """Base class for every error raised by cubebot_core."""


class ValidationError(CubeError, ValueError):
    """Malformed facelet or scramble input, detected before solving."""

    def __init__(self, message: str, face: Optional[str] = None):
        super().__init__(message)
        self.face = face


class ExternalToolError(CubeError, RuntimeError):
    """The external solver failed to start, exited non-zero or printed garbage."""

    def __init__(self, message: str, exe: Optional[str] = None, output: str = ''):
        super().__init__(message)
        self.exe = exe
        self.output = output


class SolverTimeoutError(ExternalToolError):
    """The external solver did not answer in time and was killed."""


class TranslationError(CubeError):
    """An algebraic move could not be translated into actuation.

    ``emitted`` holds the actuation produced by the moves applied before the
    offending one; those moves are not rolled back.
    """

    def __init__(self, index: int, token: str, reason: str, emitted: Optional[List] = None):
        super().__init__(f"move #{index} {token!r}: {reason}")
        self.index = index
        self.token = token
        self.reason = reason
        self.emitted = list(emitted or [])


class ActuatorTimeoutError(CubeError):
    """The actuator did not report its target position before the poll timeout."""

    def __init__(self, token, index: int, elapsed: float):
        super().__init__(f"actuation #{index} {token} not confirmed after {elapsed:.2f}s")
        self.token = token
        self.index = index
        self.elapsed = elapsed
