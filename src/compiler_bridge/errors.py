"""
Error taxonomy for the compiler bridge.

Every failure the bridge can surface is one of exactly five kinds.  Each
exception class carries an :class:`ErrorKind` tag so that callers (the chat
command layer) can dispatch on ``error.kind`` and be sure they have handled
every case:

    try:
        message = await service.run("cpp", None, None, code, "-O2", False)
    except CompilerBridgeError as e:
        match e.kind:
            case ErrorKind.TRANSPORT: ...
            case ErrorKind.UPSTREAM_STATUS: ...
            case ErrorKind.DECODE: ...
            case ErrorKind.VERSION_PARSE: ...
            case ErrorKind.INVALID_OPERATION: ...

None of these errors is recovered inside the bridge.  They are raised where
they happen and propagate to the caller unchanged; there are no retries and
no partial results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# =============================================================================
# ERROR KINDS
# =============================================================================


class ErrorKind(str, Enum):
    """Closed set of failure kinds raised by the bridge."""

    TRANSPORT = "transport"
    UPSTREAM_STATUS = "upstream_status"
    DECODE = "decode"
    VERSION_PARSE = "version_parse"
    INVALID_OPERATION = "invalid_operation"


# =============================================================================
# EXCEPTIONS
# =============================================================================


@dataclass
class CompilerBridgeError(Exception):
    """
    Base class for every error raised by the bridge.

    Not raised directly; catch it to handle all five kinds at once.

    Attributes:
        message: Human-readable error message.
        detail: Additional context (URL, upstream body excerpt, ...).
        kind: The :class:`ErrorKind` tag of the concrete subclass.
    """

    message: str
    detail: str = ""
    kind: ErrorKind = field(init=False)

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


@dataclass
class TransportError(CompilerBridgeError):
    """The HTTP round trip itself failed (connection, TLS, timeout)."""

    def __post_init__(self) -> None:
        self.kind = ErrorKind.TRANSPORT


@dataclass
class UpstreamStatusError(CompilerBridgeError):
    """
    The compiler service answered with a non-success status.

    Attributes:
        status_code: HTTP status code from the response.
    """

    status_code: int = 0

    def __post_init__(self) -> None:
        self.kind = ErrorKind.UPSTREAM_STATUS


@dataclass
class DecodeError(CompilerBridgeError):
    """The response payload did not match the expected schema."""

    def __post_init__(self) -> None:
        self.kind = ErrorKind.DECODE


@dataclass
class VersionParseError(CompilerBridgeError):
    """
    A version string could not be parsed as a semantic version.

    Attributes:
        raw: The offending version string.
    """

    raw: str = ""

    def __post_init__(self) -> None:
        self.kind = ErrorKind.VERSION_PARSE


class InvalidOperationError(CompilerBridgeError):
    """
    The selected compiler lacks the requested capability.

    ``operation`` is ``"execution"`` or ``"compilation"``.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(message=f"The selected compiler doesn't support {operation}")
        self.operation = operation
        self.kind = ErrorKind.INVALID_OPERATION


__all__ = [
    "CompilerBridgeError",
    "DecodeError",
    "ErrorKind",
    "InvalidOperationError",
    "TransportError",
    "UpstreamStatusError",
    "VersionParseError",
]
