"""
Configuration management for the compiler bridge.

This module handles configuration from multiple sources with the following
precedence (highest to lowest):

1. Command-line arguments (--server, --timeout, --message-limit, --log-level)
2. Environment variables (GODBOLT_BASE_URL, GODBOLT_TIMEOUT, ...)
3. Default values

The configuration is immutable once created.

Example:
    config = BridgeConfig.from_env()
    print(config.compilers_url)  # "https://godbolt.org/api/compilers"
    print(config.message_limit)  # 2000 (default)
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

DEFAULT_BASE_URL = "https://godbolt.org"

# Default HTTP request timeout in seconds.  Execution requests on a busy
# backend can take a while.
DEFAULT_TIMEOUT = 30.0

# Code-block message limit of the chat platform the output is posted to.
DEFAULT_MESSAGE_LIMIT = 2000

DEFAULT_LOG_LEVEL = "INFO"

# Safety margin kept below the message limit before output is truncated.
MESSAGE_MARGIN = 100

ENV_BASE_URL = "GODBOLT_BASE_URL"
ENV_TIMEOUT = "GODBOLT_TIMEOUT"
ENV_MESSAGE_LIMIT = "GODBOLT_MESSAGE_LIMIT"
ENV_LOG_LEVEL = "GODBOLT_LOG_LEVEL"


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class BridgeConfig:
    """
    Immutable configuration container for the compiler bridge.

    Attributes:
        base_url: Base URL of the compiler service, without trailing slash.
        timeout: HTTP request timeout in seconds, applied to every call.
        message_limit: Length limit of the chat message the rendered
                       output is embedded in.
        log_level: Logging level name used by the CLI.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    message_limit: int = DEFAULT_MESSAGE_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If base_url is empty, timeout is not positive or
                        message_limit does not exceed the safety margin.
        """
        if not self.base_url:
            raise ValueError("base_url cannot be empty")

        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number")

        if self.message_limit <= MESSAGE_MARGIN:
            raise ValueError(f"message_limit must be greater than {MESSAGE_MARGIN}")

    @property
    def compilers_url(self) -> str:
        """Full URL of the compiler list endpoint."""
        return f"{self.base_url}/api/compilers"

    def compile_url(self, compiler_id: str) -> str:
        """Full URL of the compile endpoint for ``compiler_id``."""
        return f"{self.base_url}/api/compiler/{compiler_id}/compile"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BridgeConfig:
        """
        Create a config from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get(ENV_BASE_URL, DEFAULT_BASE_URL).rstrip("/"),
            timeout=float(env.get(ENV_TIMEOUT, DEFAULT_TIMEOUT)),
            message_limit=int(env.get(ENV_MESSAGE_LIMIT, DEFAULT_MESSAGE_LIMIT)),
            log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        )

    @classmethod
    def from_namespace(cls, parsed: argparse.Namespace) -> BridgeConfig:
        """
        Create a config from parsed CLI options, falling back to the environment.

        Options left as ``None`` by argparse mean "check env var, then use default".
        """
        base = cls.from_env()
        return cls(
            base_url=(parsed.server_url or base.base_url).rstrip("/"),
            timeout=parsed.timeout if parsed.timeout is not None else base.timeout,
            message_limit=(
                parsed.message_limit if parsed.message_limit is not None else base.message_limit
            ),
            log_level=(parsed.log_level or base.log_level).upper(),
        )

    @classmethod
    def from_args(cls, args: Sequence[str] | None = None) -> BridgeConfig:
        """
        Create a config from command-line arguments.

        Args:
            args: Command-line arguments to parse. If None, uses sys.argv[1:].
        """
        parser = argparse.ArgumentParser(add_help=False)
        add_config_arguments(parser)
        parsed, _ = parser.parse_known_args(args)
        return cls.from_namespace(parsed)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the configuration options on ``parser``."""
    parser.add_argument(
        "--server",
        "-s",
        dest="server_url",
        default=None,
        help=f"Compiler service URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--message-limit",
        type=int,
        default=None,
        help=f"Chat message length limit (default: {DEFAULT_MESSAGE_LIMIT})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
