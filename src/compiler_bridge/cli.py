"""
Command-line interface for the compiler bridge.

Runs a single compile request from the terminal and prints the message the
chat command would post.  Handy for checking what a compiler answers
without going through the chat platform.

Usage:
    compiler-bridge c++ main.cpp
    compiler-bridge rs --execute < main.rs
    compiler-bridge c++ --compiler-version 14.2 --args "-O3" main.cpp

Exit codes:
    0: Message printed.
    1: The request failed (network, upstream, payload, version or
       capability error).
    2: No compiler matches the request.

Environment Variables:
    GODBOLT_BASE_URL:      Compiler service URL (default: https://godbolt.org)
    GODBOLT_TIMEOUT:       Request timeout in seconds (default: 30)
    GODBOLT_MESSAGE_LIMIT: Chat message length limit (default: 2000)
    GODBOLT_LOG_LEVEL:     Logging level (default: INFO)
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from compiler_bridge.catalog import CompilerCatalog
from compiler_bridge.client import GodboltClient
from compiler_bridge.config import BridgeConfig, add_config_arguments
from compiler_bridge.errors import CompilerBridgeError
from compiler_bridge.service import CompilerService

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_MATCH = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``compiler-bridge``."""
    parser = argparse.ArgumentParser(
        prog="compiler-bridge",
        description="Compile or run code on a remote compiler and print the chat message",
    )
    parser.add_argument("language", help="Language tag (e.g. c++, rust, rs)")
    parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="Source file (default: stdin)",
    )
    parser.add_argument(
        "--compiler-version",
        "-V",
        dest="compiler_version",
        default=None,
        help="Exact compiler version to use",
    )
    parser.add_argument(
        "--instruction-set",
        "-i",
        default=None,
        help="Instruction set to compile for (e.g. amd64, aarch64)",
    )
    parser.add_argument(
        "--args",
        "-a",
        dest="user_args",
        default="",
        help="Extra compiler arguments",
    )
    parser.add_argument(
        "--execute",
        "-x",
        action="store_true",
        help="Build and run the program instead of showing assembly",
    )
    add_config_arguments(parser)
    return parser


def configure_logging(level: str) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def run_request(args: argparse.Namespace, config: BridgeConfig) -> str | None:
    """Execute one request described by parsed ``args``."""
    async with GodboltClient(config) as client:
        service = CompilerService(
            client,
            CompilerCatalog(client),
            message_limit=config.message_limit,
        )
        return await service.run(
            args.language,
            args.compiler_version,
            args.instruction_set,
            args.file.read(),
            args.user_args,
            args.execute,
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    config = BridgeConfig.from_namespace(args)
    configure_logging(config.log_level)

    try:
        message = asyncio.run(run_request(args, config))
    except CompilerBridgeError as e:
        print(f"Error ({e.kind.value}): {e}", file=sys.stderr)
        return EXIT_FAILED

    if message is None:
        print(f"No compiler matches language {args.language!r}", file=sys.stderr)
        return EXIT_NO_MATCH

    print(message)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
