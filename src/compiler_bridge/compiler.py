"""
Compile orchestration.

:func:`compile_code` checks that the selected compiler can do what was asked,
submits the code in one round trip and turns the response into a
:class:`CompileResult`.  There is no retry and no caching; every call is
exactly one request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from compiler_bridge.catalog import CompilerEntry
from compiler_bridge.client import GodboltClient
from compiler_bridge.errors import InvalidOperationError
from compiler_bridge.models import CompileRequest
from compiler_bridge.versions import OptionalVersion

logger = logging.getLogger(__name__)


class RunKind(Enum):
    """Whether a request produced disassembly only or built and ran the program."""

    ASSEMBLY = "assembly"
    EXECUTION = "execution"

    @property
    def runs(self) -> bool:
        """True only for :attr:`EXECUTION`."""
        return self is RunKind.EXECUTION


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of one compile call.

    ``version`` and ``compiler_name`` are copies taken from the entry at
    compile time.

    Attributes:
        output: Program/assembly output on success, compiler diagnostics
                otherwise.
        is_success: Whether the service reported success.
        version: Version of the compiler used.
        compiler_name: Display name of the compiler used.
        run_kind: Assembly or Execution.
    """

    output: str
    is_success: bool
    version: OptionalVersion
    compiler_name: str
    run_kind: RunKind


async def compile_code(
    client: GodboltClient,
    entry: CompilerEntry,
    code: str,
    user_args: str,
    execute: bool,
) -> CompileResult:
    """
    Compile (and optionally run) ``code`` with ``entry``.

    Args:
        client: Client used for the submission.
        entry: The selected compiler.
        code: Source code.
        user_args: Raw compiler arguments, passed through untouched.
        execute: Build and run the program instead of producing assembly.

    Raises:
        InvalidOperationError: ``"execution"`` if ``execute`` is set but the
            compiler cannot execute; ``"compilation"`` if it is not set and
            the compiler cannot produce binary output.
        TransportError, UpstreamStatusError, DecodeError: From the submission.
    """
    if execute and not entry.supports_execute:
        raise InvalidOperationError("execution")

    if not execute and not entry.supports_binary:
        raise InvalidOperationError("compilation")

    run_kind = RunKind.EXECUTION if execute else RunKind.ASSEMBLY
    logger.debug("Submitting %s request to compiler %s", run_kind.value, entry.id)

    response = await client.compile(entry.id, CompileRequest.build(code, user_args, execute))

    is_success = response.is_success()
    logger.info(
        "Compiler %s finished %s request (success=%s)", entry.id, run_kind.value, is_success
    )

    return CompileResult(
        output=response.aggregate_run_out() if is_success else response.aggregate_comp_out(),
        is_success=is_success,
        version=entry.version,
        compiler_name=entry.name,
        run_kind=run_kind,
    )
