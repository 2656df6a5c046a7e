"""
Renders a :class:`~compiler_bridge.compiler.CompileResult` as a chat message.

Message layout::

    **success** (x86-64 gcc 14.2)
    ```x86asm
    main:
            xor     eax, eax
            ret```
    **Warning:** ...

The header names the outcome and the compiler, the output goes in a fenced
code block, and warnings follow one per line.  Output longer than the
message limit minus a safety margin is cut to :data:`TRUNCATED_LENGTH`
characters.  That length is a fixed constant sized for the default 2000
character limit; it does not follow a different ``message_limit``.
"""

from __future__ import annotations

from compiler_bridge.compiler import CompileResult, RunKind
from compiler_bridge.config import DEFAULT_MESSAGE_LIMIT, MESSAGE_MARGIN

TRUNCATED_LENGTH = 1840

NO_OUTPUT = "<no output>"

MANGLED_WARNING = (
    "**Warning:** Mangled sections are filtered by heuristics, "
    "consider unmangling relevant sections."
)
TRUNCATED_WARNING = (
    "**Warning:** The output was trimmed because the output is over 2000 characters long."
)


def syntax_tag(result: CompileResult) -> str:
    """``x86asm`` for successful assembly, ``ansi`` for everything else."""
    if result.run_kind is RunKind.ASSEMBLY and result.is_success:
        return "x86asm"
    return "ansi"


def header(result: CompileResult) -> str:
    """Bold outcome plus compiler name, with the version unless the name already has it."""
    status = "success" if result.is_success else "error"
    version = str(result.version)
    suffix = "" if version in result.compiler_name else f" {version}"
    return f"**{status}** ({result.compiler_name}{suffix})"


def render(result: CompileResult, message_limit: int = DEFAULT_MESSAGE_LIMIT) -> str:
    """Render ``result`` as a message fitting in ``message_limit`` characters."""
    output = result.output
    warnings: list[str] = []

    if result.run_kind is RunKind.ASSEMBLY and not output.strip():
        warnings.append(MANGLED_WARNING)

    if len(result.output) > message_limit - MESSAGE_MARGIN:
        output = output[:TRUNCATED_LENGTH]
        warnings.append(TRUNCATED_WARNING)

    body = output if output else NO_OUTPUT
    return f"{header(result)}\n```{syntax_tag(result)}\n{body}```\n" + "\n".join(warnings)
