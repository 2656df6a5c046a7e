"""Selection predicate matching a catalog entry against a caller's request."""

from __future__ import annotations

from typing import TYPE_CHECKING

from compiler_bridge.versions import OptionalVersion

if TYPE_CHECKING:
    from compiler_bridge.catalog import CompilerEntry


def matches(
    entry: CompilerEntry,
    language: str,
    version: OptionalVersion | None = None,
    instruction_set: str | None = None,
) -> bool:
    """Return whether ``entry`` satisfies a (language, version, instruction set) request.

    The language tags are compared after trimming.  A requested version must
    equal the entry's version exactly and a requested instruction set must
    equal the entry's exactly.  Each criterion left unspecified instead
    requires the entry to support both binary output and execution, so a
    bare language request only ever picks a fully capable compiler.

    Pure: no I/O, no state.
    """
    if entry.language.strip() != language.strip():
        return False

    fully_capable = entry.supports_binary and entry.supports_execute

    if version is not None:
        if version != entry.version:
            return False
    elif not fully_capable:
        return False

    if instruction_set is not None:
        if entry.instruction_set != instruction_set:
            return False
    elif not fully_capable:
        return False

    return True
