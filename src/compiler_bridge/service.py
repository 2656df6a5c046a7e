"""
Caller-facing entry point of the compiler bridge.

``CompilerService.run`` ties the pieces together for the chat command
layer:

1. look the compiler up in the catalog (populating it on first use),
2. compile or execute the code with it,
3. render the result as a message.

Caller contract
---------------
``run()`` returns either the rendered message, or ``None`` when no catalog
entry matches the request.  Every other failure is raised as a
:class:`~compiler_bridge.errors.CompilerBridgeError` subclass and left for
the caller to turn into a user-facing reply.
"""

from __future__ import annotations

import logging

from compiler_bridge import compiler
from compiler_bridge.catalog import CompilerCatalog, get_catalog
from compiler_bridge.client import GodboltClient
from compiler_bridge.config import DEFAULT_MESSAGE_LIMIT
from compiler_bridge.formatter import render
from compiler_bridge.versions import OptionalVersion

logger = logging.getLogger(__name__)


class CompilerService:
    """
    Looks up, compiles and renders in one call.

    Attributes:
        _client:        Client used for compile submissions.
        _catalog:       Catalog used for lookups; the process-wide one
                        unless injected.
        _message_limit: Chat message limit passed to the formatter.
    """

    def __init__(
        self,
        client: GodboltClient,
        catalog: CompilerCatalog | None = None,
        *,
        message_limit: int = DEFAULT_MESSAGE_LIMIT,
    ) -> None:
        self._client = client
        self._catalog = catalog if catalog is not None else get_catalog(client)
        self._message_limit = message_limit

    async def run(
        self,
        language: str,
        version: OptionalVersion | str | None,
        instruction_set: str | None,
        code: str,
        user_args: str,
        execute: bool,
    ) -> str | None:
        """
        Compile ``code`` with the compiler matching the request and render the result.

        Args:
            language:        Language tag (``"rs"`` is accepted for ``"rust"``).
            version:         Requested compiler version, as text or parsed;
                             ``None`` for "any fully capable compiler".
            instruction_set: Requested instruction set, or ``None``.
            code:            Source code.
            user_args:       Raw compiler arguments.
            execute:         Run the program instead of showing assembly.

        Returns:
            The rendered message, or ``None`` if no compiler matches.

        Raises:
            VersionParseError: If ``version`` is text that cannot be parsed.
            CompilerBridgeError: Any failure from catalog population or the
                compile submission.
        """
        if isinstance(version, str):
            version = OptionalVersion.parse(version) if version.strip() else None

        entry = await self._catalog.lookup(language, version, instruction_set)
        if entry is None:
            logger.info(
                "No compiler matches language=%r version=%s instruction_set=%r",
                language,
                version,
                instruction_set,
            )
            return None

        result = await compiler.compile_code(self._client, entry, code, user_args, execute)
        return render(result, self._message_limit)
