"""
Compiler catalog: the cached, sorted list of remote compilers.

The catalog is fetched from the compiler service the first time anyone
looks a compiler up and is then kept for the lifetime of the process.  It
is never refreshed and never replaced.

Population
----------
``CompilerCatalog.lookup`` checks whether the catalog is populated.  If it
is not, the caller fetches the compiler list, sorts it newest version
first and offers it to :meth:`CompilerCatalog._store_once`, which keeps
the first offered sequence and discards any later one.

Concurrent first lookups are *not* collapsed into one request: two
coroutines that both find the catalog empty will each fetch the list.
Only one of the two results is ever stored, and both callers then scan
that stored sequence, so every reader sees either "not populated" or the
one final tuple.  The duplicate request is an accepted cost.

Process-wide catalog
--------------------
:func:`get_catalog` returns the module-level default catalog and
:func:`lookup` is a shortcut for ``get_catalog().lookup(...)``.  The
default catalog fetches through the client of whoever creates it first
(``CompilerService`` passes its own), otherwise through a client configured
from the ``GODBOLT_*`` environment variables.  Tests and embedders that
need isolation construct their own ``CompilerCatalog``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from compiler_bridge.client import GodboltClient
from compiler_bridge.config import BridgeConfig
from compiler_bridge.models import CompilerListing
from compiler_bridge.selector import matches
from compiler_bridge.versions import OptionalVersion

logger = logging.getLogger(__name__)

# Language tag aliases accepted from chat commands.
_LANGUAGE_ALIASES = {"rs": "rust"}


@dataclass(frozen=True)
class CompilerEntry:
    """
    Immutable descriptor of one remote compiler.

    Attributes:
        id:               Opaque identifier used for compile submissions.
        name:             Display name (e.g. ``"x86-64 gcc 14.2"``).
        language:         Language tag (e.g. ``"c++"``, ``"rust"``).
        version:          Compiler version; may be absent.
        instruction_set:  Instruction set tag (e.g. ``"amd64"``).
        supports_binary:  Whether the compiler can produce assembly output.
        supports_execute: Whether programs built by it can be executed.
    """

    id: str
    name: str
    language: str
    version: OptionalVersion
    instruction_set: str
    supports_binary: bool
    supports_execute: bool

    @classmethod
    def from_listing(cls, listing: CompilerListing) -> CompilerEntry:
        """Build an entry from a decoded wire record.

        Raises:
            VersionParseError: If the record's ``semver`` cannot be parsed.
        """
        return cls(
            id=listing.id,
            name=listing.name,
            language=listing.lang,
            version=OptionalVersion.parse(listing.semver),
            instruction_set=listing.instruction_set or "",
            supports_binary=listing.supports_binary,
            supports_execute=listing.supports_execute,
        )

    def matches(
        self,
        language: str,
        version: OptionalVersion | None = None,
        instruction_set: str | None = None,
    ) -> bool:
        return matches(self, language, version, instruction_set)


def sort_entries(entries: Sequence[CompilerEntry]) -> tuple[CompilerEntry, ...]:
    """Sort newest version first; absent versions last, ties keep fetch order."""
    return tuple(sorted(entries, key=lambda entry: entry.version, reverse=True))


def normalize_language(language: str) -> str:
    return _LANGUAGE_ALIASES.get(language, language)


class CompilerCatalog:
    """
    Lazily populated, populate-once compiler catalog.

    Attributes:
        _client:  Client used for the one-time compiler list fetch.
        _entries: Sorted entries once populated, ``None`` before.
        _lock:    Guards the "store if absent" transition of ``_entries``.
    """

    def __init__(self, client: GodboltClient | None = None) -> None:
        self._client = client if client is not None else GodboltClient(BridgeConfig.from_env())
        self._entries: tuple[CompilerEntry, ...] | None = None
        self._lock = threading.Lock()

    @property
    def is_populated(self) -> bool:
        return self._entries is not None

    @property
    def entries(self) -> tuple[CompilerEntry, ...] | None:
        """The stored entries, or ``None`` when not yet populated."""
        return self._entries

    async def lookup(
        self,
        language: str,
        version: OptionalVersion | None = None,
        instruction_set: str | None = None,
    ) -> CompilerEntry | None:
        """
        Return the first catalog entry matching the request, or ``None``.

        ``"rs"`` is accepted as an alias for ``"rust"``.  Populates the
        catalog on first use.

        Raises:
            TransportError, UpstreamStatusError, DecodeError,
            VersionParseError: If the catalog has to be populated and that
                fails.  Nothing is stored in that case.
        """
        language = normalize_language(language)
        entries = await self._ensure_populated()
        for entry in entries:
            if matches(entry, language, version, instruction_set):
                return entry
        return None

    async def _ensure_populated(self) -> tuple[CompilerEntry, ...]:
        entries = self._entries
        if entries is not None:
            return entries

        listings = await self._client.list_compilers()
        fetched = sort_entries([CompilerEntry.from_listing(listing) for listing in listings])
        return self._store_once(fetched)

    def _store_once(self, entries: tuple[CompilerEntry, ...]) -> tuple[CompilerEntry, ...]:
        """Store ``entries`` unless a catalog is already stored; return the stored one."""
        with self._lock:
            if self._entries is None:
                self._entries = entries
                logger.info("Compiler catalog populated with %d entries", len(entries))
            else:
                logger.debug("Compiler catalog already populated; discarding duplicate fetch")
            return self._entries


# =============================================================================
# PROCESS-WIDE CATALOG
# =============================================================================

_default_catalog: CompilerCatalog | None = None
_default_lock = threading.Lock()


def get_catalog(client: GodboltClient | None = None) -> CompilerCatalog:
    """
    Return the process-wide catalog, creating it on first call.

    The first call binds the catalog to ``client``, or to a client built
    from the environment when none is given.  Later calls return the same
    catalog whatever client they pass.
    """
    global _default_catalog
    with _default_lock:
        if _default_catalog is None:
            _default_catalog = CompilerCatalog(client)
        return _default_catalog


async def lookup(
    language: str,
    version: OptionalVersion | None = None,
    instruction_set: str | None = None,
) -> CompilerEntry | None:
    """Look a compiler up in the process-wide catalog."""
    return await get_catalog().lookup(language, version, instruction_set)
