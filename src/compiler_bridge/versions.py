"""
Optional semantic versions for remote compilers.

The compiler list reports a ``semver`` for most entries, but not all of
them: some have no version at all and some carry a release-channel name
such as ``trunk``.  :class:`OptionalVersion` models "a version, or none"
with a total ordering so the catalog can be sorted newest-first.

Parsing rules
-------------
- ``None``, empty and blank strings are an absent version.
- Strings with no digit at all (``"trunk"``, ``"(trunk)"``, ``"nightly"``)
  name a release channel rather than a version; they are absent too.
- Otherwise the leading dotted numeric run is parsed (a leading ``v`` or
  ``(`` is tolerated and trailing qualifiers like ``" (assertions)"`` are
  dropped).  A string that has digits but no leading numeric run raises
  :class:`~compiler_bridge.errors.VersionParseError`.

Equality is semantic (``14.2 == 14.2.0``) and absent versions order below
every present one.  A parsed version displays as the text it was parsed
from, so ``"14.02"`` stays ``14.02``; an absent version displays as the
empty string.
"""

from __future__ import annotations

import re
from functools import total_ordering

from packaging.version import InvalidVersion, Version

from compiler_bridge.errors import VersionParseError

_LEADING_VERSION = re.compile(r"^\(?v?(\d+(?:\.\d+)*)")
_HAS_DIGIT = re.compile(r"\d")


@total_ordering
class OptionalVersion:
    """A semantic version that may be absent."""

    __slots__ = ("_version", "_raw")

    def __init__(self, version: Version | None = None, raw: str | None = None) -> None:
        self._version = version
        self._raw = raw

    @classmethod
    def parse(cls, raw: str | None) -> OptionalVersion:
        """Parse ``raw`` according to the module rules.

        Raises:
            VersionParseError: If ``raw`` contains digits but no leading
                numeric version.
        """
        if raw is None:
            return cls()
        text = raw.strip()
        if not text or not _HAS_DIGIT.search(text):
            return cls()

        match = _LEADING_VERSION.match(text)
        if match is None:
            raise VersionParseError(message="Could not parse version", detail=repr(raw), raw=raw)
        try:
            return cls(Version(match.group(1)), raw=text)
        except InvalidVersion as exc:
            raise VersionParseError(
                message="Could not parse version", detail=repr(raw), raw=raw
            ) from exc

    @property
    def version(self) -> Version | None:
        return self._version

    @property
    def is_present(self) -> bool:
        return self._version is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalVersion):
            return NotImplemented
        return self._version == other._version

    def __lt__(self, other: OptionalVersion) -> bool:
        if not isinstance(other, OptionalVersion):
            return NotImplemented
        if self._version is None:
            return other._version is not None
        if other._version is None:
            return False
        return self._version < other._version

    def __hash__(self) -> int:
        return hash(self._version)

    def __str__(self) -> str:
        if self._version is None:
            return ""
        return self._raw if self._raw is not None else str(self._version)

    def __repr__(self) -> str:
        return f"OptionalVersion({str(self)!r})"
