"""Compiler bridge: remote compiler lookup, compilation and chat rendering.

Mediates between a chat command front end and a compiler-as-a-service
backend.  A command supplies a language, an optional compiler version and
instruction set, source code and compiler flags; the bridge finds a
matching remote compiler, compiles (or runs) the code there and renders
the outcome as a size-bounded chat message.

Package structure
-----------------
config.py     BridgeConfig       base URL, timeout, message limit.
errors.py     CompilerBridgeError and its five tagged kinds.
versions.py   OptionalVersion    orderable "version or none".
models.py     pydantic wire models for both endpoints.
client.py     GodboltClient      async httpx client.
selector.py   matches()          pure selection predicate.
catalog.py    CompilerCatalog    populate-once compiler list.
compiler.py   compile_code()     capability check + one round trip.
formatter.py  render()           result → chat message.
service.py    CompilerService    the single entry point for callers.

``__version__`` is read from the installed package metadata.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from compiler_bridge.errors import CompilerBridgeError, ErrorKind
from compiler_bridge.service import CompilerService

try:
    __version__: str = version("compiler-bridge")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["CompilerBridgeError", "CompilerService", "ErrorKind", "__version__"]
