"""
Shared pytest fixtures for the compiler bridge test suite.

- A test configuration pointing at a fake compiler service host
- A GodboltClient bound to that configuration
- A fresh CompilerCatalog per test (never the process-wide one)
- Helpers that build compiler list records and compile responses

HTTP traffic is mocked with respx; no test touches the network.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest

from compiler_bridge.catalog import CompilerCatalog, CompilerEntry
from compiler_bridge.client import GodboltClient
from compiler_bridge.config import BridgeConfig
from compiler_bridge.versions import OptionalVersion

BASE_URL = "http://godbolt.test"
COMPILERS_URL = f"{BASE_URL}/api/compilers"


def compile_url(compiler_id: str) -> str:
    return f"{BASE_URL}/api/compiler/{compiler_id}/compile"


def listing(
    compiler_id: str,
    *,
    name: str | None = None,
    lang: str = "c++",
    semver: str | None = "14.2.0",
    instruction_set: str = "amd64",
    binary: bool = True,
    execute: bool = True,
) -> dict[str, Any]:
    """Build one compiler list record in wire format."""
    return {
        "id": compiler_id,
        "name": name if name is not None else f"{compiler_id} {semver or ''}".strip(),
        "lang": lang,
        "semver": semver,
        "instructionSet": instruction_set,
        "supportsBinary": binary,
        "supportsExecute": execute,
    }


def lines(*texts: str) -> list[dict[str, str]]:
    """Build a list of output line records."""
    return [{"text": text} for text in texts]


def make_entry(
    compiler_id: str = "g142",
    *,
    name: str = "x86-64 gcc 14.2",
    language: str = "c++",
    version: str | None = "14.2.0",
    instruction_set: str = "amd64",
    supports_binary: bool = True,
    supports_execute: bool = True,
) -> CompilerEntry:
    """Build a CompilerEntry directly, bypassing the wire format."""
    return CompilerEntry(
        id=compiler_id,
        name=name,
        language=language,
        version=OptionalVersion.parse(version),
        instruction_set=instruction_set,
        supports_binary=supports_binary,
        supports_execute=supports_execute,
    )


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def config() -> BridgeConfig:
    """Create a test configuration."""
    return BridgeConfig(base_url=BASE_URL, timeout=5.0)


@pytest.fixture
async def client(config: BridgeConfig) -> AsyncGenerator[GodboltClient, None]:
    """Create a pooled client for testing."""
    async with GodboltClient(config) as client:
        yield client


@pytest.fixture
def catalog(client: GodboltClient) -> CompilerCatalog:
    """Create an empty catalog that fetches through the test client."""
    return CompilerCatalog(client)
