"""
HTTP client for the remote compiler service.

This module provides an async HTTP client for the two endpoints the bridge
uses: the compiler list and the per-compiler compile endpoint.  It is the
only place in the package that touches the network, and the only place
that maps transport, status and payload failures onto the bridge's error
taxonomy.

The client can be used as an async context manager to share one
connection pool across calls:

    async with GodboltClient(config) as client:
        listings = await client.list_compilers()

Outside a context manager every call opens and closes its own short-lived
``httpx.AsyncClient``, which suits the process-wide catalog that outlives
any single command invocation.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from compiler_bridge.config import BridgeConfig
from compiler_bridge.errors import DecodeError, TransportError, UpstreamStatusError
from compiler_bridge.models import (
    COMPILER_FIELDS,
    CompileRequest,
    CompileResponse,
    CompilerListing,
)

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}

_LISTINGS = TypeAdapter(list[CompilerListing])


@dataclass
class GodboltClient:
    """
    Async HTTP client for the compiler service.

    Attributes:
        config: Configuration with base URL and timeout.
        transport: Optional httpx transport, forwarded to every
                   ``httpx.AsyncClient`` this client creates.
    """

    config: BridgeConfig = field(default_factory=BridgeConfig)
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    _http_client: httpx.AsyncClient | None = field(default=None, repr=False)

    # -------------------------------------------------------------------------
    # Context Manager Protocol
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> GodboltClient:
        self._http_client = self._new_http_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _new_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            headers=_JSON_HEADERS,
            transport=self.transport,
        )

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the pooled client when entered, else a one-shot client."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with self._new_http_client() as http_client:
            yield http_client

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def list_compilers(self) -> list[CompilerListing]:
        """
        Fetch every compiler the service offers.

        Returns:
            list: Decoded compiler listings in the order the service sent them.

        Raises:
            TransportError: If the request could not be completed.
            UpstreamStatusError: If the service returned a non-2xx status.
            DecodeError: If the body is not a JSON array of compiler records.
        """
        url = self.config.compilers_url
        async with self._session() as http_client:
            response = await self._send(
                http_client, "GET", url, params={"fields": ",".join(COMPILER_FIELDS)}
            )
        data = self._json(response, url)
        try:
            return _LISTINGS.validate_python(data)
        except ValidationError as e:
            logger.warning("Compiler list from %s did not match schema", url)
            raise DecodeError(
                message="Unexpected compiler list payload",
                detail=f"{url}: {e.error_count()} validation error(s)",
            ) from e

    async def compile(self, compiler_id: str, request: CompileRequest) -> CompileResponse:
        """
        Submit ``request`` to the compiler identified by ``compiler_id``.

        Raises:
            TransportError: If the request could not be completed.
            UpstreamStatusError: If the service returned a non-2xx status.
            DecodeError: If the body is not a compile response.
        """
        url = self.config.compile_url(compiler_id)
        async with self._session() as http_client:
            response = await self._send(http_client, "POST", url, json=request.to_payload())
        data = self._json(response, url)
        try:
            return CompileResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("Compile response from %s did not match schema", url)
            raise DecodeError(
                message="Unexpected compile response payload",
                detail=f"{url}: {e.error_count()} validation error(s)",
            ) from e

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    async def _send(
        self, http_client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await http_client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(
                message="Request to compiler service failed",
                detail=f"{method} {url}: {e}",
            ) from e

        if response.is_error:
            logger.warning("%s %s returned status %d", method, url, response.status_code)
            raise UpstreamStatusError(
                message="Compiler service returned an error",
                detail=f"{method} {url} -> {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                message="Compiler service returned invalid JSON",
                detail=f"{url} (status {response.status_code})",
            ) from e
