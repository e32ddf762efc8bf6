"""Connect JSON client for the asset registry service."""

from __future__ import annotations

import asyncio
import contextlib
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from chainseed.adapters.http_resilience import ResilientClient
from chainseed.domain.errors import RegistryError, SeedCancelledError
from chainseed.domain.ports.registry import Created

from .schema import (
    HTTP_STATUS_CODES,
    ConnectCode,
    ConnectError,
    ListAssetsPayload,
    ListAssetsResponse,
    ListChainsResponse,
)
from .translator import (
    created_asset_id,
    created_chain_id,
    created_deployment_id,
    translate_asset_request,
    translate_chain_request,
    translate_deployment_request,
    translate_error,
    translate_listed_assets,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from chainseed.config.http_resilience import ResilienceConfig
    from chainseed.config.registry import RegistryConfig
    from chainseed.domain.cancellation import CancelToken
    from chainseed.domain.ports.registry import (
        CreateAssetDeploymentRequest,
        CreateAssetRequest,
        CreateChainRequest,
        CreateResult,
        ListedAsset,
    )

    from .translator import JsonObject

log = getLogger(__name__)

DEFAULT_LIST_PAGE_SIZE = 500


class RegistryAPIError(RuntimeError):
    """Raised when a registry call returns a Connect error or an unusable payload."""

    def __init__(self, message: str, *, code: str = ConnectCode.UNKNOWN) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class ConnectRegistryClient:
    """Synchronous registry client over the Connect unary JSON protocol.

    Every call checks ``cancel_token`` first and races the in-flight request
    against it, so cancellation surfaces promptly as ``SeedCancelledError``.
    """

    def __init__(
        self,
        *,
        config: RegistryConfig,
        cancel_token: CancelToken | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._cancel_token = cancel_token
        self._client_factory = client_factory or ResilientClient

    def create_chain(self, request: CreateChainRequest) -> CreateResult:
        log.debug("Creating chain %s via registry", request.chain_type)
        try:
            payload = self._call("CreateChain", translate_chain_request(request))
        except RegistryAPIError as exc:
            return translate_error(exc)
        return Created(identifier=created_chain_id(payload))

    def create_asset(self, request: CreateAssetRequest) -> CreateResult:
        log.debug("Creating asset %s (%s) via registry", request.symbol, request.asset_type)
        try:
            payload = self._call("CreateAsset", translate_asset_request(request))
        except RegistryAPIError as exc:
            return translate_error(exc)
        return Created(identifier=created_asset_id(payload))

    def create_asset_deployment(self, request: CreateAssetDeploymentRequest) -> CreateResult:
        log.debug(
            "Creating deployment of %s on %s via registry",
            request.asset_id,
            request.chain_id,
        )
        try:
            payload = self._call("CreateAssetDeployment", translate_deployment_request(request))
        except RegistryAPIError as exc:
            return translate_error(exc)
        return Created(identifier=created_deployment_id(payload))

    def list_assets(self) -> list[ListedAsset]:
        """Return every registered asset, following page tokens."""

        listed: list[ListedAsset] = []
        page_token: str | None = None
        while True:
            request = ListAssetsPayload(page_size=DEFAULT_LIST_PAGE_SIZE, page_token=page_token)
            try:
                payload = self._call(
                    "ListAssets",
                    request.model_dump(mode="json", by_alias=True, exclude_none=True),
                )
                response = ListAssetsResponse.model_validate(payload)
            except (RegistryAPIError, ValidationError) as exc:
                raise RegistryError(f"ListAssets failed: {exc}") from exc
            listed.extend(translate_listed_assets(response))
            page_token = response.next_page_token
            if not page_token:
                return listed

    def list_chains(self) -> list[str]:
        try:
            payload = self._call("ListChains", {})
            response = ListChainsResponse.model_validate(payload)
        except (RegistryAPIError, ValidationError) as exc:
            raise RegistryError(f"ListChains failed: {exc}") from exc
        return [chain.chain_id or chain.chain_type or "" for chain in response.chains]

    def _call(self, method: str, payload: JsonObject) -> JsonObject:
        if self._cancel_token is not None:
            self._cancel_token.raise_if_cancelled()
        return asyncio.run(self._call_async(method, payload))

    async def _call_async(self, method: str, payload: JsonObject) -> JsonObject:
        async with self._client_factory(self._resilience) as client:
            request = asyncio.ensure_future(
                self._perform_request(client=client, method=method, payload=payload)
            )
            if self._cancel_token is None:
                return await request

            watcher = asyncio.ensure_future(self._cancel_token.wait_async())
            done, _pending = await asyncio.wait(
                {request, watcher},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if request in done:
                watcher.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await watcher
                return request.result()

            request.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await request
            log.warning("Registry call %s interrupted by cancellation", method)
            raise SeedCancelledError

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        method: str,
        payload: JsonObject,
    ) -> JsonObject:
        path = f"/{self._config.service}/{method}"
        try:
            response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise RegistryAPIError(
                str(exc) or type(exc).__name__,
                code=ConnectCode.UNAVAILABLE,
            ) from exc

        if not response.is_success:
            raise _error_from_response(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise RegistryAPIError(
                f"Undecodable {method} response",
                code=ConnectCode.INTERNAL,
            ) from exc
        if not isinstance(body, dict):
            raise RegistryAPIError(
                f"Unexpected {method} response payload",
                code=ConnectCode.INTERNAL,
            )
        return body


def _error_from_response(response: httpx.Response) -> RegistryAPIError:
    fallback = HTTP_STATUS_CODES.get(response.status_code, ConnectCode.UNKNOWN)
    try:
        error = ConnectError.model_validate(response.json())
    except (ValueError, ValidationError):
        return RegistryAPIError(f"HTTP {response.status_code}", code=fallback)
    message = error.message or f"HTTP {response.status_code}"
    return RegistryAPIError(message, code=error.code or fallback)

