import asyncio
import itertools
import logging
import time
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..config import NodeConfig
from .errors import RpcMethodError, RpcTimeoutError, RpcTransportError
from .models import RpcRequest, RpcResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class RpcGateway:
    """Forwards single JSON-RPC 1.0 calls to the node and classifies the outcome.

    Each call is an independent request/response round trip; nothing is
    retried or cached. The underlying ``httpx.AsyncClient`` is owned by the
    gateway and must be released with :meth:`aclose`.

    Args:
        node_config: Immutable node connection settings
        timeout: Client-side timeout in seconds for the whole call
        transport: Optional httpx transport, used to plug in a mock node
    """

    def __init__(
        self,
        node_config: NodeConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.node_config = node_config
        self.timeout = timeout
        # Seeded from wall-clock milliseconds, strictly increasing afterwards
        self._ids = itertools.count(int(time.time() * 1000))
        self._client = httpx.AsyncClient(
            auth=(node_config.user, node_config.password),
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def __aenter__(self) -> "RpcGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_request(self, method: str, params: Sequence[Any] = ()) -> RpcRequest:
        return RpcRequest(id=next(self._ids), method=method, params=list(params))

    async def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Invoke one RPC method on the node.

        Args:
            method: JSON-RPC method name, e.g. ``getblockchaininfo``
            params: Positional parameters for the method

        Returns:
            The ``result`` field of the response, whatever its shape

        Raises:
            RpcTimeoutError: The node did not answer within the timeout
            RpcTransportError: The node was unreachable, answered with a
                non-2xx status or with a body that is not a JSON-RPC envelope
            RpcMethodError: The node returned a JSON-RPC error object
        """
        rpc_request = self.build_request(method, params)
        try:
            try:
                # Bounds the whole exchange, httpx timeouts apply per phase
                response = await asyncio.wait_for(
                    self._client.post(self.node_config.url, json=rpc_request.model_dump()),
                    timeout=self.timeout
                )
                response.raise_for_status()
            except (httpx.TimeoutException, asyncio.TimeoutError):
                raise RpcTimeoutError(method, self.timeout)
            except httpx.HTTPStatusError as e:
                raise RpcTransportError(method, str(e), status_code=e.response.status_code)
            except httpx.HTTPError as e:
                raise RpcTransportError(method, str(e) or type(e).__name__)

            try:
                envelope = RpcResponse.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise RpcTransportError(
                    method,
                    f"invalid JSON-RPC response: {e}",
                    status_code=response.status_code
                )

            if envelope.error is not None:
                raise RpcMethodError(method, envelope.error)
        except (RpcTransportError, RpcMethodError) as e:
            logger.error(f"RPC Error ({method}): {e}")
            raise

        logger.debug(f"RPC {method} (id {rpc_request.id}) succeeded")
        return envelope.result
