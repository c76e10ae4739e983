"""
Unit tests for RpcGateway

Covers the outbound JSON-RPC 1.0 contract:
- request envelope, auth and headers
- result pass-through for every result shape
- failure classification (timeout, transport, method error)
"""

import asyncio
import base64

import httpx
import pytest

from dgb_dashboard.config import NodeConfig
from dgb_dashboard.rpc import (
    DEFAULT_TIMEOUT, RpcGateway,
    RpcError, RpcMethodError, RpcTimeoutError, RpcTransportError
)
from tests.fixtures.mock_node import closed_port


# =============================================================================
# Request construction
# =============================================================================

@pytest.mark.asyncio
async def test_request_envelope(gateway, mock_node, node_config):
    mock_node.respond("getblockhash", result="00ab")

    await gateway.call("getblockhash", [42])

    request = mock_node.requests[-1]
    assert request.method == "POST"
    assert str(request.url) == "http://127.0.0.1:14022/"
    assert request.headers["content-type"] == "application/json"

    payload = mock_node.last_payload
    assert payload["jsonrpc"] == "1.0"
    assert payload["method"] == "getblockhash"
    assert payload["params"] == [42]
    assert isinstance(payload["id"], int)


@pytest.mark.asyncio
async def test_params_default_to_empty_list(gateway, mock_node):
    mock_node.respond("getblockcount", result=10)

    await gateway.call("getblockcount")

    assert mock_node.last_payload["params"] == []


@pytest.mark.asyncio
async def test_basic_auth_header(gateway, mock_node):
    mock_node.respond("getblockcount", result=10)

    await gateway.call("getblockcount")

    expected = base64.b64encode(b"umbrel:s3cret").decode("ascii")
    assert mock_node.requests[-1].headers["authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_each_call_gets_a_fresh_id(gateway, mock_node):
    mock_node.respond("getblockcount", result=10)

    ids = []
    for _ in range(3):
        await gateway.call("getblockcount")
        ids.append(mock_node.last_payload["id"])

    assert len(set(ids)) == 3
    assert ids == sorted(ids)


def test_default_timeout_is_ten_seconds(node_config):
    assert DEFAULT_TIMEOUT == 10.0
    assert RpcGateway(node_config).timeout == 10.0


# =============================================================================
# Results
# =============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("result", [
    {"blocks": 1, "chain": "main"},
    [{"id": 0, "addr": "1.2.3.4:12024"}],
    17,
    "hello",
    None,
])
async def test_result_returned_verbatim(gateway, mock_node, result):
    mock_node.respond("anymethod", result=result)

    assert await gateway.call("anymethod") == result


# =============================================================================
# Failures
# =============================================================================

@pytest.mark.asyncio
async def test_error_field_on_http_200_fails(gateway, mock_node):
    mock_node.respond("getinfo", result=None, error={"code": -28, "message": "Loading block index..."})

    with pytest.raises(RpcMethodError) as exc_info:
        await gateway.call("getinfo")

    error = exc_info.value
    assert error.code == -28
    assert error.error == {"code": -28, "message": "Loading block index..."}
    assert error.method == "getinfo"
    assert str(error) == "RPC call failed: Loading block index... (code -28)"


@pytest.mark.asyncio
async def test_scalar_error_payload(gateway, mock_node):
    mock_node.respond("getinfo", error="boom")

    with pytest.raises(RpcMethodError) as exc_info:
        await gateway.call("getinfo")

    assert exc_info.value.code is None
    assert str(exc_info.value) == "RPC call failed: boom"


@pytest.mark.asyncio
async def test_non_2xx_status_is_transport_error(gateway, mock_node):
    mock_node.respond("getinfo", result=None, status_code=401)

    with pytest.raises(RpcTransportError) as exc_info:
        await gateway.call("getinfo")

    assert exc_info.value.status_code == 401
    assert str(exc_info.value).startswith("RPC call failed: ")


@pytest.mark.asyncio
async def test_undecodable_body_is_transport_error(node_config):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>"))
    async with RpcGateway(node_config, transport=transport) as gateway:
        with pytest.raises(RpcTransportError, match="invalid JSON-RPC response"):
            await gateway.call("getinfo")


@pytest.mark.asyncio
async def test_transport_timeout_is_classified(node_config):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with RpcGateway(node_config, transport=httpx.MockTransport(handler)) as gateway:
        with pytest.raises(RpcTimeoutError) as exc_info:
            await gateway.call("getinfo")

    assert isinstance(exc_info.value, RpcTransportError)
    assert exc_info.value.timeout == DEFAULT_TIMEOUT


@pytest.mark.asyncio
async def test_slow_node_fails_with_timeout_not_pending(node_config):
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json={"result": 1, "error": None, "id": 1})

    async with RpcGateway(node_config, timeout=0.05, transport=httpx.MockTransport(handler)) as gateway:
        with pytest.raises(RpcTimeoutError, match="timeout"):
            await asyncio.wait_for(gateway.call("getblockcount"), timeout=2)


@pytest.mark.asyncio
async def test_connection_refused_is_transport_error():
    unreachable = NodeConfig(host="127.0.0.1", port=closed_port(), user="u", password="p")

    async with RpcGateway(unreachable) as gateway:
        with pytest.raises(RpcTransportError) as exc_info:
            await gateway.call("getinfo")

    assert not isinstance(exc_info.value, RpcTimeoutError)
    assert str(exc_info.value).startswith("RPC call failed: ")


@pytest.mark.asyncio
async def test_failures_are_logged(gateway, mock_node, caplog):
    mock_node.respond("getinfo", error={"code": -1, "message": "nope"})

    with pytest.raises(RpcError):
        await gateway.call("getinfo")

    assert "RPC Error (getinfo): RPC call failed: nope (code -1)" in caplog.text
