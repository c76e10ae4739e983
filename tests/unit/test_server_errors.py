import json

import pytest

from dgb_dashboard.rpc import RpcMethodError, RpcTransportError
from dgb_dashboard.server.errors import (
    ErrorStatus, HandlerError, create_error_response, wrap_rpc_failures
)


def test_handler_error_content():
    error = HandlerError("RPC call failed: down", ErrorStatus.HEALTH_CHECK_FAILURE, {"status": "unhealthy"})

    assert error.status_code == 503
    assert error.to_content() == {"status": "unhealthy", "error": "RPC call failed: down"}


def test_create_error_response():
    response = create_error_response("broken", log_error=False)

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "broken"}


@pytest.mark.asyncio
async def test_wrap_rpc_failures_maps_gateway_errors():
    @wrap_rpc_failures(ErrorStatus.DATA_ENDPOINT_FAILURE)
    async def handler():
        raise RpcMethodError("getinfo", {"code": -8, "message": "bad"})

    with pytest.raises(HandlerError) as exc_info:
        await handler()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "RPC call failed: bad (code -8)"
    assert isinstance(exc_info.value.original_error, RpcMethodError)


@pytest.mark.asyncio
async def test_wrap_rpc_failures_passes_results_and_extra_fields():
    @wrap_rpc_failures(ErrorStatus.HEALTH_CHECK_FAILURE, status="unhealthy")
    async def failing():
        raise RpcTransportError("getblockcount", "connection refused")

    @wrap_rpc_failures()
    async def succeeding():
        return {"ok": True}

    assert await succeeding() == {"ok": True}
    with pytest.raises(HandlerError) as exc_info:
        await failing()
    assert exc_info.value.to_content() == {
        "status": "unhealthy",
        "error": "RPC call failed: connection refused"
    }


@pytest.mark.asyncio
async def test_wrap_rpc_failures_leaves_other_exceptions_alone():
    @wrap_rpc_failures()
    async def handler():
        raise KeyError("x")

    with pytest.raises(KeyError):
        await handler()
