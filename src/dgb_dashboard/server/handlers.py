from datetime import datetime, timezone
from typing import Any, Dict

from fastapi.responses import HTMLResponse, JSONResponse

from ..rpc import RpcGateway
from .errors import ErrorStatus, wrap_rpc_failures
from .models import HealthStatus
from .page import render_index_page


# Route path -> RPC method relayed verbatim
DATA_ENDPOINTS: Dict[str, str] = {
    "/api/info": "getinfo",
    "/api/blockchain": "getblockchaininfo",
    "/api/peers": "getpeerinfo",
    "/api/mempool": "getmempoolinfo",
}

HEALTH_CHECK_METHOD = "getblockcount"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@wrap_rpc_failures(ErrorStatus.DATA_ENDPOINT_FAILURE)
async def relay_rpc_method(gateway: RpcGateway, method: str) -> JSONResponse:
    """Invoke one parameterless RPC method and return its result untouched."""
    result = await gateway.call(method)
    return JSONResponse(content=result)


@wrap_rpc_failures(ErrorStatus.HEALTH_CHECK_FAILURE, status="unhealthy")
async def handle_health(gateway: RpcGateway) -> Dict[str, Any]:
    """Report healthy as long as the node answers; the block count itself is discarded."""
    await gateway.call(HEALTH_CHECK_METHOD)
    return HealthStatus(timestamp=utc_timestamp()).model_dump()


async def handle_index(server_config: dict) -> HTMLResponse:
    """Serve the dashboard page."""
    return HTMLResponse(content=render_index_page(
        title=server_config.get('title', 'DigiByte Node Dashboard'),
        refresh_interval=server_config.get('refresh_interval', 30)
    ))
