from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from contextlib import asynccontextmanager
import logging

from ..rpc import RpcGateway
from .errors import HandlerError, handler_error_handler, unexpected_error_handler
from .handlers import DATA_ENDPOINTS, handle_health, handle_index, relay_rpc_method
from .models import ErrorBody, HealthStatus, UnhealthyStatus


SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "script-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def create_app(server_config: dict, gateway: RpcGateway) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        server_config: Server configuration dictionary
        gateway: RPC gateway shared by all routes, closed on shutdown

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logging.info(f"Dashboard listening on port {server_config.get('port', 3001)}")
        logging.info(f"Forwarding RPC calls to node at {gateway.node_config.url}")
        yield
        # Shutdown
        logging.info("Dashboard shutting down, closing RPC gateway")
        await gateway.aclose()

    app = FastAPI(
        title=server_config.get('title', 'DigiByte Node Dashboard'),
        version=server_config.get('version', '1.0.0'),
        lifespan=lifespan
    )

    # Registered before CORS so error responses built here still get CORS headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unexpected_error_handler(request, exc)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=server_config.get('cors_origins', ["*"]),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HandlerError, handler_error_handler)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index():
        return await handle_index(server_config)

    for path, method in DATA_ENDPOINTS.items():
        _add_data_route(app, gateway, path, method)

    @app.get(
        "/health",
        response_model=HealthStatus,
        responses={503: {"model": UnhealthyStatus}}
    )
    async def health_check():
        """Liveness probe: healthy while the node answers RPC calls."""
        return await handle_health(gateway)

    return app


def _add_data_route(app: FastAPI, gateway: RpcGateway, path: str, method: str):
    """Register a GET route relaying a single RPC method."""

    async def endpoint():
        return await relay_rpc_method(gateway, method)

    app.add_api_route(
        path,
        endpoint,
        methods=["GET"],
        name=method,
        summary=f"Result of the node's {method} RPC",
        responses={500: {"model": ErrorBody}}
    )
