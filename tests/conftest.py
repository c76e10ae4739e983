import httpx
import pytest
import pytest_asyncio

from dgb_dashboard.config import NodeConfig
from dgb_dashboard.rpc import RpcGateway
from dgb_dashboard.server import create_app

# Import fixtures from fixtures directory
from tests.fixtures.mock_node import MockNode


@pytest.fixture
def node_config():
    return NodeConfig(host="127.0.0.1", port=14022, user="umbrel", password="s3cret")


@pytest.fixture
def server_config():
    return {"title": "Test Dashboard", "port": 3001, "refresh_interval": 30}


@pytest.fixture
def mock_node():
    return MockNode()


@pytest_asyncio.fixture
async def gateway(node_config, mock_node):
    gateway = RpcGateway(node_config, transport=mock_node.transport())
    yield gateway
    await gateway.aclose()


@pytest_asyncio.fixture
async def dashboard_client(server_config, gateway):
    """HTTP client talking to the dashboard app, which talks to the mock node."""
    app = create_app(server_config, gateway)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://dashboard") as client:
        yield client
