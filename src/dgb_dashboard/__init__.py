from .config import Config, ConfigurationError, NodeConfig
from .rpc import (
    RpcGateway,
    RpcError, RpcTransportError, RpcTimeoutError, RpcMethodError
)
from .server import create_app, HandlerError

__all__ = [
    'Config', 'ConfigurationError', 'NodeConfig',
    'RpcGateway',
    'RpcError', 'RpcTransportError', 'RpcTimeoutError', 'RpcMethodError',
    'create_app', 'HandlerError'
]
