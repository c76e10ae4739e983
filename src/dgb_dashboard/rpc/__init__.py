from .client import RpcGateway, DEFAULT_TIMEOUT
from .errors import RpcError, RpcTransportError, RpcTimeoutError, RpcMethodError
from .models import RpcRequest, RpcResponse

__all__ = [
    'RpcGateway', 'DEFAULT_TIMEOUT',
    'RpcError', 'RpcTransportError', 'RpcTimeoutError', 'RpcMethodError',
    'RpcRequest', 'RpcResponse'
]
