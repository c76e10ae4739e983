"""
Error types raised by the node RPC gateway.

Every failure of a gateway call is classified as either a transport fault
(the node could not be reached or did not answer with a usable envelope) or
a method fault (the node answered with a JSON-RPC error object).
"""

from typing import Any, Optional


RPC_FAILURE_PREFIX = "RPC call failed"


class RpcError(Exception):
    """Base class for all gateway failures."""

    def __init__(self, method: str, detail: str):
        self.method = method
        self.detail = detail
        super().__init__(f"{RPC_FAILURE_PREFIX}: {detail}")

    @property
    def message(self) -> str:
        return str(self)


class RpcTransportError(RpcError):
    """The HTTP exchange with the node failed.

    Covers connection refused, DNS failures, timeouts, non-2xx responses and
    bodies that are not a JSON-RPC envelope.
    """

    def __init__(self, method: str, detail: str, status_code: Optional[int] = None):
        super().__init__(method, detail)
        self.status_code = status_code


class RpcTimeoutError(RpcTransportError):
    """The node did not answer within the client-side timeout."""

    def __init__(self, method: str, timeout: float):
        super().__init__(method, f"timeout of {timeout:g}s exceeded")
        self.timeout = timeout


class RpcMethodError(RpcError):
    """The node answered with a non-null JSON-RPC ``error`` field.

    Args:
        method: RPC method that was invoked
        error: Error payload exactly as supplied by the node
    """

    def __init__(self, method: str, error: Any):
        self.error = error
        self.code = None
        if isinstance(error, dict):
            self.code = error.get("code")
            detail = str(error.get("message") or error)
            if self.code is not None:
                detail = f"{detail} (code {self.code})"
        else:
            detail = str(error)
        super().__init__(method, detail)
