from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class RpcRequest(BaseModel):
    """JSON-RPC 1.0 request envelope sent to the node."""
    jsonrpc: str = "1.0"
    id: int
    method: str
    params: List[Any] = Field(default_factory=list)


class RpcResponse(BaseModel):
    """JSON-RPC 1.0 response envelope returned by the node."""
    model_config = ConfigDict(extra="ignore")

    result: Any = None
    error: Any = None
    id: Optional[Any] = None
