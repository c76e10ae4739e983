from pydantic import BaseModel


class HealthStatus(BaseModel):
    """Body of a successful health check."""
    status: str = "healthy"
    timestamp: str


class UnhealthyStatus(BaseModel):
    """Body of a failed health check."""
    status: str = "unhealthy"
    error: str


class ErrorBody(BaseModel):
    """Body of a failed data endpoint request."""
    error: str
