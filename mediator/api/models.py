# Pydantic models for the Mediator API
# Response schemas for the REST endpoints

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class UserDto(BaseModel):
    """User returned by GetUserByIdRequest"""
    id: int = Field(..., description="User identifier")
    name: str = Field(..., description="Display name")

    class Config:
        frozen = True


class HandlerListResponse(BaseModel):
    """Registered handler bindings by message type name"""
    requests: Dict[str, str]
    notifications: Dict[str, List[str]]
    total: int


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    uptime_seconds: float
    handler_count: int


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str
    detail: Optional[str] = None
    code: str
    timestamp: str
