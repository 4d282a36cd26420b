"""
Response models for API client results
"""

from typing import Any, Optional
from pydantic import BaseModel


class APIResult(BaseModel):
    """Uniform result of an API client operation"""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    token: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, token: Optional[str] = None) -> "APIResult":
        return cls(success=True, data=data, token=token)

    @classmethod
    def fail(cls, error: str) -> "APIResult":
        return cls(success=False, error=error)


class CreateResult(BaseModel):
    """Result reported back to the task creation form"""
    success: bool
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    status_code: Optional[int] = None
