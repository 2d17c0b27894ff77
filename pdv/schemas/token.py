"""
Pydantic schemas for authentication and tokens
"""

from typing import Optional

from pydantic import Field

from pdv.schemas.base import CamelModel
from pdv.schemas.user import TenantResponse, UserResponse


class LoginRequest(CamelModel):
    """Login body; presence is checked by the credential service"""
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    store_name: Optional[str] = None


class LoginResponse(CamelModel):
    success: bool = True
    user: UserResponse
    token: str
    expires_in: int = Field(..., description="Token lifetime in seconds")


class RegisterResponse(LoginResponse):
    tenant: TenantResponse
