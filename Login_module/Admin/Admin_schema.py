from typing import Optional

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Request body for POST /api/admin/login"""
    password: Optional[str] = Field(None, description="Admin password")


class AdminTokenResponse(BaseModel):
    """Bearer token for the admin endpoints, valid for 12 hours."""
    token: str
