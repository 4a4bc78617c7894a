from pydantic import BaseModel, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")


class SessionIdentity(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class SessionResponse(BaseModel):
    user: SessionIdentity
