from typing import Optional
from fastapi import APIRouter, Depends, Request
from pocketgear.api.deps import get_session_identity
from pocketgear.errors import UnauthorizedError
from pocketgear.schemas.auth import LoginRequest, SessionIdentity, SessionResponse
from pocketgear.schemas.product import ErrorResponse
from pocketgear.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse, responses={401: {"model": ErrorResponse}})
async def login(credentials: LoginRequest, request: Request):
    """Start a session for a valid credential."""
    identity = AuthService.authenticate(credentials.email, credentials.password)
    if identity is None:
        raise UnauthorizedError("Invalid email or password")
    AuthService.store_identity(request.session, identity)
    return SessionResponse(user=identity)


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"message": "Signed out"}


@router.get("/session", response_model=SessionResponse, responses={401: {"model": ErrorResponse}})
async def current_session(identity: Optional[SessionIdentity] = Depends(get_session_identity)):
    if identity is None:
        raise UnauthorizedError("Not signed in")
    return SessionResponse(user=identity)
