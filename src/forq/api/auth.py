"""Registration and login endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from forq.api.models import LoginRequest, RegisterRequest, VerifyRequest

if TYPE_CHECKING:
    from forq.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account."""
    container: AppContainer = request.app.state.container
    user = container.user_service.register(
        username=body.username,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return {"message": "User registered successfully", "user": user}


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Authenticate with an email or username."""
    container: AppContainer = request.app.state.container
    user = container.user_service.login(body.email_or_username, body.password)
    return {"message": "Login successful", "user": user}


@router.post("/verify")
async def verify(body: VerifyRequest, request: Request) -> dict[str, object]:
    """Check that a stored user id still exists."""
    container: AppContainer = request.app.state.container
    return {"valid": True, "user": container.user_service.verify(body.user_id)}
