"""
Kacchi Likhavat Backend — Account Route Handlers
=================================================

What:  POST /api/auth/register and POST /api/auth/login.
How:   Both return {token, user}; the client sends the token back as
       `Authorization: Bearer <token>` on every other /api call.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.database import get_db_session
from likhavat.routes.responses import error_response
from likhavat.schemas.auth import AuthPayload, LoginRequest, RegisterRequest, UserAccount
from likhavat.schemas.common import ApiResponse
from likhavat.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[AuthPayload],
    response_model_exclude_none=True,
    responses={
        400: error_response("Invalid input or email already registered"),
        500: error_response("Server error"),
    },
    summary="Create an account",
    description="Registers a new account and returns a bearer token for it.",
)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db_session)):
    token, user = await auth_service.register(db, payload.email, payload.password, payload.name)
    return ApiResponse(
        message="User registered successfully",
        data=AuthPayload(token=token, user=UserAccount.model_validate(user)),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthPayload],
    response_model_exclude_none=True,
    responses={
        400: error_response("Invalid input"),
        401: error_response("Invalid email or password"),
        500: error_response("Server error"),
    },
    summary="Log in",
    description="Exchanges email and password for a bearer token.",
)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db_session)):
    token, user = await auth_service.login(db, payload.email, payload.password)
    return ApiResponse(
        message="Login successful",
        data=AuthPayload(token=token, user=UserAccount.model_validate(user)),
    )
