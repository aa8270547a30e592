"""
AP Exam Sync: Demo Auth Route Handlers
=======================================

What:  POST /api/auth/signup and POST /api/auth/login.
How:   Both return the public user record `{id, email, name}`; no token is
       issued. Failures are 400 with "Missing fields", "Email exists" or
       "Invalid credentials".
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from apsync.schemas.auth import LoginRequest, SignupRequest
from apsync.schemas.common import ErrorResponse, PublicUser
from apsync.services.auth_service import auth_service
from apsync.store import DocumentStore, get_store

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=PublicUser,
    responses={400: {"description": "Missing fields or email exists", "model": ErrorResponse}},
    summary="Create a user (demo, plaintext password)",
)
async def signup(
    payload: Optional[SignupRequest] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> PublicUser:
    return await auth_service.signup(store, payload or SignupRequest())


@router.post(
    "/login",
    response_model=PublicUser,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Log in (demo, plaintext comparison)",
)
async def login(
    payload: Optional[LoginRequest] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> PublicUser:
    return await auth_service.login(store, payload or LoginRequest())
