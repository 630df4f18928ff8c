"""Login and logout for the shared dashboard account."""

from __future__ import annotations

from fastapi import APIRouter, Response

from .. import schemas
from ..security import (
    SessionIdentity,
    authenticate,
    clear_session_cookie,
    create_session_token,
    set_session_cookie,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, response: Response) -> schemas.LoginResponse:
    """Validate the credentials and hand out the session cookie."""

    identity: SessionIdentity = authenticate(payload.username, payload.password)
    token = create_session_token(identity)
    set_session_cookie(response, token)
    return schemas.LoginResponse(access_token=token)


@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    clear_session_cookie(response)
    return {"message": "Logout successful"}
