# marine_shop/routes/auth.py
from __future__ import annotations
import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..deps import require_admin
from ..settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["auth"])


class LoginBody(BaseModel):
    username: str
    password: str


class LoginOut(BaseModel):
    token: str
    username: str


@router.post("/login", response_model=LoginOut)
def login(body: LoginBody):
    user_ok = hmac.compare_digest(body.username.encode(), settings.admin_username.encode())
    pass_ok = hmac.compare_digest(body.password.encode(), settings.admin_password.encode())
    if user_ok and pass_ok:
        return LoginOut(token=settings.admin_token, username=settings.admin_username)
    logger.warning("failed admin login for %r", body.username)
    raise HTTPException(status_code=401, detail="Invalid credentials")


@router.get("/me", dependencies=[Depends(require_admin)])
def me():
    return {"ok": True, "username": settings.admin_username}
