"""
Session-based OIDC login against an Authentik provider.
"""

from __future__ import annotations

import logging
from typing import Optional

from authlib.integrations.starlette_client import OAuth, OAuthError
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from contacts_api.config import Settings
from contacts_api.schemas import MessageResponse, UserResponse

logger = logging.getLogger(__name__)

PROVIDER_NAME = "openid-connect"
SESSION_COOKIE = "mysession"
SESSION_USER_KEY = "user"

router = APIRouter(prefix="/auth", tags=["auth"])


def setup_providers(settings: Settings) -> Optional[OAuth]:
    """Register the OIDC provider, or return None when it is not configured."""
    if not settings.oidc_configured:
        logger.warning("OIDC provider not configured, login disabled")
        return None

    oauth = OAuth()
    oauth.register(
        name=PROVIDER_NAME,
        client_id=settings.authentik_client_id,
        client_secret=settings.authentik_client_secret,
        server_metadata_url=settings.authentik_discovery_url,
        client_kwargs={"scope": "openid profile email"},
    )
    return oauth


def _get_client(request: Request):
    oauth: Optional[OAuth] = getattr(request.app.state, "oauth", None)
    if oauth is None:
        raise HTTPException(status_code=503, detail="Login is not configured")
    return oauth.create_client(PROVIDER_NAME)


def get_current_user(request: Request) -> Optional[dict]:
    return request.session.get(SESSION_USER_KEY)


@router.get("/login")
async def login(request: Request):
    client = _get_client(request)
    callback_url = request.app.state.settings.auth_callback_url
    return await client.authorize_redirect(request, callback_url)


@router.get("/callback")
async def callback(request: Request):
    client = _get_client(request)
    try:
        token = await client.authorize_access_token(request)
    except OAuthError as exc:
        logger.warning("OIDC callback rejected: %s", exc.error)
        raise HTTPException(status_code=401, detail="Authentication failed")

    userinfo = token.get("userinfo") or {}
    request.session[SESSION_USER_KEY] = {
        "sub": userinfo.get("sub"),
        "email": userinfo.get("email"),
        "name": userinfo.get("name"),
    }
    return RedirectResponse(request.app.state.settings.frontend_url)


@router.get("/logout", response_model=MessageResponse)
def logout(request: Request):
    request.session.pop(SESSION_USER_KEY, None)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
def me(request: Request):
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return UserResponse(**user)
