"""Authentication calls; keep the injected Session in sync with the server."""
from __future__ import annotations

import logging
from typing import Any

from ..clients.http import ApiClient
from ..errors import MemestackError
from ..schemas import AuthResponse, LoginRequest, RegisterRequest, UserSummary, parse_model, unwrap

logger = logging.getLogger(__name__)


async def register(client: ApiClient, *, username: str, email: str, password: str) -> AuthResponse:
    payload = RegisterRequest(username=username, email=email, password=password)
    data = await client.post("/auth/register", json=payload.model_dump())
    auth = parse_model(AuthResponse, data)
    client.session.login(auth.token, auth.user)
    return auth


async def login(client: ApiClient, *, email: str, password: str) -> AuthResponse:
    payload = LoginRequest(email=email, password=password)
    data = await client.post("/auth/login", json=payload.model_dump())
    auth = parse_model(AuthResponse, data)
    client.session.login(auth.token, auth.user)
    logger.info("Logged in | user=%s", auth.user.username)
    return auth


async def get_me(client: ApiClient) -> UserSummary:
    """Fetch the current user and cache it on the session."""

    data = await client.get("/auth/me")
    user = parse_model(UserSummary, unwrap(data, "user"))
    client.session.user = user
    return user


async def update_profile(client: ApiClient, **changes: Any) -> UserSummary:
    data = await client.put("/auth/profile", json=changes)
    user = parse_model(UserSummary, unwrap(data, "user"))
    client.session.user = user
    return user


async def logout(client: ApiClient) -> None:
    """Tell the server, then always tear the local session down."""

    try:
        if client.session.is_authenticated:
            await client.post("/auth/logout")
    except MemestackError:
        logger.warning("Server logout failed; clearing local session anyway")
    finally:
        client.session.logout()


__all__ = ["get_me", "login", "logout", "register", "update_profile"]
