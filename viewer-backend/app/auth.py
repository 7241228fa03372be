from __future__ import annotations

import base64
import binascii
import secrets
from typing import Optional, Tuple

from fastapi.responses import PlainTextResponse

from app.config import Settings

# Platform health probes must not need credentials
PUBLIC_PATHS = frozenset({"/healthz", "/health"})


def parse_basic_auth(header: str) -> Optional[Tuple[str, str]]:
    """Decode an 'Authorization: Basic ...' value into (user, password).

    The password may itself contain ':' so only the first one separates.
    """
    if not header.startswith("Basic "):
        return None
    try:
        creds = base64.b64decode(header[6:].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, password = creds.partition(":")
    if not sep:
        return None
    return user, password


def _challenge(message: str) -> PlainTextResponse:
    return PlainTextResponse(
        message,
        status_code=401,
        headers={"WWW-Authenticate": 'Basic realm="Protected"'},
    )


def build_auth_middleware(settings: Settings):
    async def basic_auth_middleware(request, call_next):
        if not settings.auth_enabled or request.url.path in PUBLIC_PATHS:
            return await call_next(request)
        hdr = request.headers.get("authorization", "")
        if not hdr.startswith("Basic "):
            return _challenge("Authentication required")
        creds = parse_basic_auth(hdr)
        if creds is not None:
            user_ok = secrets.compare_digest(creds[0].encode("utf-8"), settings.auth_user.encode("utf-8"))
            pass_ok = secrets.compare_digest(creds[1].encode("utf-8"), settings.auth_pass.encode("utf-8"))
            if user_ok and pass_ok:
                return await call_next(request)
        return _challenge("Invalid credentials")

    return basic_auth_middleware
