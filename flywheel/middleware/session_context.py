"""Session context middleware.

Builds the caller's SessionContext from headers set by the authenticating
gateway in front of this service and stores it in request.state.session.
Only enabled when TRUST_GATEWAY_HEADERS is on; requests without a valid
identity header get no session and are rejected by the route dependency.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

from flywheel.domain.value_objects.session import Identity, SessionContext
from flywheel.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NICKNAME_MAX_LENGTH = 255


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def session_from_headers(
    identity: str | None, nickname: str | None, roles: str | None
) -> SessionContext | None:
    """Parse gateway headers; return None when the identity is missing or malformed."""
    if not identity or not identity.strip().isdigit():
        return None
    identity_id = int(identity.strip())
    if identity_id <= 0:
        return None
    role_strings = [r.strip() for r in (roles or "").split(",") if r.strip()]
    return SessionContext.from_role_strings(
        Identity(id=identity_id, nickname=(nickname or "").strip()[:NICKNAME_MAX_LENGTH]),
        role_strings,
    )


def SessionContextMiddleware(
    app: Callable,
    identity_header: str = "X-Identity-Id",
    nickname_header: str = "X-Identity-Nickname",
    roles_header: str = "X-Identity-Roles",
) -> Callable:
    """Attach the gateway-provided session to each HTTP request. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        identity = _get_header(scope, identity_header)
        session = session_from_headers(
            identity,
            _get_header(scope, nickname_header),
            _get_header(scope, roles_header),
        )
        if session is None and identity is not None:
            logger.warning("Ignoring malformed identity header")
        scope.setdefault("state", {})["session"] = session
        await app(scope, receive, send)

    return asgi_app
