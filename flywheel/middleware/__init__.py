"""HTTP middleware: session context from gateway headers.

Applied in main app when TRUST_GATEWAY_HEADERS is enabled.
"""

from flywheel.middleware.session_context import SessionContextMiddleware, session_from_headers

__all__ = ["SessionContextMiddleware", "session_from_headers"]
