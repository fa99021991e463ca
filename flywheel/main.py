"""ASGI entry point: builds the flywheel API app.

create_app() wires the lifespan, exception handlers, CORS, the optional
gateway session middleware and the v1 router. Settings are read inside
create_app(), so tests can adjust the environment before calling it.

Run with: uvicorn flywheel.main:app
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flywheel.api.v1.router import api_router
from flywheel.core.config import get_settings
from flywheel.core.exception_handlers import register_exception_handlers
from flywheel.core.lifespan import create_lifespan
from flywheel.middleware import SessionContextMiddleware


def create_app() -> FastAPI:
    """Build the FastAPI app from current settings."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    # Middleware: last added = outermost, so the session context wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.trust_gateway_headers:
        app.add_middleware(
            SessionContextMiddleware,
            identity_header=settings.identity_header,
            nickname_header=settings.identity_nickname_header,
            roles_header=settings.identity_roles_header,
        )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
