"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. See
task_manager.core.lifespan and task_manager.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from task_manager.api.router import api_router
from task_manager.core.config import get_settings
from task_manager.core.exception_handlers import register_exception_handlers
from task_manager.core.lifespan import create_lifespan
from task_manager.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    TimeoutMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    # First added = innermost. Order from the outside: timeout, request ID, correlation ID.
    app.add_middleware(
        CorrelationIDMiddleware,
        header_name=settings.correlation_id_header,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
