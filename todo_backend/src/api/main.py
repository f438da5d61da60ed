from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import BackendError, InvalidInputError, TodoNotFoundError
from .repositories import Repository, build_repository
from .routers import todos as todos_router
from .service import TodoService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


def _register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses. No internals are exposed to clients."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for malformed requests (bad JSON,
        missing text, non-integer id). The offending input is not echoed back.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(
                    [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
                ),
            },
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(TodoNotFoundError)
    async def not_found_handler(request: Request, exc: TodoNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": "Todo not found"})

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError) -> JSONResponse:
        logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The repository is opened when the application starts and closed when it
    shuts down. A repository passed in by the caller is used as-is and left
    open; closing it is then the caller's job.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        repo = repository if repository is not None else build_repository(settings.db_path)
        app.state.todo_service = TodoService(repo)
        logger.info("Todo backend started (storage: %s)", repo.name)
        try:
            yield
        finally:
            if repository is None:
                repo.close()
            logger.info("Todo backend stopped")

    app = FastAPI(
        title="Todo Backend",
        description="Backend API service for managing todos with pluggable storage backends.",
        version="0.2.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the active storage backend.
        """
        return {"message": "Healthy", "backend": request.app.state.todo_service.repository.name}

    app.include_router(todos_router.router)
    if settings.enable_test_routes:
        app.include_router(todos_router.test_router)

    return app


app = create_app()
