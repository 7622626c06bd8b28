import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings, assert_secure_configuration
from .core.logging import configure_logging
from .core.database import check_connection, dispose_engine, init_database
from .core.errors import PromptCloudError, StoreUnavailableError
from .api.routes.v1.health import router as health_router
from .api.routes.v1.folders import router as folders_router
from .api.routes.v1.prompts import router as prompts_router


configure_logging(settings.log_level)
log = logging.getLogger("prompt_cloud.main")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    if location:
        return f"Invalid request ({location}): {message}"
    return f"Invalid request: {message}"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PromptCloudError)
    async def _handle_prompt_cloud_error(request: Request, exc: PromptCloudError) -> JSONResponse:
        if isinstance(exc, StoreUnavailableError):
            log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        log.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def _handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        log.error("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app() -> FastAPI:
    app = FastAPI(title="Prompt Cloud API", version=__version__)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers v1
    app.include_router(health_router, prefix=f"{settings.api_prefix}/v1", tags=["health"])
    app.include_router(folders_router, prefix=f"{settings.api_prefix}/v1", tags=["folders"])
    app.include_router(prompts_router, prefix=f"{settings.api_prefix}/v1", tags=["prompts"])

    @app.on_event("startup")
    def _startup() -> None:
        # Harden: block unsafe defaults outside development
        assert_secure_configuration()
        try:
            check_connection()
        except SQLAlchemyError:
            log.error("Failed to connect to the database.", exc_info=True)
            raise
        init_database()

    @app.on_event("shutdown")
    def _shutdown() -> None:
        dispose_engine()

    return app


app = create_app()
