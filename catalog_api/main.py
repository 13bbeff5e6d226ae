import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.core.config import Settings, get_settings
from catalog_api.core.database_init import init_database_schema
from catalog_api.core.db import Database
from catalog_api.core.logging import configure_logging
from catalog_api.core.middleware import RequestContextMiddleware
from catalog_api.routers import get_api_router
from catalog_api.schemas import ProblemDetails

# Request sections FastAPI prefixes onto error locations.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def validation_errors_by_field(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    validation_logger = logging.getLogger("catalog_api.validation")
    error_logger = logging.getLogger("catalog_api.errors")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        docs_url="/docs" if settings.DOCS_ENABLED else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DOCS_ENABLED else None,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = validation_errors_by_field(exc)
        validation_logger.warning(
            "Validation error on %s %s fields=%s",
            request.method,
            request.url.path,
            sorted(errors),
        )
        problem = ProblemDetails(
            title="One or more validation errors occurred.",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=errors,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=problem.model_dump(by_alias=True, exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        error_logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        problem = ProblemDetails(
            title="An error occurred while processing your request.",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=problem.model_dump(by_alias=True, exclude_none=True),
        )

    app.include_router(get_api_router(), prefix=settings.API_PREFIX)

    @app.on_event("startup")
    def startup_event():
        init_database_schema(app.state.database)

    @app.on_event("shutdown")
    def shutdown_event():
        app.state.database.dispose()

    return app


app = create_app()
