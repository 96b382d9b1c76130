"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import AppError, InputValidationError, MissingFieldsError
from app.core.security import TokenService
from app.services.email import Mailer

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validation_error_to_app_error(exc: RequestValidationError) -> InputValidationError:
    """
    Convert FastAPI body validation errors into the API's 400 errors.

    Absent, null and blank fields are reported together as missingFields (in
    declaration order); anything else is reported as an invalid body.
    """
    missing: list[str] = []
    invalid: list[dict[str, str]] = []
    for err in exc.errors():
        loc = tuple(err.get("loc", ()))
        if loc[:1] == ("body",) and len(loc) == 1 and err.get("type") == "missing":
            return InputValidationError("Request body is required")
        if len(loc) < 2:
            invalid.append({"field": "", "message": str(err.get("msg", ""))})
            continue
        # Union fields report one error per branch at a deeper loc; key on the top-level name.
        name = str(loc[1])
        at_field = len(loc) == 2 or (len(loc) == 3 and isinstance(loc[2], str))
        top_level_missing = len(loc) == 2 and err.get("type") == "missing"
        if top_level_missing or (at_field and _is_blank(err.get("input"))):
            if name not in missing:
                missing.append(name)
            continue
        field = ".".join(str(p) for p in loc[1:])
        invalid.append({"field": field, "message": str(err.get("msg", ""))})
    if missing:
        return MissingFieldsError(missing)
    return InputValidationError(extra={"errors": invalid})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_payload(),
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return await app_error_handler(request, validation_error_to_app_error(exc))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled store error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"status": 500, "message": "Something went wrong"},
    )


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    mailer: Mailer | None = None,
    token_service: TokenService | None = None,
) -> FastAPI:
    """
    Build the application and its app-scoped services.

    The engine, session factory, token service and mailer live on app.state and
    are handed to routes through dependencies; pass them in to override (tests).
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = engine or build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = token_service or TokenService(
        settings.JWT_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )
    app.state.mailer = mailer or Mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    app.include_router(v1_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": f"{settings.APP_NAME} API"}

    logger.info("Application configured (env=%s, prefix=%s)", settings.APP_ENV, settings.API_PREFIX)
    return app


app = create_app()
