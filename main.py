import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.realtime import ConnectionRegistry, EventDispatcher
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed or incomplete request bodies as 400 Bad Request."""

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release resources on shutdown."""

    logging.getLogger("app").setLevel(get_settings().log_level)
    initialize_database()
    logger.info("Application started")
    yield
    await app.state.event_dispatcher.aclose()
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Task Realm", lifespan=lifespan)

    registry = ConnectionRegistry()
    app.state.connection_registry = registry
    app.state.event_dispatcher = EventDispatcher(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    register_routes(app)
    return app


app = create_app()
