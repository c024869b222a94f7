from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

import httpx
import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.database import db, db_context
from api.endpoints import ROUTER
from api.logger import get_logger
from api.settings import settings


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting booking microservice")
    await db.create_tables()
    yield
    logger.info("Shutting down booking microservice")
    await db.close()


if settings.sentry_dsn:
    logger.debug("initializing sentry")
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.sentry_environment, attach_stacktrace=True)


app = FastAPI(
    title="Booking Microservice",
    description="Create event slots and book them.",
    root_path=settings.root_path,
    debug=settings.debug,
    lifespan=lifespan,
)
app.include_router(ROUTER)


@app.middleware("http")
async def db_session(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    async with db_context() as session:
        response = await call_next(request)
        if response.status_code >= 400:
            await session.rollback()
        return response


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(httpx.HTTPError)
async def handle_server_error(request: Request, exc: Exception) -> Response:
    logger.exception(f"{request.method} {request.url.path} failed")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Server error", "error": str(exc)}
    )
