"""
FastAPI application for the cat vs. dog vote API.

Exposes POST /vote/{category} and GET /votes on top of a single MySQL
table, serves the voting page as static files, and refuses to bind its
port until the database has answered a ping.
"""
import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings
from .database import Database
from .models import Category, HealthResponse, InvalidCategoryError, TallyResponse
from .startup import ensure_ready

logger = logging.getLogger(__name__)

router = APIRouter()


def configure_logging(debug: bool = False):
    """Configure process-wide console logging."""
    logging.basicConfig(
        level=logging.INFO if not debug else logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def get_database(request: Request) -> Database:
    """Dependency returning the database injected into the app."""
    return request.app.state.database


@router.post(
    "/vote/{category}",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Unknown category"},
        500: {"description": "Database error"}
    }
)
async def cast_vote(category: str, database: Database = Depends(get_database)):
    """
    Add one vote for a category.

    - **category**: cat or dog (case-insensitive)

    Every call counts, so repeating the request casts another vote.
    """
    try:
        choice = Category.parse(category)
    except InvalidCategoryError:
        return PlainTextResponse("Invalid animal", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        await database.increment(choice)
    except Exception as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/votes",
    response_model=TallyResponse,
    responses={
        500: {"description": "Database error"}
    }
)
async def get_votes(database: Database = Depends(get_database)):
    """Get current vote counts keyed by category."""
    try:
        return await database.get_tallies()
    except Exception as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        503: {"model": HealthResponse, "description": "Service unhealthy"}
    }
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    """Check that the database still answers a ping."""
    healthy = await database.check_health()

    response = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        services={"database": "connected" if healthy else "disconnected"},
        timestamp=datetime.utcnow()
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json")
    )


def create_app(database: Database, static_dir: Optional[str] = None) -> FastAPI:
    """
    Build the application around an already-ready database.

    Args:
        database: Database handed to every request handler
        static_dir: Directory served at "/"; defaults to STATIC_DIR

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager closing the pool on shutdown."""
        yield
        logger.info(f"Shutting down {settings.SERVICE_NAME} service...")
        await app.state.database.close()

    app = FastAPI(
        title="Vote API",
        description="Cast and count cat vs. dog votes",
        lifespan=lifespan
    )
    app.state.database = database
    app.include_router(router)

    # Mounted last so the API routes take precedence over "/"
    static_dir = static_dir or settings.STATIC_DIR
    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning(f"Static directory {static_dir} not found, not serving static files")

    return app


async def serve(config: Settings) -> int:
    """
    Run the startup handshake, then serve until shutdown.

    Returns:
        Process exit code: 1 if the database never answered, else 0
    """
    logger.info(f"Starting {config.SERVICE_NAME} service...")

    database = Database(config)
    await database.connect()

    result = await ensure_ready(database, config.DB_CONNECT_RETRIES, config.DB_RETRY_DELAY)
    if not result.ready:
        logger.error(
            f"Startup failed: could not connect to database after "
            f"{result.attempts} attempts: {result.error}"
        )
        await database.close()
        return 1

    app = create_app(database, config.STATIC_DIR)
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.HOST,
        port=config.PORT,
        log_level="debug" if config.DEBUG else "info"
    ))

    logger.info(f"Server running on port {config.PORT}")
    await server.serve()
    return 0


def main():
    """Main entry point."""
    configure_logging(settings.DEBUG)
    sys.exit(asyncio.run(serve(settings)))


if __name__ == "__main__":
    main()
