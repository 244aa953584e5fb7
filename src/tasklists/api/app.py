"""
Main FastAPI application for the Task Lists backend
"""

from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.tokens import TokenService
from ..config import Settings, get_settings, require_jwt_secret
from ..database import close_store, connect_store
from ..errors import ConfigurationError, UpstreamUnavailable
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

logger = get_logger(__name__)


def create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Task Lists API...")

        try:
            secret = require_jwt_secret(settings)
        except ConfigurationError as e:
            logger.error("Refusing to start without a token signing secret", error=str(e))
            raise

        app.state.tokens = TokenService(
            secret_key=secret,
            algorithm=settings.jwt_algorithm,
            expiry=timedelta(days=settings.token_expiry_days),
        )

        try:
            app.state.store = await connect_store(settings.db_uri, settings.db_name)
        except UpstreamUnavailable as e:
            logger.error("Could not connect to the document store", error=str(e))
            raise

        yield

        logger.info("Shutting down Task Lists API...")
        close_store(app.state.store)

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(debug=settings.debug, log_level=settings.log_level)

    app = FastAPI(
        title="Task Lists API",
        description="Multi-user task lists over GraphQL",
        version=__version__,
        lifespan=create_lifespan(settings),
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()
    app.include_router(create_graphql_router(graphiql=settings.debug), prefix="")
    logger.info("GraphQL endpoint initialized", endpoint="/graphql")

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "tasklists.api.app:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.api_reload,
        log_level=_settings.log_level.lower(),
    )
