"""
FastAPI Application Entry Point.

This is the main application file for the Merch Market Backend.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from merchmarket.app.core.config import Settings, settings
from merchmarket.app.api.v1.router import router as api_router
from merchmarket.app.core.jwt import TokenSigner
from merchmarket.app.core.security import PasswordHasher
from merchmarket.app.core.observability import ObservabilityMiddleware, configure_logging
from merchmarket.app.domain.identity.identity_gateway import IdentityGateway
from merchmarket.app.db.session import engine, Base, AsyncSessionLocal
from merchmarket.app.services.catalog import seed_catalog
from merchmarket.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from merchmarket.app.models.user import User
from merchmarket.app.models.merch import Merch
from merchmarket.app.models.purchase import Purchase
from merchmarket.app.models.ledger_entry import LedgerEntry


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application.

    The JWT secret, hashing cost and starting balance are taken from
    app_settings and injected into the collaborators kept on app.state.
    """
    configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for application startup/shutdown.

        1. Creates database tables on startup.
        2. Seeds the merch catalog (idempotent).
        """
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        if app_settings.seed_catalog_on_startup:
            async with AsyncSessionLocal() as db:
                await seed_catalog(db)
        yield
        await engine.dispose()

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        description="Internal merch store: coin wallets, transfers and purchases",
        lifespan=lifespan,
    )

    signer = TokenSigner(
        secret_key=app_settings.jwt_secret_key,
        algorithm=app_settings.jwt_algorithm,
        expires_delta=timedelta(minutes=app_settings.access_token_expire_minutes),
    )
    app.state.token_signer = signer
    app.state.identity_gateway = IdentityGateway(
        signer=signer,
        hasher=PasswordHasher(rounds=app_settings.bcrypt_rounds),
        initial_balance=app_settings.initial_balance,
    )

    app.add_middleware(ObservabilityMiddleware)

    # Register global exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Status and application information
        """
        return {
            "status": "healthy",
            "app_name": app_settings.app_name,
            "version": app_settings.api_version,
        }

    # Include API router
    app.include_router(api_router, prefix=app_settings.api_prefix)

    return app


# Initialize FastAPI application
app = create_app()
