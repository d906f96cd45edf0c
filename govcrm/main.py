"""govcrm FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from govcrm.api.activity import router as activity_router
from govcrm.api.auth import public_router as auth_public_router
from govcrm.api.auth import router as auth_router
from govcrm.api.captures import router as captures_router
from govcrm.api.companies import router as companies_router
from govcrm.api.contacts import router as contacts_router
from govcrm.api.dashboard import router as dashboard_router
from govcrm.api.health import router as health_router
from govcrm.api.opportunities import router as opportunities_router
from govcrm.api.proposals import router as proposals_router
from govcrm.api.users import router as users_router
from govcrm.auth.middleware import api_rate_limit, get_identity
from govcrm.config import Settings
from govcrm.database import build_engine, build_session_maker, create_schema
from govcrm.errors import register_error_handlers

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

# Token check runs first so unauthenticated calls never reach the database
PROTECTED = [Depends(get_identity), Depends(api_rate_limit)]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_schema:
            await create_schema(engine)
            logger.info("Database schema created")
        yield
        await engine.dispose()

    app = FastAPI(
        title="govcrm - Government Contracting CRM",
        description="Multi-tenant CRM for capture, opportunity and proposal workflows",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_public_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"], dependencies=PROTECTED)
    app.include_router(
        opportunities_router,
        prefix="/api/opportunities",
        tags=["Opportunities"],
        dependencies=PROTECTED,
    )
    app.include_router(
        contacts_router, prefix="/api/contacts", tags=["Contacts"], dependencies=PROTECTED
    )
    app.include_router(
        companies_router, prefix="/api/companies", tags=["Companies"], dependencies=PROTECTED
    )
    app.include_router(
        captures_router, prefix="/api/captures", tags=["Captures"], dependencies=PROTECTED
    )
    app.include_router(
        proposals_router, prefix="/api/proposals", tags=["Proposals"], dependencies=PROTECTED
    )
    app.include_router(
        users_router, prefix="/api/users", tags=["Users"], dependencies=PROTECTED
    )
    app.include_router(
        activity_router, prefix="/api/activity", tags=["Activity"], dependencies=PROTECTED
    )
    app.include_router(
        dashboard_router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=PROTECTED
    )

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"service": "govcrm", "version": VERSION, "docs": "/docs"}

    return app
