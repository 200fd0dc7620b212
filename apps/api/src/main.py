from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.database import connect_db, disconnect_db
from src.core.logging_config import configure_logging
from src.core.settings import Settings, settings
from src.domains.activities.routes import router as activities_router
from src.domains.admin.routes import router as admin_router
from src.domains.auth.routes import router as auth_router
from src.domains.contacts.routes import router as contacts_router
from src.domains.deals.routes import router as deals_router
from src.domains.notes.routes import activity_notes_router, contact_notes_router
from src.domains.organizations.routes import router as organizations_router
from src.domains.shares.routes import router as shares_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    await connect_db()
    yield
    # Shutdown
    await disconnect_db()


def create_app(app_settings: Settings) -> FastAPI:
    """Build the API from settings constructed once at process start."""
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title="OMW CRM API",
        description="API for contacts, deals and activities with sharing",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
        auth_router,
        contacts_router,
        organizations_router,
        deals_router,
        activities_router,
        contact_notes_router,
        activity_notes_router,
        shares_router,
        admin_router,
    ):
        app.include_router(router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"message": "OMW CRM API is running"}

    @app.get("/health")
    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app(settings)
