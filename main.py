from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.container import NotificationServices, build_notification_services
from app.infrastructure.database import engine, initialize_database
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the digest job; stop background work on shutdown."""

    services: NotificationServices = app.state.notifications
    initialize_database()
    services.scheduler.start()
    try:
        yield
    finally:
        services.scheduler.shutdown()
        await services.port.drain()
        engine.dispose()


def create_app(
    settings: Settings | None = None,
    services: NotificationServices | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()
    app = FastAPI(title="Partner Hub Notifications", lifespan=lifespan)
    app.state.settings = settings
    app.state.notifications = services or build_notification_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
