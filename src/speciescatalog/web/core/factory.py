"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.authentication import AuthenticationMiddleware

from speciescatalog.utils.auth import ViewerHeaderAuthBackend
from speciescatalog.web.core.container import Container
from speciescatalog.web.core.lifespan import lifespan
from speciescatalog.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from speciescatalog.web.routers import (
    chart_routes,
    chat_api_routes,
    comments_api_routes,
    health_api_routes,
    species_api_routes,
    species_view_routes,
    websocket_routes,
)


def create_app() -> FastAPI:
    """Create FastAPI application with dependency injection.

    Sets up the container, middleware, router wiring and lifespan. The
    container is attached to the app so the lifespan can reach it.

    Returns:
        FastAPI: The configured application instance.
    """
    container = Container()
    config = container.config()

    app = FastAPI(
        lifespan=lifespan,
        title="Species Catalog API",
        description="Browse species, discuss them and ask the species assistant",
        version="1.0.0",
    )
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # nosemgrep
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(StructuredRequestLoggingMiddleware)

    # Added last so it runs first and request.user is set for everything below
    app.add_middleware(
        AuthenticationMiddleware, backend=ViewerHeaderAuthBackend(config.viewer_header)
    )

    container.wire(
        modules=[
            "speciescatalog.web.routers.chart_routes",
            "speciescatalog.web.routers.chat_api_routes",
            "speciescatalog.web.routers.comments_api_routes",
            "speciescatalog.web.routers.health_api_routes",
            "speciescatalog.web.routers.species_api_routes",
            "speciescatalog.web.routers.species_view_routes",
            "speciescatalog.web.routers.websocket_routes",
        ]
    )

    # === API Routes ===
    app.include_router(chat_api_routes.router, prefix="/api", tags=["Chat API"])
    app.include_router(species_api_routes.router, prefix="/api", tags=["Species API"])
    app.include_router(comments_api_routes.router, prefix="/api", tags=["Comments API"])
    app.include_router(chart_routes.api_router, prefix="/api", tags=["Charts API"])
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    # Real-time communication
    app.include_router(websocket_routes.router, prefix="/ws", tags=["WebSocket"])

    # === View Routes (excluded from API documentation) ===
    app.include_router(
        species_view_routes.router,
        tags=["Species Views"],
        include_in_schema=False,
    )
    app.include_router(
        chart_routes.view_router,
        tags=["Chart Views"],
        include_in_schema=False,
    )

    return app
