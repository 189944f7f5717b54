import os
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.logging_config import logger
from core.api_client import BuildingApiClient
from core.cache import SimpleCache
from core.capabilities import CapabilityCatalog
from core.icons import IconCache, IconResolver
from core.navigation import NavigationResolver
from core.route_guard import RouteAccessGuard

# Routers
from routers import api_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app(api_client: BuildingApiClient = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Capability-driven navigation, route access and icon resolution for the building shell",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Shared components (one set per app)
    # -------------------------------------------------
    client = api_client or BuildingApiClient()
    app.state.started = False
    app.state.api_client = client
    app.state.icon_resolver = IconResolver(cache=IconCache())
    app.state.navigation_resolver = NavigationResolver()
    app.state.route_guard = RouteAccessGuard()
    app.state.capability_catalog = CapabilityCatalog(
        fetcher=client.get_building_capabilities,
        cache=SimpleCache(
            default_ttl_seconds=settings.CAPABILITY_CACHE_TTL_SECONDS,
            name="capabilities",
        ),
    )

    # -------------------------------------------------
    # Startup / shutdown
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        validate_config_on_startup()

        if settings.ICON_WARM_UP:
            warmed = app.state.icon_resolver.warm_up()
            logger.info(f"Icon cache warmed ({warmed} icons)")

        # Included-router entries carry no path of their own
        for route in app.routes:
            path = getattr(route, "path", None)
            if path is None:
                continue
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug("Route %-10s %s", methods, path)

        app.state.started = True

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.api_client.aclose()
        logger.info(f"Stopped {settings.PROJECT_NAME}")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500, 502):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"service": settings.PROJECT_NAME, "docs": "/docs"}

    return app


# Create the global FastAPI instance
app = create_app()
