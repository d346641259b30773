from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.auth import router as auth_router
from routers.admin_users import router as admin_users_router
from routers.admin_roles import router as admin_roles_router
from routers.admin_permissions import router as admin_permissions_router

from routers.members import router as members_router
from routers.bank_accounts import router as bank_accounts_router
from routers.account_types import router as account_types_router
from routers.accounts import router as accounts_router

from routers.health import router as health_router


def format_validation_errors(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into one readable line for the `error` field."""
    missing = []
    invalid = []

    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field}: {err.get('msg')}")

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid fields: {'; '.join(invalid)}")
    return ". ".join(parts) or "Invalid request body"


def cors_headers(request: Request) -> dict:
    """
    Unhandled errors are answered by ServerErrorMiddleware, outside
    CORSMiddleware, so those responses need the allow-origin header added here.
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}
    if "*" in settings.BACKEND_CORS_ORIGINS:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in settings.BACKEND_CORS_ORIGINS:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Membership Admin API: users, roles, members and accounts over Supabase",
    )

    # -------------------------------------------------
    # CORS (any origin; bearer tokens, no cookies)
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # -------------------------------------------------
    # Startup logging
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug(f"{methods:10s} {getattr(route, 'path', '')}")

    # -------------------------------------------------
    # Error handling: every error body is {"error": "..."}
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403):
            logger.warning(
                f"HTTP {exc.status_code} at {request.method} {request.url.path}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=cors_headers(request),
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------

    # Auth
    app.include_router(auth_router)

    # Access Control
    app.include_router(admin_users_router)
    app.include_router(admin_roles_router)
    app.include_router(admin_permissions_router)

    # Membership
    app.include_router(members_router)
    app.include_router(bank_accounts_router)
    app.include_router(account_types_router)
    app.include_router(accounts_router)

    # Health
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()
