# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the GrokTalk API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import GrokTalkException, groktalk_exception_handler
from app.routers import health, projects, chats, api_keys, user_settings
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup. Supabase clients are
    created lazily on first use, so there is nothing to open or close.
    """
    logger.info(f"Starting GrokTalk API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if settings.using_default_encryption_key:
        level = logging.WARNING if settings.is_production else logging.INFO
        logger.log(level, "ENCRYPTION_KEY is not set; stored API keys use the built-in fallback passphrase")

    if not settings.SUPABASE_JWT_SECRET:
        logger.info("SUPABASE_JWT_SECRET not set; HS256 tokens are verified via Supabase Auth")

    yield

    logger.info("Shutting down GrokTalk API")


# Create FastAPI application
app = FastAPI(
    title="GrokTalk API",
    description="""
## Chat Application Backend

Per-user storage for a multi-provider chat frontend. Persistence and
authentication are handled by Supabase.

### Resources

| Resource | What it stores |
|----------|----------------|
| **Projects** | Saved prompt bundles: instructions and conversation starters |
| **Chats** | Chat transcripts, optionally linked to a project |
| **API Keys** | Provider API keys, AES-256-GCM encrypted at rest |
| **User Settings** | Theme, language and notification preferences |

### Authentication

Send `Authorization: Bearer <access_token>` on every request. Tokens come
from `POST /api/auth/login` or `POST /api/auth/register`.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Registration, login and profile"},
        {"name": "Projects", "description": "Saved prompt bundles"},
        {"name": "Chats", "description": "Chat transcripts"},
        {"name": "API Keys", "description": "Encrypted provider API keys"},
        {"name": "User Settings", "description": "Per-user UI preferences"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(GrokTalkException)
async def handle_groktalk_exception(request: Request, exc: GrokTalkException):
    """Handle custom GrokTalk exceptions."""
    return await groktalk_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

prefix = settings.API_PREFIX.rstrip("/")

app.include_router(auth_routes.router, prefix=f"{prefix}/auth", tags=["Auth"])
app.include_router(auth_routes.session_router, prefix=prefix, tags=["Auth"])
app.include_router(health.router, prefix=prefix, tags=["Health"])
app.include_router(projects.router, prefix=f"{prefix}/projects", tags=["Projects"])
app.include_router(chats.router, prefix=f"{prefix}/chat", tags=["Chats"])
app.include_router(api_keys.router, prefix=f"{prefix}/api-keys", tags=["API Keys"])
app.include_router(user_settings.router, prefix=f"{prefix}/user-settings", tags=["User Settings"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "GrokTalk API",
        "version": __version__,
        "docs": "/docs",
        "health": f"{prefix}/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
