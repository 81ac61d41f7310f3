"""FastAPI application entry point."""

import os
import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time
load_dotenv()

from api.dependencies import ensure_user_indexes, get_password_hasher, get_settings
from api.exception_handlers import register_exception_handlers
from api.middleware.auth import require_identity
from api.routes import auth, health, users
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from services.auth_service import prepare_decoy_digest
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

try:
    VERSION = version("authkit")
except PackageNotFoundError:
    VERSION = "0.0.0"

SERVICE_NAME = "authkit API"

# Routers reachable without a token
PUBLIC_ROUTERS = [auth.router, health.router]
# Routers that sit behind bearer authentication
PRIVATE_ROUTERS = [users.router]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    # Fail fast on missing JWT_SECRET_KEY instead of on the first login
    settings = get_settings()
    logger.info("Auth settings loaded", extra={"settings": repr(settings)})

    # The unique email index is what enforces one account per email
    client = get_mongodb_client()
    if client:
        if not ensure_user_indexes(client[DATABASE_NAME]):
            raise RuntimeError("Could not ensure MongoDB indexes; refusing to start")
        logger.info("MongoDB indexes verified/created successfully")
    else:
        # get_user_repo ensures them before first use once the database is up
        logger.warning("MongoDB unavailable, deferring index creation")

    # Pay the decoy hash up front so the first unknown-email login isn't slower
    prepare_decoy_digest(get_password_hasher(settings))

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Email/password registration, login and bearer token authentication",
    version=VERSION,
    lifespan=lifespan,
)

# With JWT in the Authorization header:
# - CORS_ORIGINS="*": allow_credentials must be False (browsers reject credentials with wildcard)
# - explicit comma-separated list: allow_credentials can be True
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for router in PUBLIC_ROUTERS:
    app.include_router(router)
for router in PRIVATE_ROUTERS:
    app.include_router(router, dependencies=[Depends(require_identity)])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Structured application logs replace uvicorn's access log
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
