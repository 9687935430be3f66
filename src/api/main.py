"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before importing modules that read env vars (api.security, adapter.mongodb)
load_dotenv()

# main.py is at <root>/src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.errors import register_error_handlers
from api.routes import auth, health, users
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import close_client, get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Users API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure the users indexes on startup; close the MongoDB client on shutdown."""
    client = get_mongodb_client()
    if client is None:
        logger.warning("MongoDB unavailable, skipping index creation")
    elif MongoUserRepository(client[DATABASE_NAME]).ensure_indexes():
        logger.info("Users indexes verified/created")

    yield

    close_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="User management API - list, create, update, delete users and change passwords",
    version=VERSION,
    lifespan=lifespan,
)

# Credentials can't be combined with the "*" origin, so they're only
# allowed when CORS_ORIGINS is an explicit comma-separated list.
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

register_error_handlers(app)

app.include_router(users.router)
app.include_router(auth.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Uvicorn access logs duplicate our structured request logs
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
