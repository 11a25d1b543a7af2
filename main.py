"""
Backend entry point for the course enrollment platform.

Architecture:
- One Python process serving the FastAPI app
- Services in core/ hold all business rules; web_api/ only maps HTTP to them
- The database engine is created lazily and closed on shutdown

Run with: python main.py [--port PORT] [--reload]
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Set up import paths before any local imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import check_required_env_vars, get_allowed_origins, get_log_level
from core.database import close_engine, is_configured

from web_api.errors import register_exception_handlers
from web_api.routes.admin import router as admin_router
from web_api.routes.auth import router as auth_router
from web_api.routes.courses import router as courses_router
from web_api.routes.enrollments import router as enrollments_router
from web_api.routes.lessons import router as lessons_router
from web_api.routes.progress import router as progress_router

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if os.environ.get("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        environment=os.environ.get("ENVIRONMENT", "development"),
        traces_sample_rate=0.0,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Reports missing configuration on startup and releases database
    connections on shutdown.
    """
    ok, messages = check_required_env_vars()
    for message in messages:
        logger.warning(message)
    if not ok:
        raise RuntimeError("Missing required environment variables")

    yield

    logger.info("Shutting down, closing database connections")
    await close_engine()


# Create FastAPI app with lifespan
app = FastAPI(
    title="Course Enrollment Platform API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(courses_router)
app.include_router(lessons_router)
app.include_router(enrollments_router)
app.include_router(progress_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    return {"status": "ok"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database_configured": is_configured(),
    }


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Course Enrollment Platform Server")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", "8000")),
        help="Port to run the server on (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)",
    )
    args = parser.parse_args()

    if args.reload:
        # --reload requires an import string rather than the app object
        uvicorn.run("main:app", host="0.0.0.0", port=args.port, reload=True)
    else:
        uvicorn.run(app, host="0.0.0.0", port=args.port)
