"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iacp.api import health
from iacp.api import router as api_router
from iacp.api.errors import install_exception_handlers
from iacp.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

app = FastAPI(
    title="IACP API",
    description="Identity, Auth, Claim, Provider: users, configurable JWT claims, applications and roles.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list if settings.APP_ENV == "dev" else [
        o for o in settings.cors_origin_list if o != "*"
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "IACP API"}
