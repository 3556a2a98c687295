"""Liveness endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from src import __version__
from src.core.config import settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Reports that the process is up. Does not touch the database.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", service=settings.app_name, version=__version__)
