# ABOUTME: Operational API routes.
# ABOUTME: Health check for the load balancer.

from fastapi import APIRouter
from pydantic import BaseModel

from trifecta_edge import __version__

router = APIRouter(prefix="/api", tags=["api"])


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str = __version__


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for load balancer."""
    return HealthResponse(status="healthy")
