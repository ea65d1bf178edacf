"""API v1 router -- aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from offers_monitor.api.v1 import health, offers

api_v1_router = APIRouter()

api_v1_router.include_router(health.router, tags=["health"])
api_v1_router.include_router(offers.router, prefix="/offers", tags=["offers"])
