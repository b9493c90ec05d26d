"""API router aggregation.

Includes the endpoint modules under the /api prefix. Routes get their
services from task_manager.api.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from task_manager.api.endpoints import health, tasks

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tasks.router, tags=["tasks"])
