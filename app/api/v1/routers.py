"""
app/api/v1/routers.py
Main API router that aggregates all endpoint routers
"""
from fastapi import APIRouter

from app.api.v1.endpoints import branches
from app.api.v1.authentication import auth

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(branches.router, prefix="/branches", tags=["branches"])
