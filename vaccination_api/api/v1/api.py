"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from vaccination_api.api.v1.endpoints import auth, health, users

api_router = APIRouter()

# Login
api_router.include_router(auth.router)

# Registration & profile
api_router.include_router(users.router)

# Health probe
api_router.include_router(health.router)
