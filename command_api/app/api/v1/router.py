"""
Top‑level router for version 1 of the API.

When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import commands, info

router = APIRouter()

router.include_router(commands.router, prefix="/commands", tags=["commands"])
router.include_router(info.router, prefix="/info", tags=["info"])
