"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (profile, settings, streak,
sessions, goals, roles, statistics) under a unified prefix.  When a new
domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    profiles,
    settings,
    streak,
    sessions,
    goals,
    roles,
    statistics,
)

router = APIRouter()

router.include_router(profiles.router, prefix="/profile", tags=["profile"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(streak.router, prefix="/streak", tags=["streak"])
router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
router.include_router(goals.router, prefix="/goals", tags=["goals"])
router.include_router(roles.router, prefix="/roles", tags=["roles"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
