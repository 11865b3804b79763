"""Aggregate API routers."""

from fastapi import APIRouter

from .game_results import router as game_results_router
from .leaderboard import router as leaderboard_router
from .players import router as players_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    game_results_router,
    leaderboard_router,
    players_router,
)

__all__ = ["ALL_ROUTERS"]
