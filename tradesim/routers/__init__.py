"""
Trade Simulator API Routers
"""

from .simulation import router as simulation_router

__all__ = [
    "simulation_router",
]
