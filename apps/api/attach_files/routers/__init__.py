"""API routers."""

from attach_files.routers.finishers import router as finishers_router

__all__ = ["finishers_router"]
