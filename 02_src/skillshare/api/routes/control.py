"""Control API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str
    pending_waiters: int
    change_count: int


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.get("/status", response_model=StatusResponse)
    async def get_status() -> dict:
        """Report long-poll and change-log counters."""
        return {
            "status": "ok",
            "pending_waiters": app.board.pending_waiters,
            "change_count": app.board.change_count,
        }

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Reset talks and change history between test runs."""
        await app.reset()
        return {
            "status": "ok",
            "pending_waiters": app.board.pending_waiters,
            "change_count": app.board.change_count,
        }

    return router
