"""Control API routes: session reset and the trace SIM."""

from typing import Protocol

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...logging_config import get_logger

logger = get_logger(__name__)


class ISimulator(Protocol):
    """Trace generator driven from the control routes."""

    async def start(self) -> None:
        ...

    async def stop(self) -> None:
        ...

    def is_running(self) -> bool:
        ...


class ControlResponse(BaseModel):
    """Response model for control actions."""

    status: str
    sim_running: bool


def create_control_router(app: IApplication, sim: ISimulator | None = None) -> APIRouter:
    """Create control router; SIM routes answer 404 when no SIM is given."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    def require_sim() -> ISimulator:
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        return sim

    def response() -> dict:
        return {"status": "ok", "sim_running": sim is not None and sim.is_running()}

    @router.post("/reset", response_model=ControlResponse)
    async def reset_session() -> dict:
        """Discard all trace data; a running SIM starts over with a new program."""
        restart = sim is not None and sim.is_running()
        if restart:
            await sim.stop()

        await app.reset()

        if restart:
            await sim.start()
            logger.info("SIM restarted after reset")
        return response()

    @router.post("/sim/start", response_model=ControlResponse)
    async def start_sim() -> dict:
        """Start streaming synthetic trace data."""
        await require_sim().start()
        return response()

    @router.post("/sim/stop", response_model=ControlResponse)
    async def stop_sim() -> dict:
        """Stop streaming synthetic trace data."""
        await require_sim().stop()
        return response()

    return router
