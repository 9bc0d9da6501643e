"""Trace ingestion API routes."""

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...errors import SequencingError
from ...models import (
    Activity,
    MetaModel,
    PassiveEntity,
    ReceiveOp,
    SendOp,
    SourceCoordinate,
    TraceDataUpdate,
)


class SourceCoordinatePayload(BaseModel):
    """Source section of a passive entity's origin."""

    uri: str
    start_line: int
    start_column: int
    char_length: int


class ActivityPayload(BaseModel):
    """A newly observed activity."""

    id: int
    name: str
    type: int
    creation_activity_id: int | None = None
    running: bool = True


class PassiveEntityPayload(BaseModel):
    """A newly observed passive entity."""

    id: int
    type: int
    origin: SourceCoordinatePayload
    creation_activity_id: int


class SendOpPayload(BaseModel):
    """One send; target_id is resolved through the meta-model by type."""

    type: int
    creation_activity_id: int
    target_id: int


class ReceiveOpPayload(BaseModel):
    """One receive; source_id is resolved through the meta-model by type."""

    type: int
    creation_activity_id: int
    source_id: int


class TraceDataRequest(BaseModel):
    """Request model for a batch of trace data."""

    activities: list[ActivityPayload] = Field(default_factory=list)
    passive_entities: list[PassiveEntityPayload] = Field(default_factory=list)
    send_ops: list[SendOpPayload] = Field(default_factory=list)
    receive_ops: list[ReceiveOpPayload] = Field(default_factory=list)

    def to_update(self) -> TraceDataUpdate:
        """Convert to the model consumed by the system view."""
        return TraceDataUpdate(
            activities=[Activity(**a.model_dump()) for a in self.activities],
            passive_entities=[
                PassiveEntity(
                    id=e.id,
                    type=e.type,
                    origin=SourceCoordinate(**e.origin.model_dump()),
                    creation_activity_id=e.creation_activity_id,
                )
                for e in self.passive_entities
            ],
            send_ops=[SendOp(**s.model_dump()) for s in self.send_ops],
            receive_ops=[ReceiveOp(**r.model_dump()) for r in self.receive_ops],
        )


class IngestResponse(BaseModel):
    """Response model for ingestion."""

    status: str
    stats: dict[str, int]


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_trace_router(app: IApplication) -> APIRouter:
    """Create trace ingestion router."""
    router = APIRouter(prefix="/api", tags=["trace"])

    @router.post("/meta-model", response_model=StatusResponse)
    async def install_meta_model(capabilities: dict[str, Any]) -> dict:
        """Install the meta-model from the runtime's server capabilities."""
        try:
            meta_model = MetaModel.from_capabilities(capabilities)
        except (SequencingError, KeyError, TypeError, ValueError) as e:
            raise HTTPException(status_code=422, detail=f"Invalid capabilities: {e}")
        app.install_meta_model(meta_model)
        return {"status": "ok"}

    @router.post("/trace-data", response_model=IngestResponse)
    async def ingest_trace_data(request: TraceDataRequest) -> dict:
        """Apply a batch of trace data to the system view."""
        try:
            app.ingest(request.to_update())
            return {"status": "ok", "stats": app.view.stats()}
        except SequencingError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))

    return router
