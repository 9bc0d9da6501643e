"""Observability API routes: the current graph for the renderer."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication, node_to_dict


class NodeResponse(BaseModel):
    """Response model for a visible node."""

    data_id: str
    view_id: str
    kind: str
    is_group: bool
    group_size: int
    label: str
    query: str
    x: float
    y: float


class LinkResponse(BaseModel):
    """Response model for a link between visible nodes."""

    source: str
    target: str
    message_count: int
    creation: bool


class SystemViewResponse(BaseModel):
    """Response model for the whole system view."""

    activity_nodes: list[NodeResponse]
    entity_nodes: list[NodeResponse]
    links: list[LinkResponse]
    max_message_sends: int
    max_link_count: int


class PositionRequest(BaseModel):
    """Position pushed back by the layout engine."""

    x: float
    y: float


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/system-view", response_model=SystemViewResponse)
    async def get_system_view() -> dict:
        """Get visible nodes and links."""
        try:
            return app.snapshot()
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))

    @router.put("/nodes/{data_id}/position", response_model=NodeResponse)
    async def set_node_position(data_id: str, request: PositionRequest) -> dict:
        """Move a visible node; coordinates are clamped."""
        try:
            node = app.view.find_node(data_id)
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))
        if node is None:
            raise HTTPException(status_code=404, detail=f"No visible node {data_id}")

        node.x = request.x
        node.y = request.y
        return node_to_dict(node)

    @router.get("/stats")
    async def get_stats() -> dict[str, int]:
        """Get population and message counters."""
        try:
            return app.view.stats()
        except RuntimeError as e:
            raise HTTPException(status_code=409, detail=str(e))

    return router
