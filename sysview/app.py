"""Application bootstrap and lifecycle management."""

import json
from pathlib import Path
from typing import Any, Protocol

from .config import resolve_capabilities_path
from .logging_config import get_logger
from .models import MetaModel, TraceDataUpdate
from .view import EntityLink, IEntityNode, SystemViewData

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Install the configured meta-model, if any."""
        ...

    async def stop(self) -> None:
        """Shutdown."""
        ...

    async def reset(self) -> None:
        """Discard all trace data."""
        ...

    def install_meta_model(self, meta_model: MetaModel) -> None:
        """Install or replace the meta-model."""
        ...

    def ingest(self, update: TraceDataUpdate) -> None:
        """Apply a batch of trace data to the view."""
        ...

    def snapshot(self) -> dict[str, Any]:
        """Current nodes, links and edge scale."""
        ...

    @property
    def view(self) -> SystemViewData:
        """Get the system view."""
        ...


class Application:
    """Owns the system view for one debugging session."""

    def __init__(self, capabilities_path: str | Path | None = None):
        self._capabilities_path = resolve_capabilities_path(capabilities_path)

        # Created once a meta-model is known
        self._view: SystemViewData | None = None

    async def start(self) -> None:
        """Install the meta-model from the configured capabilities file."""
        logger.info("Starting application")

        if self._capabilities_path is not None:
            with open(self._capabilities_path, encoding="utf-8") as f:
                capabilities = json.load(f)
            self.install_meta_model(MetaModel.from_capabilities(capabilities))
            logger.info("Meta-model loaded from %s", self._capabilities_path)
        else:
            logger.info("Waiting for runtime capabilities")

    async def stop(self) -> None:
        """Shutdown."""
        if self._view:
            logger.info("Stopping with %s", self._view.stats())
        self._view = None

    async def reset(self) -> None:
        """Discard all trace data; the meta-model stays installed."""
        if self._view:
            self._view.reset()
            logger.info("System view reset")

    def install_meta_model(self, meta_model: MetaModel) -> None:
        """Install or replace the meta-model."""
        if self._view is None:
            self._view = SystemViewData(meta_model)
        else:
            self._view.set_meta_model(meta_model)
        logger.info(
            "Meta-model installed",
            extra={
                "context": {
                    "send_ops": len(meta_model.send_ops),
                    "receive_ops": len(meta_model.receive_ops),
                }
            },
        )

    def ingest(self, update: TraceDataUpdate) -> None:
        """Apply a batch of trace data to the view."""
        self.view.update_trace_data(update)

    def snapshot(self) -> dict[str, Any]:
        """Current nodes, links and edge scale for the renderer."""
        view = self.view
        activity_nodes = view.get_activity_nodes()
        entity_nodes = view.get_entity_nodes()
        links = view.get_links()
        return {
            "activity_nodes": [node_to_dict(n) for n in activity_nodes],
            "entity_nodes": [node_to_dict(n) for n in entity_nodes],
            "links": [link_to_dict(link) for link in links],
            "max_message_sends": view.get_max_message_sends(),
            "max_link_count": view.get_max_link_count(),
        }

    @property
    def view(self) -> SystemViewData:
        """Get the system view."""
        if not self._view:
            raise RuntimeError("Meta-model not installed")
        return self._view


def node_to_dict(node: IEntityNode) -> dict[str, Any]:
    return {
        "data_id": node.data_id,
        "view_id": node.view_id,
        "kind": node.kind.value,
        "is_group": node.is_group,
        "group_size": node.group_size(),
        "label": getattr(node, "name", None) or getattr(node, "location_id", ""),
        "query": node.query_for_code_pane(),
        "x": node.x,
        "y": node.y,
    }


def link_to_dict(link: EntityLink) -> dict[str, Any]:
    return {
        "source": link.source.data_id,
        "target": link.target.data_id,
        "message_count": link.message_count,
        "creation": link.creation,
    }
