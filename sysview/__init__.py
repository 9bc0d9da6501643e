"""System view core module."""

from .app import Application, IApplication
from .errors import SequencingError
from .models import (
    Activity,
    EntityRefType,
    MetaModel,
    PassiveEntity,
    ReceiveOp,
    SendOp,
    SourceCoordinate,
    TraceDataUpdate,
)
from .view import (
    ActivityGroupNode,
    ActivityNode,
    EntityLink,
    IEntityNode,
    PassiveEntityGroupNode,
    PassiveEntityNode,
    SystemViewData,
)

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Activity",
    "PassiveEntity",
    "SourceCoordinate",
    "SendOp",
    "ReceiveOp",
    "TraceDataUpdate",
    "EntityRefType",
    "MetaModel",
    # View
    "SystemViewData",
    "EntityLink",
    "IEntityNode",
    "ActivityNode",
    "ActivityGroupNode",
    "PassiveEntityNode",
    "PassiveEntityGroupNode",
    # Errors
    "SequencingError",
]
