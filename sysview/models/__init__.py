"""Trace data models."""

from .meta_model import EntityRefType, MetaModel, ReceiveOpDef, SendOpDef
from .trace import (
    Activity,
    PassiveEntity,
    ReceiveOp,
    SendOp,
    SourceCoordinate,
    TraceDataUpdate,
)

__all__ = [
    # Trace entities
    "Activity",
    "PassiveEntity",
    "SourceCoordinate",
    "SendOp",
    "ReceiveOp",
    "TraceDataUpdate",
    # Meta-model
    "EntityRefType",
    "MetaModel",
    "SendOpDef",
    "ReceiveOpDef",
]
