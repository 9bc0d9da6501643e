"""System view: trace aggregation and dynamic grouping."""

from .aggregation import NodeKey, SourceTargetCounts
from .groups import Group, GroupTable
from .nodes import (
    ActivityGroupNode,
    ActivityNode,
    IEntityNode,
    PassiveEntityGroupNode,
    PassiveEntityNode,
)
from .system_view import EntityLink, SystemViewData

__all__ = [
    "SystemViewData",
    "EntityLink",
    "IEntityNode",
    "ActivityNode",
    "ActivityGroupNode",
    "PassiveEntityNode",
    "PassiveEntityGroupNode",
    "Group",
    "GroupTable",
    "NodeKey",
    "SourceTargetCounts",
]
