"""Meta-model: which kind of entity each send/receive operation refers to."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import SequencingError


class EntityRefType(str, Enum):
    """Kinds of entities an operation can refer to."""

    ACTIVITY = "activity"
    PASSIVE_ENTITY = "passive_entity"
    DYNAMIC_SCOPE = "dynamic_scope"


@dataclass
class SendOpDef:
    """Capabilities entry for a send operation."""

    marker: int
    target: int  # entity type id of the target


@dataclass
class ReceiveOpDef:
    """Capabilities entry for a receive operation."""

    marker: int
    source: int  # entity type id of the source


@dataclass
class MetaModel:
    """Resolves send/receive op types to the kind of their counterpart."""

    send_ops: dict[int, EntityRefType] = field(default_factory=dict)
    receive_ops: dict[int, EntityRefType] = field(default_factory=dict)

    def send_target_kind(self, op_type: int) -> EntityRefType:
        """Kind of the target of a send op."""
        try:
            return self.send_ops[op_type]
        except KeyError:
            raise SequencingError(f"Unknown send op type: {op_type}") from None

    def receive_source_kind(self, op_type: int) -> EntityRefType:
        """Kind of the source of a receive op."""
        try:
            return self.receive_ops[op_type]
        except KeyError:
            raise SequencingError(f"Unknown receive op type: {op_type}") from None

    @classmethod
    def from_definitions(
        cls,
        entity_kinds: dict[int, EntityRefType],
        send_ops: list[SendOpDef],
        receive_ops: list[ReceiveOpDef],
    ) -> "MetaModel":
        """Build the lookup from op definitions and a type-id -> kind table."""
        meta_model = cls()
        for op in send_ops:
            meta_model.send_ops[op.marker] = _kind_of(entity_kinds, op.target)
        for op in receive_ops:
            meta_model.receive_ops[op.marker] = _kind_of(entity_kinds, op.source)
        return meta_model

    @classmethod
    def from_capabilities(cls, capabilities: dict[str, Any]) -> "MetaModel":
        """
        Build the meta-model from a runtime's server capabilities.

        Args:
            capabilities: Mapping with ``activities``, ``passiveEntities`` and
                ``dynamicScopes`` entity definitions (each with an ``id``) and
                ``sendOps`` / ``receiveOps`` operation definitions.

        Returns:
            MetaModel resolving each op marker to its counterpart's kind.
        """
        entity_kinds: dict[int, EntityRefType] = {}
        for key, kind in (
            ("activities", EntityRefType.ACTIVITY),
            ("passiveEntities", EntityRefType.PASSIVE_ENTITY),
            ("dynamicScopes", EntityRefType.DYNAMIC_SCOPE),
        ):
            for definition in capabilities.get(key, []):
                entity_kinds[int(definition["id"])] = kind

        send_ops = [
            SendOpDef(marker=int(op["marker"]), target=int(op["target"]))
            for op in capabilities.get("sendOps", [])
        ]
        receive_ops = [
            ReceiveOpDef(marker=int(op["marker"]), source=int(op["source"]))
            for op in capabilities.get("receiveOps", [])
        ]
        return cls.from_definitions(entity_kinds, send_ops, receive_ops)


def _kind_of(entity_kinds: dict[int, EntityRefType], type_id: int) -> EntityRefType:
    if type_id not in entity_kinds:
        raise SequencingError(f"Entity type {type_id} is not declared in capabilities")
    return entity_kinds[type_id]
