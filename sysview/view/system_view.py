"""Trace-to-graph aggregation with dynamic grouping.

Trace batches are absorbed into per-entity tables and a message count map
keyed by individual entities. Grouping is applied only when nodes or links
are read, so counts stay exact whatever the current granularity is.
"""

from dataclasses import dataclass

from ..config import ACTIVITY_GROUP_THRESHOLD, PASSIVE_ENTITY_GROUP_THRESHOLD
from ..errors import SequencingError
from ..logging_config import get_logger
from ..models import (
    Activity,
    EntityRefType,
    MetaModel,
    PassiveEntity,
    ReceiveOp,
    SendOp,
    TraceDataUpdate,
)
from .aggregation import NodeKey, SourceTargetCounts
from .groups import GroupTable
from .nodes import ActivityNode, IEntityNode, PassiveEntityNode, seed_position

logger = get_logger(__name__)


@dataclass
class EntityLink:
    """An edge between two visible nodes."""

    source: IEntityNode
    target: IEntityNode
    message_count: int
    creation: bool = False


class SystemViewData:
    """Live system view over streamed trace data."""

    def __init__(self, meta_model: MetaModel | None):
        self._meta_model = meta_model
        self.reset()

    @property
    def meta_model(self) -> MetaModel | None:
        return self._meta_model

    def set_meta_model(self, meta_model: MetaModel) -> None:
        """Replace the meta-model used to resolve later send/receive ops."""
        self._meta_model = meta_model

    def reset(self) -> None:
        """Discard all trace data. The meta-model is kept."""
        self._activities: dict[int, ActivityNode] = {}
        self._activity_groups = GroupTable(
            EntityRefType.ACTIVITY, ACTIVITY_GROUP_THRESHOLD
        )
        self._passive_entities: dict[int, PassiveEntityNode] = {}
        self._passive_groups = GroupTable(
            EntityRefType.PASSIVE_ENTITY, PASSIVE_ENTITY_GROUP_THRESHOLD
        )

        self._messages: SourceTargetCounts[NodeKey] = SourceTargetCounts()
        self._max_message_count = 0
        self._max_link_count = 0

    # Ingestion

    def update_trace_data(self, data: TraceDataUpdate) -> None:
        """
        Absorb a batch of trace data.

        Activities, passive entities, send ops and receive ops are applied
        in that order. The batch is checked first; if any reference cannot
        be resolved a SequencingError is raised and nothing is applied.

        Args:
            data: Newly observed trace data.
        """
        if self._meta_model is None:
            raise SequencingError("Meta-model not yet installed. Is there a race?")

        if data.is_empty():
            logger.debug("Empty trace batch skipped")
            return

        self._check_batch(data)

        for act in data.activities:
            self._add_activity(act)

        for entity in data.passive_entities:
            self._add_passive_entity(entity)

        for send in data.send_ops:
            self._add_message(send)

        for rcv in data.receive_ops:
            self._add_message_rcv(rcv)

        logger.debug(
            "Trace data applied",
            extra={
                "context": {
                    "activities": len(data.activities),
                    "passive_entities": len(data.passive_entities),
                    "send_ops": len(data.send_ops),
                    "receive_ops": len(data.receive_ops),
                }
            },
        )

    def _check_batch(self, data: TraceDataUpdate) -> None:
        new_activities = {act.id for act in data.activities}
        new_entities = {e.id for e in data.passive_entities}

        def require(kind: EntityRefType, entity_id: int) -> None:
            if kind is EntityRefType.ACTIVITY:
                known = entity_id in self._activities or entity_id in new_activities
            elif kind is EntityRefType.PASSIVE_ENTITY:
                known = entity_id in self._passive_entities or entity_id in new_entities
            else:
                raise SequencingError(
                    f"Cannot resolve {kind.value} reference {entity_id}"
                )
            if not known:
                raise SequencingError(f"Unknown {kind.value} {entity_id}")

        for act in data.activities:
            if act.creation_activity_id is not None:
                require(EntityRefType.ACTIVITY, act.creation_activity_id)
        for entity in data.passive_entities:
            require(EntityRefType.ACTIVITY, entity.creation_activity_id)
        for send in data.send_ops:
            require(EntityRefType.ACTIVITY, send.creation_activity_id)
            require(self._meta_model.send_target_kind(send.type), send.target_id)
        for rcv in data.receive_ops:
            require(EntityRefType.ACTIVITY, rcv.creation_activity_id)
            require(self._meta_model.receive_source_kind(rcv.type), rcv.source_id)

    def _add_activity(self, act: Activity) -> None:
        num_groups = len(self._activity_groups)
        group = self._activity_groups.add(act.name, act)
        x, y = seed_position(group.size, num_groups)
        self._activities[act.id] = ActivityNode(act, x, y)

    def _add_passive_entity(self, entity: PassiveEntity) -> None:
        num_groups = len(self._passive_groups)
        group = self._passive_groups.add(entity.origin.location_id, entity)
        x, y = seed_position(group.size, num_groups)
        self._passive_entities[entity.id] = PassiveEntityNode(entity, x, y)

    def _add_message(self, send: SendOp) -> None:
        source = (EntityRefType.ACTIVITY, send.creation_activity_id)
        target = (self._meta_model.send_target_kind(send.type), send.target_id)
        self._count_message(source, target)

    def _add_message_rcv(self, rcv: ReceiveOp) -> None:
        target = (EntityRefType.ACTIVITY, rcv.creation_activity_id)
        source = (self._meta_model.receive_source_kind(rcv.type), rcv.source_id)
        self._count_message(source, target)

    def _count_message(self, source: NodeKey, target: NodeKey) -> None:
        count = self._messages.increment(source, target)
        self._max_message_count = max(self._max_message_count, count)

    # Nodes

    def get_activity_nodes(self) -> list[IEntityNode]:
        """Visible activity nodes; promotes groups over the threshold."""
        return self._visible_nodes(
            self._activities.values(), self._activity_groups, lambda n: n.name
        )

    def get_entity_nodes(self) -> list[IEntityNode]:
        """Visible passive entity nodes; promotes groups over the threshold."""
        return self._visible_nodes(
            self._passive_entities.values(), self._passive_groups, lambda n: n.location_id
        )

    def _visible_nodes(self, nodes, groups: GroupTable, key_of) -> list[IEntityNode]:
        started: set[int] = set()
        result: list[IEntityNode] = []

        for node in nodes:
            group = groups[key_of(node)]
            if groups.over_threshold(group):
                if group.id not in started:
                    started.add(group.id)
                    result.append(group.promote(len(groups)))
            else:
                result.append(node)
        return result

    def _promote_groups(self) -> None:
        self._activity_groups.promote_all()
        self._passive_groups.promote_all()

    def _visible(self, key: NodeKey) -> IEntityNode:
        """Currently visible node for an entity: its group node or itself."""
        kind, entity_id = key
        if kind is EntityRefType.ACTIVITY:
            node = self._activities.get(entity_id)
            if node is None:
                raise SequencingError(f"Unknown activity {entity_id}")
            group = self._activity_groups[node.name]
        elif kind is EntityRefType.PASSIVE_ENTITY:
            node = self._passive_entities.get(entity_id)
            if node is None:
                raise SequencingError(f"Unknown passive_entity {entity_id}")
            group = self._passive_groups[node.location_id]
        else:
            raise SequencingError(f"No nodes for {kind.value}")

        if group.group_node is not None:
            return group.group_node
        return node

    def find_node(self, data_id: str) -> IEntityNode | None:
        """Visible node with the given data id, if any."""
        for node in self.get_activity_nodes() + self.get_entity_nodes():
            if node.data_id == data_id:
                return node
        return None

    # Links

    def get_links(self) -> list[EntityLink]:
        """
        Message and creation links over the currently visible nodes.

        Groups over the threshold are promoted first, so the result does not
        depend on whether the node lists were read before. Link order is
        unspecified.
        """
        self._promote_groups()

        links: list[EntityLink] = []
        self._collect_message_links(links)
        self._collect_creation_links(links)
        return links

    def _collect_message_links(self, links: list[EntityLink]) -> None:
        folded: SourceTargetCounts[IEntityNode] = SourceTargetCounts()

        # fold counts of entities that now share a group node
        for source, target, count in self._messages.items():
            folded.increment(self._visible(source), self._visible(target), count)

        self._max_link_count = folded.max_count()

        for source, target, count in folded.items():
            links.append(
                EntityLink(source=source, target=target, message_count=count, creation=False)
            )

    def _collect_creation_links(self, links: list[EntityLink]) -> None:
        connections: SourceTargetCounts[IEntityNode] = SourceTargetCounts()

        for entity_id, node in self._activities.items():
            creator_id = node.activity.creation_activity_id
            if creator_id is None:
                # root activity, created ex nihilo
                continue
            connections.increment(
                self._visible((EntityRefType.ACTIVITY, creator_id)),
                self._visible((EntityRefType.ACTIVITY, entity_id)),
            )

        for entity_id, node in self._passive_entities.items():
            connections.increment(
                self._visible((EntityRefType.ACTIVITY, node.entity.creation_activity_id)),
                self._visible((EntityRefType.PASSIVE_ENTITY, entity_id)),
            )

        for source, target, count in connections.items():
            links.append(
                EntityLink(source=source, target=target, message_count=count, creation=True)
            )

    def get_max_message_sends(self) -> int:
        """Largest cumulative message count of a single entity pair."""
        return self._max_message_count

    def get_max_link_count(self) -> int:
        """Largest folded message count of the last get_links() call."""
        return self._max_link_count

    def stats(self) -> dict[str, int]:
        """Population and message counters."""
        return {
            "activities": len(self._activities),
            "passive_entities": len(self._passive_entities),
            "activity_groups": len(self._activity_groups),
            "passive_entity_groups": len(self._passive_groups),
            "promoted_groups": sum(
                1
                for table in (self._activity_groups, self._passive_groups)
                for group in table
                if group.group_node is not None
            ),
            "message_pairs": len(self._messages),
            "messages": self._messages.total(),
        }
