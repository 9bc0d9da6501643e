"""Grouping tables: entities of one kind keyed by name or source location."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from ..errors import SequencingError
from ..logging_config import get_logger
from ..models import Activity, EntityRefType, PassiveEntity
from .nodes import ActivityGroupNode, PassiveEntityGroupNode, seed_position

logger = get_logger(__name__)

GroupNode = ActivityGroupNode | PassiveEntityGroupNode


@dataclass(eq=False)
class Group:
    """Entities sharing a grouping key, in arrival order."""

    id: int
    kind: EntityRefType
    members: list[Activity | PassiveEntity] = field(default_factory=list)
    group_node: GroupNode | None = None

    @property
    def size(self) -> int:
        return len(self.members)

    def promote(self, num_groups: int) -> GroupNode:
        """Create the group node on first call; later calls return the same node."""
        if self.group_node is None:
            x, y = seed_position(self.size, num_groups)
            if self.kind is EntityRefType.ACTIVITY:
                self.group_node = ActivityGroupNode(self, x, y)
            elif self.kind is EntityRefType.PASSIVE_ENTITY:
                self.group_node = PassiveEntityGroupNode(self, x, y)
            else:
                raise SequencingError(f"No group nodes for {self.kind.value}")
            logger.debug(
                "Group promoted: %s with %d members",
                self.group_node.data_id,
                self.size,
            )
        return self.group_node


class GroupTable:
    """Key -> Group map for one entity kind. It never shrinks."""

    def __init__(self, kind: EntityRefType, threshold: int):
        self.kind = kind
        self.threshold = threshold
        self._groups: dict[str, Group] = {}

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(self._groups.values())

    def __getitem__(self, key: str) -> Group:
        return self._groups[key]

    def add(self, key: str, member: Activity | PassiveEntity) -> Group:
        """Append a member to the group for key, creating the group if needed."""
        group = self._groups.get(key)
        if group is None:
            # ids are dense, in creation order
            group = Group(id=len(self._groups), kind=self.kind)
            self._groups[key] = group
        group.members.append(member)
        return group

    def over_threshold(self, group: Group) -> bool:
        return group.size > self.threshold

    def promote_all(self) -> list[GroupNode]:
        """Promote every group whose population exceeds the threshold."""
        return [
            group.promote(len(self._groups))
            for group in self._groups.values()
            if self.over_threshold(group)
        ]
