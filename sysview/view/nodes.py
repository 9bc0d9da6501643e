"""Visual nodes: single entities and groups of entities."""

from typing import TYPE_CHECKING, Protocol

from ..config import COORDINATE_LIMIT, HORIZONTAL_DISTANCE, VERTICAL_DISTANCE
from ..models import Activity, EntityRefType, PassiveEntity
from .ids import code_pane_query, entity_data_id, group_data_id, view_id

if TYPE_CHECKING:
    from .groups import Group


def seed_position(population: int, num_groups: int) -> tuple[float, float]:
    """Initial position: right of earlier group members, one row per group."""
    return (
        HORIZONTAL_DISTANCE + HORIZONTAL_DISTANCE * population,
        VERTICAL_DISTANCE * num_groups,
    )


def _clamp(value: float) -> float:
    if value > COORDINATE_LIMIT:
        return COORDINATE_LIMIT
    if value < -COORDINATE_LIMIT:
        return -COORDINATE_LIMIT
    return value


class IEntityNode(Protocol):
    """A node of the system view, as seen by the layout engine."""

    kind: EntityRefType
    is_group: bool
    x: float
    y: float

    @property
    def data_id(self) -> str:
        """Id used to correlate the node with trace data and the code view."""
        ...

    @property
    def view_id(self) -> str:
        """Id used to bind the node to its graphics element."""
        ...

    def group_size(self) -> int:
        """Number of entities represented by the node."""
        ...

    def query_for_code_pane(self) -> str:
        """Comma-joined ``#id`` tokens of all represented entities."""
        ...


class _PositionedNode:
    """Position holder; coordinates are clamped on every assignment."""

    def __init__(self, x: float, y: float):
        self._x = _clamp(x)
        self._y = _clamp(y)

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._x = _clamp(value)

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._y = _clamp(value)

    @property
    def view_id(self) -> str:
        return view_id(self.data_id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.data_id} size={self.group_size()}>"


class ActivityNode(_PositionedNode):
    """A single activity."""

    kind = EntityRefType.ACTIVITY
    is_group = False

    def __init__(self, activity: Activity, x: float, y: float):
        super().__init__(x, y)
        self.activity = activity

    @property
    def data_id(self) -> str:
        return entity_data_id(self.activity.id)

    @property
    def name(self) -> str:
        return self.activity.name

    @property
    def type(self) -> int:
        return self.activity.type

    @property
    def activity_id(self) -> int:
        return self.activity.id

    def group_size(self) -> int:
        return 1

    def is_running(self) -> bool:
        return self.activity.running

    def query_for_code_pane(self) -> str:
        return code_pane_query([self.activity.id])


class ActivityGroupNode(_PositionedNode):
    """Stand-in for all activities sharing a name.

    The first member is representative for name, type and activity id.
    """

    kind = EntityRefType.ACTIVITY
    is_group = True

    def __init__(self, group: "Group", x: float, y: float):
        super().__init__(x, y)
        self.group = group

    @property
    def data_id(self) -> str:
        return group_data_id(self.kind, self.group.id)

    @property
    def name(self) -> str:
        return self.group.members[0].name

    @property
    def type(self) -> int:
        return self.group.members[0].type

    @property
    def activity_id(self) -> int:
        return self.group.members[0].id

    def group_size(self) -> int:
        return len(self.group.members)

    def is_running(self) -> bool:
        return any(act.running for act in self.group.members)

    def query_for_code_pane(self) -> str:
        return code_pane_query(act.id for act in self.group.members)


class PassiveEntityNode(_PositionedNode):
    """A single passive entity."""

    kind = EntityRefType.PASSIVE_ENTITY
    is_group = False

    def __init__(self, entity: PassiveEntity, x: float, y: float):
        super().__init__(x, y)
        self.entity = entity

    @property
    def data_id(self) -> str:
        return entity_data_id(self.entity.id)

    @property
    def location_id(self) -> str:
        return self.entity.origin.location_id

    @property
    def type(self) -> int:
        return self.entity.type

    def group_size(self) -> int:
        return 1

    def query_for_code_pane(self) -> str:
        return code_pane_query([self.entity.id])


class PassiveEntityGroupNode(_PositionedNode):
    """Stand-in for all passive entities created at one source location."""

    kind = EntityRefType.PASSIVE_ENTITY
    is_group = True

    def __init__(self, group: "Group", x: float, y: float):
        super().__init__(x, y)
        self.group = group

    @property
    def data_id(self) -> str:
        return group_data_id(self.kind, self.group.id)

    @property
    def location_id(self) -> str:
        return self.group.members[0].origin.location_id

    @property
    def type(self) -> int:
        return self.group.members[0].type

    def group_size(self) -> int:
        return len(self.group.members)

    def query_for_code_pane(self) -> str:
        return code_pane_query(e.id for e in self.group.members)
