"""Identifiers used to bind nodes to graphics and to the code view."""

from collections.abc import Iterable

from ..models import EntityRefType

_GROUP_PREFIX = {
    EntityRefType.ACTIVITY: "ag",
    EntityRefType.PASSIVE_ENTITY: "pg",
}


def entity_data_id(entity_id: int) -> str:
    return f"e{entity_id}"


def group_data_id(kind: EntityRefType, group_id: int) -> str:
    # activity and passive group ids both start at 0
    return f"{_GROUP_PREFIX[kind]}{group_id}"


def view_id(data_id: str) -> str:
    """Visualization id, kept apart from the data id namespace."""
    return f"sv-{data_id}"


def code_pane_query(entity_ids: Iterable[int]) -> str:
    """Query selecting the given entities in the code view, e.g. ``#e1,#e4``."""
    return ",".join("#" + entity_data_id(i) for i in entity_ids)
