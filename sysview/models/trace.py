"""Entity reference model for execution trace data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceCoordinate:
    """A section of a source file."""

    uri: str
    start_line: int
    start_column: int
    char_length: int

    @property
    def location_id(self) -> str:
        """Textual form used to group passive entities by origin."""
        return f"{self.uri}:{self.start_line}:{self.start_column}:{self.char_length}"


@dataclass
class Activity:
    """An active entity of the traced program (actor, thread, task, ...)."""

    id: int
    name: str  # grouping key
    type: int  # activity kind, as announced by the runtime's capabilities
    creation_activity_id: int | None  # None only for the root activity
    running: bool = True


@dataclass
class PassiveEntity:
    """A passive entity (channel, promise, lock, ...) created by an activity."""

    id: int
    type: int
    origin: SourceCoordinate
    creation_activity_id: int


@dataclass
class SendOp:
    """One send operation performed by an activity."""

    type: int
    creation_activity_id: int
    target_id: int  # kind given by the meta-model for this op type


@dataclass
class ReceiveOp:
    """One receive operation performed by an activity."""

    type: int
    creation_activity_id: int
    source_id: int  # kind given by the meta-model for this op type


@dataclass
class TraceDataUpdate:
    """A batch of newly observed trace data."""

    activities: list[Activity] = field(default_factory=list)
    passive_entities: list[PassiveEntity] = field(default_factory=list)
    send_ops: list[SendOp] = field(default_factory=list)
    receive_ops: list[ReceiveOp] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.activities or self.passive_entities or self.send_ops or self.receive_ops
        )
