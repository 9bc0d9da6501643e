"""Source -> target -> count maps used for message and creation edges."""

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

from ..models import EntityRefType

K = TypeVar("K", bound=Hashable)

# Arena key of an individual entity node: (kind, entity id)
NodeKey = tuple[EntityRefType, int]


class SourceTargetCounts(Generic[K]):
    """Two-level map of cumulative counts. Counts only ever grow."""

    def __init__(self) -> None:
        self._counts: dict[K, dict[K, int]] = {}

    def increment(self, source: K, target: K, inc: int = 1) -> int:
        """Add inc to the (source, target) count and return the new count."""
        targets = self._counts.setdefault(source, {})
        count = targets.get(target, 0) + inc
        targets[target] = count
        return count

    def items(self) -> Iterator[tuple[K, K, int]]:
        for source, targets in self._counts.items():
            for target, count in targets.items():
                yield source, target, count

    def total(self) -> int:
        return sum(count for _, _, count in self.items())

    def max_count(self) -> int:
        return max((count for _, _, count in self.items()), default=0)

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._counts.values())
