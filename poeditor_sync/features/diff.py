"""Term diff module - compare local keys with remote terms."""

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, List


@dataclass(frozen=True)
class Difference:
    """Keys to add to and remove from the remote project."""
    insertions: FrozenSet[str] = field(default_factory=frozenset)  # Local only
    removals: FrozenSet[str] = field(default_factory=frozenset)    # Remote only

    @property
    def is_empty(self) -> bool:
        return not self.insertions and not self.removals

    @property
    def total_differences(self) -> int:
        return len(self.insertions) + len(self.removals)

    def sorted_insertions(self) -> List[str]:
        return sorted(self.insertions)

    def sorted_removals(self) -> List[str]:
        return sorted(self.removals)


class TermReconciler:
    """
    Computes the symmetric difference between local and remote key sets.

    No fuzzy matching and no case folding: keys are compared exactly as the
    extractor produced them.
    """

    def diff(self, local: AbstractSet[str], remote: AbstractSet[str]) -> Difference:
        """
        Compute what the remote project needs to match the local keys.

        Args:
            local: Keys declared locally
            remote: Terms currently on the service

        Returns:
            Difference with insertions (local - remote) and removals (remote - local)
        """
        local_set = frozenset(local)
        remote_set = frozenset(remote)

        return Difference(
            insertions=local_set - remote_set,
            removals=remote_set - local_set,
        )
