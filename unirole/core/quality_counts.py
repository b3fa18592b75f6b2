"""
Good/bad occurrence counting keyed by arbitrary hashable objects.
"""

from typing import Dict, Generic, Hashable, Iterator, List, TypeVar

K = TypeVar("K", bound=Hashable)


class QualityCountMap(Generic[K]):
    """
    Keeps two parallel counters per key: a "good" count and a "bad" count.

    Keys are registered the first time either counter is touched, and the
    registration order is used to break ties when ranking keys.
    """

    def __init__(self):
        # key -> [good, bad]; dict order is the registration order
        self._counts: Dict[K, List[int]] = {}

    def _entry(self, key: K) -> List[int]:
        entry = self._counts.get(key)
        if entry is None:
            entry = [0, 0]
            self._counts[key] = entry
        return entry

    def good(self, key: K) -> int:
        """Return the good count for a key (0 if never seen)."""
        entry = self._counts.get(key)
        return entry[0] if entry else 0

    def bad(self, key: K) -> int:
        """Return the bad count for a key (0 if never seen)."""
        entry = self._counts.get(key)
        return entry[1] if entry else 0

    def set_good(self, key: K, count: int = 1) -> None:
        """
        Record good occurrences for a key.

        Args:
            key: Key to credit
            count: Number of good occurrences to add (must be positive)
        """
        if count < 1:
            raise ValueError(f"Good count increment must be positive, got {count}")
        self._entry(key)[0] += count

    def set_bad(self, key: K, count: int = 1) -> None:
        """
        Record bad occurrences for a key.

        Args:
            key: Key to penalize
            count: Number of bad occurrences to add (must be positive)
        """
        if count < 1:
            raise ValueError(f"Bad count increment must be positive, got {count}")
        self._entry(key)[1] += count

    def size(self) -> int:
        """Return the number of distinct keys touched so far."""
        return len(self._counts)

    def keys(self) -> List[K]:
        """Return the registered keys in registration order."""
        return list(self._counts)

    def best_keys(self) -> List[K]:
        """
        Return all registered keys, best first.

        Keys are ordered by good count descending, then bad count ascending.
        The sort is stable, so remaining ties keep registration order.
        """
        return sorted(self._counts, key=lambda k: (-self._counts[k][0], self._counts[k][1]))

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[K]:
        return iter(self._counts)
