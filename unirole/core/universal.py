"""
Universal role counting.

A role that occurs exactly once in a genome earns a good count for that
genome, and a role that occurs more than once earns a bad count. Roles
that are singly-occurring in a large enough fraction of the genomes are
the universal roles.
"""

import math
from collections import Counter
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from .genomes import Genome
from .quality_counts import QualityCountMap
from .role_map import Role, RoleMap
from .snapshot import CounterSnapshot, RoleCounts, read_snapshot, write_snapshot


class UniversalRoleCounter:
    """
    Counts good and bad occurrences of the roles of interest across genomes.
    """

    def __init__(self, role_map: Optional[RoleMap] = None):
        """
        Initialize the counter.

        Args:
            role_map: Registry of the roles of interest
        """
        self.role_map = role_map if role_map is not None else RoleMap()
        self.counts: QualityCountMap[Role] = QualityCountMap()
        self.genome_count = 0

    def count(self, genome: Genome) -> None:
        """
        Fold one genome's role occurrences into the counts.

        Args:
            genome: Genome whose features are to be counted
        """
        profile: Counter = Counter()
        for feature in genome:
            profile.update(feature.useful_roles(self.role_map))

        for role, occurrences in profile.items():
            if occurrences == 1:
                self.counts.set_good(role)
            elif occurrences > 1:
                self.counts.set_bad(role)

        self.genome_count += 1
        logger.debug(f"Counted {len(profile)} roles in genome {genome}")

    def good(self, role: Role) -> int:
        return self.counts.good(role)

    def bad(self, role: Role) -> int:
        return self.counts.bad(role)

    def best_keys(self) -> List[Role]:
        return self.counts.best_keys()

    def get_counted(self) -> int:
        """Return the number of genomes counted."""
        return self.genome_count

    def get_role(self, role_id: str) -> Optional[Role]:
        """Return the registered role with the given ID, or None."""
        return self.role_map.get(role_id)

    def universals(self, threshold: float) -> List[Role]:
        """
        Return the roles singly-occurring in at least the threshold fraction of genomes.

        When threshold * genome count is a whole number, a role needs exactly that
        many good occurrences; otherwise it needs more than the truncated product.

        Args:
            threshold: Minimum acceptable fraction (0 to 1)

        Returns:
            Qualifying roles, best first
        """
        if self.genome_count == 0:
            logger.warning("No genomes counted; universal role selection is degenerate")
        min_d = threshold * self.genome_count
        min_f = math.floor(min_d)
        minimum = int(min_f) - 1 if min_d == min_f else int(min_f)
        return [role for role in self.counts.best_keys() if self.counts.good(role) > minimum]

    def score(self, role: Role) -> float:
        """
        Return the fraction of counted genomes in which the role occurs singly.

        Returns NaN if no genomes have been counted.
        """
        if self.genome_count == 0:
            logger.warning(f"Cannot score role {role.id}: no genomes counted")
            return float("nan")
        return self.counts.good(role) / self.genome_count

    def to_snapshot(self) -> CounterSnapshot:
        """Capture the counter state, including roles never counted."""
        return CounterSnapshot(
            genome_count=self.genome_count,
            roles=[
                RoleCounts(role.id, role.name, self.counts.good(role), self.counts.bad(role))
                for role in self.role_map.values()
            ],
        )

    @classmethod
    def from_snapshot(cls, snapshot: CounterSnapshot) -> "UniversalRoleCounter":
        """Rebuild a counter from a snapshot."""
        counter = cls(RoleMap())
        counter.genome_count = snapshot.genome_count
        for entry in snapshot.roles:
            role = Role(entry.role_id, entry.role_name)
            counter.role_map.register(role)
            if entry.good > 0:
                counter.counts.set_good(role, entry.good)
            if entry.bad > 0:
                counter.counts.set_bad(role, entry.bad)
        return counter

    def save(self, out_file: Union[str, Path]) -> None:
        """
        Save the counter to a binary snapshot file.

        Args:
            out_file: Destination file
        """
        write_snapshot(self.to_snapshot(), out_file)
        logger.info(f"Saved counts for {len(self.role_map)} roles over {self.genome_count} genomes to {out_file}")

    @classmethod
    def load(cls, in_file: Union[str, Path]) -> "UniversalRoleCounter":
        """
        Load a counter from a binary snapshot file.

        Args:
            in_file: Snapshot file written by save()

        Returns:
            Counter with the saved state
        """
        counter = cls.from_snapshot(read_snapshot(in_file))
        logger.info(f"Loaded counts for {len(counter.role_map)} roles over {counter.genome_count} genomes from {in_file}")
        return counter
