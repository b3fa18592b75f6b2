"""
Core modules for universal role counting.
"""

from .quality_counts import QualityCountMap
from .role_map import Role, RoleMap
from .genomes import Feature, Genome, GenomeDirectory
from .snapshot import CounterSnapshot, RoleCounts, SnapshotError
from .universal import UniversalRoleCounter
from .report import build_report, write_report

__all__ = [
    "QualityCountMap",
    "Role",
    "RoleMap",
    "Feature",
    "Genome",
    "GenomeDirectory",
    "CounterSnapshot",
    "RoleCounts",
    "SnapshotError",
    "UniversalRoleCounter",
    "build_report",
    "write_report"
]
