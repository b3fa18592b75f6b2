"""
unirole - find the functional roles that occur exactly once in most genomes,
candidates for universal phylogenetic marker roles.
"""

__version__ = "1.0.0"

from .core.quality_counts import QualityCountMap
from .core.role_map import Role, RoleMap
from .core.genomes import Feature, Genome, GenomeDirectory
from .core.universal import UniversalRoleCounter

__all__ = [
    "QualityCountMap",
    "Role",
    "RoleMap",
    "Feature",
    "Genome",
    "GenomeDirectory",
    "UniversalRoleCounter"
]
