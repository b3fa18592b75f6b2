"""
Shared fixtures for the unirole tests.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add the unirole package to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from unirole.core.genomes import Feature, Genome
from unirole.core.role_map import Role, RoleMap


ROLE_NAMES = {
    "Role1n1": "Role 1",
    "Role2n1": "Role 2",
    "Role3n1": "Role 3",
    "Role4n1": "Role 4",
    "Role5n1": "Role 5",
    "RoleA": "Role A",
    "RoleB": "Role B",
}


@pytest.fixture(autouse=True)
def reset_logger():
    """Put loguru back on the real stderr after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def role_map():
    return RoleMap(Role(role_id, name) for role_id, name in ROLE_NAMES.items())


@pytest.fixture
def fake_genome():
    """Genome where roles 1 and 2 occur three times and roles 3-5 once."""
    genome = Genome("12345.6", "Bacillus praestrigiae Narnia")
    for peg, function in [
        (1, "Role 1"),
        (2, "Role 2"),
        (3, "Role 3"),
        (4, "Role 4"),
        (5, "Role 5"),
        (6, "Role 6 / Role 1"),
        (7, "Role 2 # comment"),
        (9, "Role 1"),
        (10, "Role 2"),
    ]:
        genome.add_feature(Feature(f"fig|12345.6.peg.{peg}", function))
    return genome
