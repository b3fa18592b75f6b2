"""
Tests for universal role counting and selection.
"""

import math

import pytest

from unirole.core.genomes import Feature, Genome
from unirole.core.role_map import Role, RoleMap
from unirole.core.universal import UniversalRoleCounter


def test_counter(role_map, fake_genome):
    role1, role2, role3, role4, role5, role_a, role_b = (
        role_map.get(role_id) for role_id in
        ["Role1n1", "Role2n1", "Role3n1", "Role4n1", "Role5n1", "RoleA", "RoleB"]
    )
    counter = UniversalRoleCounter(role_map)
    assert counter.get_role("RoleB") is role_b

    counter.count(fake_genome)
    assert counter.get_counted() == 1
    assert counter.universals(0.60) == [role3, role4, role5]
    assert counter.score(role2) == 0.0

    fake_genome.add_feature(Feature("fig|12345.6.peg.8", "Role 3"))
    counter.count(fake_genome)
    assert counter.universals(0.60) == [role4, role5]
    assert (counter.good(role1), counter.bad(role1)) == (0, 2)
    assert counter.score(role1) == pytest.approx(0.0)
    assert (counter.good(role2), counter.bad(role2)) == (0, 2)
    assert (counter.good(role3), counter.bad(role3)) == (1, 1)
    assert counter.score(role3) == pytest.approx(0.5)

    fake_genome.add_feature(Feature("fig|12345.6.peg.11", "Role 4"))
    counter.count(fake_genome)
    assert counter.universals(0.60) == [role5, role4]
    assert (counter.good(role4), counter.bad(role4)) == (2, 1)
    assert counter.score(role4) == pytest.approx(0.667, abs=0.001)
    assert (counter.good(role_a), counter.bad(role_a)) == (0, 0)
    assert counter.score(role_a) == pytest.approx(0.0)


def test_bad_counts_once_per_genome(role_map):
    role1 = role_map.get("Role1n1")
    genome = Genome("1.1", features=[Feature(f"f{i}", "Role 1") for i in range(5)])
    counter = UniversalRoleCounter(role_map)
    counter.count(genome)
    assert counter.good(role1) == 0
    assert counter.bad(role1) == 1


def test_absent_role_gets_no_credit(role_map):
    counter = UniversalRoleCounter(role_map)
    counter.count(Genome("1.1", features=[Feature("f1", "Role 3")]))
    role_a = role_map.get("RoleA")
    assert counter.good(role_a) == 0
    assert counter.bad(role_a) == 0
    assert role_a not in counter.best_keys()


def test_unregistered_roles_ignored(role_map):
    counter = UniversalRoleCounter(role_map)
    counter.count(Genome("1.1", features=[Feature("f1", "Role 6"), Feature("f2", "")]))
    assert counter.get_counted() == 1
    assert counter.best_keys() == []


def _counter_with_goods(goods, genome_count):
    """Build a counter whose roles R0, R1, ... have the given good counts."""
    roles = [Role(f"R{i}", f"role {i}") for i in range(len(goods))]
    counter = UniversalRoleCounter(RoleMap(roles))
    for i in range(genome_count):
        features = [Feature(f"f{j}", role.name) for j, role in enumerate(roles) if goods[j] > i]
        counter.count(Genome(f"g{i}", features=features))
    return counter, roles


def test_threshold_exact_boundary():
    counter, roles = _counter_with_goods([3, 2], 5)
    # 0.6 * 5 is exactly 3, so three good genomes qualify and two do not
    assert counter.universals(0.6) == [roles[0]]


def test_threshold_fractional_boundary():
    counter, roles = _counter_with_goods([4, 3, 2], 5)
    # 0.7 * 5 = 3.5 truncates to 3; a role needs more than 3
    assert counter.universals(0.7) == [roles[0]]


def test_threshold_zero_accepts_all_touched_roles():
    counter, roles = _counter_with_goods([2, 1, 0], 2)
    assert counter.universals(0.0) == [roles[0], roles[1]]


def test_threshold_one_requires_every_genome():
    counter, roles = _counter_with_goods([4, 3], 4)
    assert counter.universals(1.0) == [roles[0]]


def test_universals_subsequence_of_best_keys(role_map, fake_genome):
    counter = UniversalRoleCounter(role_map)
    counter.count(fake_genome)
    fake_genome.add_feature(Feature("fig|12345.6.peg.8", "Role 3"))
    counter.count(fake_genome)
    best = counter.best_keys()
    for threshold in (0.0, 0.3, 0.5, 0.75, 1.0):
        selected = counter.universals(threshold)
        positions = [best.index(role) for role in selected]
        assert positions == sorted(positions)


def test_empty_counter(role_map):
    counter = UniversalRoleCounter(role_map)
    assert counter.get_counted() == 0
    assert counter.universals(0.5) == []
    assert math.isnan(counter.score(role_map.get("Role1n1")))


def test_get_role_missing(role_map):
    counter = UniversalRoleCounter(role_map)
    assert counter.get_role("NoSuchRole") is None
