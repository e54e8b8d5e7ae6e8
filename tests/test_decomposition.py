import random

import pytest

from models import Attribute, FunctionalDependency, InvalidDependency, Relation
from analyzer import NormalFormAnalyzer, is_bcnf
from decomposition import Decomposer, bcnf_decompose


def fd(left: str, right: str) -> FunctionalDependency:
    return FunctionalDependency(set(left), set(right))


CHAIN = [fd("A", "B"), fd("B", "C")]


def test_chain_splits_on_violating_dependency():
    assert bcnf_decompose("ABC", CHAIN) == {frozenset("BC"), frozenset("AB")}


def test_relation_without_dependencies_is_kept():
    assert bcnf_decompose("AB", []) == {frozenset("AB")}


def test_empty_relation():
    assert bcnf_decompose(set(), []) == {frozenset()}


def test_bcnf_relation_is_returned_unchanged():
    fds = [fd("A", "BC")]

    assert is_bcnf("ABC", fds) is True
    assert bcnf_decompose("ABC", fds) == {frozenset("ABC")}


def test_decomposition_trace_of_chain():
    result = Decomposer.decompose_to_bcnf(Relation("R", "ABC", CHAIN))

    assert [rel.name for rel in result.decomposed_relations] == ["R_1", "R_2"]
    assert len(result.steps) == 1
    assert result.steps[0].violated_dependency == fd("B", "C")
    assert result.preserved_dependencies == CHAIN
    assert result.lost_dependencies == []
    assert result.is_lossless() is True
    assert "Исходное отношение: R(A, B, C)" in result.get_summary()


def test_bcnf_may_lose_dependencies():
    fds = [fd("AB", "C"), fd("C", "B")]

    result = Decomposer.decompose_to_bcnf(Relation("R", "ABC", fds))

    assert result.schemas() == {frozenset("BC"), frozenset("AC")}
    assert result.lost_dependencies == [fd("AB", "C")]
    assert result.is_lossless() is True


def test_nested_split():
    fds = [fd("A", "B"), fd("B", "C"), fd("C", "D")]

    result = Decomposer.decompose_to_bcnf(Relation("R", "ABCD", fds))

    assert len(result.steps) >= 2
    assert frozenset().union(*result.schemas()) == frozenset("ABCD")
    for rel in result.decomposed_relations:
        assert NormalFormAnalyzer(rel).is_bcnf()


def test_decomposition_properties_on_random_schemas():
    rng = random.Random(5)
    attrs = "ABCD"
    for _ in range(8):
        fds = []
        for _ in range(rng.randint(1, 3)):
            left = rng.sample(attrs, rng.randint(1, 2))
            right = rng.sample(attrs, rng.randint(1, 2))
            fds.append(FunctionalDependency(left, right))

        result = Decomposer.decompose_to_bcnf(Relation("R", attrs, fds))

        assert frozenset().union(*result.schemas()) == frozenset(attrs)
        assert result.is_lossless()
        for rel in result.decomposed_relations:
            assert NormalFormAnalyzer(rel).is_bcnf()


def test_decomposition_is_deterministic():
    fds = [fd("A", "B"), fd("C", "D"), fd("B", "D")]

    first = Decomposer.decompose_to_bcnf(Relation("R", "ABCD", fds))
    second = Decomposer.decompose_to_bcnf(Relation("R", "ABCD", fds))

    assert [s.reason for s in first.steps] == [s.reason for s in second.steps]
    assert first.schemas() == second.schemas()


def test_named_attributes():
    emp, dept, budget = Attribute("emp_id", "INTEGER"), Attribute("dept"), Attribute("budget")
    fds = [FunctionalDependency({emp}, {dept}), FunctionalDependency({dept}, {budget})]

    assert bcnf_decompose({emp, dept, budget}, fds) == {
        frozenset({dept, budget}), frozenset({emp, dept}),
    }


def test_mixed_type_attributes():
    fds = [FunctionalDependency({1}, {"b"}), FunctionalDependency({"b"}, {3})]

    assert is_bcnf({1, "b", 3}, fds) is False
    assert bcnf_decompose({1, "b", 3}, fds) == {frozenset({"b", 3}), frozenset({1, "b"})}


def test_unknown_attribute_is_rejected():
    with pytest.raises(InvalidDependency) as excinfo:
        bcnf_decompose("AB", [fd("A", "B"), fd("B", "C")])

    assert excinfo.value.dependency == fd("B", "C")
