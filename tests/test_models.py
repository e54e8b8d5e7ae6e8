import pytest

from models import (
    Attribute, DependencySet, FunctionalDependency, InvalidDependency, Relation, format_attributes
)


def fd(left: str, right: str) -> FunctionalDependency:
    return FunctionalDependency(set(left), set(right))


def test_dependency_equality_ignores_construction_order():
    assert FunctionalDependency(["A", "B"], ["C"]) == FunctionalDependency({"B", "A"}, ("C",))
    assert fd("A", "B") != fd("B", "A")


def test_dependency_is_hashable_and_immutable():
    dep = fd("AB", "C")

    assert {dep, fd("BA", "C")} == {dep}
    with pytest.raises(AttributeError):
        dep.determinant = frozenset("X")


def test_triviality():
    assert fd("AB", "A").is_trivial() is True
    assert fd("AB", "AB").is_trivial() is True
    assert fd("A", "").is_trivial() is True
    assert fd("A", "AB").is_trivial() is False


def test_augment_returns_new_dependency():
    dep = fd("A", "B")

    augmented = dep.augment({"C"})

    assert augmented == fd("AC", "BC")
    assert dep == fd("A", "B")
    assert dep.add_to_determinant("D") == fd("AD", "B")
    assert dep.add_to_dependent("D") == fd("A", "BD")


def test_copy_is_equal_but_distinct():
    dep = fd("A", "B")
    copied = dep.copy()

    assert copied == dep
    assert copied is not dep


def test_repr_sorts_attribute_names():
    assert repr(fd("BA", "C")) == "{A, B} → {C}"
    assert format_attributes(set()) == "{}"


def test_dependency_set_deduplicates_and_keeps_order():
    fds = DependencySet([fd("B", "C"), fd("A", "B"), fd("B", "C")])

    assert len(fds) == 2
    assert list(fds) == [fd("B", "C"), fd("A", "B")]

    fds.add(fd("A", "B"))
    assert len(fds) == 2


def test_dependency_set_equality_ignores_order():
    assert DependencySet([fd("A", "B"), fd("B", "C")]) == DependencySet([fd("B", "C"), fd("A", "B")])
    assert DependencySet([fd("A", "B")]) != DependencySet([fd("A", "C")])


def test_dependency_set_attributes_and_projection():
    fds = DependencySet([fd("A", "B"), fd("B", "C"), fd("AB", "D")])

    assert fds.attributes() == frozenset("ABCD")
    assert list(fds.project("AB")) == [fd("A", "B")]
    assert list(fds.project("ABD")) == [fd("A", "B"), fd("AB", "D")]


def test_dependency_set_copy_is_independent():
    fds = DependencySet([fd("A", "B")])
    copied = fds.copy()
    copied.add(fd("B", "C"))

    assert len(fds) == 1
    assert len(copied) == 2


def test_named_attributes_compare_by_name():
    a = Attribute("id", "INTEGER")

    assert a == Attribute("id")
    assert hash(a) == hash(Attribute("id"))
    assert sorted([Attribute("b"), Attribute("a")]) == [Attribute("a"), Attribute("b")]


def test_named_attribute_does_not_order_against_other_types():
    assert Attribute("a").__lt__("b") is NotImplemented
    with pytest.raises(TypeError):
        Attribute("a") < "b"


def test_dependency_set_nontrivial_keeps_order():
    fds = DependencySet([fd("B", "C"), fd("AB", "A"), fd("A", "B")])

    assert fds.nontrivial() == [fd("B", "C"), fd("A", "B")]


def test_relation_freezes_inputs():
    rel = Relation("R", ["A", "B"], [fd("A", "B")])

    assert rel.attributes == frozenset("AB")
    assert isinstance(rel.functional_dependencies, DependencySet)
    assert rel.get_attribute_by_name("B") == "B"
    assert rel.get_attribute_by_name("Z") is None
    assert repr(rel) == "R(A, B)"


def test_invalid_dependency_carries_dependency():
    dep = fd("A", "Z")

    err = InvalidDependency(dep, "AB")

    assert err.dependency == dep
    assert err.unknown_attributes == frozenset("Z")
    assert "{A} → {Z}" in str(err)
