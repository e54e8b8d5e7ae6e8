"""
Алгоритмы для работы с функциональными зависимостями
"""
import logging
from collections import defaultdict
from typing import Dict, Hashable, Iterable, List, Set

from models import (
    AttributeSet, DependencySet, FunctionalDependency, InvalidDependency, attribute_sort_key
)

logger = logging.getLogger(__name__)


class FDAlgorithms:
    """Класс с алгоритмами для работы с функциональными зависимостями"""

    @staticmethod
    def power_set(elements: Iterable[Hashable]) -> List[AttributeSet]:
        """
        Все подмножества множества элементов (включая пустое и само множество)

        Входное множество не изменяется: рекурсия идет по индексу
        в упорядоченной копии элементов. Элементы не обязаны
        быть сравнимыми: порядок задается типом и repr.

        Args:
            elements: Конечное множество хешируемых элементов

        Returns:
            Список из 2^n различных подмножеств в детерминированном порядке
        """
        items = sorted(set(elements), key=attribute_sort_key)

        def subsets_from(index: int) -> List[AttributeSet]:
            if index == len(items):
                return [frozenset()]
            without = subsets_from(index + 1)
            item = items[index]
            return without + [subset | {item} for subset in without]

        return subsets_from(0)

    @staticmethod
    def closure(attributes: Iterable[Hashable], fds: Iterable[FunctionalDependency]) -> AttributeSet:
        """
        Вычисление замыкания множества атрибутов

        Args:
            attributes: Множество атрибутов
            fds: Функциональные зависимости

        Returns:
            Замыкание множества атрибутов
        """
        closure = set(attributes)
        fds = list(fds)
        changed = True

        while changed:
            changed = False
            for fd in fds:
                # Если детерминант ФЗ содержится в замыкании
                if fd.determinant.issubset(closure):
                    # Добавляем зависимые атрибуты
                    new_attrs = fd.dependent - closure
                    if new_attrs:
                        closure.update(new_attrs)
                        changed = True

        return frozenset(closure)

    @staticmethod
    def trivial(fds: Iterable[FunctionalDependency]) -> DependencySet:
        """Левая часть каждой ФЗ определяет любое свое непустое подмножество"""
        result = DependencySet()
        for fd in fds:
            for subset in FDAlgorithms.power_set(fd.determinant):
                if subset:
                    result.add(FunctionalDependency(fd.determinant, subset))
        return result

    @staticmethod
    def reflexive(attributes: Iterable[Hashable]) -> DependencySet:
        """Тривиальные ФЗ X → S для всех непустых S ⊆ X ⊆ attributes"""
        result = DependencySet()
        for subset in FDAlgorithms.power_set(attributes):
            if subset:
                result.update(FDAlgorithms.trivial([FunctionalDependency(subset, subset)]))
        return result

    @staticmethod
    def augment(fds: Iterable[FunctionalDependency], attributes: Iterable[Hashable]) -> DependencySet:
        """Пополнение каждой ФЗ множеством attributes"""
        attributes = frozenset(attributes)
        return DependencySet(fd.augment(attributes) for fd in fds)

    @staticmethod
    def transitive(fds: Iterable[FunctionalDependency]) -> DependencySet:
        """
        Все ФЗ, выводимые по транзитивности, до неподвижной точки

        Returns:
            Множество транзитивных ФЗ (без исходных, если они не выводятся заново)
        """
        fds = DependencySet(fds)
        result = DependencySet()

        while True:
            last = len(result)
            union = fds.copy()
            union.update(result)

            by_determinant: Dict[AttributeSet, List[FunctionalDependency]] = defaultdict(list)
            for fd in union:
                by_determinant[fd.determinant].append(fd)

            # α: L1 → R1, β: L2 → R2, где L2 ⊆ R1
            for alpha in union:
                for left in FDAlgorithms.power_set(alpha.dependent):
                    for beta in by_determinant.get(left, ()):
                        if alpha != beta:
                            result.add(FunctionalDependency(alpha.determinant, beta.dependent))

            if len(result) == last:
                return result

    @staticmethod
    def fd_set_closure(fds: Iterable[FunctionalDependency]) -> DependencySet:
        """
        Замыкание множества ФЗ (F+) по аксиомам Армстронга

        Правила применяются раундами, пока множество растет. Стоимость
        экспоненциальна по числу атрибутов, подходит для небольших схем.

        Args:
            fds: Множество функциональных зависимостей

        Returns:
            Новое множество со всеми выводимыми ФЗ с непустой правой частью
        """
        current = DependencySet(fds)
        universe = current.attributes()
        universe_subsets = FDAlgorithms.power_set(universe)
        current.update(FDAlgorithms.reflexive(universe))

        rounds = 0
        while True:
            last = len(current)
            snapshot = current.copy()

            for attrs in universe_subsets:
                current.update(FDAlgorithms.augment(snapshot, attrs))
            current.update(FDAlgorithms.trivial(current))
            current.update(FDAlgorithms.transitive(current))

            rounds += 1
            logger.debug("F+ раунд %d: %d -> %d ФЗ", rounds, last, len(current))
            if len(current) == last:
                return current

    @staticmethod
    def validate(relation: Iterable[Hashable], fds: Iterable[FunctionalDependency]) -> None:
        """
        Проверка, что все ФЗ ссылаются только на атрибуты отношения

        Raises:
            InvalidDependency: первая ФЗ с посторонними атрибутами
        """
        relation = frozenset(relation)
        for fd in fds:
            if not fd.attributes() <= relation:
                raise InvalidDependency(fd, relation)

    @staticmethod
    def find_superkeys(relation: Iterable[Hashable], fds: Iterable[FunctionalDependency],
                       validate: bool = True) -> Set[AttributeSet]:
        """
        Найти все суперключи отношения (не только минимальные)

        Args:
            relation: Атрибуты отношения
            fds: Функциональные зависимости над этими атрибутами
            validate: Проверять ли ФЗ на посторонние атрибуты

        Returns:
            Множество подмножеств relation, замыкание которых равно relation
        """
        relation = frozenset(relation)
        fds = list(fds)
        if validate:
            FDAlgorithms.validate(relation, fds)

        return {
            candidate for candidate in FDAlgorithms.power_set(relation)
            if FDAlgorithms.closure(candidate, fds) == relation
        }

    @staticmethod
    def is_superkey(attributes: Iterable[Hashable], relation: Iterable[Hashable],
                    fds: Iterable[FunctionalDependency]) -> bool:
        """Проверка, является ли множество атрибутов суперключом"""
        return FDAlgorithms.closure(attributes, fds) == frozenset(relation)

    @staticmethod
    def find_candidate_keys(relation: Iterable[Hashable],
                            fds: Iterable[FunctionalDependency]) -> List[AttributeSet]:
        """
        Найти все потенциальные (минимальные) ключи отношения

        Returns:
            Ключи, упорядоченные по размеру и именам атрибутов
        """
        return FDAlgorithms.minimal_keys(FDAlgorithms.find_superkeys(relation, fds))

    @staticmethod
    def minimal_keys(superkeys: Iterable[AttributeSet]) -> List[AttributeSet]:
        """Минимальные по включению суперключи"""
        superkeys = set(superkeys)
        keys = [key for key in superkeys if not any(other < key for other in superkeys)]
        return sorted(keys, key=lambda key: (len(key), sorted(str(attr) for attr in key)))
