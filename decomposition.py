"""
Модуль с алгоритмом декомпозиции отношения в НФБК
"""
import logging
from typing import Hashable, Iterable, List, Set, Tuple

from models import (
    AttributeSet, DecompositionStep, FunctionalDependency, NormalizationResult, Relation
)
from fd_algorithms import FDAlgorithms
from analyzer import NormalFormAnalyzer

logger = logging.getLogger(__name__)


class Decomposer:
    """Класс для выполнения декомпозиции отношений"""

    @staticmethod
    def decompose_to_bcnf(relation: Relation) -> NormalizationResult:
        """
        Декомпозиция отношения в нормальную форму Бойса-Кодда

        ФЗ проверяются на посторонние атрибуты один раз, до рекурсии.

        Raises:
            InvalidDependency: ФЗ ссылается на атрибуты вне отношения
        """
        FDAlgorithms.validate(relation.attributes, relation.functional_dependencies)

        steps: List[DecompositionStep] = []
        final_relations: List[Relation] = []
        Decomposer._split(relation, steps, final_relations)

        # Проверяем сохранение зависимостей
        preserved, lost = Decomposer._check_dependency_preservation(
            relation.functional_dependencies,
            final_relations
        )

        return NormalizationResult(
            original_relation=relation,
            decomposed_relations=final_relations,
            steps=steps,
            preserved_dependencies=preserved,
            lost_dependencies=lost
        )

    @staticmethod
    def _split(relation: Relation, steps: List[DecompositionStep], final_relations: List[Relation]) -> None:
        analyzer = NormalFormAnalyzer(relation, validate=False)
        violations = analyzer.violating_dependencies()

        if not violations:
            # Отношение в НФБК
            if all(rel.attributes != relation.attributes for rel in final_relations):
                final_relations.append(relation)
            return

        violating_fd = violations[0]

        # R1: детерминант + зависимые атрибуты
        r1_attrs = violating_fd.determinant | violating_fd.dependent
        # R2: детерминант + остальные атрибуты
        r2_attrs = violating_fd.determinant | (relation.attributes - violating_fd.dependent)

        # F+ проецируется на обе схемы целиком, до рекурсивных вызовов
        closure = FDAlgorithms.fd_set_closure(relation.functional_dependencies)
        r1 = Relation(f"{relation.name}_1", r1_attrs, closure.project(r1_attrs))
        r2 = Relation(f"{relation.name}_2", r2_attrs, closure.project(r2_attrs))

        steps.append(DecompositionStep(
            original_relation=relation,
            resulting_relations=[r1, r2],
            reason=f"Устранение нарушения НФБК: {violating_fd}",
            violated_dependency=violating_fd
        ))
        logger.debug("Декомпозиция %s по %s: %s, %s", relation, violating_fd, r1, r2)

        Decomposer._split(r1, steps, final_relations)
        Decomposer._split(r2, steps, final_relations)

    @staticmethod
    def _check_dependency_preservation(
            original_fds: Iterable[FunctionalDependency],
            decomposed_relations: List[Relation]
    ) -> Tuple[List[FunctionalDependency], List[FunctionalDependency]]:
        """
        Проверить сохранение функциональных зависимостей после декомпозиции
        """
        preserved = []
        lost = []

        # Собираем все ФЗ из декомпозированных отношений
        all_decomposed_fds = []
        for rel in decomposed_relations:
            all_decomposed_fds.extend(rel.functional_dependencies)

        # Проверяем каждую исходную ФЗ
        for fd in original_fds:
            closure = FDAlgorithms.closure(fd.determinant, all_decomposed_fds)

            if fd.dependent.issubset(closure):
                preserved.append(fd)
            else:
                lost.append(fd)

        return preserved, lost


def bcnf_decompose(relation: Iterable[Hashable], fds: Iterable[FunctionalDependency]) -> Set[AttributeSet]:
    """
    Декомпозиция схемы в НФБК

    Args:
        relation: Атрибуты отношения
        fds: Функциональные зависимости над ними

    Returns:
        Множество схем, каждая из которых в НФБК
    """
    return Decomposer.decompose_to_bcnf(Relation("R", relation, fds)).schemas()
