"""
Модуль для анализа отношения на соответствие НФБК
"""
from typing import Hashable, Iterable, List, Tuple

from models import AttributeSet, FunctionalDependency, Relation, format_attributes
from fd_algorithms import FDAlgorithms


class NormalFormAnalyzer:
    """Класс для анализа нормальной формы Бойса-Кодда"""

    def __init__(self, relation: Relation, validate: bool = True):
        self.relation = relation
        # Проверка ФЗ выполняется здесь, при поиске суперключей
        self.superkeys = FDAlgorithms.find_superkeys(
            relation.attributes, relation.functional_dependencies, validate=validate
        )
        self.candidate_keys = FDAlgorithms.minimal_keys(self.superkeys)
        self.prime_attributes = self._find_prime_attributes()
        self.non_prime_attributes = self.relation.get_all_attributes_set() - self.prime_attributes

    def _find_prime_attributes(self) -> AttributeSet:
        """Найти простые атрибуты (входящие хотя бы в один ключ)"""
        prime_attrs = set()
        for key in self.candidate_keys:
            prime_attrs.update(key)
        return frozenset(prime_attrs)

    def violating_dependencies(self) -> List[FunctionalDependency]:
        """Нетривиальные ФЗ, детерминант которых не суперключ, в порядке добавления"""
        return [
            fd for fd in self.relation.functional_dependencies.nontrivial()
            if fd.determinant not in self.superkeys
        ]

    def is_bcnf(self) -> bool:
        return not self.violating_dependencies()

    def check_bcnf(self) -> Tuple[bool, List[str]]:
        """
        Проверка нормальной формы Бойса-Кодда

        Returns:
            (соответствует_НФБК, список_нарушений)
        """
        violations = [
            f"Нарушение НФБК: {fd} "
            f"(детерминант не является суперключом)"
            for fd in self.violating_dependencies()
        ]
        return len(violations) == 0, violations

    def get_analysis_report(self) -> str:
        """Получить подробный отчет об анализе"""
        report = f"Анализ отношения: {self.relation}\n"
        report += "=" * 50 + "\n\n"

        # Функциональные зависимости
        report += f"Функциональные зависимости ({len(self.relation.functional_dependencies)}):\n"
        for fd in self.relation.functional_dependencies:
            report += f"  - {fd}\n"

        # Ключи
        report += f"\nКандидатные ключи ({len(self.candidate_keys)}):\n"
        for key in self.candidate_keys:
            report += f"  - {format_attributes(key)}\n"

        # Простые и непростые атрибуты
        report += f"\nПростые атрибуты: {format_attributes(self.prime_attributes)}\n"
        report += f"Непростые атрибуты: {format_attributes(self.non_prime_attributes)}\n"

        is_bcnf, violations = self.check_bcnf()
        report += f"\nНФБК: {'да' if is_bcnf else 'нет'}\n"

        if violations:
            report += "\nНарушения:\n"
            for v in violations:
                report += f"  - {v}\n"

        return report


def is_bcnf(relation: Iterable[Hashable], fds: Iterable[FunctionalDependency]) -> bool:
    """
    Проверка, находится ли отношение в НФБК относительно множества ФЗ

    Raises:
        InvalidDependency: ФЗ ссылается на атрибуты вне relation
    """
    return NormalFormAnalyzer(Relation("R", relation, fds)).is_bcnf()
