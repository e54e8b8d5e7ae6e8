"""
Модуль с классами для представления данных реляционной модели
"""
from typing import Dict, FrozenSet, Hashable, Iterable, Iterator, List, Optional, Set, Tuple
from dataclasses import dataclass, field


AttributeSet = FrozenSet[Hashable]


@dataclass
class Attribute:
    """Класс для представления атрибута отношения"""
    name: str
    data_type: str = "VARCHAR"

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if isinstance(other, Attribute):
            return self.name == other.name
        return False

    def __lt__(self, other):
        if isinstance(other, Attribute):
            return self.name < other.name
        return NotImplemented

    def __repr__(self):
        return f"{self.name}"


def attribute_sort_key(attr: Hashable) -> Tuple[str, str]:
    """Ключ упорядочивания, не требующий сравнения атрибутов между собой"""
    return type(attr).__qualname__, repr(attr)


def format_attributes(attributes: Iterable[Hashable]) -> str:
    """Строковое представление множества атрибутов в фигурных скобках"""
    names = sorted(str(attr) for attr in attributes)
    return "{" + ", ".join(names) + "}"


@dataclass(frozen=True)
class FunctionalDependency:
    """Класс для представления функциональной зависимости determinant → dependent"""
    determinant: AttributeSet
    dependent: AttributeSet

    def __post_init__(self):
        # Обе части замораживаются, чтобы ФЗ можно было хранить в множествах
        object.__setattr__(self, "determinant", frozenset(self.determinant))
        object.__setattr__(self, "dependent", frozenset(self.dependent))

    def __repr__(self):
        return f"{format_attributes(self.determinant)} → {format_attributes(self.dependent)}"

    def is_trivial(self) -> bool:
        """Проверка, является ли ФЗ тривиальной"""
        return self.dependent.issubset(self.determinant)

    def attributes(self) -> AttributeSet:
        """Все атрибуты, упомянутые в ФЗ"""
        return self.determinant | self.dependent

    def copy(self) -> "FunctionalDependency":
        return FunctionalDependency(self.determinant, self.dependent)

    def add_to_determinant(self, attributes: Iterable[Hashable]) -> "FunctionalDependency":
        """Новая ФЗ с расширенной левой частью"""
        return FunctionalDependency(self.determinant | frozenset(attributes), self.dependent)

    def add_to_dependent(self, attributes: Iterable[Hashable]) -> "FunctionalDependency":
        """Новая ФЗ с расширенной правой частью"""
        return FunctionalDependency(self.determinant, self.dependent | frozenset(attributes))

    def augment(self, attributes: Iterable[Hashable]) -> "FunctionalDependency":
        """
        Пополнение (аксиома Армстронга): из L → R получаем LZ → RZ

        Args:
            attributes: Множество атрибутов Z

        Returns:
            Новая функциональная зависимость
        """
        extra = frozenset(attributes)
        return FunctionalDependency(self.determinant | extra, self.dependent | extra)


class InvalidDependency(ValueError):
    """ФЗ ссылается на атрибуты, отсутствующие в отношении"""

    def __init__(self, dependency: FunctionalDependency, relation: Iterable[Hashable] = ()):
        self.dependency = dependency
        self.unknown_attributes = dependency.attributes() - frozenset(relation)
        message = f"ФЗ ссылается на неизвестные атрибуты: {dependency}"
        if self.unknown_attributes:
            message += f" (нет в отношении: {format_attributes(self.unknown_attributes)})"
        super().__init__(message)


class DependencySet:
    """
    Множество функциональных зависимостей без повторов

    Порядок добавления сохраняется: алгоритмы, выбирающие "первую" ФЗ,
    дают одинаковый результат от запуска к запуску.
    """

    def __init__(self, dependencies: Iterable[FunctionalDependency] = ()):
        self._items: Dict[FunctionalDependency, None] = {}
        self.update(dependencies)

    def add(self, dependency: FunctionalDependency) -> None:
        self._items.setdefault(dependency, None)

    def update(self, dependencies: Iterable[FunctionalDependency]) -> None:
        for dependency in dependencies:
            self.add(dependency)

    def copy(self) -> "DependencySet":
        return DependencySet(self._items)

    def attributes(self) -> AttributeSet:
        """Все атрибуты, упомянутые хотя бы в одной ФЗ"""
        result: Set[Hashable] = set()
        for dependency in self._items:
            result.update(dependency.determinant)
            result.update(dependency.dependent)
        return frozenset(result)

    def project(self, schema: Iterable[Hashable]) -> "DependencySet":
        """
        Проекция на схему: ФЗ, все атрибуты которых входят в schema

        Args:
            schema: Множество атрибутов схемы

        Returns:
            Новое множество ФЗ
        """
        schema = frozenset(schema)
        return DependencySet(fd for fd in self._items if fd.attributes() <= schema)

    def nontrivial(self) -> List[FunctionalDependency]:
        """Нетривиальные ФЗ в порядке добавления"""
        return [fd for fd in self._items if not fd.is_trivial()]

    def __contains__(self, dependency) -> bool:
        return dependency in self._items

    def __iter__(self) -> Iterator[FunctionalDependency]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other):
        if isinstance(other, DependencySet):
            return self._items.keys() == other._items.keys()
        return NotImplemented

    def __repr__(self):
        return "{" + ", ".join(repr(fd) for fd in self._items) + "}"


@dataclass
class Relation:
    """Класс для представления отношения (схема + множество ФЗ над ней)"""
    name: str
    attributes: AttributeSet = frozenset()
    functional_dependencies: DependencySet = field(default_factory=DependencySet)

    def __post_init__(self):
        self.attributes = frozenset(self.attributes)
        if not isinstance(self.functional_dependencies, DependencySet):
            self.functional_dependencies = DependencySet(self.functional_dependencies)

    def get_attribute_by_name(self, name: str) -> Optional[Hashable]:
        """Получить атрибут по имени"""
        for attr in self.attributes:
            if str(attr) == name:
                return attr
        return None

    def get_all_attributes_set(self) -> AttributeSet:
        """Получить все атрибуты как множество"""
        return self.attributes

    def __repr__(self):
        attrs_str = ", ".join(sorted(str(attr) for attr in self.attributes))
        return f"{self.name}({attrs_str})"


@dataclass
class DecompositionStep:
    """Класс для представления шага декомпозиции"""
    original_relation: Relation
    resulting_relations: List[Relation]
    reason: str
    violated_dependency: Optional[FunctionalDependency] = None

    def __repr__(self):
        result_str = ", ".join([rel.name for rel in self.resulting_relations])
        return f"Декомпозиция {self.original_relation.name} → [{result_str}]: {self.reason}"


@dataclass
class NormalizationResult:
    """Класс для представления результата нормализации в НФБК"""
    original_relation: Relation
    decomposed_relations: List[Relation]
    steps: List[DecompositionStep]
    preserved_dependencies: List[FunctionalDependency]
    lost_dependencies: List[FunctionalDependency]

    def schemas(self) -> Set[AttributeSet]:
        """Схемы итоговых отношений"""
        return {rel.attributes for rel in self.decomposed_relations}

    def is_lossless(self) -> bool:
        """
        Проверка декомпозиции без потерь

        Каждое разбиение R → (R1, R2) должно удовлетворять условию
        R1 ∩ R2 → R1 или R1 ∩ R2 → R2 относительно ФЗ исходного R.
        """
        # Импорт здесь: fd_algorithms сам зависит от models
        from fd_algorithms import FDAlgorithms

        for step in self.steps:
            left, right = step.resulting_relations
            common = left.attributes & right.attributes
            closure = FDAlgorithms.closure(common, step.original_relation.functional_dependencies)
            if not (left.attributes <= closure or right.attributes <= closure):
                return False
        return True

    def get_summary(self) -> str:
        """Получить краткое описание результата"""
        summary = "Нормализация в НФБК\n"
        summary += f"Исходное отношение: {self.original_relation}\n"
        summary += f"Результирующие отношения: {len(self.decomposed_relations)}\n"
        for rel in self.decomposed_relations:
            summary += f"  - {rel}\n"
        if self.steps:
            summary += f"Шаги декомпозиции: {len(self.steps)}\n"
            for step in self.steps:
                summary += f"  - {step}\n"
        if self.lost_dependencies:
            summary += f"Потерянные зависимости: {len(self.lost_dependencies)}\n"
            for fd in self.lost_dependencies:
                summary += f"  - {fd}\n"
        return summary
