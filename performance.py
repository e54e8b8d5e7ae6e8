"""
Замер времени работы алгоритмов в зависимости от числа атрибутов

Поиск суперключей и построение F+ перебирают подмножества, поэтому время
растет экспоненциально. Модуль строит схемы разного размера, замеряет
операции и рисует график.

ПРИМЕР ИСПОЛЬЗОВАНИЯ:
    python performance.py

    # Или программно:
    from performance import run_performance_test, plot_performance
    results = run_performance_test({"attribute_counts": [2, 3, 4], "repeats": 2})
    plot_performance(results)
"""
import logging
import random
import time
from typing import Callable, Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from models import FunctionalDependency, Relation
from fd_algorithms import FDAlgorithms
from decomposition import bcnf_decompose

logger = logging.getLogger(__name__)

# ======================= Параметры замеров =======================
BENCHMARK_PARAMS = {
    'attribute_counts': [2, 3, 4, 5],
    'repeats': 3,
    'seed': 42,
    # Число ФЗ в случайной схеме на один атрибут
    'fds_per_attribute': 1.0,
}

OPERATIONS = ['closure', 'fd_set_closure', 'find_superkeys', 'bcnf_decompose', 'bcnf_decompose_chain']


def attribute_names(n: int) -> List[str]:
    return [f"A{i}" for i in range(1, n + 1)]


def chain_relation(n: int) -> Relation:
    """Отношение A1 → A2 → ... → An (при n >= 3 не в НФБК)"""
    names = attribute_names(n)
    fds = [FunctionalDependency({a}, {b}) for a, b in zip(names, names[1:])]
    return Relation(f"chain_{n}", names, fds)


def generate_relation(n: int, num_fds: int, rng: random.Random) -> Relation:
    """
    Случайное отношение над A1..An

    Args:
        n: Число атрибутов
        num_fds: Число ФЗ
        rng: Генератор случайных чисел

    Returns:
        Отношение с нетривиальными ФЗ
    """
    names = attribute_names(n)
    fds = []
    if n < 2:
        return Relation(f"random_{n}", names, fds)

    for _ in range(num_fds):
        determinant = set(rng.sample(names, rng.randint(1, max(1, n // 2))))
        candidates = [a for a in names if a not in determinant]
        dependent = set(rng.sample(candidates, rng.randint(1, len(candidates))))
        fds.append(FunctionalDependency(determinant, dependent))

    return Relation(f"random_{n}", names, fds)


def _time_call(fn: Callable[[], object], repeats: int = 3) -> float:
    """
    Запустить функцию несколько раз и вернуть среднее время выполнения
    """
    times = []
    for _ in range(repeats):
        start = time.perf_counter()
        fn()
        times.append(time.perf_counter() - start)

    if times:
        return float(np.mean(times))
    return float("nan")


def run_performance_test(params: Optional[Dict] = None) -> Dict[str, Dict[int, float]]:
    """
    Замер времени основных операций для каждого размера схемы

    Returns:
        {операция: {число_атрибутов: среднее_время_в_секундах}}
    """
    params = {**BENCHMARK_PARAMS, **(params or {})}
    rng = random.Random(params['seed'])
    results: Dict[str, Dict[int, float]] = {op: {} for op in OPERATIONS}

    for n in params['attribute_counts']:
        num_fds = max(1, int(round(n * params['fds_per_attribute'])))
        relation = generate_relation(n, num_fds, rng)
        attrs = relation.attributes
        fds = relation.functional_dependencies
        start_attrs = {sorted(attrs)[0]} if attrs else set()

        logger.info("Замер для %s, ФЗ: %s", relation, fds)
        results['closure'][n] = _time_call(
            lambda: FDAlgorithms.closure(start_attrs, fds), params['repeats'])
        results['fd_set_closure'][n] = _time_call(
            lambda: FDAlgorithms.fd_set_closure(fds), params['repeats'])
        results['find_superkeys'][n] = _time_call(
            lambda: FDAlgorithms.find_superkeys(attrs, fds), params['repeats'])
        results['bcnf_decompose'][n] = _time_call(
            lambda: bcnf_decompose(attrs, fds), params['repeats'])

        chain = chain_relation(n)
        results['bcnf_decompose_chain'][n] = _time_call(
            lambda: bcnf_decompose(chain.attributes, chain.functional_dependencies), params['repeats'])

    return results


def format_results(results: Dict[str, Dict[int, float]]) -> str:
    """Таблица результатов (время в миллисекундах)"""
    sizes = sorted({n for timings in results.values() for n in timings})
    header = f"{'Операция':<18}" + "".join(f"{'n=' + str(n):>12}" for n in sizes)
    lines = [header, "-" * len(header)]
    for op, timings in results.items():
        row = f"{op:<18}"
        for n in sizes:
            value = timings.get(n, float("nan"))
            row += f"{value * 1000:>12.2f}"
        lines.append(row)
    return "\n".join(lines)


def plot_performance(results: Dict[str, Dict[int, float]], show: bool = True,
                     path: Optional[str] = None) -> plt.Figure:
    """
    График зависимости времени выполнения от числа атрибутов
    """
    fig, ax = plt.subplots(figsize=(12, 7))
    markers = ['o', 's', '^', 'D', 'v']
    colors = ['dodgerblue', 'orangered', 'green', 'purple', 'brown']

    for idx, (op, timings) in enumerate(results.items()):
        valid = [(n, t) for n, t in sorted(timings.items()) if not np.isnan(t) and t > 0]
        if not valid:
            continue
        n_values = np.array([n for n, _ in valid])
        times_ms = np.array([t for _, t in valid]) * 1000
        ax.plot(n_values, times_ms, marker=markers[idx % len(markers)], linestyle='-',
                color=colors[idx % len(colors)], label=op)

    ax.set_yscale('log')
    ax.set_title('Зависимость времени выполнения от количества атрибутов (N)', fontsize=16)
    ax.set_xlabel('Количество атрибутов (N)', fontsize=12)
    ax.set_ylabel('Время выполнения (мс)', fontsize=12)
    if ax.get_legend_handles_labels()[0]:
        ax.legend()
    ax.grid(True, which="both", ls="--", linewidth=0.5)
    fig.tight_layout()

    if path:
        fig.savefig(path)
    if show:
        plt.show()
    return fig


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    print(f"\n{'=' * 60}")
    print("ЗАМЕР ПРОИЗВОДИТЕЛЬНОСТИ АЛГОРИТМОВ")
    print(f"{'=' * 60}")
    print(f"Размеры схем: {BENCHMARK_PARAMS['attribute_counts']}")
    print(f"Повторений на операцию: {BENCHMARK_PARAMS['repeats']}")
    print(f"{'=' * 60}\n")

    results = run_performance_test()
    print(format_results(results))
    plot_performance(results)


if __name__ == "__main__":
    main()
