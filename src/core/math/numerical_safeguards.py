"""
Numerical Safeguards — базовые численные примитивы ядра

Модуль содержит общие параметры и примитивы, на которые опираются
активации, матрица и гарнитура численного дифференцирования:
- Параметры численного дифференцирования (шаг, толерантность)
- Пределы размерности матрицы
- NaN-aware clamp (NaN пропагирует, а не подменяется)
- Epsilon-сравнения float
- Валидация параметров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN никогда не подменяется молча: NaN на входе → NaN на выходе
2. Бесконечности насыщаются до границ диапазона
3. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ЧИСЛЕННОГО ДИФФЕРЕНЦИРОВАНИЯ
# =============================================================================

# Шаг центральной разности для double precision.
# Больше → растёт ошибка усечения O(h²), меньше → растёт ошибка сокращения
# в вычитании f(x+h) - f(x-h)
DEFAULT_DIFF_STEP: Final[float] = 1e-5

# Допустимое расхождение аналитической и численной производной
DEFAULT_DIFF_TOLERANCE: Final[float] = 1e-3

# Точки выборки для пакетной проверки производных
DEFAULT_SAMPLE_POINTS: Final[tuple[float, ...]] = (-5.0, -2.0, -1.0, 0.0, 1.0, 2.0, 5.0)


# =============================================================================
# ПАРАМЕТРЫ АКТИВАЦИЙ
# =============================================================================

# Наклон leaky ReLU при x <= 0
LEAKY_RELU_ALPHA_DEFAULT: Final[float] = 0.01

# Масштаб ELU при x <= 0
ELU_ALPHA_DEFAULT: Final[float] = 1.0

# Линейный участок hard sigmoid: 0.2 * x + 0.5 на [-2.5, 2.5]
HARD_SIGMOID_SLOPE: Final[float] = 0.2
HARD_SIGMOID_BOUND: Final[float] = 2.5

# Допустимое расхождение tanh_manual и math.tanh при |x| < 20
TANH_MANUAL_MATCH_TOL: Final[float] = 1e-9


# =============================================================================
# ПАРАМЕТРЫ МАТРИЦЫ
# =============================================================================

# Размер одного элемента буфера (IEEE-754 double)
MATRIX_ITEM_SIZE_BYTES: Final[int] = 8

# Максимальное адресуемое число элементов матрицы
MAX_MATRIX_ELEMENTS: Final[int] = sys.maxsize // MATRIX_ITEM_SIZE_BYTES


# =============================================================================
# ПРОВЕРКИ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# ОГРАНИЧЕНИЕ ДИАПАЗОНА
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне с пропагацией NaN.

    Встроенные max/min зависят от порядка аргументов при NaN, поэтому
    NaN проверяется явно и возвращается без изменений.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value], либо NaN

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(float('inf'), 0.0, 1.0)
        1.0
    """
    if math.isnan(value):
        return value

    result = value

    if min_value is not None and result < min_value:
        result = min_value

    if max_value is not None and result > max_value:
        result = max_value

    return result


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и строго положительное.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и неотрицательное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
