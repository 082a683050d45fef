"""
Numeric Differentiation — проверка аналитических производных

Гарнитура сравнивает заявленную производную f'(x) с оценкой центральной
разностью:

    numerical  = (f(x + h) - f(x - h)) / (2h)     ошибка усечения O(h²)
    analytical = f'(x)
    passed     = |analytical - numerical| <= tolerance

Центральная разность выбрана вместо односторонней: порядок ошибки выше
ценой одного лишнего вычисления f, а скалярные активации дешёвые.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Расхождение производных является результатом (passed=False), не исключение
2. Повторов нет, каждая точка вычисляется ровно один раз
3. Пакетная проверка не прерывается на первой неудаче
4. Гарнитура не участвует в горячем пути ElementwiseEngine
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, Field

from src.core.math.activations import ScalarActivation, ScalarUnaryFn
from src.core.math.numerical_safeguards import (
    DEFAULT_DIFF_STEP,
    DEFAULT_DIFF_TOLERANCE,
    DEFAULT_SAMPLE_POINTS,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ И РЕЗУЛЬТАТЫ
# =============================================================================


class DerivativeCheckConfig(BaseModel):
    """Параметры численной проверки производной."""

    step: float = Field(
        DEFAULT_DIFF_STEP,
        gt=0,
        allow_inf_nan=False,
        description="Шаг h центральной разности",
    )
    tolerance: float = Field(
        DEFAULT_DIFF_TOLERANCE,
        ge=0,
        allow_inf_nan=False,
        description="Допустимое |analytical - numerical|",
    )

    model_config = {"frozen": True}


@dataclass(frozen=True)
class DerivativeCheckResult:
    """Результат проверки производной в одной точке."""

    point: float
    analytical: float
    numerical: float
    absolute_error: float
    passed: bool

    # Параметры проверки для диагностики
    step: float
    tolerance: float


@dataclass(frozen=True)
class VerificationReport:
    """Результат пакетной проверки одной активации по набору точек."""

    activation: str
    results: tuple[DerivativeCheckResult, ...]

    # Точки в окрестности излома, где производная не определена
    skipped_points: tuple[float, ...]

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count

    @property
    def all_passed(self) -> bool:
        return self.failed_count == 0

    def failures(self) -> tuple[DerivativeCheckResult, ...]:
        return tuple(r for r in self.results if not r.passed)


# =============================================================================
# ЦЕНТРАЛЬНАЯ РАЗНОСТЬ
# =============================================================================


def central_difference(
    forward: ScalarUnaryFn,
    x: float,
    h: float = DEFAULT_DIFF_STEP,
) -> float:
    """
    Оценка производной центральной разностью (f(x+h) - f(x-h)) / (2h).

    Args:
        forward: Скалярная функция f
        x: Точка
        h: Шаг (default: 1e-5, калиброван для double precision)

    Returns:
        Численная оценка f'(x)

    Raises:
        ValueError: Если h <= 0 или NaN/Inf
    """
    validate_positive(h, "h")
    return (forward(x + h) - forward(x - h)) / (2.0 * h)


def check_derivative(
    forward: ScalarUnaryFn,
    derivative: ScalarUnaryFn,
    x: float,
    h: float = DEFAULT_DIFF_STEP,
    tolerance: float = DEFAULT_DIFF_TOLERANCE,
) -> DerivativeCheckResult:
    """
    Сравнение аналитической производной с центральной разностью.

    Несовпадение (включая NaN в любой из оценок) возвращается как
    passed=False. ArithmeticError из forward или derivative (OverflowError,
    ZeroDivisionError) не пробрасывается: соответствующая оценка становится
    NaN. Исключение возможно только при некорректных h/tolerance:
    это ошибка вызывающего кода, а не результат проверки.

    Args:
        forward: Скалярная функция f
        derivative: Заявленная производная f'
        x: Точка проверки
        h: Шаг центральной разности (default: 1e-5)
        tolerance: Допустимое расхождение (default: 1e-3)

    Returns:
        DerivativeCheckResult

    Raises:
        ValueError: Если h <= 0, tolerance < 0 или они NaN/Inf

    Examples:
        >>> from src.core.math.activations import sigmoid, sigmoid_derivative
        >>> check_derivative(sigmoid, sigmoid_derivative, 0.0).passed
        True
    """
    validate_positive(h, "h")
    validate_non_negative(tolerance, "tolerance")

    try:
        numerical = central_difference(forward, x, h)
    except ArithmeticError as e:
        logger.debug("Forward evaluation failed near x=%r: %s", x, e)
        numerical = math.nan

    try:
        analytical = derivative(x)
    except ArithmeticError as e:
        logger.debug("Derivative evaluation failed at x=%r: %s", x, e)
        analytical = math.nan

    absolute_error = abs(analytical - numerical)

    # NaN <= tolerance всегда False
    passed = absolute_error <= tolerance

    if not passed:
        logger.debug(
            "Derivative mismatch at x=%r: analytical=%r numerical=%r error=%r tol=%r",
            x,
            analytical,
            numerical,
            absolute_error,
            tolerance,
        )

    return DerivativeCheckResult(
        point=x,
        analytical=analytical,
        numerical=numerical,
        absolute_error=absolute_error,
        passed=passed,
        step=h,
        tolerance=tolerance,
    )


# =============================================================================
# ПАКЕТНАЯ ПРОВЕРКА
# =============================================================================


def verify_activation(
    activation: ScalarActivation,
    points: Iterable[float] = DEFAULT_SAMPLE_POINTS,
    config: DerivativeCheckConfig | None = None,
) -> VerificationReport:
    """
    Проверка производной активации во всех точках набора.

    Точки, отстоящие от объявленного излома меньше чем на h, пропускаются:
    центральная разность в них усредняет левую и правую производные.

    Args:
        activation: Пара (forward, derivative)
        points: Точки проверки (default: DEFAULT_SAMPLE_POINTS)
        config: Шаг и толерантность (default: DerivativeCheckConfig())

    Returns:
        VerificationReport со всеми результатами и пропущенными точками
    """
    config = config or DerivativeCheckConfig()

    results: list[DerivativeCheckResult] = []
    skipped: list[float] = []

    for x in points:
        if any(abs(x - kink) < config.step for kink in activation.non_differentiable_at):
            skipped.append(x)
            continue

        results.append(
            check_derivative(
                activation.forward,
                activation.derivative,
                x,
                h=config.step,
                tolerance=config.tolerance,
            )
        )

    report = VerificationReport(
        activation=activation.name,
        results=tuple(results),
        skipped_points=tuple(skipped),
    )

    logger.info(
        "Derivative verification for %s: %d passed, %d failed, %d skipped",
        report.activation,
        report.passed_count,
        report.failed_count,
        len(report.skipped_points),
    )

    return report
